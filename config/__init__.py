"""
Configuration management package

Provides configuration classes for the simulation and their YAML loader.
"""

from .simulation import (
    SimulationConfig,
    BuildingConfig,
    ElevatorConfig,
    TrafficConfig,
    OutputConfig
)

from .config_loader import (
    ConfigLoader,
    load_simulation_config,
    save_simulation_config
)

__all__ = [
    # Simulation
    'SimulationConfig',
    'BuildingConfig',
    'ElevatorConfig',
    'TrafficConfig',
    'OutputConfig',

    # Loader
    'ConfigLoader',
    'load_simulation_config',
    'save_simulation_config',
]
