"""
Simulation Configuration

Building size, elevator fleet, traffic and output settings for one
simulation run. Every section validates itself on construction.
"""

from dataclasses import dataclass
from numbers import Real
from typing import Optional

from simulator.exceptions import InvalidParameterError


def _require_int(name, value):
    # bool is an int subclass; YAML 'yes'/'true' must not pass as a count
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameterError(f"{name} must be an integer, got {value!r}")


def _require_real(name, value):
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidParameterError(f"{name} must be a number, got {value!r}")


def _section(data, key):
    """Sub-mapping of a config dict; a missing or empty (null) section counts as {}"""
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise InvalidParameterError(f"'{key}' must be a mapping, got {section!r}")
    return section


@dataclass
class BuildingConfig:
    """Building specifications"""
    num_floors: int = 10

    def __post_init__(self):
        _require_int("num_floors", self.num_floors)
        if self.num_floors <= 1:
            raise InvalidParameterError(f"num_floors must be greater than 1, got {self.num_floors}")


@dataclass
class ElevatorConfig:
    """Elevator fleet specifications"""
    num_elevators: int = 1

    def __post_init__(self):
        _require_int("num_elevators", self.num_elevators)
        if self.num_elevators < 1:
            raise InvalidParameterError(f"num_elevators must be at least 1, got {self.num_elevators}")


@dataclass
class TrafficConfig:
    """Traffic pattern configuration"""
    arrival_probability: float = 0.1  # chance of a new request per step
    simulation_length: int = 100  # steps

    def __post_init__(self):
        _require_real("arrival_probability", self.arrival_probability)
        _require_int("simulation_length", self.simulation_length)
        if not (0.0 <= self.arrival_probability <= 1.0):
            raise InvalidParameterError(
                f"arrival_probability must be between 0.0 and 1.0, got {self.arrival_probability}"
            )
        if self.simulation_length < 0:
            raise InvalidParameterError(f"simulation_length cannot be negative, got {self.simulation_length}")


@dataclass
class OutputConfig:
    """Where to write run artifacts (None = do not write)"""
    event_log: Optional[str] = None  # JSON Lines trace
    trajectory_plot: Optional[str] = None  # PNG trajectory diagram


@dataclass
class SimulationConfig:
    """
    Complete simulation configuration

    Combines building, elevator, traffic and output settings.
    """
    building: BuildingConfig
    elevator: ElevatorConfig
    traffic: TrafficConfig
    output: Optional[OutputConfig] = None

    # Simulation control
    random_seed: Optional[int] = None

    def __post_init__(self):
        if self.output is None:
            self.output = OutputConfig()

    @classmethod
    def create(cls, probability: float, num_floors: int, num_elevators: int, length: int,
               random_seed: Optional[int] = None) -> 'SimulationConfig':
        """Build a configuration from the four run parameters"""
        return cls(
            building=BuildingConfig(num_floors=num_floors),
            elevator=ElevatorConfig(num_elevators=num_elevators),
            traffic=TrafficConfig(arrival_probability=probability, simulation_length=length),
            random_seed=random_seed
        )

    @property
    def probability(self) -> float:
        return self.traffic.arrival_probability

    @property
    def num_floors(self) -> int:
        return self.building.num_floors

    @property
    def num_elevators(self) -> int:
        return self.elevator.num_elevators

    @property
    def length(self) -> int:
        return self.traffic.simulation_length

    @classmethod
    def from_dict(cls, data: dict) -> 'SimulationConfig':
        """Create SimulationConfig from dictionary"""
        sim_data = _section(data, 'simulation') if 'simulation' in data else data

        building_data = _section(sim_data, 'building')
        building = BuildingConfig(
            num_floors=building_data.get('num_floors', 10)
        )

        elevator_data = _section(sim_data, 'elevator')
        elevator = ElevatorConfig(
            num_elevators=elevator_data.get('num_elevators', 1)
        )

        traffic_data = _section(sim_data, 'traffic')
        traffic = TrafficConfig(
            arrival_probability=traffic_data.get('arrival_probability', 0.1),
            simulation_length=traffic_data.get('simulation_length', 100)
        )

        output_data = _section(sim_data, 'output')
        output = OutputConfig(
            event_log=output_data.get('event_log'),
            trajectory_plot=output_data.get('trajectory_plot')
        )

        return cls(
            building=building,
            elevator=elevator,
            traffic=traffic,
            output=output,
            random_seed=sim_data.get('random_seed')
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        result = {
            'simulation': {
                'building': {
                    'num_floors': self.building.num_floors
                },
                'elevator': {
                    'num_elevators': self.elevator.num_elevators
                },
                'traffic': {
                    'arrival_probability': self.traffic.arrival_probability,
                    'simulation_length': self.traffic.simulation_length
                },
                'output': {
                    'event_log': self.output.event_log,
                    'trajectory_plot': self.output.trajectory_plot
                }
            }
        }

        if self.random_seed is not None:
            result['simulation']['random_seed'] = self.random_seed

        return result

    def validate(self):
        """Validate configuration consistency"""
        if self.random_seed is not None and (isinstance(self.random_seed, bool)
                                             or not isinstance(self.random_seed, int)):
            raise InvalidParameterError(f"random_seed must be an integer, got {self.random_seed!r}")
        if self.output.event_log is not None and self.output.event_log == self.output.trajectory_plot:
            raise InvalidParameterError("output.event_log and output.trajectory_plot must be different files")
