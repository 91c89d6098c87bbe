"""
Elevator System Analyzer

This package provides statistical analysis and reporting tools
for elevator simulation runs.

Components:
- Statistics: Broadcast listener recording trajectories and the event log
- SimulationStatistics: Per-request metrics with "God's view"
"""

__version__ = "0.1.0"

from .statistics import Statistics
from .simulation_statistics import SimulationStatistics

__all__ = ['Statistics', 'SimulationStatistics']
