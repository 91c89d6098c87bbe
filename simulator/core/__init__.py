"""Core simulation entities"""

from .entity import Entity
from .arrival_source import ArrivalSource
from .request import Request
from .request_queue import RequestQueue
from .elevator import Elevator, ElevatorState, Idle, MovingToSource, MovingToDestination

__all__ = [
    'Entity',
    'ArrivalSource',
    'Request',
    'RequestQueue',
    'Elevator',
    'ElevatorState',
    'Idle',
    'MovingToSource',
    'MovingToDestination',
]
