"""
Elevator Simulator - Core simulation engine

This package provides the request, queue and elevator entities.
The discrete-time driver lives in simulator.simulation.
"""

__version__ = "0.1.0"

from .exceptions import InvalidParameterError, EmptyQueueError

from .core.arrival_source import ArrivalSource
from .core.request import Request
from .core.request_queue import RequestQueue
from .core.elevator import Elevator, Idle, MovingToSource, MovingToDestination
from .core.entity import Entity

from .infrastructure.message_broker import MessageBroker

__all__ = [
    'InvalidParameterError',
    'EmptyQueueError',
    'ArrivalSource',
    'Request',
    'RequestQueue',
    'Elevator',
    'Idle',
    'MovingToSource',
    'MovingToDestination',
    'Entity',
    'MessageBroker',
]
