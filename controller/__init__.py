"""
Elevator Dispatch Control

This package assigns queued requests to elevators.
"""

__version__ = "0.1.0"

from .dispatcher import Dispatcher

__all__ = ['Dispatcher']
