# File: entity.py
import simpy
import itertools  # Helper for entity ID counter
from typing import Any


class Entity:
    """
    Base class for named, stateful entities in the simulation.

    Holds the SimPy environment used as the simulation clock, a unique entity ID
    and the current state. State changes go through set_state(), which validates
    the new state, logs the transition and calls the _on_state_changed() hook.
    Entities do not run their own SimPy process; the simulator advances them
    once per time step.
    """
    # Entity ID counter shared across all class instances
    _entity_id_counter = itertools.count()

    def __init__(self, env: simpy.Environment, name: str = None):
        """
        Initialize the entity.

        Args:
            env: The SimPy simulation environment this entity belongs to.
            name: Entity name. Optional. If not specified, auto-generated from class name and ID.
        """
        self.env = env
        self.entity_id: int = next(self._entity_id_counter)
        self.name: str = name if name is not None else f"{self.__class__.__name__}_{self.entity_id}"

        # Concrete classes set their initial state right after this constructor returns
        self.state: Any = None

        self._log(f'Entity "{self.name}" ({self.__class__.__name__}, ID:{self.entity_id}) created.')

    # --- Common utility methods ---

    def set_state(self, new_state):
        """
        Transition the entity's state.

        Args:
            new_state: Target state. Validated by _validate_state() first.
        """
        self._validate_state(new_state)
        if self.state != new_state:
            old_state = self.state
            self.state = new_state
            self._on_state_changed(old_state, new_state)

    def _validate_state(self, new_state):
        """Hook for subclasses to reject invalid states (raise on violation)."""

    def _on_state_changed(self, old_state, new_state):
        """
        Hook method called after every state change.
        Subclasses extend this to publish status; the base implementation logs.
        """
        self._log_state_change(old_state, new_state)

    def _log_state_change(self, old_state, new_state):
        self._log(f"State transition: {old_state} -> {new_state}")

    def _log(self, message: str):
        print(f"{self.env.now:.2f}: [{self.name}] {message}")
