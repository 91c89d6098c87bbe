import simpy
from dataclasses import dataclass
from typing import ClassVar, Optional, Union

from .entity import Entity
from .request import Request
from ..exceptions import InvalidParameterError
from ..infrastructure.message_broker import MessageBroker


# --- Elevator states ---
# Each state is an immutable variant. Only the two moving variants carry a
# request, so "request present iff not idle" holds by construction.

@dataclass(frozen=True)
class Idle:
    """No assigned request, stationary"""
    label: ClassVar[str] = "IDLE"

    @property
    def request(self) -> None:
        return None

    def __str__(self):
        return self.label


@dataclass(frozen=True)
class MovingToSource:
    """Travelling to pick up the request at its source floor"""
    request: Request
    label: ClassVar[str] = "TO_SOURCE"

    def __post_init__(self):
        if not isinstance(self.request, Request):
            raise InvalidParameterError(f"{self.label} state requires a Request, got {self.request!r}")

    @property
    def target_floor(self) -> int:
        return self.request.source_floor

    def __str__(self):
        return f"{self.label}({self.request.name} -> floor {self.target_floor})"


@dataclass(frozen=True)
class MovingToDestination:
    """Carrying the request to its destination floor"""
    request: Request
    label: ClassVar[str] = "TO_DESTINATION"

    def __post_init__(self):
        if not isinstance(self.request, Request):
            raise InvalidParameterError(f"{self.label} state requires a Request, got {self.request!r}")

    @property
    def target_floor(self) -> int:
        return self.request.destination_floor

    def __str__(self):
        return f"{self.label}({self.request.name} -> floor {self.target_floor})"


ElevatorState = Union[Idle, MovingToSource, MovingToDestination]
ELEVATOR_STATES = (Idle, MovingToSource, MovingToDestination)


class Elevator(Entity):
    """
    Elevator serving one request at a time with a two-phase goal.

    State machine:
        IDLE --assign()--> TO_SOURCE --source reached--> TO_DESTINATION --destination reached--> IDLE

    The elevator moves exactly one floor per call to advance(). When it is
    already on its target no movement is consumed and the transition happens
    in the same step.
    """

    def __init__(self, env: simpy.Environment, name: str, broker: Optional[MessageBroker] = None,
                 initial_floor: int = 1):
        super().__init__(env, name)
        self.broker = broker
        self.status_topic = f"elevator/{self.name}/status"

        self.current_floor = 1
        self.set_current_floor(initial_floor)
        self.set_state(Idle())

    # --- Accessors ---

    @property
    def request(self) -> Optional[Request]:
        """Request currently being served, None when idle"""
        return self.state.request

    @property
    def is_idle(self) -> bool:
        return isinstance(self.state, Idle)

    @property
    def target_floor(self) -> Optional[int]:
        if self.is_idle:
            return None
        return self.state.target_floor

    # --- Contract-checked setters ---

    def set_current_floor(self, floor: int):
        """
        Raises:
            InvalidParameterError: If floor is negative
        """
        if floor < 0:
            raise InvalidParameterError(f"Floor must be positive, got {floor}")
        self.current_floor = floor

    def _validate_state(self, new_state):
        if not isinstance(new_state, ELEVATOR_STATES):
            raise InvalidParameterError(f"Invalid elevator state: {new_state!r}")

    def _on_state_changed(self, old_state, new_state):
        super()._on_state_changed(old_state, new_state)
        self._report_status()

    # --- Behaviour ---

    def assign(self, request: Request):
        """
        Take a request and start moving to its source floor.

        Raises:
            InvalidParameterError: If the elevator is not idle
        """
        if not self.is_idle:
            raise InvalidParameterError(f"{self.name} is busy with {self.request.name}, cannot take {request.name}")
        self.set_state(MovingToSource(request))
        self._publish("request/assigned", {
            "timestamp": self.env.now,
            "request_id": request.request_id,
            "elevator_name": self.name,
            "current_floor": self.current_floor,
        })

    def advance(self, now: int) -> Optional[int]:
        """
        Apply one step of movement and the resulting transition.

        Args:
            now: Current simulation step

        Returns:
            The request's wait time if its source floor was reached this step, otherwise None
        """
        if self.is_idle:
            return None

        target = self.state.target_floor
        if self.current_floor != target:
            self.set_current_floor(self.current_floor + (1 if target > self.current_floor else -1))
            self._report_status()

        if self.current_floor != target:
            return None

        request = self.state.request
        if isinstance(self.state, MovingToSource):
            wait_time = now - request.arrival_time
            self._publish("request/picked_up", {
                "timestamp": self.env.now,
                "request_id": request.request_id,
                "elevator_name": self.name,
                "floor": self.current_floor,
                "wait_time": wait_time,
            })
            self.set_state(MovingToDestination(request))
            return wait_time

        self._publish("request/delivered", {
            "timestamp": self.env.now,
            "request_id": request.request_id,
            "elevator_name": self.name,
            "floor": self.current_floor,
        })
        self.set_state(Idle())
        return None

    # --- Status reporting ---

    def _report_status(self):
        request = self.request
        self._publish(self.status_topic, {
            "timestamp": self.env.now,
            "elevator_name": self.name,
            "current_floor": self.current_floor,
            "state": self.state.label,
            "target_floor": self.target_floor,
            "request_id": request.request_id if request is not None else None,
        })

    def _publish(self, topic: str, message: dict):
        if self.broker is not None:
            self.broker.put(topic, message)

    def __repr__(self):
        return f"Elevator(name={self.name!r}, floor={self.current_floor}, state={self.state})"
