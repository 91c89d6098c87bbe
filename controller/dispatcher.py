"""
First-Idle Dispatcher

Assigns queued requests to idle elevators. The policy is greedy and
order-based: elevators are scanned in array order and the first idle one
takes the request at the head of the queue. Distance to the source floor
plays no part in the choice.
"""

from typing import List, Sequence, Tuple

from simulator.core.elevator import Elevator
from simulator.core.request import Request
from simulator.core.request_queue import RequestQueue


class Dispatcher:
    """
    Greedy dispatcher

    Rules:
    - Runs once per step, before any elevator moves
    - Each idle elevator takes at most one request per step
    - Stops as soon as the queue is empty
    - Busy elevators are never reassigned
    """

    def __init__(self, name: str = "Dispatcher"):
        self.name = name

    def dispatch(self, queue: RequestQueue, elevators: Sequence[Elevator],
                 now: float = 0) -> List[Tuple[Elevator, Request]]:
        """
        Assign pending requests to idle elevators

        Args:
            queue: Pending requests (FIFO)
            elevators: Elevators in their fixed array order
            now: Current simulation time (for logging)

        Returns:
            List of (elevator, request) assignments made this step
        """
        assignments = []
        for elevator in elevators:
            if queue.is_empty():
                break
            if not elevator.is_idle:
                continue

            request = queue.dequeue()
            elevator.assign(request)
            assignments.append((elevator, request))
            print(f"{now:.2f} [{self.name}] Assigned {request.name} "
                  f"({request.source_floor} -> {request.destination_floor}) to {elevator.name} "
                  f"at floor {elevator.current_floor}")

        return assignments

    def get_strategy_name(self) -> str:
        """Return strategy name"""
        return "First Idle (Array Order)"
