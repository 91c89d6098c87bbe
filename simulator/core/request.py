"""
Request - one ride from a source floor to a destination floor
"""

import random
from typing import Optional

from ..exceptions import InvalidParameterError


class Request:
    """
    A single ride request.

    Floors are drawn uniformly and independently from [1, num_floors], so
    self-trips (source == destination) can occur. The arrival time starts at
    the sentinel 0 and is stamped exactly once by the simulator when the
    request is queued.
    """

    def __init__(self, num_floors: int, rng: Optional[random.Random] = None,
                 request_id: Optional[int] = None):
        """
        Args:
            num_floors: Number of floors in the building (must be > 1)
            rng: Random generator used to draw both floors
            request_id: Sequence number assigned by the simulator (for tracing)

        Raises:
            InvalidParameterError: If num_floors <= 1
        """
        if num_floors <= 1:
            raise InvalidParameterError(
                f"Number of floors must be greater than 1, got {num_floors}"
            )
        rng = rng if rng is not None else random

        self.request_id = request_id
        self._source_floor = rng.randint(1, num_floors)
        self._destination_floor = rng.randint(1, num_floors)
        self._arrival_time = 0
        self._stamped = False

    @property
    def source_floor(self) -> int:
        return self._source_floor

    @property
    def destination_floor(self) -> int:
        return self._destination_floor

    @property
    def arrival_time(self) -> int:
        return self._arrival_time

    @property
    def is_stamped(self) -> bool:
        return self._stamped

    def stamp_arrival(self, time: int):
        """
        Record the step at which the request entered the queue.

        Raises:
            InvalidParameterError: If the time is negative or the request was already stamped
        """
        if self._stamped:
            raise InvalidParameterError(
                f"Arrival time of {self} already set to {self._arrival_time}"
            )
        if time < 0:
            raise InvalidParameterError(f"Arrival time cannot be negative, got {time}")
        self._arrival_time = time
        self._stamped = True

    @property
    def name(self) -> str:
        if self.request_id is None:
            return "Request"
        return f"Request_{self.request_id}"

    def __repr__(self):
        return (f"Request(id={self.request_id}, source={self._source_floor}, "
                f"destination={self._destination_floor}, arrival={self._arrival_time})")
