"""
RequestQueue - FIFO holding area for requests not yet assigned to an elevator
"""

from collections import deque

from .request import Request
from ..exceptions import EmptyQueueError


class RequestQueue:
    """
    First-in, first-out queue of pending requests.

    Requests leave only from the front, in exactly the order they arrived.
    No indexing, removal-by-value or reordering is offered.
    """

    def __init__(self):
        self._items = deque()

    def enqueue(self, request: Request):
        """Append a request to the tail"""
        self._items.append(request)

    def dequeue(self) -> Request:
        """
        Remove and return the request at the head.

        Raises:
            EmptyQueueError: If the queue is empty
        """
        if not self._items:
            raise EmptyQueueError("Queue is empty.")
        return self._items.popleft()

    def peek(self) -> Request:
        """
        Return the head request without removing it.

        Raises:
            EmptyQueueError: If the queue is empty
        """
        if not self._items:
            raise EmptyQueueError("Queue is empty.")
        return self._items[0]

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self):
        return len(self._items)

    def __repr__(self):
        return f"RequestQueue(size={len(self._items)})"
