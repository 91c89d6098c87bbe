"""
Simulation error taxonomy

Both errors signal a broken caller contract. They are raised at the point
of violation and are never recovered from inside the simulator.
"""


class InvalidParameterError(ValueError):
    """
    Raised when a constructor or setter receives a value outside its contract
    (probability outside [0, 1], floor count <= 1, negative floor,
    unknown elevator state, inconsistent configuration).
    """


class EmptyQueueError(IndexError):
    """Raised when a request is taken from an empty RequestQueue"""
