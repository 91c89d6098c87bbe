import random
from typing import Optional

from ..exceptions import InvalidParameterError


class ArrivalSource:
    """
    Biased coin that decides whether a ride request appears at a time step.

    The probability is fixed for the whole run. All randomness comes from the
    injected generator so a seeded run is reproducible.
    """

    def __init__(self, probability: float, rng: Optional[random.Random] = None):
        """
        Args:
            probability: Chance of an arrival per step, within [0.0, 1.0]
            rng: Random generator (defaults to the module-level ``random`` functions)

        Raises:
            InvalidParameterError: If probability is outside [0.0, 1.0]
        """
        if not (0.0 <= probability <= 1.0):
            raise InvalidParameterError(
                f"Probability must be between 0.0 and 1.0, got {probability}"
            )
        self._probability = probability
        self._rng = rng if rng is not None else random

    @property
    def probability(self) -> float:
        return self._probability

    def request_arrived(self) -> bool:
        """
        Draw one sample in [0, 1) and report whether it falls under the probability.

        A probability of 0.0 never fires, even for a sample of exactly 0.0.
        """
        sample = self._rng.random()
        if self._probability == 0.0:
            return False
        return sample <= self._probability
