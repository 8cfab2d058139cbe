from typing import Callable, Iterable, Optional, Sequence, TypeVar

T = TypeVar("T")


class MathTools:
    """Provides essential mathematical utilities for workout calculations."""

    EPLEY_DIVISOR: int = 30

    @classmethod
    def epley_1rm(cls, weight: float, reps: int) -> float:
        """Return the estimated one-rep max using the Epley formula.

        A single rep is its own max; anything else is rounded to the
        nearest whole unit.
        """
        if reps <= 0:
            raise ValueError("reps must be positive")
        if reps == 1:
            return weight
        return round(weight * (1 + reps / cls.EPLEY_DIVISOR))

    @staticmethod
    def volume(sets: Iterable[tuple[int, float]], multiplier: int = 1) -> float:
        """Compute training volume as the sum of reps times weight."""
        vol = 0.0
        for reps, weight in sets:
            vol += reps * weight * multiplier
        return vol

    @staticmethod
    def best(items: Sequence[T], key: Callable[[T], float]) -> Optional[T]:
        """Return the first item with the highest ``key`` or ``None``."""
        best_item: Optional[T] = None
        best_value = 0.0
        for item in items:
            value = key(item)
            if best_item is None or value > best_value:
                best_item = item
                best_value = value
        return best_item
