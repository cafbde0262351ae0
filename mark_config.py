"""
Configuration for candidate timing and equivalence checks.
"""

from dataclasses import dataclass


@dataclass
class MarkConfig:
    """
    Measurement settings for `harness.mark`.

    Each candidate runs until `min_iterations` calls have been made and
    their accumulated time reaches `min_time`, or until `max_iterations`
    calls have been made, whichever comes first.

    Attributes
    ----------
    min_time : float
        Minimum accumulated time per candidate, in seconds
    min_iterations : int
        Minimum number of timed calls per candidate
    max_iterations : int
        Maximum number of timed calls per candidate
    memory : bool
        Trace one extra call per candidate for allocations
    rtol : float
        Relative tolerance of the equivalence check
    atol : float
        Absolute tolerance of the equivalence check
    """

    min_time: float = 0.5
    min_iterations: int = 1
    max_iterations: int = 10000

    memory: bool = True

    rtol: float = 1.5e-8
    atol: float = 0.0

    def copy(self) -> 'MarkConfig':
        """
        Create a copy of this configuration.

        Returns
        -------
        MarkConfig
            A new instance with the same settings
        """
        return MarkConfig(
            min_time=self.min_time,
            min_iterations=self.min_iterations,
            max_iterations=self.max_iterations,
            memory=self.memory,
            rtol=self.rtol,
            atol=self.atol
        )

    @classmethod
    def full(cls) -> 'MarkConfig':
        """Settings used for published comparisons (the defaults)."""
        return cls()

    @classmethod
    def quick(cls) -> 'MarkConfig':
        """Short runs for smoke testing."""
        return cls(min_time=0.05, max_iterations=1000)

    def with_tolerance(self, rtol: float, atol: float = 0.0) -> 'MarkConfig':
        """Copy of this configuration with a different equivalence tolerance."""
        config = self.copy()
        config.rtol = rtol
        config.atol = atol
        return config

    def validate(self):
        """Raise ValueError if the settings cannot drive a measurement."""
        if self.min_iterations < 1:
            raise ValueError(f"min_iterations must be at least 1, got {self.min_iterations}")
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be at least 1, got {self.max_iterations}")
        if self.min_iterations > self.max_iterations:
            raise ValueError(
                f"min_iterations ({self.min_iterations}) exceeds max_iterations ({self.max_iterations})")
        if self.min_time < 0:
            raise ValueError(f"min_time must be non-negative, got {self.min_time}")
        if self.rtol < 0 or self.atol < 0:
            raise ValueError("Tolerances must be non-negative")

    def __str__(self) -> str:
        return (f"min_time={self.min_time}s, iterations={self.min_iterations}..{self.max_iterations}, "
                f"memory={'on' if self.memory else 'off'}")
