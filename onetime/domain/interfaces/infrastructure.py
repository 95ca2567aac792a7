"""Interfaces for cross-cutting infrastructure collaborators."""

from abc import ABC, abstractmethod
from datetime import datetime


class IClock(ABC):
    """Supplies the current time.

    Every expiry decision in the package reads the time through this
    interface, so tests can pin or advance it.
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time as a timezone-aware UTC datetime."""
        raise NotImplementedError
