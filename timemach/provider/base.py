"""
Abstract base class for data providers.

This module defines the DataProvider interface that every source of
generations and diffs must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from timemach.models import DiffResult, Generation


class DataProvider(ABC):
    """Abstract base class for generation data sources.

    Implementations are called from worker threads and may block. They
    report failure by raising a ProviderError subclass.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the provider name (e.g., 'backend', 'demo')."""
        pass

    @abstractmethod
    def list_generations(self) -> list[Generation]:
        """List all generations, in the order they should be displayed.

        Returns:
            The generations reported by the source.

        Raises:
            ProviderInvocationError: If the source could not be queried.
            PayloadParseError: If the source returned malformed data.
        """
        pass

    @abstractmethod
    def diff(self, from_id: str, to_id: str) -> DiffResult:
        """Compute the package difference between two generations.

        Args:
            from_id: Identifier of the starting generation.
            to_id: Identifier of the target generation.

        Returns:
            Packages added, removed and modified going from one to the other.

        Raises:
            ProviderInvocationError: If the source could not be queried.
            PayloadParseError: If the source returned malformed data.
        """
        pass

    def close(self) -> None:
        """Release resources and unblock calls still in progress.

        Called once when the app quits. The default does nothing.
        """
