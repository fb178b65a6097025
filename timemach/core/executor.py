"""
Command execution against a data provider.

``execute`` is the boundary where provider failures stop: whatever
happens inside the provider, the caller gets back exactly one outcome event.
"""

from __future__ import annotations

import logging
from typing import Union

from timemach.core.events import (
    DiffFetched,
    FetchCommand,
    FetchDiff,
    FetchFailed,
    FetchGenerations,
    ListFetched,
)
from timemach.errors import ProviderError, ProviderInvocationError
from timemach.provider.base import DataProvider

_logger = logging.getLogger(__name__)

FetchOutcome = Union[ListFetched, DiffFetched, FetchFailed]


def execute(provider: DataProvider, command: FetchCommand) -> FetchOutcome:
    """Run ``command`` synchronously and wrap its result.

    Args:
        provider: Source to query.
        command: FetchGenerations or FetchDiff.

    Returns:
        ListFetched or DiffFetched on success, FetchFailed otherwise.

    Raises:
        TypeError: If ``command`` is not a fetch command.
    """
    if not isinstance(command, (FetchGenerations, FetchDiff)):
        raise TypeError(f"not a fetch command: {command!r}")

    _logger.debug("Executing %r with %s provider", command, provider.name)
    try:
        if isinstance(command, FetchGenerations):
            generations = provider.list_generations()
            _logger.debug("Fetched %d generations", len(generations))
            return ListFetched(generations)
        return DiffFetched(provider.diff(command.from_id, command.to_id))
    except ProviderError as e:
        _logger.warning("%r failed: %s", command, e)
        return FetchFailed(e)
    except Exception as e:
        _logger.exception("Unexpected error from %s provider", provider.name)
        return FetchFailed(ProviderInvocationError(f"unexpected provider error: {e}"))
