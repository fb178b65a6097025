"""
Data providers for generation listings and diffs.

This module provides a unified interface over the sources the interface
can browse: the backend executable and an in-memory demo source.

Usage:
    from timemach.provider import get_provider

    provider = get_provider("backend", binary="/run/current-system/sw/bin/nix-timemach-backend")
    for generation in provider.list_generations():
        print(generation.id, generation.display_time)
"""

from __future__ import annotations

from typing import Any

from timemach.provider.backend import DEFAULT_BACKEND_BINARY, BackendProvider
from timemach.provider.base import DataProvider
from timemach.provider.demo import DemoProvider, demo_generations
from timemach.provider.payload import parse_diff, parse_generations

# Mapping of provider names to implementations
PROVIDERS: dict[str, type[DataProvider]] = {
    "backend": BackendProvider,
    "demo": DemoProvider,
}


def get_provider(name: str, **options: Any) -> DataProvider:
    """Instantiate a provider by name.

    Args:
        name: One of the keys of PROVIDERS.
        **options: Keyword arguments for the provider constructor.

    Raises:
        ValueError: If the name is unknown.

    Examples:
        >>> get_provider("demo").name
        'demo'
    """
    try:
        provider_cls = PROVIDERS[name]
    except KeyError:
        supported = ", ".join(sorted(PROVIDERS))
        raise ValueError(f"Unknown provider {name!r} (supported: {supported})") from None
    return provider_cls(**options)


__all__ = [
    "DataProvider",
    "BackendProvider",
    "DemoProvider",
    "DEFAULT_BACKEND_BINARY",
    "PROVIDERS",
    "demo_generations",
    "get_provider",
    "parse_diff",
    "parse_generations",
]
