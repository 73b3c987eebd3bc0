"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support for the copier.

Usage:
    from graphcopy.config import CopySettings

    # Load from environment variables (GRAPHCOPY_*)
    settings = CopySettings()

    # Or override with explicit values
    settings = CopySettings(allow_bare_allocation=False)
"""

from __future__ import annotations

import importlib
import warnings

from pydantic_settings import BaseSettings, SettingsConfigDict


class CopySettings(BaseSettings):  # type: ignore[misc]
    """Configuration for DeepCopier.

    Attributes:
        cache_type_shapes: Reuse introspected type shapes across calls.
        allow_bare_allocation: Allow `cls.__new__(cls)` when calling the class
            with placeholder arguments is not possible.
        immutable_types: Dotted paths of extra types copied by reference.

    Environment Variables:
        GRAPHCOPY_CACHE_TYPE_SHAPES
        GRAPHCOPY_ALLOW_BARE_ALLOCATION
        GRAPHCOPY_IMMUTABLE_TYPES (JSON list, e.g. '["decimal.Context"]')
    """

    model_config = SettingsConfigDict(
        env_prefix="GRAPHCOPY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    cache_type_shapes: bool = True
    allow_bare_allocation: bool = True
    immutable_types: list[str] = []

    def resolve_immutable_types(self) -> list[type]:
        """Import the configured immutable types.

        Entries that cannot be imported or do not name a class are skipped
        with a warning.

        Returns:
            The resolved classes, in configuration order.
        """
        resolved: list[type] = []
        for path in self.immutable_types:
            module_name, _, attribute = path.rpartition(".")
            try:
                candidate = getattr(importlib.import_module(module_name), attribute)
            except (ImportError, AttributeError, ValueError) as exc:
                warnings.warn(
                    f"Ignoring immutable type {path!r}: {exc}",
                    stacklevel=2,
                )
                continue
            if not isinstance(candidate, type):
                warnings.warn(
                    f"Ignoring immutable type {path!r}: not a class",
                    stacklevel=2,
                )
                continue
            resolved.append(candidate)
        return resolved
