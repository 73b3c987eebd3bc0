"""Configuration module using Pydantic Settings.

Usage:
    from graphcopy.config import CopySettings

    settings = CopySettings(cache_type_shapes=False)
"""

from graphcopy.config.settings import CopySettings

__all__ = [
    "CopySettings",
]
