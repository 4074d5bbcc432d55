"""Common base models."""

from nomad.shared.schemas.base import CamelModel

__all__ = ["CamelModel"]
