"""Base classes for compiler options.

This module defines the foundation class for the frozen option dataclasses
used to configure the markast compiler.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from markast.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> Self:
        """Build an options instance from a plain mapping.

        Parameters
        ----------
        values : Mapping[str, Any]
            Option names and values

        Returns
        -------
        Self
            New options instance

        Raises
        ------
        ValidationError
            If the mapping contains names that are not option fields

        """
        known = {f.name for f in fields(cls)}  # type: ignore[arg-type]
        unknown = sorted(str(key) for key in values if key not in known)
        if unknown:
            raise ValidationError(
                f"Unknown option(s) for {cls.__name__}: {', '.join(unknown)}",
                parameter_name=unknown[0],
                parameter_value=values[unknown[0]],
            )
        return cls(**values)


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for all parser options.

    Notes
    -----
    Subclasses should define parsing options as frozen dataclass fields and
    extend ``__post_init__`` with their own range and type checks.

    """

    def __post_init__(self) -> None:
        """Validate that every boolean field holds an actual bool.

        Raises
        ------
        ValidationError
            If a field declared as ``bool`` holds another type.

        """
        for f in fields(self):
            if f.type not in ("bool", bool):
                continue
            value = getattr(self, f.name)
            if not isinstance(value, bool):
                raise ValidationError(
                    f"{f.name} must be a bool, got {type(value).__name__}",
                    parameter_name=f.name,
                    parameter_value=value,
                )
