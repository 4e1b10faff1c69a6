"""Provider lifetime scopes and named injection tokens."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any


class Scope(enum.Enum):
    """Lifetime for a DI provider."""

    SINGLETON = "singleton"
    """One instance for the lifetime of the container."""
    TRANSIENT = "transient"
    """A new instance per resolve call."""
    REQUEST = "request"
    """One instance per request."""


@dataclass(frozen=True)
class Token:
    """A typed, named DI key, usable where a bare type is ambiguous."""

    name: str
    target: Any

    def type_id(self) -> Any:
        """The pointed-at type this token names."""
        return self.target