"""Structured framework error type."""

from __future__ import annotations


class KickError(Exception):
    """Framework error with a stable code, a message, an optional hint and context.

    The ``with_*`` methods return the error itself so calls can be chained.
    """

    def __init__(self, code: str, message: str) -> None:
        super().__init__(code, message)
        self.code = code
        self.message = str(message)
        self.fix_hint: str | None = None
        self.source: BaseException | None = None
        self.context: dict[str, str] = {}

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    def __repr__(self) -> str:
        return f"KickError(code={self.code!r}, message={self.message!r})"

    def with_hint(self, hint: str) -> KickError:
        """Attach an actionable suggestion for the developer."""
        self.fix_hint = str(hint)
        return self

    def with_source(self, source: BaseException) -> KickError:
        """Attach a wrapped lower-level error."""
        self.source = source
        self.__cause__ = source
        return self

    def with_context(self, key: str, value: str) -> KickError:
        """Attach a context key/value pair; keys are kept in sorted order."""
        merged = {**self.context, str(key): str(value)}
        self.context = dict(sorted(merged.items()))
        return self