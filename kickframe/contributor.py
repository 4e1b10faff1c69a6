"""Context contributors: typed, declarative populators of per-request values."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Hashable, Iterator
from dataclasses import dataclass
from typing import Any, ClassVar

from kickframe.container import Container
from kickframe.errors import KickError
from kickframe.tokens import Token


def _type_name(key: Hashable) -> str:
    if isinstance(key, Token):
        return key.name
    if isinstance(key, type):
        return f"{key.__module__}.{key.__qualname__}"
    return repr(key)


class ContributorStore:
    """In-memory per-request value store, optionally wired to a DI container."""

    def __init__(self, container: Container | None = None) -> None:
        self._items: dict[Hashable, Any] = {}
        self._container = container

    def __repr__(self) -> str:
        names = [_type_name(k) for k in self._items]
        return f"ContributorStore(items={names!r}, has_container={self._container is not None})"

    @property
    def container(self) -> Container | None:
        """The attached DI container, if any."""
        return self._container

    def set_container(self, container: Container) -> Container | None:
        """Attach ``container``; returns the previously attached one, if any."""
        previous, self._container = self._container, container
        return previous

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._items)

    def get(self, key: Hashable) -> Any:
        """The value stored under ``key``, or None when absent."""
        return self._items.get(key)

    def insert(self, key: Hashable, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any earlier value."""
        self._items[key] = value

    def inject(self, key: Hashable) -> Any:
        """Resolve ``key`` from the attached container.

        Raises RuntimeError when no container is attached and LookupError
        when the container has no provider for ``key``.
        """
        if self._container is None:
            raise RuntimeError(
                "ContributorRequest.inject called without a container — "
                "use ContributorStore(container) or the HTTP layer"
            )
        return self._container.resolve(key)

    def try_inject(self, key: Hashable) -> Any | None:
        """Resolve ``key`` if a container is attached and knows it; else None."""
        if self._container is None:
            return None
        return self._container.try_resolve(key)


class OnErrorAction:
    """What the pipeline does when a contributor's resolve fails."""


@dataclass(frozen=True)
class Propagate(OnErrorAction):
    """Re-raise the error; the pipeline aborts."""


@dataclass(frozen=True)
class Skip(OnErrorAction):
    """Swallow the error and store nothing for this contributor."""


@dataclass(frozen=True)
class Recover(OnErrorAction):
    """Substitute ``value`` as the contributor's output."""

    value: Any


class ContextContributor(ABC):
    """Produces the value stored under ``key`` from the values under ``deps``.

    Subclasses set ``key`` (the produced type or token) and ``deps`` (the
    keys read from upstream contributors, in order).
    """

    key: ClassVar[Hashable]
    deps: ClassVar[tuple[Hashable, ...]] = ()

    @abstractmethod
    async def resolve(self, ctx: ContributorStore, deps: tuple[Any, ...]) -> Any:
        """Compute the value for the current request."""

    def on_error(self, err: KickError) -> OnErrorAction:
        """Decide how to handle a resolve failure; the default propagates."""
        return Propagate()


def _missing_at_runtime(key: Hashable) -> KickError:
    name = _type_name(key)
    return (
        KickError(
            "RK_E_MISSING_CONTRIBUTOR",
            f"required value `{name}` missing from request context",
        )
        .with_hint("framework bug — boot-time topo-sort should have caught this")
        .with_context("type", name)
    )


class ErasedContributor:
    """Uniform wrapper around a contributor, as held by a pipeline."""

    def __init__(self, inner: ContextContributor) -> None:
        if not hasattr(inner, "key") or not callable(getattr(inner, "resolve", None)):
            raise TypeError(f"{inner!r} is not a context contributor")
        self._inner = inner

    def __repr__(self) -> str:
        return f"ErasedContributor(produces={self.produces_name()!r})"

    @property
    def inner(self) -> ContextContributor:
        """The wrapped contributor."""
        return self._inner

    def produces(self) -> Hashable:
        """Key of the value this contributor produces."""
        return self._inner.key

    def requires(self) -> list[Hashable]:
        """Keys of the values this contributor reads, in declaration order."""
        return list(getattr(self._inner, "deps", ()))

    def produces_name(self) -> str:
        """Human-readable name of the produced key, for diagnostics."""
        return _type_name(self.produces())

    async def run(self, ctx: ContributorStore) -> None:
        """Run the contributor against ``ctx`` and insert what it produces."""
        deps = []
        for dep in self.requires():
            if dep not in ctx:
                raise _missing_at_runtime(dep)
            deps.append(ctx.get(dep))

        key = self.produces()
        try:
            produced = await self._inner.resolve(ctx, tuple(deps))
        except KickError as err:
            action = self._inner.on_error(err)
            if isinstance(action, Recover):
                ctx.insert(key, action.value)
                return
            if isinstance(action, Skip):
                return
            raise
        ctx.insert(key, produced)


def erase(contributor: ContextContributor) -> ErasedContributor:
    """Wrap a contributor for storage in a module or pipeline."""
    return ErasedContributor(contributor)