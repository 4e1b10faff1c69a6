"""DI container with singleton, lazy-singleton and transient providers."""

from __future__ import annotations

import threading
from collections.abc import Callable, Hashable
from typing import Any

from kickframe.errors import KickError
from kickframe.tokens import Token

Factory = Callable[["Container"], Any]


def _describe(key: Hashable) -> str:
    if isinstance(key, Token):
        return key.name
    if isinstance(key, type):
        return f"{key.__module__}.{key.__qualname__}"
    return repr(key)


class Container:
    """Read-side container; resolves providers by type or token key."""

    def __init__(
        self,
        singletons: dict[Hashable, Any],
        singleton_factories: dict[Hashable, Factory],
        transient_factories: dict[Hashable, Factory],
        type_names: dict[Hashable, str],
    ) -> None:
        self._singletons = dict(singletons)
        self._singleton_factories = dict(singleton_factories)
        self._transient_factories = dict(transient_factories)
        self._type_names = dict(type_names)
        self._lock = threading.RLock()

    @staticmethod
    def builder() -> ContainerBuilder:
        """Begin building a container."""
        return ContainerBuilder()

    def __repr__(self) -> str:
        return f"Container(registered_types={list(self._type_names.values())!r})"

    def resolve(self, key: Hashable) -> Any:
        """Resolve a provider; raises LookupError if ``key`` was never registered."""
        if not self.contains(key):
            raise LookupError(
                f"Container.resolve called for unregistered type `{_describe(key)}` — "
                "register it with .singleton/.singleton_factory/.transient before .build()"
            )
        return self.try_resolve(key)

    def try_resolve(self, key: Hashable) -> Any | None:
        """Best-effort lookup; returns None if no provider matches."""
        if key in self._singletons:
            return self._singletons[key]

        factory = self._singleton_factories.get(key)
        if factory is not None:
            with self._lock:
                if key not in self._singletons:
                    self._singletons[key] = factory(self)
                return self._singletons[key]

        factory = self._transient_factories.get(key)
        if factory is not None:
            return factory(self)

        return None

    def contains(self, key: Hashable) -> bool:
        """Whether a provider for ``key`` is registered."""
        return (
            key in self._singletons
            or key in self._singleton_factories
            or key in self._transient_factories
        )


class ContainerBuilder:
    """Fluent builder for a Container; registration errors surface at build()."""

    def __init__(self) -> None:
        self._singletons: dict[Hashable, Any] = {}
        self._singleton_factories: dict[Hashable, Factory] = {}
        self._transient_factories: dict[Hashable, Factory] = {}
        self._type_names: dict[Hashable, str] = {}
        self._errors: list[KickError] = []

    def _claim(self, key: Hashable) -> bool:
        if (
            key in self._singletons
            or key in self._singleton_factories
            or key in self._transient_factories
        ):
            self._errors.append(_ambiguous_bind(key))
            return False
        self._type_names[key] = _describe(key)
        return True

    def singleton(self, value: Any, key: Hashable | None = None) -> ContainerBuilder:
        """Register ``value`` as a singleton, keyed by its type unless ``key`` is given."""
        key = type(value) if key is None else key
        if self._claim(key):
            self._singletons[key] = value
        return self

    def singleton_factory(self, key: Hashable, factory: Factory) -> ContainerBuilder:
        """Register a lazily built singleton; ``factory`` runs at most once."""
        if self._claim(key):
            self._singleton_factories[key] = factory
        return self

    def transient(self, key: Hashable, factory: Factory) -> ContainerBuilder:
        """Register a factory that runs on every resolve."""
        if self._claim(key):
            self._transient_factories[key] = factory
        return self

    def build(self) -> Container:
        """Finalize; raises the first registration error, if any."""
        if self._errors:
            raise self._errors[0]
        return Container(
            self._singletons,
            self._singleton_factories,
            self._transient_factories,
            self._type_names,
        )


def _ambiguous_bind(key: Hashable) -> KickError:
    name = _describe(key)
    return (
        KickError("RK_E_AMBIGUOUS_BIND", f"two providers registered for `{name}`")
        .with_hint("each scope+type pair must be unique; use `Token<T>` for a second binding")
        .with_context("type", name)
    )