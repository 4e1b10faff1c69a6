"""Module composition: named, transport-agnostic bundles of providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Any

from kickframe.container import Container, ContainerBuilder
from kickframe.contributor import ContextContributor, ErasedContributor, erase
from kickframe.tokens import Token

RegisterFn = Callable[[ContainerBuilder], ContainerBuilder]


def _describe(key: Hashable) -> str:
    if isinstance(key, Token):
        return key.name
    if isinstance(key, type):
        return f"{key.__module__}.{key.__qualname__}"
    return repr(key)


class ServiceImpl(ABC):
    """A service that knows how to build itself from a container."""

    @classmethod
    @abstractmethod
    def build(cls, container: Container) -> Any:
        """Build a new instance by resolving dependencies from ``container``."""


@dataclass(frozen=True)
class ProviderSpec:
    """One DI provider declared by a module."""

    type_name: str
    register: RegisterFn

    def __repr__(self) -> str:
        return f"ProviderSpec(type={self.type_name!r})"


class Module:
    """A built module: providers, contributors and sub-modules under a name."""

    def __init__(
        self,
        name: str,
        prefix: str,
        providers: list[ProviderSpec],
        contributors: list[ErasedContributor],
        sub_modules: list[Module],
    ) -> None:
        self.name = name
        self.prefix = prefix
        self._providers = list(providers)
        self._contributors = list(contributors)
        self._sub_modules = list(sub_modules)

    def __repr__(self) -> str:
        return (
            f"Module(name={self.name!r}, prefix={self.prefix!r}, "
            f"providers={self._providers!r}, contributors={len(self._contributors)}, "
            f"sub_modules={self._sub_modules!r})"
        )

    def provider_type_names(self) -> list[str]:
        """Names of every provider declared here and in sub-modules."""
        names = [spec.type_name for spec in self._providers]
        for sub in self._sub_modules:
            names.extend(sub.provider_type_names())
        return names

    def provider_count(self) -> int:
        """Number of direct and transitive providers."""
        return len(self._providers) + sum(sub.provider_count() for sub in self._sub_modules)

    def register_into(self, builder: ContainerBuilder) -> ContainerBuilder:
        """Fold every provider, recursively, into ``builder``.

        Duplicate keys across modules surface at ``builder.build()`` as
        RK_E_AMBIGUOUS_BIND.
        """
        for spec in self._providers:
            builder = spec.register(builder)
        for sub in self._sub_modules:
            builder = sub.register_into(builder)
        return builder

    def sub_modules(self) -> list[Module]:
        """Direct sub-modules."""
        return list(self._sub_modules)

    def collect_contributors(self) -> list[ErasedContributor]:
        """Every contributor declared here and in sub-modules."""
        collected = list(self._contributors)
        for sub in self._sub_modules:
            collected.extend(sub.collect_contributors())
        return collected


class ModuleBuilder:
    """Fluent builder for a Module."""

    def __init__(self, name: str) -> None:
        self._name = str(name)
        self._prefix = ""
        self._providers: list[ProviderSpec] = []
        self._contributors: list[ErasedContributor] = []
        self._sub_modules: list[Module] = []

    def prefix(self, prefix: str) -> ModuleBuilder:
        """Set the path prefix applied by transport wrappers."""
        self._prefix = str(prefix)
        return self

    def service_value(self, value: Any, key: Hashable | None = None) -> ModuleBuilder:
        """Bind a pre-built singleton, keyed by its type unless ``key`` is given."""
        key = type(value) if key is None else key
        self._providers.append(
            ProviderSpec(_describe(key), lambda builder: builder.singleton(value, key))
        )
        return self

    def service(self, service_cls: type[ServiceImpl]) -> ModuleBuilder:
        """Bind a ServiceImpl class as a lazily built singleton."""
        return self.service_factory(service_cls, service_cls.build)

    def contribute(self, contributor: ContextContributor | ErasedContributor) -> ModuleBuilder:
        """Register a context contributor on this module."""
        if not isinstance(contributor, ErasedContributor):
            contributor = erase(contributor)
        self._contributors.append(contributor)
        return self

    def service_factory(
        self, key: Hashable, factory: Callable[[Container], Any]
    ) -> ModuleBuilder:
        """Bind a singleton built lazily by ``factory``."""
        self._providers.append(
            ProviderSpec(_describe(key), lambda builder: builder.singleton_factory(key, factory))
        )
        return self

    def transient(self, key: Hashable, factory: Callable[[Container], Any]) -> ModuleBuilder:
        """Bind a provider that runs on every resolve."""
        self._providers.append(
            ProviderSpec(_describe(key), lambda builder: builder.transient(key, factory))
        )
        return self

    def sub_module(self, module: Module) -> ModuleBuilder:
        """Mount ``module`` under this one."""
        self._sub_modules.append(module)
        return self

    def build(self) -> Module:
        """Finalize the module."""
        return Module(
            self._name,
            self._prefix,
            self._providers,
            self._contributors,
            self._sub_modules,
        )


def define_module(name: str) -> ModuleBuilder:
    """Start composing a module named ``name``."""
    return ModuleBuilder(name)