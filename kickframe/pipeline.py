"""Topo-sorted contributor pipeline, built once at boot and run per request."""

from __future__ import annotations

from collections import deque
from collections.abc import Hashable, Iterable

from kickframe.contributor import ContextContributor, ContributorStore, ErasedContributor, erase
from kickframe.errors import KickError
from kickframe.tokens import Token


def _describe(key: Hashable) -> str:
    if isinstance(key, Token):
        return key.name
    if isinstance(key, type):
        return f"{key.__module__}.{key.__qualname__}"
    return repr(key)


def _as_erased(item: ErasedContributor | ContextContributor) -> ErasedContributor:
    if isinstance(item, ErasedContributor):
        return item
    return erase(item)


class ContributorPipeline:
    """Contributors ordered so each runs after the ones it depends on."""

    def __init__(self, sorted_items: list[ErasedContributor]) -> None:
        self._sorted = list(sorted_items)

    def __repr__(self) -> str:
        return f"ContributorPipeline(order={self.order()!r})"

    @classmethod
    def build(cls, items: Iterable[ErasedContributor | ContextContributor]) -> ContributorPipeline:
        """Topo-sort ``items`` by their produces/requires graph.

        Raises KickError with code RK_E_MISSING_CONTRIBUTOR,
        RK_E_CONTRIBUTOR_CYCLE or RK_E_DUPLICATE_CONTRIBUTOR.
        """
        return cls.build_with_ambient(items, ())

    @classmethod
    def build_with_ambient(
        cls,
        items: Iterable[ErasedContributor | ContextContributor],
        ambient: Iterable[Hashable],
    ) -> ContributorPipeline:
        """Like ``build``, but keys in ``ambient`` count as already present."""
        contributors = [_as_erased(item) for item in items]
        ambient_keys = set(ambient)

        produced_by: dict[Hashable, int] = {}
        for index, item in enumerate(contributors):
            key = item.produces()
            if key in produced_by:
                raise KickError(
                    "RK_E_DUPLICATE_CONTRIBUTOR",
                    f"two contributors produce `{item.produces_name()}`: "
                    f"positions {produced_by[key]} and {index}",
                ).with_hint(
                    "rename one of the `Key` types or remove the duplicate registration"
                )
            produced_by[key] = index

        count = len(contributors)
        in_degree = [0] * count
        out_edges: list[list[int]] = [[] for _ in range(count)]

        for consumer, item in enumerate(contributors):
            for dep in item.requires():
                if dep in ambient_keys:
                    continue
                producer = produced_by.get(dep)
                if producer is None:
                    raise KickError(
                        "RK_E_MISSING_CONTRIBUTOR",
                        f"contributor producing `{item.produces_name()}` requires "
                        f"`{_describe(dep)}` but nothing produces it",
                    ).with_hint(
                        "add a contributor that produces this type, or remove the dependency"
                    )
                if producer == consumer:
                    raise KickError(
                        "RK_E_CONTRIBUTOR_CYCLE",
                        f"contributor producing `{item.produces_name()}` "
                        "lists its own output as a dep",
                    )
                out_edges[producer].append(consumer)
                in_degree[consumer] += 1

        ready = deque(i for i, degree in enumerate(in_degree) if degree == 0)
        order: list[int] = []
        while ready:
            current = ready.popleft()
            order.append(current)
            for nxt in out_edges[current]:
                in_degree[nxt] -= 1
                if in_degree[nxt] == 0:
                    ready.append(nxt)

        if len(order) != count:
            placed = set(order)
            names = [
                item.produces_name()
                for i, item in enumerate(contributors)
                if i not in placed
            ]
            raise KickError(
                "RK_E_CONTRIBUTOR_CYCLE",
                f"cycle detected in contributor graph; involved: {names!r}",
            ).with_hint("break the cycle in `type Deps = (...)` declarations")

        return cls([contributors[i] for i in order])

    def __len__(self) -> int:
        return len(self._sorted)

    def order(self) -> list[str]:
        """Names of produced keys in execution order."""
        return [item.produces_name() for item in self._sorted]

    async def run(self, ctx: ContributorStore) -> None:
        """Run every contributor in order against ``ctx``."""
        for item in self._sorted:
            await item.run(ctx)