"""Kahn topological sort for named items with `depends_on` lists."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Iterable, Sequence
from typing import TypeVar

from kickframe.errors import KickError


class MountItem(ABC):
    """Anything sortable: a stable name and the names it depends on."""

    @abstractmethod
    def name(self) -> str:
        """Stable identifier."""

    def depends_on(self) -> Sequence[str]:
        """Names of items that must come earlier."""
        return ()


T = TypeVar("T")


def topo_sort(items: Iterable[T]) -> list[T]:
    """Return ``items`` ordered so every item follows its dependencies.

    Raises KickError with code RK_E_DUPLICATE_MOUNT, RK_E_MISSING_MOUNT_DEP
    or RK_E_MOUNT_CYCLE when the graph is invalid.
    """
    items = list(items)
    names = [item.name() for item in items]
    deps = [list(item.depends_on()) for item in items]

    seen: set[str] = set()
    for name in names:
        if name in seen:
            raise (
                KickError("RK_E_DUPLICATE_MOUNT", f"duplicate mount name `{name}`")
                .with_hint("rename or `.scoped(name)` one of them")
                .with_context("duplicate_of", name)
            )
        seen.add(name)

    in_degree = dict.fromkeys(names, 0)
    edges: dict[str, list[str]] = {}
    for name, item_deps in zip(names, deps):
        for dep in item_deps:
            if dep not in in_degree:
                raise KickError(
                    "RK_E_MISSING_MOUNT_DEP",
                    f"`{name}` depends on unknown mount `{dep}`",
                ).with_hint("add the missing item, or remove the dependency")
            edges.setdefault(dep, []).append(name)
            in_degree[name] += 1

    ready = deque(name for name, degree in in_degree.items() if degree == 0)
    order: list[str] = []
    while ready:
        name = ready.popleft()
        for nxt in edges.get(name, ()):
            in_degree[nxt] -= 1
            if in_degree[nxt] == 0:
                ready.append(nxt)
        order.append(name)

    if len(order) != len(names):
        raise KickError("RK_E_MOUNT_CYCLE", "cycle detected in mount graph").with_hint(
            "break the cycle in `depends_on` declarations"
        )

    rank = {name: position for position, name in enumerate(order)}
    return sorted(items, key=lambda item: rank[item.name()])