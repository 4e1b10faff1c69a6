import pytest

from kickframe.errors import KickError
from kickframe.mount_sort import MountItem, topo_sort


class Item(MountItem):
    def __init__(self, n, deps=()):
        self.n = n
        self.deps = tuple(deps)

    def name(self):
        return self.n

    def depends_on(self):
        return self.deps


class Bare(MountItem):
    def __init__(self, n):
        self.n = n

    def name(self):
        return self.n


def test_sorts_linear_chain():
    items = [Item("c", ["b"]), Item("a"), Item("b", ["a"])]
    sorted_items = topo_sort(items)
    assert [i.n for i in sorted_items] == ["a", "b", "c"]


def test_sort_keeps_original_objects():
    a, b = Item("a"), Item("b", ["a"])
    result = topo_sort([b, a])
    assert result[0] is a
    assert result[1] is b


def test_diamond_respects_every_edge():
    items = [Item("d", ["b", "c"]), Item("b", ["a"]), Item("c", ["a"]), Item("a")]
    names = [i.n for i in topo_sort(items)]
    assert sorted(names) == ["a", "b", "c", "d"]
    assert names[0] == "a"
    assert names[-1] == "d"


def test_default_depends_on_is_empty():
    result = topo_sort([Bare("x"), Item("y", ["x"])])
    assert [i.name() for i in result] == ["x", "y"]


def test_empty_input_sorts_to_empty():
    assert topo_sort([]) == []


def test_detects_cycle():
    items = [Item("a", ["b"]), Item("b", ["a"])]
    with pytest.raises(KickError) as info:
        topo_sort(items)
    assert info.value.code == "RK_E_MOUNT_CYCLE"


def test_detects_missing_dep():
    with pytest.raises(KickError) as info:
        topo_sort([Item("a", ["ghost"])])
    assert info.value.code == "RK_E_MISSING_MOUNT_DEP"
    assert "ghost" in info.value.message


def test_detects_duplicate():
    with pytest.raises(KickError) as info:
        topo_sort([Item("a"), Item("a")])
    assert info.value.code == "RK_E_DUPLICATE_MOUNT"
    assert info.value.context == {"duplicate_of": "a"}