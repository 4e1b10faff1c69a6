import itertools

import pytest

from kickframe.container import Container
from kickframe.errors import KickError
from kickframe.tokens import Token


class Greeter:
    def __init__(self, text):
        self.text = text


def test_singleton_resolves_to_registered_value():
    c = Container.builder().singleton(Greeter("hello")).build()
    assert c.resolve(Greeter).text == "hello"


def test_singleton_resolve_returns_same_object():
    value = Greeter("once")
    c = Container.builder().singleton(value).build()
    first = c.resolve(Greeter)
    second = c.resolve(Greeter)
    assert first.text == "once"
    assert first is value
    assert second is value


def test_singleton_factory_runs_once_and_caches():
    calls = []

    def factory(_c):
        calls.append(1)
        return Greeter("from-factory")

    c = Container.builder().singleton_factory(Greeter, factory).build()
    first = c.resolve(Greeter)
    c.resolve(Greeter)
    c.resolve(Greeter)
    assert len(calls) == 1
    assert first.text == "from-factory"


def test_singleton_factory_can_resolve_other_providers():
    class Db:
        def __init__(self, url):
            self.url = url

    class Repo:
        def __init__(self, db_url):
            self.db_url = db_url

    c = (
        Container.builder()
        .singleton(Db("postgres://localhost"))
        .singleton_factory(Repo, lambda c: Repo(c.resolve(Db).url))
        .build()
    )
    assert c.resolve(Repo).db_url == "postgres://localhost"


def test_transient_fires_per_resolve():
    class Ticket:
        def __init__(self, n):
            self.n = n

    counter = itertools.count()
    c = Container.builder().transient(Ticket, lambda _c: Ticket(next(counter))).build()
    a = c.resolve(Ticket)
    b = c.resolve(Ticket)
    assert a.n != b.n
    assert a is not b


def test_try_resolve_returns_none_for_unregistered():
    c = Container.builder().build()
    assert c.try_resolve(Greeter) is None


def test_contains_reports_registration():
    c = Container.builder().singleton(Greeter("x")).build()
    assert c.contains(Greeter)
    assert not c.contains(int)


def test_duplicate_singleton_is_ambiguous_bind():
    with pytest.raises(KickError) as info:
        Container.builder().singleton(Greeter("a")).singleton(Greeter("b")).build()
    assert info.value.code == "RK_E_AMBIGUOUS_BIND"
    assert "Greeter" in info.value.message
    assert "Greeter" in info.value.context["type"]


def test_singleton_then_factory_is_ambiguous_bind():
    with pytest.raises(KickError) as info:
        (
            Container.builder()
            .singleton(Greeter("v"))
            .singleton_factory(Greeter, lambda _c: Greeter("f"))
            .build()
        )
    assert info.value.code == "RK_E_AMBIGUOUS_BIND"


def test_singleton_and_transient_for_same_type_is_ambiguous_bind():
    with pytest.raises(KickError) as info:
        (
            Container.builder()
            .singleton(Greeter("v"))
            .transient(Greeter, lambda _c: Greeter("t"))
            .build()
        )
    assert info.value.code == "RK_E_AMBIGUOUS_BIND"


def test_empty_builder_builds():
    c = Container.builder().build()
    assert not c.contains(Greeter)


def test_resolve_raises_on_unregistered():
    c = Container.builder().build()
    with pytest.raises(LookupError, match="unregistered type"):
        c.resolve(Greeter)


def test_token_keys_allow_two_bindings_of_one_type():
    reads = Token("pg:reads", Greeter)
    writes = Token("pg:writes", Greeter)
    c = (
        Container.builder()
        .singleton(Greeter("r"), key=reads)
        .singleton(Greeter("w"), key=writes)
        .build()
    )
    assert c.resolve(reads).text == "r"
    assert c.resolve(writes).text == "w"
    assert not c.contains(Greeter)


def test_duplicate_token_names_token_in_error():
    token = Token("users/repository", Greeter)
    with pytest.raises(KickError) as info:
        Container.builder().singleton(Greeter("a"), key=token).singleton(
            Greeter("b"), key=token
        ).build()
    assert "users/repository" in info.value.message