from kickframe.tokens import Token


class UserRepo:
    pass


def test_type_id_is_the_target():
    token = Token("users/repository", UserRepo)
    assert token.type_id() is UserRepo
    assert token.name == "users/repository"


def test_tokens_with_same_name_and_target_are_equal():
    a = Token("users/repository", UserRepo)
    b = Token("users/repository", UserRepo)
    assert a == b
    assert hash(a) == hash(b)


def test_tokens_with_different_names_differ_as_keys():
    reads = Token("pg:reads", UserRepo)
    writes = Token("pg:writes", UserRepo)
    registry = {reads: 1, writes: 2}
    assert len(registry) == 2
    assert registry[Token("pg:reads", UserRepo)] == 1