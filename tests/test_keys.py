import pytest

from aliyun_storage import KeyResolver


@pytest.mark.parametrize(
    "key, expected",
    [
        ("a/b.txt", "uploads/a/b.txt"),
        ("x", "uploads/x"),
        ("deep/nested/key.bin", "uploads/deep/nested/key.bin"),
        ("trailing/", "uploads/trailing/"),
    ],
)
def test_resolve_joins_root_and_key(key, expected):
    resolver = KeyResolver("uploads")

    assert resolver.resolve(key) == expected
    assert resolver.resolve(key) == resolver.resolve(key)


@pytest.mark.parametrize("root", [None, ""])
def test_resolve_without_root_returns_key(root):
    assert KeyResolver(root).resolve("a/b.txt") == "a/b.txt"


@pytest.mark.parametrize("key", ["/secret.txt", "//secret.txt"])
def test_leading_slash_key_stays_under_root(key):
    assert KeyResolver("uploads").resolve(key) == "uploads/secret.txt"


def test_root_trailing_slash_is_not_doubled():
    assert KeyResolver("uploads/").resolve("a/b.txt") == "uploads/a/b.txt"


def test_resolve_does_not_normalize():
    assert KeyResolver("uploads").resolve("a/../b") == "uploads/a/../b"


def test_distinct_keys_do_not_collide():
    resolver = KeyResolver("uploads/")
    keys = ["a", "a/", "a/b", "ab", "b/a"]

    assert len({resolver.resolve(k) for k in keys}) == len(keys)
