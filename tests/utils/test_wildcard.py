import pytest

from typedconf.utils.wildcard import like, to_regex


def test_implicit_wildcards_and_case_folding():
    assert like("Hello World", "hello")
    assert like("Hello World", "WORLD")
    assert not like("Hello World", "hello", case_sensitive=True)


@pytest.mark.parametrize(
    "source, pattern, expected",
    [
        ("config.json", "config*json", True),
        ("config.backup.json", "config*json", True),
        ("config.json.bak", "config*json", False),
        ("cat", "c?t", True),
        ("cart", "c?t", False),
        ("ct", "c?t", False),
        ("alpha beta gamma", "alpha gamma", True),
        ("a+b", "a+b", True),
        ("aab", "a+b", False),
        ("[x]", "[x]", True),
        ("x", "[x]", False),
        ("line1\nline2", "line1*line2", True),
        ("", "*", True),
    ],
)
def test_anchored_matching(source, pattern, expected):
    assert like(source, pattern, prefix_wildcard=False, suffix_wildcard=False) is expected


def test_prefix_and_suffix_are_independent():
    assert not like("xxabc", "abc", prefix_wildcard=False)
    assert like("abcxx", "abc", prefix_wildcard=False)
    assert not like("abcxx", "abc", suffix_wildcard=False)
    assert like("xxabc", "abc", suffix_wildcard=False)


def test_to_regex_pattern():
    assert to_regex("a?c", prefix_wildcard=False, suffix_wildcard=False).pattern == "a.c"
    assert to_regex("a c").pattern == ".*a.*c.*"
