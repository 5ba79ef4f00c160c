"""Tests for username normalization."""
import pytest
from portfolio_analyzer.domain.username import USERNAME_PATTERN, normalize_username


@pytest.mark.parametrize("raw, expected", [
    ("octocat", "octocat"),
    ("  octocat  ", "octocat"),
    ("Octo-Cat", "Octo-Cat"),
    ("octocat/", "octocat"),
    ("https://github.com/octocat", "octocat"),
    ("https://github.com/octocat/", "octocat"),
    ("github.com/torvalds", "torvalds"),
    ("https://github.com/github.com/a-b", "a-b"),
    ("a" * 39, "a" * 39),
])
def test_accepts_valid_input(raw, expected):
    """Test handles and profile URLs that normalize to a login."""
    assert normalize_username(raw) == expected


@pytest.mark.parametrize("raw", [
    "",
    "   ",
    None,
    42,
    "-octocat",
    "octocat-",
    "octo--cat",
    "octo_cat",
    "octo cat",
    "a" * 40,
    "https://github.com/",
    "https://github.com/octocat/hello-world",
    "https://example.com/octocat",
    "octo\u0663",
    "\u212aate",
    "\u017foo",
])
def test_rejects_invalid_input(raw):
    """Test malformed input is rejected without raising."""
    assert normalize_username(raw) is None


def test_accepted_output_matches_login_grammar():
    """Test every accepted value satisfies the GitHub login grammar."""
    samples = ["x", "A1", "a-b-c", "https://github.com/Zed-42/", "  z  "]
    
    for sample in samples:
        login = normalize_username(sample)
        assert login is not None
        assert 1 <= len(login) <= 39
        assert USERNAME_PATTERN.fullmatch(login)
        assert not login.startswith("-") and not login.endswith("-")


def test_normalization_is_idempotent():
    """Test that normalizing an accepted login returns it unchanged."""
    login = normalize_username("https://github.com/Octocat")
    
    assert normalize_username(login) == login
