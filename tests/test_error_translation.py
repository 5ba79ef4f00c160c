"""Tests for error classification and user-facing messages."""
import pytest
from portfolio_analyzer.application.error_translation import (
    classify_error,
    classify_error_message,
    rate_limited_message,
    user_message
)
from portfolio_analyzer.domain.errors import (
    ErrorKind,
    MissingConfigError,
    ModelNotFoundError,
    ModelResponseError,
    ProfileNotFoundError
)


@pytest.mark.parametrize("message, expected", [
    ("Not Found", ErrorKind.NOT_FOUND),
    ("API rate limit exceeded for 1.2.3.4", ErrorKind.UPSTREAM_RATE_LIMITED),
    ("Bad credentials", ErrorKind.BAD_CREDENTIALS),
    ("OPENROUTER_API_KEY is not set", ErrorKind.MISSING_CONFIG),
    ("429 Too Many Requests", ErrorKind.MODEL_QUOTA_EXCEEDED),
    ("Rate limit: quota exceeded", ErrorKind.MODEL_QUOTA_EXCEEDED),
    ("RESOURCE EXHAUSTED", ErrorKind.MODEL_QUOTA_EXCEEDED),
    ("Model gpt-x not found", ErrorKind.MODEL_NOT_FOUND),
    ("connection reset", ErrorKind.UNCLASSIFIED),
    ("", ErrorKind.UNCLASSIFIED),
])
def test_classify_error_message(message, expected):
    """Test ordered substring classification of untyped errors."""
    assert classify_error_message(message) == expected


def test_typed_errors_use_their_kind():
    """Test typed errors bypass text matching."""
    assert classify_error(ProfileNotFoundError("whatever text")) == ErrorKind.NOT_FOUND
    assert classify_error(MissingConfigError("x")) == ErrorKind.MISSING_CONFIG
    assert classify_error(ModelNotFoundError("x")) == ErrorKind.MODEL_NOT_FOUND


def test_unclassified_typed_error_falls_back_to_text():
    """Test a typed error without a specific kind is classified by its message."""
    assert classify_error(ModelResponseError("Bad credentials")) == ErrorKind.BAD_CREDENTIALS
    assert classify_error(ModelResponseError("Empty response from AI")) == ErrorKind.UNCLASSIFIED


def test_every_kind_has_a_distinct_message():
    """Test user messages are distinct per kind."""
    kinds = [kind for kind in ErrorKind if kind is not ErrorKind.ADMISSION_DENIED]
    
    messages = {user_message(kind, "octocat") for kind in kinds}
    
    assert len(messages) == len(kinds)
    assert 'GitHub user "octocat" not found' in user_message(ErrorKind.NOT_FOUND, "octocat")


def test_rate_limited_message_rounds_up_seconds():
    assert rate_limited_message(1) == "Too many requests. Please wait 1 seconds before trying again."
    assert rate_limited_message(59001) == "Too many requests. Please wait 60 seconds before trying again."
    assert rate_limited_message(0) == "Too many requests. Please wait 0 seconds before trying again."
