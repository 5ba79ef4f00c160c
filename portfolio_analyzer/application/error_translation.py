"""Translation of pipeline failures into user-facing messages.

Raw exception text is never returned to the user.
"""
import math
from portfolio_analyzer.domain.errors import AnalysisError, ErrorKind


def classify_error_message(message: str) -> ErrorKind:
    """Classify an untyped error by substrings of its lowercased message.

    Order matters: "model ... not found" must not land in the user-not-found
    branch, and quota errors must not land in the GitHub rate-limit branch.
    """
    message = message.lower()

    if "not found" in message and "model" not in message:
        return ErrorKind.NOT_FOUND
    if "rate limit" in message and "quota" not in message:
        return ErrorKind.UPSTREAM_RATE_LIMITED
    if "bad credentials" in message:
        return ErrorKind.BAD_CREDENTIALS
    if "openrouter_api_key" in message:
        return ErrorKind.MISSING_CONFIG
    if (
        "429" in message
        or "quota" in message
        or "too many requests" in message
        or "resource exhausted" in message
    ):
        return ErrorKind.MODEL_QUOTA_EXCEEDED
    if "model" in message and "not found" in message:
        return ErrorKind.MODEL_NOT_FOUND
    return ErrorKind.UNCLASSIFIED


def classify_error(error: BaseException) -> ErrorKind:
    """Typed errors report their own kind; anything else falls back to text matching."""
    if isinstance(error, AnalysisError) and error.kind is not ErrorKind.UNCLASSIFIED:
        return error.kind
    return classify_error_message(str(error))


def user_message(kind: ErrorKind, username: str = "") -> str:
    if kind is ErrorKind.NOT_FOUND:
        return f'GitHub user "{username}" not found. Please check the username and try again.'
    if kind is ErrorKind.UPSTREAM_RATE_LIMITED:
        return "GitHub API rate limit reached. Please try again in a few minutes."
    if kind is ErrorKind.BAD_CREDENTIALS:
        return "GitHub token is invalid. Please check the GITHUB_TOKEN setting."
    if kind is ErrorKind.MISSING_CONFIG:
        return "AI service is not configured. Please add OPENROUTER_API_KEY to the environment."
    if kind is ErrorKind.MODEL_QUOTA_EXCEEDED:
        return (
            "AI service rate limit reached. Please wait 1-2 minutes and try again. "
            "(Free tier has limited requests per minute.)"
        )
    if kind is ErrorKind.MODEL_NOT_FOUND:
        return "AI model configuration error. Please contact the administrator."
    if kind is ErrorKind.INVALID_INPUT:
        return "Please enter a valid GitHub username or profile URL."
    return "An unexpected error occurred during analysis. Please try again in a moment."


def rate_limited_message(retry_after_ms: int) -> str:
    retry_seconds = math.ceil((retry_after_ms or 0) / 1000)
    return f"Too many requests. Please wait {retry_seconds} seconds before trying again."
