"""Normalization of free-form GitHub username input."""
import re
from typing import Optional


MAX_USERNAME_LENGTH = 39

PROFILE_URL_MARKER = "github.com/"

# 1-39 chars, alphanumeric or single hyphens, no leading or trailing hyphen
USERNAME_PATTERN = re.compile(
    r"[a-z\d](?:[a-z\d]|-(?=[a-z\d])){0,38}", re.IGNORECASE | re.ASCII
)


def normalize_username(raw_input) -> Optional[str]:
    """Extract a GitHub login from a raw handle or a profile URL.

    Case is preserved. Returns None when the input cannot be turned into a
    valid login.
    """
    if not raw_input or not isinstance(raw_input, str):
        return None

    candidate = raw_input.strip()
    if candidate.endswith("/"):
        candidate = candidate[:-1]

    if PROFILE_URL_MARKER in candidate:
        after_marker = candidate.rsplit(PROFILE_URL_MARKER, 1)[-1]
        if after_marker:
            candidate = after_marker

    if USERNAME_PATTERN.fullmatch(candidate) and len(candidate) <= MAX_USERNAME_LENGTH:
        return candidate
    return None
