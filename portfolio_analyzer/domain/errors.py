"""Typed failures raised by collaborators of the analysis pipeline.

Each error carries an explicit kind so the pipeline can translate it into a
user-facing message without inspecting the error text.
"""
from enum import Enum


class ErrorKind(Enum):
    """Failure taxonomy of the analysis pipeline."""
    ADMISSION_DENIED = "admission-denied"
    INVALID_INPUT = "invalid-input"
    NOT_FOUND = "not-found"
    UPSTREAM_RATE_LIMITED = "upstream-rate-limited"
    BAD_CREDENTIALS = "bad-credentials"
    MISSING_CONFIG = "missing-config"
    MODEL_QUOTA_EXCEEDED = "model-quota-exceeded"
    MODEL_NOT_FOUND = "model-not-found"
    UNCLASSIFIED = "unclassified"


class AnalysisError(Exception):
    """Base class for failures with a known kind."""
    kind = ErrorKind.UNCLASSIFIED


class ProfileNotFoundError(AnalysisError):
    """Raised when the GitHub account does not exist."""
    kind = ErrorKind.NOT_FOUND


class UpstreamRateLimitError(AnalysisError):
    """Raised when the GitHub API quota is exhausted."""
    kind = ErrorKind.UPSTREAM_RATE_LIMITED


class BadCredentialsError(AnalysisError):
    """Raised when the configured GitHub token is rejected."""
    kind = ErrorKind.BAD_CREDENTIALS


class MissingConfigError(AnalysisError):
    """Raised when the scoring model API key is not configured."""
    kind = ErrorKind.MISSING_CONFIG


class ModelQuotaError(AnalysisError):
    kind = ErrorKind.MODEL_QUOTA_EXCEEDED


class ModelNotFoundError(AnalysisError):
    kind = ErrorKind.MODEL_NOT_FOUND


class ModelResponseError(AnalysisError):
    """Raised when the model output is empty, not JSON, or misses required fields."""
    pass
