"""Error taxonomy and classification of upstream failures into user-facing messages."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import requests

logger = logging.getLogger(__name__)


class ChannelKitError(Exception):
    """Base exception for channelkit errors."""
    pass


class InvalidRequestError(ChannelKitError):
    """A request is missing a required field or is malformed.

    The message is written for the end user (e.g. "Please enter a description
    for your logo.") and is surfaced as-is.
    """
    pass


class JobTimeoutError(ChannelKitError):
    """A polled job exceeded its wall-clock or attempt budget."""
    pass


class RemoteOperationError(ChannelKitError):
    """The remote service reported a failed operation, or returned nothing usable."""
    pass


class MissingApiKeyError(ChannelKitError):
    """No API key configured for the remote service."""

    def __init__(self, service: str = "Gemini"):
        self.service = service
        super().__init__(f"{service} API key is not configured")


class ErrorKind(Enum):
    INVALID_INPUT = "InvalidInput"
    AUTH_MISSING = "AuthMissing"
    AUTH_INVALID = "AuthInvalid"
    RATE_LIMITED = "RateLimited"
    REMOTE_UNAVAILABLE = "RemoteUnavailable"
    TIMEOUT = "Timeout"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class ClassifiedError:
    """A normalized failure, safe to show to end users.

    `cause` is kept for logging only and never rendered.
    """
    kind: ErrorKind
    message: str
    cause: Any = field(default=None, compare=False, repr=False)

    def __str__(self) -> str:
        return self.message


MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.AUTH_MISSING: (
        "No API key is configured. Please set GEMINI_API_KEY (or API_KEY) and try again."
    ),
    ErrorKind.AUTH_INVALID: (
        "The API key was rejected by the AI service. Please check that it is valid "
        "and has access to the requested model."
    ),
    ErrorKind.RATE_LIMITED: (
        "You have exceeded the request limit for the AI service. This is usually "
        "temporary - please wait a moment and try again later."
    ),
    ErrorKind.REMOTE_UNAVAILABLE: (
        "Could not reach the AI service. Please check your internet connection and try again."
    ),
    ErrorKind.TIMEOUT: (
        "Generation took too long and was stopped. Please try again."
    ),
    ErrorKind.UNKNOWN: "Something went wrong while generating your asset. Please try again.",
}

RATE_LIMIT_TOKENS = ("quota", "rate limit", "rate-limit", "ratelimit", "resource_exhausted", "too many requests")
AUTH_MISSING_TOKENS = ("missing", "not configured", "not set", "required", "no api key")
AUTH_INVALID_TOKENS = ("invalid", "not valid", "api_key_invalid")
AUTH_DENIED_TOKENS = ("permission denied", "permission_denied", "unauthenticated", "unauthorized")
NETWORK_TOKENS = (
    "network",
    "connection",
    "failed to fetch",
    "unreachable",
    "service unavailable",
    "temporarily unavailable",
    "name resolution",
)


def _status_code(raw: Any) -> int | None:
    """Best-effort HTTP status from SDK or requests exceptions."""
    for attr in ("code", "status_code"):
        value = getattr(raw, attr, None)
        if isinstance(value, int):
            return value
    response = getattr(raw, "response", None)
    value = getattr(response, "status_code", None)
    return value if isinstance(value, int) else None


def _make(kind: ErrorKind, raw: Any, message: str | None = None) -> ClassifiedError:
    return ClassifiedError(kind=kind, message=message or MESSAGES[kind], cause=raw)


def _classify(raw: Any) -> ClassifiedError:
    if isinstance(raw, ClassifiedError):
        return raw

    text = str(raw).lower() if raw is not None else ""
    status = _status_code(raw)

    # 1. Quota / rate limit
    if status == 429 or any(token in text for token in RATE_LIMIT_TOKENS):
        return _make(ErrorKind.RATE_LIMITED, raw)

    # 2. Credentials
    if isinstance(raw, MissingApiKeyError):
        return _make(ErrorKind.AUTH_MISSING, raw)
    mentions_key = "api key" in text or "api_key" in text or "apikey" in text
    if mentions_key and any(token in text for token in AUTH_MISSING_TOKENS):
        return _make(ErrorKind.AUTH_MISSING, raw)
    if mentions_key and any(token in text for token in AUTH_INVALID_TOKENS):
        return _make(ErrorKind.AUTH_INVALID, raw)
    if status in (401, 403) or any(token in text for token in AUTH_DENIED_TOKENS):
        return _make(ErrorKind.AUTH_INVALID, raw)

    # 3. Network / connectivity
    if isinstance(raw, (requests.ConnectionError, requests.Timeout, ConnectionError)):
        return _make(ErrorKind.REMOTE_UNAVAILABLE, raw)
    if (status is not None and status >= 500) or any(token in text for token in NETWORK_TOKENS):
        return _make(ErrorKind.REMOTE_UNAVAILABLE, raw)

    # 4. Caller validation
    if isinstance(raw, InvalidRequestError):
        return _make(ErrorKind.INVALID_INPUT, raw, str(raw) or "Please fill in all required fields.")

    # 5. Orchestrator timeout
    if isinstance(raw, JobTimeoutError):
        return _make(ErrorKind.TIMEOUT, raw)

    return _make(ErrorKind.UNKNOWN, raw)


def classify(raw: Any) -> ClassifiedError:
    """Map any failure object to a ClassifiedError. Never raises."""
    try:
        return _classify(raw)
    except Exception as e:  # str()/attribute access on a hostile object
        logger.warning(f"Error classification failed: {e!r}")
        return ClassifiedError(kind=ErrorKind.UNKNOWN, message=MESSAGES[ErrorKind.UNKNOWN], cause=raw)
