"""
Error Taxonomy

Exceptions raised along the analysis pipeline. Only call failures
(TransientCallError and its RateLimited subclass) are retried; every
other generative-path error degrades into a fallback report.
"""

import asyncio
from typing import Optional


class AuditError(Exception):
    """Base class for all screen-audit errors"""


class TransientCallError(AuditError):
    """
    A single model invocation failed (network, provider outage, timeout).

    Attributes:
        status_code: HTTP-like status reported by the provider, if any
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RateLimited(TransientCallError):
    """The provider rejected the call with a 429 rate-limit status"""

    def __init__(self, message: str = "Rate limit exceeded"):
        super().__init__(message, status_code=429)


class ExtractionError(AuditError):
    """No parseable JSON could be recovered from the model text"""

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(f"{message}: {detail}" if detail else message)
        self.detail = detail


class SchemaError(AuditError):
    """A parsed response is missing required top-level keys"""

    def __init__(self, missing: list[str]):
        super().__init__(f"Missing required field(s): {', '.join(missing)}")
        self.missing = missing


class HeuristicInputError(AuditError, ValueError):
    """Region data handed to the heuristic analyzers is malformed"""


def _status_code(exc: BaseException) -> Optional[int]:
    for attr in ("status_code", "status", "code"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value

    response = getattr(exc, "response", None)
    value = getattr(response, "status_code", None)
    if isinstance(value, int) and not isinstance(value, bool):
        return value

    return None


def classify_call_error(exc: Exception) -> TransientCallError:
    """
    Map a provider library exception onto the retryable taxonomy.

    Provider SDKs expose the HTTP status under different attribute names
    (status_code, status, code, response.status_code); a 429 on any of
    them becomes RateLimited.

    Args:
        exc: Exception raised by a provider call

    Returns:
        RateLimited for 429 responses, TransientCallError otherwise
    """
    if isinstance(exc, TransientCallError):
        return exc

    if isinstance(exc, asyncio.TimeoutError):
        return TransientCallError("Model call timed out")

    status = _status_code(exc)
    if status == 429:
        return RateLimited(f"Rate limit exceeded: {exc}")

    return TransientCallError(f"{type(exc).__name__}: {exc}", status_code=status)
