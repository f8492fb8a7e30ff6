"""
Error categories for Mistral calls.

The value of each code is what structured logs record as ``error_code``.
Which code a failure gets depends on where it happened:

* before any I/O (missing key, no stored credentials): ``AUTH``;
* opening the stream, by HTTP status: 400/409/422 ``VALIDATION``,
  401/403 ``AUTH``, 404 ``NOT_FOUND``, 408/504 ``TIMEOUT``, 429
  ``RATE_LIMIT``, 500 ``SERVER_ERROR``, 502 ``TRANSIENT``, 503
  ``UNAVAILABLE``;
* connect or read failures without a status: ``TIMEOUT`` or ``TRANSIENT``;
* a chunk that does not decode, or a tool call that is missing its id or
  name: ``VALIDATION``;
* a stream the caller cancelled: ``CANCELLED``.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    TRANSIENT = "transient"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
