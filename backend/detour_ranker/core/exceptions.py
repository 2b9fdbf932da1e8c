"""Error taxonomy for the matching endpoints.

Only two failures ever reach a caller:

- ``ValidationError``: the request is malformed. Always raised before any
  call to the duration-matrix provider.
- ``GatewayError``: the provider could not be reached or answered with a
  non-OK top-level status. Never retried.

A single unroutable origin/destination pair is not an exception; it is
recorded on the affected match (see ``services.detour``).
"""
from typing import Optional


class DetourRankerError(Exception):
    """Base class for errors surfaced by the matching endpoints."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DetourRankerError):
    """Caller input is missing a required field or list."""


class GatewayError(DetourRankerError):
    """The duration-matrix lookup itself failed."""

    def __init__(self, message: str, status: Optional[str] = None):
        super().__init__(message)
        self.status = status
