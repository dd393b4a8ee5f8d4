"""Error taxonomy for the Concourse API client.

Library errors derive from ConcourseClientError. Failures reported by the
HTTP transport are httpx exceptions and are never wrapped: TransportError is
simply an alias for httpx.HTTPError so callers can catch them by one name.
"""

from typing import List, Sequence

import httpx


class ConcourseClientError(Exception):
    """Base exception for errors raised by this library."""

    pass


class ValidationError(ConcourseClientError, ValueError):
    """Exception raised when options fail schema validation.

    Raised before any network request is made.
    """

    def __init__(self, violations: Sequence[str]):
        self.violations: List[str] = list(violations)
        super().__init__(f"Invalid parameter(s): [{', '.join(self.violations)}].")


class NotFoundError(ConcourseClientError):
    """Exception raised when navigating to a resource that does not exist."""

    def __init__(self, kind: str, name: str):
        super().__init__(f"No {kind} with name: {name}")
        self.kind = kind
        self.name = name


class AuthenticationError(ConcourseClientError):
    """Exception raised when a bearer token cannot be obtained."""

    pass


# Transport failures propagate as raised by httpx
TransportError = httpx.HTTPError
