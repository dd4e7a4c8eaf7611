"""
Failure taxonomy.

Every failure in the system is scoped to the operation that triggered it:

- TransportError: no response at all (network unreachable, DNS, transport timeout)
- ApiError: the catalog responded with a failure status or an unusable body
- PersistenceError: local durable storage could not be read or written
- MalformedQuery: a criterion could not be turned into a query term.
  Raised and handled inside the query builder only; callers never see it.

None of these is fatal to the process.
"""

from enum import Enum


class FailureKind(str, Enum):
    """Classification of failure types."""

    TRANSPORT = "transport"
    API = "api"
    PERSISTENCE = "persistence"
    MALFORMED_QUERY = "malformed_query"


class CatalogError(Exception):
    """
    Base class for known, explainable failures.

    Subclass this for errors where the system knows what went wrong.
    """

    kind: FailureKind

    def __init__(self, message: str, detail: str | None = None):
        self.message = message
        self.detail = detail
        super().__init__(message)


class TransportError(CatalogError):
    """No response was received from the catalog."""

    kind = FailureKind.TRANSPORT


class ApiError(CatalogError):
    """
    The catalog responded, but not successfully.

    Attributes:
        status: HTTP status code of the response
        body: Response body text (may be empty)
    """

    kind = FailureKind.API

    def __init__(self, status: int, body: str = "", message: str | None = None):
        self.status = status
        self.body = body
        super().__init__(message or f"Catalog returned HTTP {status}", detail=body or None)


class PersistenceError(CatalogError):
    """Durable storage read or write failed."""

    kind = FailureKind.PERSISTENCE


class MalformedQuery(CatalogError):
    """A filter criterion cannot be expressed as a query term."""

    kind = FailureKind.MALFORMED_QUERY
