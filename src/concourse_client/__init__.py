"""
Concourse Client - async client library for the Concourse CI REST API.

Provides a navigable hierarchy of scoped clients (root, team, pipeline,
job, resource) over httpx, plus a credential-exchanging session for
top-level queries.
"""

__version__ = "0.3.0"

from .api_clients import (
    Client,
    TeamClient,
    TeamPipelineClient,
    TeamPipelineJobClient,
    TeamPipelineResourceClient,
)
from .errors import (
    AuthenticationError,
    ConcourseClientError,
    NotFoundError,
    TransportError,
    ValidationError,
)
from .session import Concourse

__all__ = [
    "Concourse",
    "Client",
    "TeamClient",
    "TeamPipelineClient",
    "TeamPipelineJobClient",
    "TeamPipelineResourceClient",
    "ConcourseClientError",
    "ValidationError",
    "NotFoundError",
    "AuthenticationError",
    "TransportError",
]
