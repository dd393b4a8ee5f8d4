"""Scoped API clients mirroring the Concourse resource hierarchy.

Client -> TeamClient -> TeamPipelineClient -> TeamPipelineJobClient /
TeamPipelineResourceClient. Each level validates its construction options,
composes its own URLs and descends by creating a new, narrower client.
"""

from .base_client import DEFAULT_BUILD_COUNT, ScopedClient
from .root_client import Client
from .team_client import TeamClient
from .team_pipeline_client import TeamPipelineClient
from .team_pipeline_job_client import TeamPipelineJobClient
from .team_pipeline_resource_client import TeamPipelineResourceClient

__all__ = [
    "DEFAULT_BUILD_COUNT",
    "ScopedClient",
    "Client",
    "TeamClient",
    "TeamPipelineClient",
    "TeamPipelineJobClient",
    "TeamPipelineResourceClient",
]
