"""Pipeline-scoped client."""

import logging
from types import MappingProxyType
from typing import List, Optional, Tuple

import httpx

from ..urls import (
    team_pipeline_builds_url,
    team_pipeline_job_url,
    team_pipeline_jobs_url,
    team_pipeline_pause_url,
    team_pipeline_resource_types_url,
    team_pipeline_resource_url,
    team_pipeline_resources_url,
    team_pipeline_unpause_url,
    team_pipeline_url,
)
from ..validation import (
    Entity,
    EntityView,
    Name,
    OptionsSchema,
    validate_options,
)
from .base_client import DEFAULT_BUILD_COUNT, ClientOptions, ScopedClient
from .team_pipeline_job_client import TeamPipelineJobClient
from .team_pipeline_resource_client import TeamPipelineResourceClient

logger = logging.getLogger(__name__)


class TeamPipelineClientOptions(ClientOptions):
    team: Entity
    pipeline: Entity


class JobNameOptions(OptionsSchema):
    job_name: Name


class ResourceNameOptions(OptionsSchema):
    resource_name: Name


class TeamPipelineClient(ScopedClient):
    """Client for a single pipeline and its jobs, resources and resource types."""

    def __init__(
        self,
        api_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        team: Optional[Entity] = None,
        pipeline: Optional[Entity] = None,
    ):
        """Initialize pipeline client.

        Args:
            api_url: Concourse API URL
            http_client: Authenticated transport
            team: Normalized team entity
            pipeline: Normalized pipeline entity

        Raises:
            ValidationError: If any argument is missing or invalid
        """
        options = validate_options(
            TeamPipelineClientOptions,
            {
                "api_url": api_url,
                "http_client": http_client,
                "team": team,
                "pipeline": pipeline,
            },
        )
        super().__init__(api_url=options.api_url, http_client=options.http_client)
        self._team = options.team
        self._pipeline = options.pipeline

    @property
    def team(self) -> EntityView:
        return MappingProxyType(self._team)

    @property
    def pipeline(self) -> EntityView:
        return MappingProxyType(self._pipeline)

    @property
    def _path(self) -> Tuple[str, str, str]:
        return self.api_url, self.team["name"], self.pipeline["name"]

    async def pause(self) -> None:
        await self._send(
            "PUT", team_pipeline_pause_url(*self._path), expected_status=200
        )

    async def unpause(self) -> None:
        await self._send(
            "PUT", team_pipeline_unpause_url(*self._path), expected_status=200
        )

    async def delete(self) -> None:
        await self._send("DELETE", team_pipeline_url(*self._path), expected_status=204)
        logger.info(f"Deleted pipeline {self.team['name']}/{self.pipeline['name']}")

    async def list_jobs(self) -> List[Entity]:
        jobs: List[Entity] = await self._get_json(team_pipeline_jobs_url(*self._path))
        return jobs

    async def get_job(self, job_name: Optional[str] = None) -> Entity:
        """Get the named job.

        Raises:
            ValidationError: If job_name is missing or not a string
            httpx.HTTPStatusError: If the request fails, including 404
        """
        options = validate_options(JobNameOptions, {"job_name": job_name})
        job: Entity = await self._get_json(
            team_pipeline_job_url(*self._path, options.job_name)
        )
        return job

    async def for_job(self, job_name: Optional[str] = None) -> TeamPipelineJobClient:
        """Get a client scoped to the named job.

        Raises:
            ValidationError: If job_name is missing or not a string
            NotFoundError: If the job does not exist
            httpx.HTTPError: On any other request failure
        """
        job = await self._navigate("job", job_name, self.get_job)
        return TeamPipelineJobClient(
            api_url=self.api_url,
            http_client=self.http_client,
            team=self._team,
            pipeline=self._pipeline,
            job=job,
        )

    async def list_resources(self) -> List[Entity]:
        resources: List[Entity] = await self._get_json(
            team_pipeline_resources_url(*self._path)
        )
        return resources

    async def get_resource(self, resource_name: Optional[str] = None) -> Entity:
        """Get the named resource.

        Raises:
            ValidationError: If resource_name is missing or not a string
            httpx.HTTPStatusError: If the request fails, including 404
        """
        options = validate_options(
            ResourceNameOptions, {"resource_name": resource_name}
        )
        resource: Entity = await self._get_json(
            team_pipeline_resource_url(*self._path, options.resource_name)
        )
        return resource

    async def for_resource(
        self, resource_name: Optional[str] = None
    ) -> TeamPipelineResourceClient:
        """Get a client scoped to the named resource.

        Raises:
            ValidationError: If resource_name is missing or not a string
            NotFoundError: If the resource does not exist
            httpx.HTTPError: On any other request failure
        """
        resource = await self._navigate("resource", resource_name, self.get_resource)
        return TeamPipelineResourceClient(
            api_url=self.api_url,
            http_client=self.http_client,
            team=self._team,
            pipeline=self._pipeline,
            resource=resource,
        )

    async def list_resource_types(self) -> List[Entity]:
        resource_types: List[Entity] = await self._get_json(
            team_pipeline_resource_types_url(*self._path)
        )
        return resource_types

    async def list_builds(
        self, count: Optional[int] = DEFAULT_BUILD_COUNT
    ) -> List[Entity]:
        return await self._list_builds(team_pipeline_builds_url(*self._path), count)
