"""Job-scoped client."""

from types import MappingProxyType
from typing import List, Optional, Tuple

import httpx

from ..urls import (
    team_pipeline_job_build_url,
    team_pipeline_job_builds_url,
    team_pipeline_job_pause_url,
    team_pipeline_job_unpause_url,
)
from ..validation import (
    Entity,
    EntityView,
    Name,
    OptionsSchema,
    validate_options,
)
from .base_client import DEFAULT_BUILD_COUNT, ClientOptions, ScopedClient


class TeamPipelineJobClientOptions(ClientOptions):
    team: Entity
    pipeline: Entity
    job: Entity


class BuildNameOptions(OptionsSchema):
    build_name: Name


class TeamPipelineJobClient(ScopedClient):
    """Client for a single job of a pipeline."""

    def __init__(
        self,
        api_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        team: Optional[Entity] = None,
        pipeline: Optional[Entity] = None,
        job: Optional[Entity] = None,
    ):
        options = validate_options(
            TeamPipelineJobClientOptions,
            {
                "api_url": api_url,
                "http_client": http_client,
                "team": team,
                "pipeline": pipeline,
                "job": job,
            },
        )
        super().__init__(api_url=options.api_url, http_client=options.http_client)
        self._team = options.team
        self._pipeline = options.pipeline
        self._job = options.job

    @property
    def team(self) -> EntityView:
        return MappingProxyType(self._team)

    @property
    def pipeline(self) -> EntityView:
        return MappingProxyType(self._pipeline)

    @property
    def job(self) -> EntityView:
        return MappingProxyType(self._job)

    @property
    def _path(self) -> Tuple[str, str, str, str]:
        return (
            self.api_url,
            self.team["name"],
            self.pipeline["name"],
            self.job["name"],
        )

    async def pause(self) -> None:
        await self._send(
            "PUT", team_pipeline_job_pause_url(*self._path), expected_status=200
        )

    async def unpause(self) -> None:
        await self._send(
            "PUT", team_pipeline_job_unpause_url(*self._path), expected_status=200
        )

    async def list_builds(
        self, count: Optional[int] = DEFAULT_BUILD_COUNT
    ) -> List[Entity]:
        return await self._list_builds(team_pipeline_job_builds_url(*self._path), count)

    async def get_build(self, build_name: Optional[str] = None) -> Entity:
        """Get a build of this job by its name (the job-local build number).

        Raises:
            ValidationError: If build_name is missing or not a string
            httpx.HTTPStatusError: If the request fails, including 404
        """
        options = validate_options(BuildNameOptions, {"build_name": build_name})
        build: Entity = await self._get_json(
            team_pipeline_job_build_url(*self._path, options.build_name)
        )
        return build
