"""Team-scoped client."""

import logging
from types import MappingProxyType
from typing import List, Optional

import httpx

from ..urls import team_builds_url, team_pipeline_url, team_pipelines_url
from ..validation import (
    Entity,
    EntityView,
    Name,
    OptionsSchema,
    validate_options,
)
from .base_client import DEFAULT_BUILD_COUNT, ClientOptions, ScopedClient
from .team_pipeline_client import TeamPipelineClient

logger = logging.getLogger(__name__)


class TeamClientOptions(ClientOptions):
    team: Entity


class PipelineNameOptions(OptionsSchema):
    pipeline_name: Name


class TeamClient(ScopedClient):
    """Client for operations within a single team."""

    def __init__(
        self,
        api_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        team: Optional[Entity] = None,
    ):
        """Initialize team client.

        Args:
            api_url: Concourse API URL
            http_client: Authenticated transport
            team: Normalized team entity (must carry ``name``)

        Raises:
            ValidationError: If any argument is missing or invalid
        """
        options = validate_options(
            TeamClientOptions,
            {"api_url": api_url, "http_client": http_client, "team": team},
        )
        super().__init__(api_url=options.api_url, http_client=options.http_client)
        self._team = options.team

    @property
    def team(self) -> EntityView:
        return MappingProxyType(self._team)

    async def list_pipelines(self) -> List[Entity]:
        pipelines: List[Entity] = await self._get_json(
            team_pipelines_url(self.api_url, self.team["name"])
        )
        return pipelines

    async def get_pipeline(self, pipeline_name: Optional[str] = None) -> Entity:
        """Get the named pipeline.

        Raises:
            ValidationError: If pipeline_name is missing or not a string
            httpx.HTTPStatusError: If the request fails, including 404
        """
        options = validate_options(
            PipelineNameOptions, {"pipeline_name": pipeline_name}
        )
        pipeline: Entity = await self._get_json(
            team_pipeline_url(self.api_url, self.team["name"], options.pipeline_name)
        )
        return pipeline

    async def delete_pipeline(self, pipeline_name: Optional[str] = None) -> None:
        """Delete the named pipeline.

        Raises:
            ValidationError: If pipeline_name is missing or not a string
            httpx.HTTPError: If the request fails
        """
        options = validate_options(
            PipelineNameOptions, {"pipeline_name": pipeline_name}
        )
        await self._send(
            "DELETE",
            team_pipeline_url(self.api_url, self.team["name"], options.pipeline_name),
            expected_status=204,
        )
        logger.info(f"Deleted pipeline {self.team['name']}/{options.pipeline_name}")

    async def list_builds(
        self, count: Optional[int] = DEFAULT_BUILD_COUNT
    ) -> List[Entity]:
        return await self._list_builds(
            team_builds_url(self.api_url, self.team["name"]), count
        )

    async def for_pipeline(
        self, pipeline_name: Optional[str] = None
    ) -> TeamPipelineClient:
        """Get a client scoped to the named pipeline.

        Raises:
            ValidationError: If pipeline_name is missing or not a string
            NotFoundError: If the pipeline does not exist
            httpx.HTTPError: On any other request failure
        """
        pipeline = await self._navigate("pipeline", pipeline_name, self.get_pipeline)
        return TeamPipelineClient(
            api_url=self.api_url,
            http_client=self.http_client,
            team=self._team,
            pipeline=pipeline,
        )
