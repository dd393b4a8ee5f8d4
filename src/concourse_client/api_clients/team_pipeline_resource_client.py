"""Resource-scoped client."""

from types import MappingProxyType
from typing import List, Optional, Tuple

import httpx

from ..urls import (
    team_pipeline_resource_pause_url,
    team_pipeline_resource_unpause_url,
    team_pipeline_resource_versions_url,
)
from ..validation import Entity, EntityView, validate_options
from .base_client import ClientOptions, ScopedClient


class TeamPipelineResourceClientOptions(ClientOptions):
    team: Entity
    pipeline: Entity
    resource: Entity


class TeamPipelineResourceClient(ScopedClient):
    """Client for a single resource of a pipeline."""

    def __init__(
        self,
        api_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        team: Optional[Entity] = None,
        pipeline: Optional[Entity] = None,
        resource: Optional[Entity] = None,
    ):
        options = validate_options(
            TeamPipelineResourceClientOptions,
            {
                "api_url": api_url,
                "http_client": http_client,
                "team": team,
                "pipeline": pipeline,
                "resource": resource,
            },
        )
        super().__init__(api_url=options.api_url, http_client=options.http_client)
        self._team = options.team
        self._pipeline = options.pipeline
        self._resource = options.resource

    @property
    def team(self) -> EntityView:
        return MappingProxyType(self._team)

    @property
    def pipeline(self) -> EntityView:
        return MappingProxyType(self._pipeline)

    @property
    def resource(self) -> EntityView:
        return MappingProxyType(self._resource)

    @property
    def _path(self) -> Tuple[str, str, str, str]:
        return (
            self.api_url,
            self.team["name"],
            self.pipeline["name"],
            self.resource["name"],
        )

    async def pause(self) -> None:
        await self._send(
            "PUT", team_pipeline_resource_pause_url(*self._path), expected_status=200
        )

    async def unpause(self) -> None:
        await self._send(
            "PUT", team_pipeline_resource_unpause_url(*self._path), expected_status=200
        )

    async def list_versions(self) -> List[Entity]:
        """List the versions detected for this resource."""
        versions: List[Entity] = await self._get_json(
            team_pipeline_resource_versions_url(*self._path)
        )
        return versions
