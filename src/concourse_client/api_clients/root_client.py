"""Root client for a Concourse API."""

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..errors import NotFoundError
from ..urls import all_builds_url, all_pipelines_url, info_url, teams_url
from ..validation import Entity, Name, OptionsSchema, validate_options
from .base_client import DEFAULT_BUILD_COUNT, ClientOptions, ScopedClient
from .team_client import TeamClient

logger = logging.getLogger(__name__)


class TeamNameOptions(OptionsSchema):
    team_name: Name


class Client(ScopedClient):
    """Client for server-wide operations and the entry point of navigation."""

    def __init__(
        self,
        api_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize root client.

        Args:
            api_url: Concourse API URL, e.g. https://ci.example.com/api/v1
            http_client: Transport, usually preconfigured with a bearer header

        Raises:
            ValidationError: If any argument is missing or invalid
        """
        options = validate_options(
            ClientOptions, {"api_url": api_url, "http_client": http_client}
        )
        super().__init__(api_url=options.api_url, http_client=options.http_client)

    async def get_info(self) -> Dict[str, Any]:
        """Get server information (version, worker version)."""
        info: Dict[str, Any] = await self._get_json(info_url(self.api_url))
        return info

    async def list_teams(self) -> List[Entity]:
        teams: List[Entity] = await self._get_json(teams_url(self.api_url))
        return teams

    async def list_pipelines(self) -> List[Entity]:
        """List pipelines across all teams visible to the caller."""
        pipelines: List[Entity] = await self._get_json(all_pipelines_url(self.api_url))
        return pipelines

    async def list_builds(
        self, count: Optional[int] = DEFAULT_BUILD_COUNT
    ) -> List[Entity]:
        """List builds across all teams.

        Args:
            count: Maximum number of builds; None for no limit
        """
        return await self._list_builds(all_builds_url(self.api_url), count)

    async def for_team(self, team_name: Optional[str] = None) -> TeamClient:
        """Get a client scoped to the named team.

        The API has no single-team endpoint, so the team is looked up in the
        team list.

        Raises:
            ValidationError: If team_name is missing or not a string
            NotFoundError: If no team has the supplied name
        """
        options = validate_options(TeamNameOptions, {"team_name": team_name})
        teams = await self.list_teams()
        team = next((t for t in teams if t.get("name") == options.team_name), None)
        if team is None:
            raise NotFoundError("team", options.team_name)

        return TeamClient(
            api_url=self.api_url, http_client=self.http_client, team=team
        )
