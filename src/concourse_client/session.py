"""Authenticated session against a Concourse server.

A Concourse session holds a server URL, a team name and basic credentials.
Every operation exchanges the credentials for a fresh bearer token, issues
its request with that token and returns the normalized response. Tokens are
never cached between operations.
"""

import logging
import re
from typing import Annotated, Any, ClassVar, Dict, List, Optional, Tuple

import httpx
from pydantic import Field

from .api_clients import Client
from .api_clients.base_client import DEFAULT_BUILD_COUNT, BuildCount
from .errors import AuthenticationError
from .http import (
    DEFAULT_TIMEOUT,
    basic_auth_header,
    bearer_auth_header,
    build_http_client,
)
from .normalize import camelcase_keys_deep
from .urls import (
    all_builds_url,
    all_pipelines_url,
    api_url_for,
    auth_token_url,
    team_builds_url,
    team_pipeline_builds_url,
    team_pipeline_job_builds_url,
    team_pipeline_jobs_url,
    team_pipelines_url,
    teams_url,
)
from .validation import Entity, Name, OptionsSchema, Uri, validate_options

logger = logging.getLogger(__name__)

DEFAULT_TEAM_NAME = "main"

JOB_PATTERN = r"^(.*)/(.*)$"
_JOB_REGEX = re.compile(JOB_PATTERN)


class ConcourseOptions(OptionsSchema):
    url: Uri
    team_name: Name = DEFAULT_TEAM_NAME
    username: Optional[Name] = None
    password: Optional[Name] = None
    timeout: Annotated[float, Field(gt=0)] = DEFAULT_TIMEOUT


class LoginOptions(OptionsSchema):
    username: Name
    password: Name
    team_name: Optional[Name] = None


class JobsOptions(OptionsSchema):
    pipeline: Name


class PipelinesOptions(OptionsSchema):
    all: bool = False


class BuildsOptions(OptionsSchema):
    exclusive: ClassVar[Tuple[Tuple[str, str], ...]] = (("job", "pipeline"),)

    count: BuildCount = DEFAULT_BUILD_COUNT
    pipeline: Optional[Name] = None
    job: Optional[Annotated[str, Field(pattern=JOB_PATTERN)]] = None
    team: bool = False


def builds_url_for(
    api_url: str,
    team_name: str,
    pipeline_name: Optional[str] = None,
    job_name: Optional[str] = None,
    team: bool = False,
) -> str:
    """Resolve the narrowest build listing for the given scope.

    Precedence: job, then pipeline, then team, then all builds.
    """
    if job_name and pipeline_name is not None:
        return team_pipeline_job_builds_url(api_url, team_name, pipeline_name, job_name)
    if pipeline_name:
        return team_pipeline_builds_url(api_url, team_name, pipeline_name)
    if team:
        return team_builds_url(api_url, team_name)
    return all_builds_url(api_url)


class Concourse:
    """Session for unscoped operations against a Concourse server."""

    def __init__(
        self,
        url: Optional[str] = None,
        team_name: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize session.

        Args:
            url: Concourse server URL, e.g. https://ci.example.com
            team_name: Team to authenticate against (default: main)
            username: Basic auth username
            password: Basic auth password
            timeout: Request timeout in seconds

        Raises:
            ValidationError: If any argument is invalid
        """
        options = validate_options(
            ConcourseOptions,
            {
                "url": url,
                "team_name": team_name,
                "username": username,
                "password": password,
                "timeout": timeout,
            },
        )
        self._url = options.url
        self._team_name = options.team_name
        self._username = options.username
        self._password = options.password
        self._timeout = options.timeout

    @property
    def url(self) -> str:
        return self._url

    @property
    def api_url(self) -> str:
        return api_url_for(self._url)

    @property
    def team_name(self) -> str:
        return self._team_name

    @property
    def username(self) -> Optional[str]:
        return self._username

    @property
    def timeout(self) -> float:
        return self._timeout

    def login(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
        team_name: Optional[str] = None,
    ) -> "Concourse":
        """Get a new session bound to other credentials.

        The current session is left untouched.

        Args:
            username: Basic auth username
            password: Basic auth password
            team_name: Team for the new session (default: this session's team)

        Raises:
            ValidationError: If username or password is missing or invalid
        """
        options = validate_options(
            LoginOptions,
            {"username": username, "password": password, "team_name": team_name},
        )
        return Concourse(
            url=self._url,
            team_name=options.team_name or self._team_name,
            username=options.username,
            password=options.password,
            timeout=self._timeout,
        )

    async def _fetch_bearer_token(self, http: httpx.AsyncClient) -> str:
        """Exchange basic credentials for a bearer token.

        Raises:
            AuthenticationError: If credentials are missing or the token
                response carries no token
            httpx.HTTPError: If the exchange request fails
        """
        if self._username is None or self._password is None:
            raise AuthenticationError(
                "Username and password are required; use login() to supply them"
            )

        url = auth_token_url(self.api_url, self._team_name)
        logger.debug(f"Requesting bearer token for {self._username} from {url}")
        response = await http.request(
            "GET", url, headers=basic_auth_header(self._username, self._password)
        )
        response.raise_for_status()

        payload = response.json()
        token = payload.get("value") if isinstance(payload, dict) else None
        if not isinstance(token, str) or not token:
            raise AuthenticationError("No valid bearer token in response")
        return token

    async def _authenticated_get(
        self, url: str, params: Optional[Dict[str, Any]] = None
    ) -> Any:
        async with build_http_client(timeout=self._timeout) as http:
            token = await self._fetch_bearer_token(http)
            logger.debug(f"GET {url}")
            response = await http.request(
                "GET", url, headers=bearer_auth_header(token), params=params
            )
            response.raise_for_status()
            return camelcase_keys_deep(response.json())

    async def teams(self) -> List[Entity]:
        teams: List[Entity] = await self._authenticated_get(teams_url(self.api_url))
        return teams

    async def jobs(self, pipeline: Optional[str] = None) -> List[Entity]:
        """List jobs of a pipeline in the session's team.

        Raises:
            ValidationError: If pipeline is missing or not a string
        """
        options = validate_options(JobsOptions, {"pipeline": pipeline})
        jobs: List[Entity] = await self._authenticated_get(
            team_pipeline_jobs_url(self.api_url, self._team_name, options.pipeline)
        )
        return jobs

    async def pipelines(self, all: bool = False) -> List[Entity]:
        """List pipelines of the session's team, or of every team.

        Args:
            all: List pipelines across all teams
        """
        options = validate_options(PipelinesOptions, {"all": all})
        url = (
            all_pipelines_url(self.api_url)
            if options.all
            else team_pipelines_url(self.api_url, self._team_name)
        )
        pipelines: List[Entity] = await self._authenticated_get(url)
        return pipelines

    async def builds(
        self,
        count: Optional[int] = DEFAULT_BUILD_COUNT,
        pipeline: Optional[str] = None,
        job: Optional[str] = None,
        team: bool = False,
    ) -> List[Entity]:
        """List builds, narrowed by job, pipeline or team.

        Args:
            count: Maximum number of builds; None for no limit
            pipeline: Pipeline name; excludes job
            job: Job reference as "pipeline/job"; excludes pipeline
            team: Restrict to the session's team

        Raises:
            ValidationError: If the options are invalid, including when both
                job and pipeline are supplied
        """
        options = validate_options(
            BuildsOptions,
            {"count": count, "pipeline": pipeline, "job": job, "team": team},
        )

        pipeline_name = options.pipeline
        job_name = None
        match = _JOB_REGEX.match(options.job) if options.job is not None else None
        if match is not None:
            pipeline_name, job_name = match.group(1), match.group(2)

        url = builds_url_for(
            self.api_url, self._team_name, pipeline_name, job_name, options.team
        )
        params = {"limit": options.count} if options.count is not None else None
        builds: List[Entity] = await self._authenticated_get(url, params=params)
        return builds

    async def client(self) -> Client:
        """Get a root client authenticated with a freshly exchanged token.

        The returned client's http_client is owned by the caller and should be
        closed with ``await client.http_client.aclose()``.
        """
        async with build_http_client(timeout=self._timeout) as http:
            token = await self._fetch_bearer_token(http)

        return Client(
            api_url=self.api_url,
            http_client=build_http_client(
                headers=bearer_auth_header(token), timeout=self._timeout
            ),
        )
