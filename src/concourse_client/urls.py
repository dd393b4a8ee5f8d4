"""URL composition for the Concourse API.

All functions are pure: they map an API URL plus resource names onto the
absolute URL of a resource. Names are inserted as single, percent-encoded
path segments.
"""

from typing import Mapping, Optional, Union
from urllib.parse import quote, urlencode

API_PATH = "/api/v1"

QueryValue = Union[str, int]


def url_for(
    base_url: str,
    *segments: str,
    query: Optional[Mapping[str, QueryValue]] = None,
) -> str:
    """Join path segments onto a base URL.

    Args:
        base_url: Absolute base URL, with or without trailing slash
        *segments: Literal path parts or resource names
        query: Optional query parameters appended to the URL

    Returns:
        Absolute URL without duplicated slashes
    """
    url = base_url.rstrip("/")
    if segments:
        url = url + "/" + "/".join(quote(str(segment), safe="") for segment in segments)
    if query:
        url = f"{url}?{urlencode(query)}"
    return url


def api_url_for(url: str) -> str:
    return url.rstrip("/") + API_PATH


def auth_token_url(api_url: str, team_name: str) -> str:
    return url_for(api_url, "teams", team_name, "auth", "token")


def info_url(api_url: str) -> str:
    return url_for(api_url, "info")


def teams_url(api_url: str) -> str:
    return url_for(api_url, "teams")


def all_pipelines_url(api_url: str) -> str:
    return url_for(api_url, "pipelines")


def all_builds_url(api_url: str) -> str:
    return url_for(api_url, "builds")


def team_builds_url(api_url: str, team_name: str) -> str:
    return url_for(api_url, "teams", team_name, "builds")


def team_pipelines_url(api_url: str, team_name: str) -> str:
    return url_for(api_url, "teams", team_name, "pipelines")


def team_pipeline_url(api_url: str, team_name: str, pipeline_name: str) -> str:
    return url_for(api_url, "teams", team_name, "pipelines", pipeline_name)


def team_pipeline_pause_url(api_url: str, team_name: str, pipeline_name: str) -> str:
    return url_for(team_pipeline_url(api_url, team_name, pipeline_name), "pause")


def team_pipeline_unpause_url(
    api_url: str, team_name: str, pipeline_name: str
) -> str:
    return url_for(team_pipeline_url(api_url, team_name, pipeline_name), "unpause")


def team_pipeline_builds_url(api_url: str, team_name: str, pipeline_name: str) -> str:
    return url_for(team_pipeline_url(api_url, team_name, pipeline_name), "builds")


def team_pipeline_jobs_url(api_url: str, team_name: str, pipeline_name: str) -> str:
    return url_for(team_pipeline_url(api_url, team_name, pipeline_name), "jobs")


def team_pipeline_job_url(
    api_url: str, team_name: str, pipeline_name: str, job_name: str
) -> str:
    return url_for(
        team_pipeline_jobs_url(api_url, team_name, pipeline_name), job_name
    )


def team_pipeline_job_pause_url(
    api_url: str, team_name: str, pipeline_name: str, job_name: str
) -> str:
    return url_for(
        team_pipeline_job_url(api_url, team_name, pipeline_name, job_name), "pause"
    )


def team_pipeline_job_unpause_url(
    api_url: str, team_name: str, pipeline_name: str, job_name: str
) -> str:
    return url_for(
        team_pipeline_job_url(api_url, team_name, pipeline_name, job_name), "unpause"
    )


def team_pipeline_job_builds_url(
    api_url: str, team_name: str, pipeline_name: str, job_name: str
) -> str:
    return url_for(
        team_pipeline_job_url(api_url, team_name, pipeline_name, job_name), "builds"
    )


def team_pipeline_job_build_url(
    api_url: str, team_name: str, pipeline_name: str, job_name: str, build_name: str
) -> str:
    return url_for(
        team_pipeline_job_builds_url(api_url, team_name, pipeline_name, job_name),
        build_name,
    )


def team_pipeline_resources_url(
    api_url: str, team_name: str, pipeline_name: str
) -> str:
    return url_for(team_pipeline_url(api_url, team_name, pipeline_name), "resources")


def team_pipeline_resource_url(
    api_url: str, team_name: str, pipeline_name: str, resource_name: str
) -> str:
    return url_for(
        team_pipeline_resources_url(api_url, team_name, pipeline_name), resource_name
    )


def team_pipeline_resource_pause_url(
    api_url: str, team_name: str, pipeline_name: str, resource_name: str
) -> str:
    return url_for(
        team_pipeline_resource_url(api_url, team_name, pipeline_name, resource_name),
        "pause",
    )


def team_pipeline_resource_unpause_url(
    api_url: str, team_name: str, pipeline_name: str, resource_name: str
) -> str:
    return url_for(
        team_pipeline_resource_url(api_url, team_name, pipeline_name, resource_name),
        "unpause",
    )


def team_pipeline_resource_versions_url(
    api_url: str, team_name: str, pipeline_name: str, resource_name: str
) -> str:
    return url_for(
        team_pipeline_resource_url(api_url, team_name, pipeline_name, resource_name),
        "versions",
    )


def team_pipeline_resource_types_url(
    api_url: str, team_name: str, pipeline_name: str
) -> str:
    return url_for(
        team_pipeline_url(api_url, team_name, pipeline_name), "resource-types"
    )
