"""Command line interface for Concourse Client."""

import asyncio
import json
import logging
import sys
from typing import Any, Dict, List, Optional, Sequence

import click
import httpx
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import VALID_LOG_LEVELS, load_config
from .errors import ConcourseClientError
from .session import Concourse

console = Console()


def _configure_logging(level: int) -> None:
    logging.basicConfig(level=level, format="%(levelname)s:%(name)s:%(message)s")
    if level > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)


def _session(ctx: click.Context) -> Concourse:
    try:
        config = load_config(ctx.obj["overrides"])
    except ValueError as e:
        console.print(f"❌ Invalid configuration: {e}", style="red")
        sys.exit(1)

    _configure_logging(config.logging_level)
    try:
        return Concourse(
            url=config.url,
            team_name=config.team_name,
            username=config.username,
            password=config.password,
            timeout=config.timeout,
        )
    except ConcourseClientError as e:
        console.print(f"❌ Invalid configuration: {e}", style="red")
        sys.exit(1)


def _run(action: str, coro) -> Any:
    """Run a coroutine, reporting library and transport failures."""
    try:
        return asyncio.run(coro)
    except (ConcourseClientError, httpx.HTTPError) as e:
        console.print(f"❌ Failed to {action}: {e}", style="red")
        sys.exit(1)


def _lookup(row: Dict[str, Any], column: str) -> str:
    value: Any = row
    for part in column.split("."):
        if not isinstance(value, dict):
            return ""
        value = value.get(part)
    return "" if value is None else str(value)


def _render(
    ctx: click.Context, rows: List[Dict[str, Any]], columns: Sequence[str], title: str
) -> None:
    if ctx.obj["json"]:
        click.echo(json.dumps(rows, indent=2))
        return

    if not rows:
        console.print(f"No {title.lower()} found", style="yellow")
        return

    table = Table(title=title)
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*(_lookup(row, column) for column in columns))
    console.print(table)


@click.group()
@click.version_option(version=__version__, prog_name="concourse")
@click.option("--url", help="Concourse server URL (or CONCOURSE_URL)")
@click.option("--team", "team_name", help="Team name (or CONCOURSE_TEAM)")
@click.option("--username", help="Username (or CONCOURSE_USERNAME)")
@click.option("--password", help="Password (or CONCOURSE_PASSWORD)")
@click.option(
    "--log-level",
    type=click.Choice(VALID_LOG_LEVELS),
    help="Logging level (or CONCOURSE_LOG_LEVEL)",
)
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON output")
@click.pass_context
def cli(
    ctx,
    url: Optional[str],
    team_name: Optional[str],
    username: Optional[str],
    password: Optional[str],
    log_level: Optional[str],
    as_json: bool,
):
    """Query and control pipelines on a Concourse CI server.

    \b
    EXAMPLES:
      concourse --url https://ci.example.com pipelines
      concourse builds --job my-pipeline/unit-tests --count 10
      concourse pause my-pipeline
    """
    ctx.ensure_object(dict)
    ctx.obj["overrides"] = {
        "url": url,
        "team_name": team_name,
        "username": username,
        "password": password,
        "log_level": log_level,
    }
    ctx.obj["json"] = as_json


@cli.command("teams")
@click.pass_context
def list_teams(ctx):
    """List teams."""
    session = _session(ctx)
    teams = _run("list teams", session.teams())
    _render(ctx, teams, ["id", "name"], "Teams")


@cli.command("pipelines")
@click.option("--all", "all_teams", is_flag=True, help="Include every team")
@click.pass_context
def list_pipelines(ctx, all_teams: bool):
    """List pipelines of the configured team."""
    session = _session(ctx)
    pipelines = _run("list pipelines", session.pipelines(all=all_teams))
    _render(ctx, pipelines, ["name", "teamName", "paused", "public"], "Pipelines")


@cli.command("jobs")
@click.argument("pipeline", required=True)
@click.pass_context
def list_jobs(ctx, pipeline: str):
    """List jobs of PIPELINE."""
    session = _session(ctx)
    jobs = _run("list jobs", session.jobs(pipeline))
    _render(ctx, jobs, ["name", "paused", "finishedBuild.status"], "Jobs")


@cli.command("builds")
@click.option(
    "--count", type=int, default=50, help="Maximum number of builds (default: 50)"
)
@click.option("--unlimited", is_flag=True, help="Do not limit the number of builds")
@click.option("--pipeline", help="Only builds of this pipeline")
@click.option("--job", help="Only builds of this job, as PIPELINE/JOB")
@click.option("--team-only", is_flag=True, help="Only builds of the configured team")
@click.pass_context
def list_builds(
    ctx,
    count: int,
    unlimited: bool,
    pipeline: Optional[str],
    job: Optional[str],
    team_only: bool,
):
    """List recent builds.

    \b
    EXAMPLES:
      concourse builds                        # Most recent 50 builds
      concourse builds --pipeline main-app    # Builds of one pipeline
      concourse builds --job main-app/deploy  # Builds of one job
    """
    session = _session(ctx)
    builds = _run(
        "list builds",
        session.builds(
            count=None if unlimited else count,
            pipeline=pipeline,
            job=job,
            team=team_only,
        ),
    )
    _render(
        ctx,
        builds,
        ["id", "teamName", "pipelineName", "jobName", "name", "status"],
        "Builds",
    )


async def _set_paused(session: Concourse, pipeline: str, paused: bool) -> None:
    client = await session.client()
    try:
        team_client = await client.for_team(session.team_name)
        pipeline_client = await team_client.for_pipeline(pipeline)
        if paused:
            await pipeline_client.pause()
        else:
            await pipeline_client.unpause()
    finally:
        await client.http_client.aclose()


@cli.command("pause")
@click.argument("pipeline", required=True)
@click.pass_context
def pause_pipeline(ctx, pipeline: str):
    """Pause PIPELINE."""
    session = _session(ctx)
    _run("pause pipeline", _set_paused(session, pipeline, paused=True))
    console.print(f"✅ Paused {session.team_name}/{pipeline}", style="green")


@cli.command("unpause")
@click.argument("pipeline", required=True)
@click.pass_context
def unpause_pipeline(ctx, pipeline: str):
    """Unpause PIPELINE."""
    session = _session(ctx)
    _run("unpause pipeline", _set_paused(session, pipeline, paused=False))
    console.print(f"✅ Unpaused {session.team_name}/{pipeline}", style="green")


def main() -> None:
    cli(obj={})
