"""Unit tests for the concourse command line tool."""

import json

import pytest
from click.testing import CliRunner

from concourse_client import __version__
from concourse_client.cli import cli
from concourse_client.config import ENVIRONMENT_VARIABLES

SERVER_URL = "https://ci.example.com"
API_URL = f"{SERVER_URL}/api/v1"
TOKEN_URL = f"{API_URL}/teams/main/auth/token"
BASE_ARGS = ["--url", SERVER_URL, "--username", "admin", "--password", "secret"]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for variable in ENVIRONMENT_VARIABLES.values():
        monkeypatch.delenv(variable, raising=False)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def mock_token(httpx_mock):
    def register():
        httpx_mock.add_response(
            method="GET",
            url=TOKEN_URL,
            match_headers={"Authorization": "Basic YWRtaW46c2VjcmV0"},
            json={"type": "Bearer", "value": "cli-token"},
        )

    return register


class TestCliBasics:
    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "pipelines" in result.output
        assert "builds" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_missing_url(self, runner):
        result = runner.invoke(cli, ["teams"])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_invalid_url(self, runner):
        result = runner.invoke(cli, ["--url", "spinach", "teams"])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_url_from_environment(self, runner, mock_token, httpx_mock, monkeypatch):
        monkeypatch.setenv("CONCOURSE_URL", SERVER_URL)
        monkeypatch.setenv("CONCOURSE_USERNAME", "admin")
        monkeypatch.setenv("CONCOURSE_PASSWORD", "secret")
        mock_token()
        httpx_mock.add_response(method="GET", url=f"{API_URL}/teams", json=[])

        result = runner.invoke(cli, ["--json", "teams"])

        assert result.exit_code == 0
        assert json.loads(result.output) == []


class TestListingCommands:
    def test_teams_json(self, runner, mock_token, httpx_mock):
        mock_token()
        httpx_mock.add_response(
            method="GET",
            url=f"{API_URL}/teams",
            match_headers={"Authorization": "Bearer cli-token"},
            json=[{"id": 1, "name": "main"}],
        )

        result = runner.invoke(cli, BASE_ARGS + ["--json", "teams"])

        assert result.exit_code == 0
        assert json.loads(result.output) == [{"id": 1, "name": "main"}]

    def test_pipelines_table(self, runner, mock_token, httpx_mock):
        mock_token()
        httpx_mock.add_response(
            method="GET",
            url=f"{API_URL}/teams/main/pipelines",
            json=[{"id": 14, "name": "deploy", "team_name": "main", "paused": False}],
        )

        result = runner.invoke(cli, BASE_ARGS + ["pipelines"])

        assert result.exit_code == 0
        assert "deploy" in result.output

    def test_pipelines_of_all_teams(self, runner, mock_token, httpx_mock):
        mock_token()
        httpx_mock.add_response(method="GET", url=f"{API_URL}/pipelines", json=[])

        result = runner.invoke(cli, BASE_ARGS + ["pipelines", "--all"])

        assert result.exit_code == 0
        assert "No pipelines found" in result.output

    def test_jobs_json(self, runner, mock_token, httpx_mock):
        mock_token()
        httpx_mock.add_response(
            method="GET",
            url=f"{API_URL}/teams/main/pipelines/deploy/jobs",
            json=[{"name": "test", "finished_build": {"status": "failed"}}],
        )

        result = runner.invoke(cli, BASE_ARGS + ["--json", "jobs", "deploy"])

        assert result.exit_code == 0
        assert json.loads(result.output) == [
            {"name": "test", "finishedBuild": {"status": "failed"}}
        ]

    def test_builds_of_job(self, runner, mock_token, httpx_mock):
        mock_token()
        httpx_mock.add_response(
            method="GET",
            url=f"{API_URL}/teams/main/pipelines/deploy/jobs/test/builds?limit=5",
            json=[{"id": 7, "status": "succeeded"}],
        )

        result = runner.invoke(
            cli, BASE_ARGS + ["--json", "builds", "--job", "deploy/test", "--count", "5"]
        )

        assert result.exit_code == 0
        assert json.loads(result.output) == [{"id": 7, "status": "succeeded"}]

    def test_builds_unlimited(self, runner, mock_token, httpx_mock):
        mock_token()
        httpx_mock.add_response(method="GET", url=f"{API_URL}/builds", json=[])

        result = runner.invoke(cli, BASE_ARGS + ["--json", "builds", "--unlimited"])

        assert result.exit_code == 0

    def test_builds_with_conflicting_scope(self, runner, httpx_mock):
        result = runner.invoke(
            cli,
            BASE_ARGS + ["builds", "--job", "deploy/test", "--pipeline", "deploy"],
        )

        assert result.exit_code == 1
        assert "Failed to list builds" in result.output
        assert httpx_mock.get_requests() == []

    def test_server_error_is_reported(self, runner, httpx_mock):
        httpx_mock.add_response(method="GET", url=TOKEN_URL, status_code=401)

        result = runner.invoke(cli, BASE_ARGS + ["teams"])

        assert result.exit_code == 1
        assert "Failed to list teams" in result.output


class TestPauseCommands:
    def register_navigation(self, httpx_mock):
        httpx_mock.add_response(
            method="GET", url=f"{API_URL}/teams", json=[{"id": 1, "name": "main"}]
        )
        httpx_mock.add_response(
            method="GET",
            url=f"{API_URL}/teams/main/pipelines/deploy",
            json={"id": 14, "name": "deploy"},
        )

    def test_pause(self, runner, mock_token, httpx_mock):
        mock_token()
        self.register_navigation(httpx_mock)
        httpx_mock.add_response(
            method="PUT",
            url=f"{API_URL}/teams/main/pipelines/deploy/pause",
            match_headers={"Authorization": "Bearer cli-token"},
        )

        result = runner.invoke(cli, BASE_ARGS + ["pause", "deploy"])

        assert result.exit_code == 0
        assert "Paused main/deploy" in result.output

    def test_unpause(self, runner, mock_token, httpx_mock):
        mock_token()
        self.register_navigation(httpx_mock)
        httpx_mock.add_response(
            method="PUT", url=f"{API_URL}/teams/main/pipelines/deploy/unpause"
        )

        result = runner.invoke(cli, BASE_ARGS + ["unpause", "deploy"])

        assert result.exit_code == 0
        assert "Unpaused main/deploy" in result.output

    def test_pause_unknown_pipeline(self, runner, mock_token, httpx_mock):
        mock_token()
        httpx_mock.add_response(
            method="GET", url=f"{API_URL}/teams", json=[{"id": 1, "name": "main"}]
        )
        httpx_mock.add_response(
            method="GET", url=f"{API_URL}/teams/main/pipelines/ghost", status_code=404
        )

        result = runner.invoke(cli, BASE_ARGS + ["pause", "ghost"])

        assert result.exit_code == 1
        assert "No pipeline with name: ghost" in result.output
