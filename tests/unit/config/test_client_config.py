"""Unit tests for command line configuration loading."""

import logging

import pytest

from concourse_client.config import ClientConfig, load_config


class TestClientConfig:
    def test_defaults(self):
        config = ClientConfig(url="https://ci.example.com/")

        assert config.url == "https://ci.example.com"
        assert config.team_name == "main"
        assert config.username is None
        assert config.password is None
        assert config.log_level == "warning"
        assert config.timeout == 30.0
        assert config.logging_level == logging.WARNING

    def test_log_level_is_case_insensitive(self):
        config = ClientConfig(url="https://ci.example.com", log_level="DEBUG")

        assert config.log_level == "debug"
        assert config.logging_level == logging.DEBUG

    @pytest.mark.parametrize(
        "kwargs,message",
        [
            ({"url": ""}, "url cannot be empty"),
            ({"url": "https://ci", "team_name": ""}, "team_name cannot be empty"),
            ({"url": "https://ci", "log_level": "loud"}, "log_level must be one of"),
            ({"url": "https://ci", "timeout": 0}, "timeout must be positive"),
        ],
    )
    def test_invalid_values(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            ClientConfig(**kwargs)


class TestLoadConfig:
    def test_reads_environment(self):
        config = load_config(
            environ={
                "CONCOURSE_URL": "https://ci.example.com",
                "CONCOURSE_TEAM": "ops",
                "CONCOURSE_USERNAME": "admin",
                "CONCOURSE_PASSWORD": "secret",
                "CONCOURSE_LOG_LEVEL": "info",
                "CONCOURSE_TIMEOUT": "12.5",
            }
        )

        assert config == ClientConfig(
            url="https://ci.example.com",
            team_name="ops",
            username="admin",
            password="secret",
            log_level="info",
            timeout=12.5,
        )

    def test_overrides_take_precedence(self):
        config = load_config(
            overrides={"url": "https://other.example.com", "team_name": None},
            environ={"CONCOURSE_URL": "https://ci.example.com", "CONCOURSE_TEAM": "ops"},
        )

        assert config.url == "https://other.example.com"
        assert config.team_name == "ops"

    def test_missing_url(self):
        with pytest.raises(ValueError, match="Missing required field: url"):
            load_config(environ={})

    def test_non_numeric_timeout(self):
        with pytest.raises(ValueError, match="CONCOURSE_TIMEOUT must be a number"):
            load_config(
                environ={"CONCOURSE_URL": "https://ci", "CONCOURSE_TIMEOUT": "soon"}
            )

    def test_warns_on_partial_credentials(self, caplog):
        with caplog.at_level(logging.WARNING, logger="concourse_client.config"):
            load_config(overrides={"url": "https://ci", "username": "admin"}, environ={})

        assert "Only one of username and password" in caplog.text
