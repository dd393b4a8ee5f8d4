"""Unit tests for camelCase response normalization."""

import pytest

from concourse_client.normalize import camelcase_keys_deep, camelize


@pytest.mark.parametrize(
    "key,expected",
    [
        ("team_name", "teamName"),
        ("finished-build", "finishedBuild"),
        ("api_url", "apiUrl"),
        ("ID", "id"),
        ("teamName", "teamName"),
        ("name", "name"),
        ("disable_manual_trigger", "disableManualTrigger"),
        ("", ""),
    ],
)
def test_camelize(key, expected):
    assert camelize(key) == expected


class TestCamelcaseKeysDeep:
    def test_nested_mappings_and_lists(self):
        payload = [
            {
                "id": 3,
                "team_name": "main",
                "finished_build": {"start_time": 1, "end-time": 2},
                "inputs": [{"resource_name": "repo", "trigger": True}],
            }
        ]

        assert camelcase_keys_deep(payload) == [
            {
                "id": 3,
                "teamName": "main",
                "finishedBuild": {"startTime": 1, "endTime": 2},
                "inputs": [{"resourceName": "repo", "trigger": True}],
            }
        ]

    def test_values_are_not_rewritten(self):
        payload = {"pipeline_name": "deploy_app", "groups": ["group_one"]}

        assert camelcase_keys_deep(payload) == {
            "pipelineName": "deploy_app",
            "groups": ["group_one"],
        }

    def test_preserves_list_order(self):
        payload = [{"build_id": n} for n in (5, 3, 9, 1)]

        assert [item["buildId"] for item in camelcase_keys_deep(payload)] == [5, 3, 9, 1]

    def test_is_idempotent(self):
        payload = {"team_name": "main", "nested_list": [{"inner_key": None}]}
        once = camelcase_keys_deep(payload)

        assert camelcase_keys_deep(once) == once

    @pytest.mark.parametrize("scalar", [None, 1, 2.5, True, "some_string"])
    def test_scalars_pass_through(self, scalar):
        assert camelcase_keys_deep(scalar) == scalar
