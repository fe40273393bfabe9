"""
Config tests - environment loading and validation.
"""

import pytest

from cortex_graph.core import Config, ConfigurationError

ENV_VARS = (
    "CORTEX_GRAPH_BASE_URL",
    "CORTEX_GRAPH_ACCESS_TOKEN",
    "CORTEX_GRAPH_RETRY_COUNT",
    "CORTEX_GRAPH_RETRY_BASE_DELAY",
    "CORTEX_GRAPH_TIMEOUT",
    "CORTEX_GRAPH_DEFAULT_LIMIT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestConfig:
    """Test Config."""

    def test_defaults(self):
        config = Config.from_env()
        assert config.retry_count == 3
        assert config.retry_base_delay == 0.1
        assert config.request_timeout == 30.0
        assert config.default_limit == 1000
        assert config.access_token is None

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("CORTEX_GRAPH_BASE_URL", "http://graph:8080/")
        monkeypatch.setenv("CORTEX_GRAPH_ACCESS_TOKEN", "tok")
        monkeypatch.setenv("CORTEX_GRAPH_RETRY_COUNT", "5")
        monkeypatch.setenv("CORTEX_GRAPH_RETRY_BASE_DELAY", "0.25")
        monkeypatch.setenv("CORTEX_GRAPH_TIMEOUT", "10")
        monkeypatch.setenv("CORTEX_GRAPH_DEFAULT_LIMIT", "200")

        config = Config.from_env()

        assert config.base_url == "http://graph:8080/"
        assert config.access_token == "tok"
        assert config.retry_count == 5
        assert config.retry_base_delay == 0.25
        assert config.request_timeout == 10.0
        assert config.default_limit == 200

    def test_empty_token_is_none(self, monkeypatch):
        monkeypatch.setenv("CORTEX_GRAPH_ACCESS_TOKEN", "")
        assert Config.from_env().access_token is None

    def test_non_numeric_env_rejected(self, monkeypatch):
        monkeypatch.setenv("CORTEX_GRAPH_RETRY_COUNT", "three")
        with pytest.raises(ConfigurationError):
            Config.from_env()

    @pytest.mark.parametrize("kwargs", [
        {"retry_count": -1},
        {"retry_base_delay": -0.1},
        {"request_timeout": 0},
        {"default_limit": -5},
    ])
    def test_invalid_values_rejected(self, kwargs):
        with pytest.raises(ConfigurationError):
            Config(**kwargs)

    def test_for_testing(self):
        config = Config.for_testing(retry_count=1)
        assert config.retry_base_delay == 0.0
        assert config.retry_count == 1

    @pytest.mark.parametrize("overrides", [
        {"retry_count": -1},
        {"request_timeout": 0},
        {"default_limit": -1},
    ])
    def test_for_testing_validates_overrides(self, overrides):
        with pytest.raises(ConfigurationError):
            Config.for_testing(**overrides)

    def test_for_testing_keeps_explicit_delay(self):
        assert Config.for_testing(retry_base_delay=0.3).retry_base_delay == 0.3

    def test_for_testing_unknown_field(self):
        with pytest.raises(ConfigurationError):
            Config.for_testing(nonsense=True)
