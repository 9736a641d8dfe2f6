"""
Unit tests for configuration loading.
"""
import pytest
from pydantic import ValidationError

from aclstore.core.config import (
    AppConfig, BackendType, ConfigManager, StoreConfig, parse_list, parse_tokens
)


ENV_VARS = [
    "ACLSTORE_BACKEND", "ACLSTORE_DATABASE_URL", "ACLSTORE_MAX_ATTEMPTS",
    "ACLSTORE_ADMIN_USERS", "ACLSTORE_ROOT_PATH", "ACLSTORE_TOKENS",
    "API_HOST", "API_PORT", "LOG_LEVEL", "LOG_FILE", "APP_ENV", "DEBUG",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestParsing:
    """Test environment value parsers."""

    def test_parse_list(self):
        assert parse_list("alice, bob,,carol ") == ["alice", "bob", "carol"]
        assert parse_list("") == []

    def test_parse_tokens(self):
        assert parse_tokens("alice:tok1, bob:tok:2") == {"tok1": "alice", "tok:2": "bob"}

    def test_parse_tokens_skips_malformed(self):
        assert parse_tokens("nocolon,:tok,alice:") == {}


class TestConfigDefaults:
    """Test default configuration values."""

    def test_defaults(self, clean_env):
        config = ConfigManager().load_config()

        assert isinstance(config, AppConfig)
        assert config.store.backend == BackendType.MEMORY
        assert config.store.max_attempts == 100
        assert config.api.root_path == "/acls"
        assert config.manager.initial_admin_users == []
        assert config.auth.tokens == {}

    def test_max_attempts_must_be_positive(self):
        with pytest.raises(ValidationError):
            StoreConfig(max_attempts=0)


class TestEnvironmentOverrides:
    """Test environment variable overrides."""

    def test_overrides(self, clean_env):
        clean_env.setenv("ACLSTORE_BACKEND", "SQL")
        clean_env.setenv("ACLSTORE_DATABASE_URL", "sqlite:///other.db")
        clean_env.setenv("ACLSTORE_MAX_ATTEMPTS", "7")
        clean_env.setenv("ACLSTORE_ADMIN_USERS", "root, ops")
        clean_env.setenv("ACLSTORE_TOKENS", "root:s3cret")
        clean_env.setenv("API_PORT", "9000")
        clean_env.setenv("LOG_LEVEL", "debug")
        clean_env.setenv("DEBUG", "true")

        config = ConfigManager().load_config()

        assert config.store.backend == BackendType.SQL
        assert config.store.database_url == "sqlite:///other.db"
        assert config.store.max_attempts == 7
        assert config.manager.initial_admin_users == ["root", "ops"]
        assert config.auth.tokens == {"s3cret": "root"}
        assert config.api.port == 9000
        assert config.logging.level == "DEBUG"
        assert config.debug is True

    def test_empty_root_path(self, clean_env):
        clean_env.setenv("ACLSTORE_ROOT_PATH", "")

        config = ConfigManager().load_config()

        assert config.api.root_path == ""

    def test_invalid_backend(self, clean_env):
        clean_env.setenv("ACLSTORE_BACKEND", "redis")

        with pytest.raises(ValueError):
            ConfigManager().load_config()

    def test_reload_picks_up_changes(self, clean_env):
        manager = ConfigManager()
        assert manager.get_config().api.port == 8000

        clean_env.setenv("API_PORT", "8123")

        assert manager.get_config().api.port == 8000
        assert manager.reload_config().api.port == 8123
