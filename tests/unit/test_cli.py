"""
Unit tests for the command line interface.
"""
import pytest
from click.testing import CliRunner
from loguru import logger
from unittest.mock import patch

from aclstore.cli.main import cli
from aclstore.core import config as config_module


@pytest.fixture
def runner(tmp_path, monkeypatch):
    """CliRunner bound to a fresh SQLite-backed configuration."""
    monkeypatch.setenv("ACLSTORE_BACKEND", "sql")
    monkeypatch.setenv("ACLSTORE_DATABASE_URL", f"sqlite:///{tmp_path / 'cli.db'}")
    monkeypatch.setenv("ACLSTORE_ADMIN_USERS", "root")
    monkeypatch.setenv("ACLSTORE_TOKENS", "root:very-secret-token")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    monkeypatch.setattr(config_module.config_manager, "_config", None)
    yield CliRunner()
    logger.remove()


class TestACLCommands:
    """Test the acl command group against a SQLite backend."""

    def test_create_and_get(self, runner):
        result = runner.invoke(cli, ["acl", "create", "docs", "carol", "alice"])
        assert result.exit_code == 0, result.output
        assert "Created ACL 'docs'" in result.output

        result = runner.invoke(cli, ["acl", "get", "docs"])
        assert result.exit_code == 0, result.output
        assert "alice" in result.output
        assert "carol" in result.output

    def test_create_existing(self, runner):
        runner.invoke(cli, ["acl", "create", "docs", "carol"])

        result = runner.invoke(cli, ["acl", "create", "docs", "dave"])

        assert result.exit_code == 0
        assert "already exists" in result.output

    def test_create_reserved_name(self, runner):
        result = runner.invoke(cli, ["acl", "create", "_docs"])

        assert result.exit_code == 1
        assert 'invalid ACL name "_docs"' in result.output

    def test_add_remove_set(self, runner):
        runner.invoke(cli, ["acl", "create", "docs", "carol"])

        assert runner.invoke(cli, ["acl", "add", "docs", "dave", "erin"]).exit_code == 0
        assert runner.invoke(cli, ["acl", "remove", "docs", "carol"]).exit_code == 0
        result = runner.invoke(cli, ["acl", "get", "docs"])
        assert "dave" in result.output
        assert "carol" not in result.output

        assert runner.invoke(cli, ["acl", "set", "docs", "zoe"]).exit_code == 0
        result = runner.invoke(cli, ["acl", "get", "docs"])
        assert "zoe" in result.output
        assert "dave" not in result.output

    def test_missing_acl(self, runner):
        result = runner.invoke(cli, ["acl", "get", "nope"])

        assert result.exit_code == 1
        assert "ACL not found" in result.output

    def test_list(self, runner):
        runner.invoke(cli, ["acl", "create", "docs"])

        result = runner.invoke(cli, ["acl", "list"])

        assert result.exit_code == 0
        for name in ("_docs", "admin", "docs"):
            assert name in result.output

    def test_admin_acl_bootstrapped(self, runner):
        result = runner.invoke(cli, ["acl", "get", "admin"])

        assert result.exit_code == 0
        assert "root" in result.output


class TestTopLevelCommands:
    """Test show-config and serve."""

    def test_show_config_hides_tokens(self, runner):
        result = runner.invoke(cli, ["show-config", "--show-sensitive"])

        assert result.exit_code == 0, result.output
        assert "Backend: sql" in result.output
        assert "very-secret-token" not in result.output
        assert "root" in result.output

    def test_serve(self, runner):
        with patch("aclstore.core.app.run_server") as run_server:
            result = runner.invoke(cli, ["serve", "--host", "127.0.0.1", "--port", "9001"])

        assert result.exit_code == 0, result.output
        run_server.assert_called_once_with(host="127.0.0.1", port=9001)

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output
