"""Tests for .env loading of SECURETASK_* settings."""

import os

from securetask.core.config import load_config
from securetask.core.config.env import (
    get_project_env_path,
    get_user_env_path,
    load_layered_env,
    read_env_file,
)


class TestEnvPaths:
    def test_user_env_beside_user_config(self, isolated_env):
        assert get_user_env_path() == isolated_env["config_home"] / "securetask" / ".env"

    def test_project_env_beside_project_config(self, tmp_path):
        assert get_project_env_path(tmp_path) == tmp_path / ".env"


class TestReadEnvFile:
    def test_missing_file(self, tmp_path):
        assert read_env_file(tmp_path / ".env") is None

    def test_only_securetask_keys(self, tmp_path):
        """Test that unrelated variables in a shared .env are left alone."""
        env_file = tmp_path / ".env"
        env_file.write_text("SECURETASK_TIMEOUT=5\nDATABASE_URL=postgres://x\n")

        assert read_env_file(env_file) == {"SECURETASK_TIMEOUT": "5"}


class TestLoadLayeredEnv:
    """Test exporting .env settings into the process environment."""

    def test_project_env_overrides_user_env(self, user_config_dir, isolated_env):
        (user_config_dir / ".env").write_text(
            "SECURETASK_API_URL=https://user.example/api\nSECURETASK_TIMEOUT=5\n"
        )
        (isolated_env["project_dir"] / ".env").write_text(
            "SECURETASK_API_URL=https://project.example/api\n"
        )

        applied = load_layered_env()

        assert applied == {
            "SECURETASK_API_URL": "https://project.example/api",
            "SECURETASK_TIMEOUT": "5",
        }
        assert os.environ["SECURETASK_API_URL"] == "https://project.example/api"
        assert os.environ["SECURETASK_TIMEOUT"] == "5"

    def test_os_environment_wins(self, isolated_env, monkeypatch):
        """Test that a variable already set in the process is never overridden."""
        (isolated_env["project_dir"] / ".env").write_text("SECURETASK_TOKEN=from-file\n")
        monkeypatch.setenv("SECURETASK_TOKEN", "from-shell")

        assert load_layered_env() == {}
        assert os.environ["SECURETASK_TOKEN"] == "from-shell"

    def test_explicit_project_dir(self, tmp_path):
        project = tmp_path / "elsewhere"
        project.mkdir()
        (project / ".env").write_text("SECURETASK_TIMEOUT=9\n")

        load_layered_env(project)

        assert os.environ["SECURETASK_TIMEOUT"] == "9"

    def test_reaches_client_config(self, isolated_env):
        """Test that .env settings end up in the loaded configuration."""
        (isolated_env["project_dir"] / ".env").write_text(
            "SECURETASK_API_URL=https://env-file.example/api/\n"
        )

        load_layered_env()

        assert load_config().api_url == "https://env-file.example/api"

    def test_no_files(self):
        assert load_layered_env() == {}
