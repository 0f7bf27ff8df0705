"""Tests for application settings."""

import os

import pytest

from affirm_checkout.core.config import ENV_FILE, Settings

REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


class TestEnvFile:
    def test_env_file_does_not_depend_on_working_directory(self):
        assert os.path.isabs(ENV_FILE)
        assert ENV_FILE == os.path.join(REPO_ROOT, "config", ".env")
        assert Settings.model_config["env_file"] == ENV_FILE

    def test_example_sits_beside_env_file(self):
        assert os.path.exists(os.path.join(os.path.dirname(ENV_FILE), ".env.example"))

    def test_reads_env_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("AFFIRM_PRODUCT_KEY", raising=False)
        monkeypatch.delenv("AFFIRM_ENVIRONMENT", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("AFFIRM_PRODUCT_KEY=FROM-FILE\nAFFIRM_ENVIRONMENT=production\n")

        settings = Settings(_env_file=str(env_file))

        assert settings.affirm_product_key == "FROM-FILE"
        assert settings.get_affirm_base_url() == "https://api.affirm.com/api/v2"


class TestAffirmBaseUrl:
    def test_override_wins(self):
        settings = Settings(_env_file=None, affirm_base_url="http://localhost:9000/api/v2/")
        assert settings.get_affirm_base_url() == "http://localhost:9000/api/v2"

    def test_unknown_environment(self):
        settings = Settings(_env_file=None, affirm_environment="staging", affirm_base_url=None)
        with pytest.raises(ValueError, match="staging"):
            settings.get_affirm_base_url()
