"""Settings loading from the environment and a .env file."""

import pytest

from chat_relay.config import DEFAULT_SYSTEM_PROMPT, Settings


ENV_KEYS = ["PORT", "HOST", "OPENROUTER_API_KEY", "CHAT_RESPONSE_MODE", "LOG_LEVEL", "MAX_BODY_BYTES"]


@pytest.fixture
def clean_env(tmp_path, monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestSettings:
    def test_defaults(self, clean_env):
        settings = Settings()
        assert settings.HOST == "0.0.0.0"
        assert settings.PORT == 3000
        assert settings.CHAT_RESPONSE_MODE == "stream"
        assert settings.MAX_BODY_BYTES == 10 * 1024 * 1024
        assert settings.SYSTEM_PROMPT == DEFAULT_SYSTEM_PROMPT
        assert settings.api_key_configured is False

    def test_reads_dotenv_file(self, clean_env):
        (clean_env / ".env").write_text(
            "OPENROUTER_API_KEY=from-dotenv\nCHAT_RESPONSE_MODE=buffered\nUNRELATED_KEY=1\n",
            encoding="utf-8",
        )
        settings = Settings()
        assert settings.OPENROUTER_API_KEY == "from-dotenv"
        assert settings.CHAT_RESPONSE_MODE == "buffered"
        assert settings.api_key_configured is True

    def test_environment_beats_dotenv(self, clean_env, monkeypatch):
        (clean_env / ".env").write_text("PORT=4000\n", encoding="utf-8")
        monkeypatch.setenv("PORT", "5000")
        assert Settings().PORT == 5000

    def test_configured_through_model_config(self):
        assert "Config" not in vars(Settings)
        assert Settings.model_config["env_file"] == ".env"
