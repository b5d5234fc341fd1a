# tests/unit/test_config.py
from pr_reviewer.config import Settings


def test_settings_loads_from_env(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "test-token")
    monkeypatch.setenv("OLLAMA_MODEL", "codellama")
    monkeypatch.setenv("LLM_MAX_CONCURRENCY", "4")

    settings = Settings()

    assert settings.github_token == "test-token"
    assert settings.ollama_model == "codellama"
    assert settings.llm_max_concurrency == 4


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    settings = Settings(_env_file=None)

    assert settings.github_token is None
    assert settings.github_api_url == "https://api.github.com"
    assert settings.ollama_binary == "ollama"
    assert settings.chat_model == "llama3"
    assert settings.history_capacity == 50
