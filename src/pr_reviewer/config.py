# src/pr_reviewer/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env")

    # GitHub
    github_api_url: str = "https://api.github.com"
    github_token: str | None = None

    # Local model
    ollama_binary: str = "ollama"
    ollama_model: str = "llama3"
    chat_model: str = "llama3"
    llm_timeout: float | None = 300.0
    llm_max_concurrency: int = 2

    # Storage
    history_capacity: int = 50

    log_level: str = "INFO"
