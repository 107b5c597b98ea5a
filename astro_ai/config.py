"""Astro AI configuration — loaded from environment variables / .env file."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Anthropic
    anthropic_api_key: str = ""

    # LangSmith
    langchain_tracing_v2: bool = False
    langchain_api_key: str = ""
    langchain_project: str = "astro-ai"

    # Models
    primary_model: str = "claude-sonnet-4-20250514"
    max_tokens: int = 8192

    # Google Drive image store
    google_credentials_file: str = "credentials.json"
    drive_folder_id: str = ""
    http_timeout_seconds: float = 30.0

    # Agent settings
    max_tool_rounds: int = 5

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origins: list[str] = [
        "http://localhost:3000",
        "https://astro-ai-fe.vercel.app",
    ]
    expose_error_details: bool = True
    request_log_dir: str = "logs"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
