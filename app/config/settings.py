from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "resume_analysis"
    db_username: str = "resume_analysis"
    db_password: str = "secret"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10

    storage_dir: Path = Path("uploads")
    default_owner: str = "default-user@example.com"

    conductor_server_url: str = "http://localhost:8080/api"
    conductor_key_id: str = ""
    conductor_key_secret: str = ""
    conductor_workflow_name: str = "resume_analysis_workflow"
    conductor_workflow_version: int = 1
    conductor_timeout_seconds: int = 10

    worker_id: str = ""
    worker_concurrency: int = 5
    worker_poll_interval_ms: int = 100
    worker_poll_timeout_ms: int = 100

    pdf_engine: str = "pdfplumber"

    analysis_provider: str = "gemini"
    analysis_api_key: str = ""
    analysis_model_name: str = "gemini-1.5-flash"
    analysis_base_url: str = ""
    analysis_timeout_seconds: int = 30
    analysis_temperature: float = 0.1
    analysis_top_p: float = 0.1
    analysis_max_output_tokens: int = 2048
    analysis_max_input_chars: int = 15000
    analysis_structured_output: bool = True
