from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Service configuration read from environment variables."""

    app_name: str = Field(default="Ticket Reactor")
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="%(asctime)s %(levelname)s %(name)s %(message)s")

    # Collaborator endpoints
    tickets_api_url: str = Field(default="http://localhost:8001")
    tickets_api_token: str | None = Field(default=None)
    workflow_api_url: str = Field(default="http://localhost:8002")
    workflow_api_token: str | None = Field(default=None)
    http_timeout_seconds: float = Field(default=10.0, gt=0)

    # Observability configuration
    otel_enabled: bool = Field(default=False)
    otel_service_name: str = Field(default="ticket-reactor")
    otel_exporter_otlp_endpoint: str | None = Field(default=None)
    otel_exporter_otlp_headers: dict[str, str] = Field(default_factory=dict)

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    """Return a cached instance of the service settings."""

    return Settings()
