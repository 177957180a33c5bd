from functools import lru_cache
from pathlib import Path
from typing import Literal
from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Library settings loaded from environment.

    Every field can be set with a ``SOLID_AGENT_`` prefixed variable, e.g.
    ``SOLID_AGENT_REDIS_URL=redis://localhost:6379/0``.
    """

    model_config = SettingsConfigDict(
        env_prefix="SOLID_AGENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    environment: Literal["local", "dev", "staging", "prod"] = "local"
    debug: bool = False

    # Database (optional - only needed by the bundled SQLModel context tables)
    database_url: SecretStr | None = None
    db_echo_sql: bool = False

    # Broadcasting (optional - in-memory broadcaster when unset)
    redis_url: SecretStr | None = None

    # Observability
    log_level: int = 20  # INFO by default (DEBUG=10, INFO=20, WARNING=30, ERROR=40)
    log_format: Literal["json", "console"] = "json"

    # Context model defaults used for the canonical "context" name
    context_class: str = "AgentContext"
    message_class: str = "AgentMessage"
    generation_class: str = "AgentGeneration"

    # Tool schema templates live at <templates_path>/<agent_name>/tools/<tool>.json
    templates_path: Path = Path("templates")

    # Tool status broadcasting
    tool_status_url_max_length: int = 50

    @property
    def is_production(self) -> bool:
        return self.environment == "prod"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
