"""Configuration management using Pydantic Settings."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gqlfetch.services.graphql import DEFAULT_ENDPOINT_URL, GraphQLConfig

logger = logging.getLogger(__name__)

DEFAULT_QUERY = "{ users{name} }"


class GraphQLSettings(BaseModel):
    """Endpoint and transport parameters."""

    endpoint_url: str = DEFAULT_ENDPOINT_URL
    timeout_seconds: float = 30.0
    max_retries: int = 3
    backoff_factor: float = 1.0  # seconds, doubled on each retry
    headers: dict[str, str] = Field(default_factory=dict)
    raise_on_errors: bool = False

    @field_validator("endpoint_url")
    @classmethod
    def check_scheme(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("endpoint_url must start with http:// or https://")
        return v

    def to_client_config(self) -> GraphQLConfig:
        return GraphQLConfig(
            endpoint_url=self.endpoint_url,
            timeout_seconds=self.timeout_seconds,
            max_retries=self.max_retries,
            backoff_factor=self.backoff_factor,
            headers=dict(self.headers),
            raise_on_errors=self.raise_on_errors,
        )


class RequestSettings(BaseModel):
    """The GraphQL operation sent on each run."""

    query: str = DEFAULT_QUERY
    variables: dict[str, Any] | None = None
    operation_name: str | None = None


class Settings(BaseSettings):
    """Main configuration class."""

    config_path: Path = Path("gqlfetch.yaml")
    logfire_token: str = ""

    # Nested configuration sections
    graphql: GraphQLSettings = Field(default_factory=GraphQLSettings)
    request: RequestSettings = Field(default_factory=RequestSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    def load_yaml_config(self) -> None:
        """Load and merge YAML configuration."""
        config_path = self.config_path

        if not config_path.exists():
            logger.warning(f"Config file not found: {config_path}. Using defaults.")
            return

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f)

            if not yaml_config:
                logger.warning(f"Empty config file: {config_path}")
                return

            for section_name in ["graphql", "request"]:
                if section_name in yaml_config:
                    section = getattr(self, section_name)
                    yaml_section = yaml_config[section_name] or {}

                    section_dict = section.model_dump()
                    section_dict.update(yaml_section)

                    new_section = section.__class__(**section_dict)
                    setattr(self, section_name, new_section)

            logger.info(f"Loaded configuration from {config_path}")

        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML config: {e}")
            raise
        except Exception as e:
            logger.error(f"Failed to load config: {e}")
            raise


@lru_cache()
def get_settings() -> Settings:
    """Get singleton Settings instance."""
    settings = Settings()
    settings.load_yaml_config()
    return settings
