"""Environment-based configuration using pydantic-settings.

Configuration is loaded once at startup into a frozen ServerConfig and passed
by reference to every component that needs it. Nothing else reads the
environment directly.

Environment variables:
    JIRA_BASE_URL_MCP_RELAY     Jira Cloud site, e.g. https://acme.atlassian.net
    JIRA_USER_EMAIL_MCP_RELAY   Service account email
    JIRA_API_TOKEN_MCP_RELAY    Service account API token
    AWS_ACCESS_KEY_ID           S3 credentials
    AWS_SECRET_ACCESS_KEY
    AWS_REGION
    S3_BUCKET_NAME              Bucket holding per-project brand guidelines
    MCP_RELAY_LOG_LEVEL         Optional, default INFO
    MCP_RELAY_HTTP_TIMEOUT_MS   Optional, default 30000
"""
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError, startup_metadata
from .http_client import DEFAULT_TIMEOUT_MS
from .validation import format_issues

_SETTINGS_CONFIG = SettingsConfigDict(
    env_file=".env",
    extra="ignore",
    frozen=True,
)


def _not_blank(value: SecretStr) -> SecretStr:
    if not value.get_secret_value().strip():
        raise ValueError("must not be empty")
    return value


class JiraSettings(BaseSettings):
    """Jira service account."""

    model_config = _SETTINGS_CONFIG

    base_url: HttpUrl = Field(validation_alias="JIRA_BASE_URL_MCP_RELAY")
    user_email: str = Field(
        validation_alias="JIRA_USER_EMAIL_MCP_RELAY",
        pattern=r"^[^@\s]+@[^@\s]+$",
    )
    api_token: SecretStr = Field(validation_alias="JIRA_API_TOKEN_MCP_RELAY")

    _require_token = field_validator("api_token")(_not_blank)

    def url_for(self, path: str) -> str:
        """Join an API path onto the configured site URL."""
        return f"{str(self.base_url).rstrip('/')}{path}"


class S3Settings(BaseSettings):
    """Object store holding brand guideline documents."""

    model_config = _SETTINGS_CONFIG

    access_key_id: SecretStr = Field(validation_alias="AWS_ACCESS_KEY_ID")
    secret_access_key: SecretStr = Field(validation_alias="AWS_SECRET_ACCESS_KEY")
    region: str = Field(validation_alias="AWS_REGION", min_length=1)
    bucket_name: str = Field(validation_alias="S3_BUCKET_NAME", min_length=1)

    _require_keys = field_validator("access_key_id", "secret_access_key")(_not_blank)


class RuntimeSettings(BaseSettings):
    """Process-level tuning with sensible defaults."""

    model_config = _SETTINGS_CONFIG

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", validation_alias="MCP_RELAY_LOG_LEVEL"
    )
    http_timeout_ms: int = Field(
        default=DEFAULT_TIMEOUT_MS, gt=0, validation_alias="MCP_RELAY_HTTP_TIMEOUT_MS"
    )


class ServerConfig(BaseModel):
    """Validated, immutable process configuration."""

    model_config = ConfigDict(frozen=True)

    jira: JiraSettings
    s3: S3Settings
    runtime: RuntimeSettings = Field(default_factory=RuntimeSettings)


def load_config(env_file: Optional[str] = ".env") -> ServerConfig:
    """Load and validate configuration, failing fast on any problem.

    Every invalid or missing variable is reported by name. Values are never
    included in the error.

    Raises:
        ConfigurationError: if any setting is missing or malformed
    """
    sections = {"jira": JiraSettings, "s3": S3Settings, "runtime": RuntimeSettings}
    loaded = {}
    issues: list[str] = []

    for name, settings_cls in sections.items():
        try:
            loaded[name] = settings_cls(_env_file=env_file)
        except ValidationError as e:
            issues.extend(format_issues(e))

    if issues:
        formatted = "\n".join(f"  - {issue}" for issue in issues)
        raise ConfigurationError(
            f"Configuration validation failed:\n{formatted}",
            startup_metadata("load_config"),
        )

    return ServerConfig(**loaded)
