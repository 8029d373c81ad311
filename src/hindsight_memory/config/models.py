"""Configuration models using Pydantic."""

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

DEFAULT_BASE_URL = "http://localhost:8001"
DEFAULT_BANK_ID = "aletheia"


class ConfigError(Exception):
    """Configuration error."""

    pass


class PluginConfig(BaseModel):
    """Plugin configuration.

    Loaded once at registration and shared read-only by the client, the
    policies and the tools. Host configs use camelCase keys (``baseUrl``,
    ``bankId``...), so every field accepts its alias as well as its name.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    base_url: str = Field(default=DEFAULT_BASE_URL, alias="baseUrl")
    bank_id: str = Field(default=DEFAULT_BANK_ID, alias="bankId")
    api_key: SecretStr | None = Field(default=None, alias="apiKey")
    auto_retain: bool = Field(default=True, alias="autoRetain")
    auto_recall: bool = Field(default=False, alias="autoRecall")

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("base_url must not be empty")
        return value.rstrip("/")

    @field_validator("bank_id")
    @classmethod
    def _require_bank_id(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("bank_id must not be empty")
        return value

    def resolve_api_key(self) -> str | None:
        """Return the plain API key, or None when unset or blank."""
        if self.api_key is None:
            return None
        return self.api_key.get_secret_value() or None
