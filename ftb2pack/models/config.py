"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_API_URL = "https://api.modpacks.ch/public/modpack/"
DEFAULT_CATALOG_URL = "https://meta.feed-the-beast.com/v1/modpacks"


class AppConfig(BaseModel):
    """A validated configuration model for the application."""

    model_config = ConfigDict(validate_assignment=True, str_strip_whitespace=True)

    # Remote endpoints
    api_url: str = DEFAULT_API_URL
    catalog_url: str = DEFAULT_CATALOG_URL

    # Install Settings
    destination: str = "."

    # Logging
    json_logs: bool = False
    log_dir: str = ""

    # Internal fields not loaded from INI file
    config_path: str = Field("", repr=False)

    @field_validator("api_url", "catalog_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Only plain HTTP(S) endpoints are supported."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"URL must start with http:// or https://, got: {v!r}")
        return v

    @field_validator("api_url")
    @classmethod
    def ensure_trailing_slash(cls, v: str) -> str:
        """Pack and version ids are appended to the API URL as path segments."""
        return v if v.endswith("/") else f"{v}/"

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if not v:
            raise ValueError("Destination directory cannot be empty.")
        return v

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that are expected in the INI file."""
        internal_fields = {"config_path"}
        return {key for key in cls.model_fields if key not in internal_fields}
