"""Configuration models for the MKS source-control adapter."""

from pathlib import Path

from pydantic import BaseModel, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_EXECUTABLE = "si.exe"
DEFAULT_PORT = 8722
DEFAULT_AUTO_GET_SOURCE = True
DEFAULT_TIMEOUT_SECONDS = 600.0


class MksConfig(BaseModel):
    """Settings for one MKS Source Integrity sandbox."""

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "executable": "C:\\MKS\\bin\\si.exe",
                "user": "ccnet",
                "password": "secret",
                "hostname": "mks.example.com",
                "port": 8722,
                "sandbox_root": "C:\\MyProject",
                "sandbox_file": "myproject.pj",
                "auto_get_source": True,
                "checkpoint_on_success": False,
            }
        },
    }

    executable: str = Field(
        default=DEFAULT_EXECUTABLE, description="Path to the si command-line client"
    )
    user: str | None = Field(default=None, description="MKS user id")
    password: SecretStr | None = Field(default=None, description="Password for the MKS user id")
    hostname: str = Field(default=..., description="MKS Source Integrity server host")
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535, description="MKS server port")
    sandbox_root: str = Field(default=..., description="Local directory the sandbox maps to")
    sandbox_file: str = Field(default=..., description="Sandbox project file, e.g. project.pj")
    checkpoint_on_success: bool = Field(
        default=False, description="Checkpoint the project after a successful build"
    )
    auto_get_source: bool = Field(
        default=DEFAULT_AUTO_GET_SOURCE,
        description="Resynchronize the sandbox before each build",
    )
    timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS, gt=0, description="Timeout for each si invocation"
    )
    product_name: str = Field(
        default="Cruise Control.Net", description="Prefix of checkpoint descriptions"
    )

    @property
    def sandbox_path(self) -> Path:
        """Full path of the sandbox project file."""
        return Path(self.sandbox_root) / self.sandbox_file

    @property
    def password_value(self) -> str | None:
        if self.password is None:
            return None
        return self.password.get_secret_value()


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    json_logs: bool = Field(
        default=True,
        description="If True, output JSON logs. If False, use console format.",
    )
    log_file: str | None = Field(
        default=None,
        description="Optional path to log file. If None, logs only to stdout.",
    )


class AppConfig(BaseSettings):
    """Main application configuration.

    This class uses pydantic-settings to load configuration from environment
    variables with the MKS_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="MKS_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    source_control: MksConfig
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
