import os
from pathlib import Path

from aws_lambda_powertools.logging import Logger
from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = Logger()


class AppConfig(BaseModel):
    """Application configuration."""

    app_env: str = Field(
        description="Application environment (local, dev or prod)"
    )
    version: str = Field(description="Application version")
    commit_hash: str = Field(description="Commit hash")
    max_file_size_mb: float = Field(
        default=1, gt=0, description="Upload size ceiling in MiB"
    )
    accepted_mime_type: str = Field(
        default="application/pdf", description="The only accepted upload type"
    )
    render_scale: float = Field(
        default=1.5, gt=0, description="Zoom used for canvas and image output"
    )
    cors_allow_origin: str = Field(
        default="*", description="Origin allowed by the HTTP API"
    )

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load configuration from environment variables.

        In 'local' mode (default), it first loads variables from a .env file.
        In 'dev' and 'prod' modes, it reads directly from environment variables.
        """

        app_env = os.getenv("APP_ENV", "local").lower()
        logger.debug("App environment", extra={"app_env": app_env})
        if app_env == "local":
            dotenv_path = Path(".env")
            load_dotenv(dotenv_path=dotenv_path, override=True)
            logger.debug("Loaded .env file", extra={"dotenv_path": str(dotenv_path)})
        elif app_env not in ["dev", "prod"]:
            raise ValueError(f"Invalid app environment: {app_env}")

        return cls(
            app_env=app_env,
            version=os.getenv("VERSION", "unknown"),
            commit_hash=os.getenv("COMMIT_HASH", "unknown"),
            max_file_size_mb=float(os.getenv("MAX_FILE_SIZE_MB", "1")),
            accepted_mime_type=os.getenv("ACCEPTED_MIME_TYPE", "application/pdf"),
            render_scale=float(os.getenv("RENDER_SCALE", "1.5")),
            cors_allow_origin=os.getenv("CORS_ALLOW_ORIGIN", "*"),
        )

    @property
    def display_version(self) -> str:
        """Version string shown by GET /version."""
        return f"{self.version}-B:{self.commit_hash[:7]}-{self.app_env[0].upper()}"
