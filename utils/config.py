#Description: Pydantic settings loader with defaults, reading .env, plus credential loading.
import os
import pathlib
from typing import Mapping

from pydantic_settings import BaseSettings
from pydantic import Field
from dotenv import load_dotenv

from adapters.okx_errors import ConfigurationError
from models.schemas import Credentials

env_path = pathlib.Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# env var -> Credentials field
CREDENTIAL_ENV_VARS = {
    "OKX_API_KEY": "api_key",
    "OKX_SECRET_KEY": "secret_key",
    "OKX_API_PASSPHRASE": "passphrase",
    "OKX_PROJECT_ID": "project_id",
}

class Settings(BaseSettings):
    APP_ENV: str = Field(default="development")
    LOG_LEVEL: str = Field(default=os.getenv("LOG_LEVEL", "INFO"))

    OKX_BASE_URL: str = Field(default="https://web3.okx.com")
    OKX_TIMEOUT_MS: int = Field(default=10_000, gt=0)
    OKX_API_VERSION: str = Field(default="v6")

    # Read for visibility only; load_credentials() is what enforces them.
    OKX_API_KEY: str | None = None
    OKX_SECRET_KEY: str | None = None
    OKX_API_PASSPHRASE: str | None = None
    OKX_PROJECT_ID: str | None = None

    class Config:
        env_file = ".env"
        extra = "allow"

settings = Settings()


def load_credentials(environ: Mapping[str, str]) -> Credentials:
    """Build Credentials from an environment-like mapping.

    Every missing or empty variable is reported at once, so a half-configured
    deployment fails with a single readable error.
    """
    missing = [name for name in CREDENTIAL_ENV_VARS if not environ.get(name)]
    if missing:
        raise ConfigurationError(
            "Missing required environment variables: " + "/".join(missing)
        )
    return Credentials(**{field: environ[name] for name, field in CREDENTIAL_ENV_VARS.items()})
