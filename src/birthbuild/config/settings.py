"""
Settings/secret loading helpers.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_BASE_DOMAIN = "birthbuild.com"
DEFAULT_DATA_ROOT = Path("birthbuild_data")


def _load_dotenv() -> None:
    cwd_env = Path.cwd() / ".env"
    if cwd_env.exists():
        load_dotenv(dotenv_path=cwd_env, override=True)


_load_dotenv()


class Secrets(BaseModel):
    """
    Container for API keys loaded from environment variables.

    Attributes:
        netlify_api_token: Personal access token for the Netlify deploy API.
    """
    netlify_api_token: Optional[str] = Field(default=None, alias="NETLIFY_API_TOKEN")

    model_config = {
        "populate_by_name": True,
    }


class Settings(BaseModel):
    """
    Runtime settings read from BIRTHBUILD_* environment variables.

    Attributes:
        data_root: Directory holding checkpoint history and live pointers.
        base_domain: Domain under which each site gets a subdomain.
        storage_url: Public base URL for photo storage paths.
        deploy_timeout: Seconds allowed for a single hosting request.
    """
    data_root: Path = Field(default=DEFAULT_DATA_ROOT, alias="BIRTHBUILD_HOME")
    base_domain: str = Field(default=DEFAULT_BASE_DOMAIN, alias="BIRTHBUILD_BASE_DOMAIN")
    storage_url: Optional[str] = Field(default=None, alias="BIRTHBUILD_STORAGE_URL")
    deploy_timeout: float = Field(default=60.0, alias="BIRTHBUILD_DEPLOY_TIMEOUT")

    model_config = {
        "populate_by_name": True,
    }


@lru_cache(maxsize=1)
def get_secrets() -> Secrets:
    """
    Load secrets from environment/.env exactly once.
    """
    values = {field.alias: os.getenv(field.alias) for field in Secrets.model_fields.values()}
    return Secrets(**values)


def get_settings() -> Settings:
    """
    Read settings from the environment, ignoring unset variables.
    """
    values = {
        field.alias: os.environ[field.alias]
        for field in Settings.model_fields.values()
        if os.environ.get(field.alias)
    }
    return Settings(**values)
