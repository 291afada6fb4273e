"""
apiscout/config.py

Environment variable configuration.

Contains:
- Config: Centralized settings from environment variables
- LOG_LEVEL, DEFAULT_FRAMEWORK, GITHUB_TOKEN, etc.
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

load_dotenv()

# requests/urllib3 are chatty at DEBUG while downloading tarballs
logging.getLogger("urllib3").setLevel(logging.WARNING)


class Config():
    """
    Centralized configuration for environment variables.
    """

    # logging configuration
    LOG_LEVEL: int = logging.getLevelNamesMapping().get(
        os.getenv("LOG_LEVEL", "INFO").upper(),
        logging.INFO
    )
    LOG_DATE_FORMAT: str = os.getenv("LOG_DATE_FORMAT", "%Y-%m-%d %H:%M:%S")
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "[%(asctime)s] %(levelname)s:%(name)s:%(message)s")

    # discovery defaults (CLI)
    DEFAULT_FRAMEWORK: str = os.getenv("APISCOUT_DEFAULT_FRAMEWORK", "express")
    DEFAULT_OBJECT_INSTANCE: str = os.getenv("APISCOUT_DEFAULT_OBJECT", "router")

    # remote sources
    GITHUB_TOKEN: str | None = os.getenv("GITHUB_TOKEN")
    GITHUB_API_URL: str = os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/")
    CLONE_TIMEOUT: int = int(os.getenv("APISCOUT_CLONE_TIMEOUT", "300"))
    HTTP_TIMEOUT: int = int(os.getenv("APISCOUT_HTTP_TIMEOUT", "60"))
