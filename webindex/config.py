"""
Settings and logging setup
Values come from WEBINDEX_* environment variables or a .env file
"""

import logging

from pydantic_settings import BaseSettings

from .core import QuerySyntax


class Settings(BaseSettings):

    default_url: str = "https://www.google.com"
    default_syntax: QuerySyntax = QuerySyntax.PREFIX

    html_encoding: str = "utf-8"

    log_level: str = "INFO"
    log_format: str = "%(message)s"

    class Config:
        env_prefix = "WEBINDEX_"
        env_file = ".env"
        extra = "ignore"


settings = Settings()


def configure_logging(config: Settings = settings) -> None:
    """Configure root logging from settings."""
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format=config.log_format,
    )
