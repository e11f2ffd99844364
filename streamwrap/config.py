import logging
import os
import re

from pydantic import BaseModel, field_validator

DEFAULT_SCHEME = "wrapper"
DEFAULT_LOG_LEVEL = "WARNING"

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")


class Settings(BaseModel):
    scheme: str = DEFAULT_SCHEME
    log_level: str = DEFAULT_LOG_LEVEL

    @field_validator("scheme")
    @classmethod
    def _check_scheme(cls, value: str) -> str:
        if not _SCHEME_RE.match(value):
            raise ValueError(f"invalid scheme name: {value!r}")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        value = value.upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"unknown log level: {value!r}")
        return value

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            scheme=os.getenv("STREAMWRAP_SCHEME", DEFAULT_SCHEME),
            log_level=os.getenv("STREAMWRAP_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        )


def configure_logging(settings: Settings) -> None:
    logging.getLogger("streamwrap").setLevel(settings.log_level)
