# commerce/config.py
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from commerce.errors import ConfigError

_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


class CommerceSettings(BaseModel):
    """Commerce runtime configuration."""
    strict_contact: bool = True             # False=accept any non-empty contact
    contact_separator: str = Field(default="@", min_length=1, max_length=1)
    log_level: str = "INFO"
    log_dir: Optional[str] = None           # None=stdout only

    @field_validator("log_level", mode="before")
    @classmethod
    def _norm_level(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return "INFO"
        v = str(v).strip().upper()
        if v not in _LOG_LEVELS:
            raise ValueError(f"unknown log level: {v}")
        return v

    @field_validator("log_dir", mode="before")
    @classmethod
    def _empty_dir_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @classmethod
    def from_cfg(cls, cfg: Optional[Mapping[str, Any]]) -> "CommerceSettings":
        """Build from the `commerce:` section of a load_cfg() dict."""
        section = (cfg or {}).get("commerce") or {}
        if not isinstance(section, Mapping):
            raise ConfigError(f"commerce section must be a mapping, got {type(section).__name__}")
        try:
            return cls(**section)
        except ValidationError as e:
            raise ConfigError(f"invalid commerce config: {e}") from e
