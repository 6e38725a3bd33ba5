# --- Settings ---------------------------------------------------------------
import logging
import os
from dataclasses import dataclass

from java_lens.errors import ConfigError

# Files above this size get a degenerate empty analysis instead of a parse.
DEFAULT_MAX_PARSE_BYTES = 1024 * 1024

DEFAULT_EXCLUDED_DIRS = ("out", "build", ".gradle", "node_modules")

# Files whose lifecycle methods make up the boot timeline.
DEFAULT_LIFECYCLE_TARGETS = ("ZygoteInit.java", "SystemServer.java")


@dataclass(frozen=True)
class Settings:
    max_parse_bytes: int = DEFAULT_MAX_PARSE_BYTES
    excluded_dirs: tuple[str, ...] = DEFAULT_EXCLUDED_DIRS
    lifecycle_targets: tuple[str, ...] = DEFAULT_LIFECYCLE_TARGETS
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Reads overrides from JAVA_LENS_* environment variables.
        Anything unset keeps its default; a malformed value raises ConfigError.
        """
        max_bytes = os.environ.get("JAVA_LENS_MAX_PARSE_BYTES")
        excluded = os.environ.get("JAVA_LENS_EXCLUDED_DIRS")
        log_level = os.environ.get("JAVA_LENS_LOG_LEVEL", "WARNING").upper()
        return cls(
            max_parse_bytes=_parse_byte_limit(max_bytes) if max_bytes else DEFAULT_MAX_PARSE_BYTES,
            excluded_dirs=tuple(d for d in excluded.split(",") if d) if excluded else DEFAULT_EXCLUDED_DIRS,
            log_level=_check_log_level(log_level),
        )


def _parse_byte_limit(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"JAVA_LENS_MAX_PARSE_BYTES must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"JAVA_LENS_MAX_PARSE_BYTES must be positive, got {value}")
    return value


def _check_log_level(name: str) -> str:
    # getLevelName maps known names to their int level and echoes anything else back as text
    if not isinstance(logging.getLevelName(name), int):
        raise ConfigError(f"JAVA_LENS_LOG_LEVEL is not a logging level: {name!r}")
    return name
