from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import to_uppercase, to_lowercase, split_csv

DEFAULT_PALETTE = "red,green,yellow,blue,magenta,cyan,white"


class Settings(BaseSettings):
    """
    Request logger settings loaded from environment.

    These are the defaults for every wrap call. Callers that need a different
    destination or level build their own Settings (or use `model_copy(update=...)`)
    and pass it explicitly, nothing here is mutated at runtime.
    """

    # Logging destination
    LOG_FILE: Path = Path("logs/ring.log")
    LOG_TO_STDOUT: bool = False
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5

    # Logging behaviour
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_PREFIX_FORMAT: Literal["production", "debugging"] = "production"
    LOG_COLOR: bool = True
    LOG_USE_QUEUE: bool = False

    # Request id colorization, comma separated colour names
    LOG_PALETTE: str = DEFAULT_PALETTE

    # --- Derived settings ---
    @property
    def palette_colors(self) -> tuple[str, ...]:
        """
        Return LOG_PALETTE as an ordered tuple of colour names.

        Validation of the names themselves (known colours, at least two, no
        duplicates) happens when the Palette is built, in wrap_with_logger() /
        wrap_with_plaintext_logger() and RequestLoggerMiddleware.__init__, so a
        bad value fails at startup with a ConfigurationError.
        """
        return tuple(split_csv(self.LOG_PALETTE) or ())

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize the LOG_LEVEL environment variable value to uppercase.
        """
        return to_uppercase(v)

    @field_validator("LOG_PREFIX_FORMAT", mode="before")
    def normalize_prefix_format(cls, v: str | None) -> str | None:
        return to_lowercase(v)

    @field_validator("LOG_PALETTE", mode="before")
    def normalize_palette(cls, v: str | list[str] | None) -> str | None:
        names = split_csv(v)
        if names is None:
            return None
        return ",".join(names)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

# get_settings() takes no arguments and always returns the same settings from the environment,
# so caching it with @lru_cache() is good for performance.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
