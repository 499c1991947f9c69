"""Settings, read from environment variables."""

import os
from dataclasses import dataclass
from enum import StrEnum
from typing import Mapping, Optional, Self

from src.core.exceptions import ConfigurationError

ENV_PREFIX = "CONNECT_FOUR_"
TRUTHY = {"1", "true", "yes", "on"}
FALSY = {"0", "false", "no", "off", ""}
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class StorageBackend(StrEnum):
    MEMORY = "memory"
    SQL = "sql"


@dataclass(frozen=True)
class Settings:
    storage: StorageBackend = StorageBackend.MEMORY
    database_url: str = "sqlite:///connect_four.db"
    database_echo: bool = False
    opponent_seed: Optional[int] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Self:
        """Any variable that is not set falls back to the default above."""
        env = os.environ if environ is None else environ
        defaults = cls()

        storage_name = env.get(f"{ENV_PREFIX}STORAGE", defaults.storage).lower()
        if storage_name not in {backend.value for backend in StorageBackend}:
            raise ConfigurationError(
                f"Invalid storage backend: {storage_name!r}. \nPick one from {','.join(StorageBackend)}"
            )

        log_level = env.get(f"{ENV_PREFIX}LOG_LEVEL", defaults.log_level).strip().upper()
        if log_level not in LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log level: {log_level!r}. \nPick one from {','.join(sorted(LOG_LEVELS))}"
            )

        seed = env.get(f"{ENV_PREFIX}OPPONENT_SEED")
        return cls(
            storage=StorageBackend(storage_name),
            database_url=env.get(f"{ENV_PREFIX}DATABASE_URL", defaults.database_url),
            database_echo=_parse_bool(
                env.get(f"{ENV_PREFIX}DATABASE_ECHO", str(defaults.database_echo))
            ),
            opponent_seed=_parse_int(seed) if seed is not None else None,
            log_level=log_level,
        )


def _parse_bool(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in TRUTHY:
        return True
    if normalized in FALSY:
        return False
    raise ConfigurationError(f"Cannot interpret {value!r} as a boolean.")


def _parse_int(value: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise ConfigurationError(f"Cannot interpret {value!r} as an integer.") from e
