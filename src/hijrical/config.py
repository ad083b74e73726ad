"""Environment-driven settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

TABLE_ENV = "HIJRICAL_TABLE"
INDEX_ENV = "HIJRICAL_INDEX"
LOG_LEVEL_ENV = "HIJRICAL_LOG_LEVEL"

_TRUE = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    table_path: Optional[str] = None  # None -> packaged table
    build_index: bool = False
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        table = env.get(TABLE_ENV, "").strip() or None
        index = env.get(INDEX_ENV, "").strip().lower() in _TRUE
        level = env.get(LOG_LEVEL_ENV, "").strip().upper() or "WARNING"
        return cls(table_path=table, build_index=index, log_level=level)
