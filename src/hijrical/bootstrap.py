from __future__ import annotations
from typing import Optional

from hijrical.config import Settings
from hijrical.engines.conversion import ConversionEngine
from hijrical.reference.table import load_table

def build_engine(settings: Optional[Settings] = None) -> ConversionEngine:
    s = settings if settings is not None else Settings.from_env()
    return ConversionEngine(load_table(s.table_path), index=s.build_index)
