# core/db.py
from __future__ import annotations
from pathlib import Path
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from core.schema_registry import auto_discover, run_all

def get_engine(db_url: str) -> Engine:
    if db_url in ("sqlite://", "sqlite:///:memory:"):
        # one shared connection, otherwise every checkout gets its own empty database
        return create_engine(
            db_url, future=True,
            connect_args={"check_same_thread": False}, poolclass=StaticPool,
        )
    if db_url.startswith("sqlite:///"):
        db_file = db_url.replace("sqlite:///", "")
        Path(db_file).parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(db_url, future=True)
    return engine

def init_db(engine: Engine) -> None:
    # 1) auto-discover schema modules (schemas/*.py)
    auto_discover("schemas")

    # 2) run all registered installers
    run_all(engine)
