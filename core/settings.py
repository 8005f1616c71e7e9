from __future__ import annotations
import os
import yaml
from pathlib import Path
from pydantic import BaseModel

DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parents[1] / "config" / "settings.yaml"

class AppConfig(BaseModel):
    name: str
    environment: str
    debug: bool = False

class AuthConfig(BaseModel):
    bootstrap_admin_login: str
    bootstrap_admin_password: str
    bootstrap_admin_email: str = ""
    session_idle_minutes: int = 5

class DBConfig(BaseModel):
    url: str

class LimitsConfig(BaseModel):
    max_courses_per_coordinator: int = 8
    max_courses_per_discipline: int = 15

class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

class Settings(BaseModel):
    app: AppConfig
    auth: AuthConfig
    db: DBConfig
    limits: LimitsConfig = LimitsConfig()
    logging: LoggingConfig = LoggingConfig()

    @property
    def debug(self) -> bool:
        return self.app.debug

def load_settings(path: str | Path | None = None) -> Settings:
    if path is None:
        path = os.environ.get("POSGRAD_SETTINGS") or DEFAULT_SETTINGS_PATH
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return Settings(
        app=AppConfig(**data["app"]),
        auth=AuthConfig(**data["auth"]),
        db=DBConfig(**data["db"]),
        limits=LimitsConfig(**(data.get("limits") or {})),
        logging=LoggingConfig(**(data.get("logging") or {})),
    )
