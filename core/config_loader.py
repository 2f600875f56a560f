from __future__ import annotations
import json
from typing import Annotated, List

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./scheduling.db"
    SQL_ECHO: bool = False

    # JSON list or comma separated, e.g. "http://localhost:5173,https://hr.example.com"
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = []

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def split_origins(cls, v):
        if isinstance(v, str):
            v = v.strip()
            if v.startswith("["):
                return json.loads(v)
            return [o.strip() for o in v.split(",") if o.strip()]
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def upper_level(cls, v: str) -> str:
        return v.upper()


settings = Settings()
