from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_mapping(cls, settings: Mapping) -> "DBConfig":
        """Build from a settings ``DB_CONFIG`` dict."""
        return cls(
            host=str(settings["host"]),
            port=int(settings.get("port", 3306)),
            user=str(settings["user"]),
            password=str(settings.get("password", "")),
            database=str(settings["database"]),
        )


class DatabaseConnection:
    """Process-wide connection factory; every repository call opens its own connection."""

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self.config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance.config != config:
            cls._instance = cls(config)
        return cls._instance

    def connect(self):
        c = self.config
        return mysql.connector.connect(
            host=c.host,
            port=c.port,
            user=c.user,
            password=c.password,
            database=c.database,
        )
