import json
import logging
import os
import pathlib
from collections.abc import Mapping
from dataclasses import dataclass, field


logger = logging.getLogger(__name__)


@dataclass
class DatabaseConfig:
    host: str = ""
    port: int = 5432
    name: str = "contacts"
    user: str = "contacts"
    password: str = ""

    @property
    def conninfo(self) -> str:
        return (
            f"host={self.host} port={self.port} "
            f"dbname={self.name} user={self.user} password={self.password}"
        )


@dataclass
class AuthConfig:
    token_secret: str = ""
    token_expire_minutes: int = 30


@dataclass
class ServerConfig:
    environment: str = "development"
    log_level: str = "INFO"
    port: int = 5000

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@dataclass
class AppConfig:
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    app: ServerConfig = field(default_factory=ServerConfig)

    @classmethod
    def load(cls) -> "AppConfig":
        """Load config from the JSON file named by CONFIG_FILE, then apply env overrides.

        A missing file is not an error: defaults are used so local development
        can run on the in-memory store with only ACCESS_TOKEN_SECRET set.
        """
        config_path = os.environ.get("CONFIG_FILE", "/run/secrets/config.json")
        path = pathlib.Path(config_path)

        data: dict = {}
        if path.exists():
            with open(path) as f:
                data = json.load(f)
        else:
            logger.warning("Config file not found at %s", config_path)

        config = cls(
            database=DatabaseConfig(**data.get("database", {})),
            auth=AuthConfig(**data.get("auth", {})),
            app=ServerConfig(**data.get("app", {})),
        )
        config.apply_env(os.environ)
        return config

    def apply_env(self, env: Mapping[str, str]) -> None:
        if env.get("ACCESS_TOKEN_SECRET"):
            self.auth.token_secret = env["ACCESS_TOKEN_SECRET"]
        if env.get("TOKEN_EXPIRE_MINUTES"):
            self.auth.token_expire_minutes = int(env["TOKEN_EXPIRE_MINUTES"])
        if env.get("APP_ENV"):
            self.app.environment = env["APP_ENV"]
        if env.get("LOG_LEVEL"):
            self.app.log_level = env["LOG_LEVEL"].upper()
        if env.get("PORT"):
            self.app.port = int(env["PORT"])

    def validate(self) -> None:
        """Raise if the config cannot run the service."""
        if not self.auth.token_secret:
            raise RuntimeError(
                "No token secret configured: set auth.token_secret or ACCESS_TOKEN_SECRET"
            )
        if self.auth.token_expire_minutes <= 0:
            raise RuntimeError("auth.token_expire_minutes must be positive")
