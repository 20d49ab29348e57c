"""Environment-driven settings, read once at startup."""

from pathlib import Path

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_ROOT = Path(__file__).resolve().parents[1]


class EnvSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_PROJECT_ROOT / ".env"),
        env_ignore_empty=True,
        extra="ignore",
    )

    DEBUG: bool = False
    SECRET_KEY: SecretStr = SecretStr("dev-secret-change-me")
    ALLOWED_HOSTS: str = "localhost,127.0.0.1"
    TIME_ZONE: str = "UTC"
    LOG_LEVEL: str = "INFO"

    DATABASE_ENGINE: str = "sqlite"
    DATABASE_NAME: str = str(_PROJECT_ROOT / "db.sqlite3")
    DATABASE_USER: str = ""
    DATABASE_PASSWORD: SecretStr = SecretStr("")
    DATABASE_HOST: str = ""
    DATABASE_PORT: str = ""

    GAMES_MAX_PAGE_SIZE: int = 100

    @field_validator("DATABASE_ENGINE")
    @classmethod
    def known_engine(cls, v: str) -> str:
        if v not in ("sqlite", "postgresql"):
            raise ValueError("DATABASE_ENGINE must be 'sqlite' or 'postgresql'")
        return v

    def allowed_hosts(self) -> list[str]:
        return [host.strip() for host in self.ALLOWED_HOSTS.split(",") if host.strip()]

    def database(self) -> dict:
        if self.DATABASE_ENGINE == "sqlite":
            return {
                "ENGINE": "django.db.backends.sqlite3",
                "NAME": self.DATABASE_NAME,
            }
        return {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": self.DATABASE_NAME,
            "USER": self.DATABASE_USER,
            "PASSWORD": self.DATABASE_PASSWORD.get_secret_value(),
            "HOST": self.DATABASE_HOST,
            "PORT": self.DATABASE_PORT,
        }


env = EnvSettings()
