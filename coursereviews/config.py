from typing import Any, Dict, Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings


class DatabaseSettings(BaseSettings):
    DATABASE_URL: Optional[str] = None
    DATABASE_PORT: int = 5432
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_USER: str = "postgres"
    POSTGRES_DB: str = "course_reviews"
    POSTGRES_HOST: str = "localhost"
    DATABASE_ECHO: bool = False

    @property
    def SQLALCHEMY_DATABASE_URL(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return "postgresql://{}:{}@{}:{}/{}".format(
            self.POSTGRES_USER,
            self.POSTGRES_PASSWORD,
            self.POSTGRES_HOST,
            self.DATABASE_PORT,
            self.POSTGRES_DB,
        )


class RedisSettings(BaseSettings):
    REDIS_PASSWORD: Optional[str] = None
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379


class AuthSettings(BaseSettings):
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    GOOGLE_CLIENT_ID: str = ""
    GOOGLE_CLIENT_SECRET: str = ""
    GOOGLE_REDIRECT_URI: str = "http://localhost:8000/auth/callback"
    ALLOWED_EMAIL_DOMAIN: str = "goa.bits-pilani.ac.in"
    FRONTEND_URL: str = "http://localhost:3000"
    COOKIE_SECURE: bool = False


class StorageSettings(BaseSettings):
    HANDOUT_BUCKET: str = "course-handouts"
    HANDOUT_URL_EXPIRES: int = 3600
    ACCESS_KEY_ID: Optional[str] = None
    SECRET_ACCESS_KEY: Optional[str] = None
    AWS_REGION: Optional[str] = None


class AppSettings(DatabaseSettings, RedisSettings, AuthSettings, StorageSettings):
    ALLOWED_ORIGINS: str = ""
    COURSE_CATALOG_FILE: Optional[str] = None

    class Config:
        env_file = "./.env"
        extra = "allow"


class LogConfig(BaseSettings):
    LOGGER_NAME: str = "coursereviews"
    LOG_FORMAT: str = "%(levelprefix)s | %(asctime)s | %(name)s | %(message)s"
    LOG_LEVEL: str = "INFO"

    version: int = 1
    disable_existing_loggers: bool = False
    formatters: Dict[str, Any] = {}
    handlers: Dict[str, Any] = {
        "default": {
            "formatter": "default",
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
        },
    }
    loggers: Dict[str, Any] = {}

    @model_validator(mode="after")
    def build_from_settings(self):
        # Built per instance so LOG_LEVEL and LOG_FORMAT from the environment apply
        if not self.formatters:
            self.formatters = {
                "default": {
                    "()": "uvicorn.logging.DefaultFormatter",
                    "fmt": self.LOG_FORMAT,
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            }
        if not self.loggers:
            self.loggers = {
                self.LOGGER_NAME: {"handlers": ["default"], "level": self.LOG_LEVEL},
            }
        return self


config = AppSettings()
