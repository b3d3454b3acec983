from __future__ import annotations

from motor.motor_asyncio import AsyncIOMotorClient
from pydantic import NonNegativeInt, PositiveInt, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ghent.mongo.connection import MongoConnection


class MongoSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GHENT_MONGO_",
        env_file=".env",
        extra="ignore",
    )

    url: SecretStr = SecretStr("mongodb://localhost:27017")
    database: str = "ghent"
    user_database: str | None = None
    max_pool_size: PositiveInt = 100
    min_pool_size: NonNegativeInt = 0
    server_selection_timeout_ms: PositiveInt = 30000
    retry_writes: bool = True
    app_name: str | None = None

    @field_validator("database", "user_database")
    @classmethod
    def validate_database_name(cls, value: str | None, info) -> str | None:  # noqa: ANN001
        if value is None:
            return None
        normalized = value.strip()
        if not normalized:
            msg = f"{info.field_name} must be a non-empty string"
            raise ValueError(msg)
        if any(char in normalized for char in "/\\. \"$"):
            msg = f"{info.field_name} contains characters MongoDB does not allow in database names"
            raise ValueError(msg)
        return normalized

    def connect(self) -> MongoConnection:
        client = AsyncIOMotorClient(
            self.url.get_secret_value(),
            maxPoolSize=self.max_pool_size,
            minPoolSize=self.min_pool_size,
            serverSelectionTimeoutMS=self.server_selection_timeout_ms,
            retryWrites=self.retry_writes,
            appname=self.app_name,
            tz_aware=True,
        )
        return MongoConnection(client, database=self.database, user_database=self.user_database)
