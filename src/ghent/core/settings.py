from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from ghent.mongo.settings import MongoSettings
from ghent.utils.scopes import parse_scopes

DEFAULT_SYSTEM_SCOPES = [
    "admin",
    "profile",
    "client:read",
    "client:write",
    "user:read",
    "user:write",
]


class GhentSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GHENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    system_scopes: Annotated[list[str], NoDecode] = Field(default_factory=lambda: list(DEFAULT_SYSTEM_SCOPES))

    mongo: MongoSettings = Field(default_factory=MongoSettings)

    @field_validator("system_scopes", mode="before")
    @classmethod
    def split_system_scopes(cls, value: object) -> object:
        if isinstance(value, str):
            return parse_scopes(value)
        return value

    @field_validator("system_scopes")
    @classmethod
    def validate_system_scopes(cls, value: list[str]) -> list[str]:
        scopes = [scope.strip() for scope in value if scope.strip()]
        if not scopes:
            msg = "system_scopes must contain at least one scope"
            raise ValueError(msg)
        if any(" " in scope for scope in scopes):
            msg = "system_scopes entries must not contain spaces"
            raise ValueError(msg)
        return list(dict.fromkeys(scopes))
