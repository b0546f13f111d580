from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .utils.reference_parser import BIBLE_VERSIONS


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="BHL_", case_sensitive=False)

    base_url: str = Field("https://biblehub.com")
    default_version: str = Field("nlt")
    link_target: str = Field("_blank")
    link_rel: str = Field("noopener noreferrer")
    # JSON list in the environment, e.g. BHL_EXCLUDED_TAGS='["a", "pre", "code"]'
    excluded_tags: List[str] = Field(default_factory=lambda: ["a", "pre", "code", "script", "style"])
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("default_version")
    @classmethod
    def check_version(cls, value: str) -> str:
        if value.upper() not in BIBLE_VERSIONS:
            raise ValueError(f"default_version must be one of {', '.join(BIBLE_VERSIONS)}")
        return value.lower()

    @field_validator("excluded_tags")
    @classmethod
    def lowercase_tags(cls, value: List[str]) -> List[str]:
        return [tag.lower() for tag in value]


@lru_cache()
def get_settings() -> Settings:
    return Settings()
