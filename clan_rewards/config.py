"""Application configuration and environment settings"""
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""
    # Bungie.net credentials
    BUNGIE_API_KEY: Optional[str] = Field(None, description="Bungie.net API key")
    BUNGIE_USERNAME: Optional[str] = Field(None, description="Player whose clan is reported")

    # API endpoints
    BUNGIE_BASE_URL: str = Field("https://www.bungie.net/Platform", description="Bungie.net platform URL")
    BUNGIE_STATS_URL: str = Field("https://stats.bungie.net/Platform", description="Post-game carnage report URL")

    # Report settings
    ACTIVITY_PAGE_SIZE: int = Field(100, description="Activity history page size")
    CLAN_MILESTONE_HASH: int = Field(4253138191, description="Clan weekly rewards milestone definition")

    VERBOSE: bool = Field(False, description="Enable verbose logging")

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=True,
        extra='ignore'
    )


settings = Settings()
