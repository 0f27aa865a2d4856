"""Configuration management for Pet Wiki."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Base paths
    base_dir: Path = Field(default_factory=lambda: Path(__file__).parent.parent.parent)
    data_dir: Optional[Path] = Field(default=None)

    # Database
    database_url: str = "sqlite:///data/pet_wiki.db"

    # Import sources
    pets_data_file: Optional[Path] = Field(default=None)
    blog_data_file: Optional[Path] = Field(default=None)

    # Site
    site_name: str = "tailr.wiki"
    placeholder_image: str = "/images/placeholder-pet.jpg"
    blog_page_size: int = 6

    # Logging
    log_level: str = "INFO"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if self.data_dir is None:
            self.data_dir = self.base_dir / "data"
        if self.pets_data_file is None:
            self.pets_data_file = self.data_dir / "petsData.json"
        if self.blog_data_file is None:
            self.blog_data_file = self.data_dir / "blogData.json"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
