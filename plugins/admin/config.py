"""Configuration for the admin plugin, read from ``ADMIN_*`` environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings


class AdminSettings(BaseSettings):
    purge_default: int = Field(default=10, description="Messages deleted when no count is given")
    purge_max: int = Field(default=100, description="Largest count purge accepts (Discord bulk-delete limit)")
    confirmation_delay: float = Field(default=5.0, description="Seconds before the purge confirmation is removed")

    class Config:
        env_prefix = "ADMIN_"
        env_file = ".env"
        extra = "ignore"


admin_settings = AdminSettings()
