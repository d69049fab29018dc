from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class MissingTokenError(RuntimeError):
    """Raised when the bot is started without a Discord token."""


class BotSettings(BaseSettings):
    discord_token: str | None = Field(default=None, description="Discord bot token")

    bot_prefix: str = Field(
        default="!",
        description="Command prefix",
        validation_alias=AliasChoices("bot_prefix", "text_command_prefix"),
    )
    environment: str = Field(default="development", description="Environment")
    log_level: str = Field(default="INFO", description="Logging level")

    # Plugin configuration
    enabled_plugins: list[str] = Field(
        default=["general", "admin", "interactions", "context_menus", "welcome"],
        description="List of enabled plugins",
    )
    plugin_directories: list[str] = Field(
        default=["plugins"],
        description="Directories to scan for plugins",
    )

    # Guilds to register application commands in (empty = global)
    default_guilds: list[int] = Field(default=[], description="Guild IDs for instant command registration")

    # Cooldowns
    cooldown_seconds: float = Field(default=3.0, description="Per-user, per-command cooldown window")
    cooldown_max_entries: int = Field(default=10_000, description="Cooldown entries kept before pruning")

    # Presence and greetings
    status_text: str = Field(default="/help", description="Text shown in the bot's 'Listening to' status")
    welcome_message: str = Field(default="Welcome to the server!", description="DM sent to new members")

    # Development settings
    debug: bool = Field(default=False, description="Enable debug mode")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    def require_token(self) -> str:
        if not self.discord_token:
            raise MissingTokenError("MISSING DISCORD_TOKEN; check .env file.")
        return self.discord_token


# Global settings instance
settings = BotSettings()
