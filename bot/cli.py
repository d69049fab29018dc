import logging
import os
from pathlib import Path
from typing import Optional

import typer

from bot.core import DiscordBot
from config.settings import MissingTokenError, settings

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="discord-bot",
    help="Discord bot starter template",
    add_completion=False,
)

ENV_TEMPLATE = """# Discord Bot Configuration
DISCORD_TOKEN=your_discord_bot_token_here
BOT_PREFIX=!
ENVIRONMENT=development
LOG_LEVEL=INFO
COOLDOWN_SECONDS=3
# DEFAULT_GUILDS=[123456789012345678]
"""


def setup_logging(level: str = "INFO") -> None:
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def start_bot() -> None:
    """Build and run the bot, exiting with status 1 when no token is configured."""
    try:
        bot = DiscordBot()
    except MissingTokenError as e:
        logger.error(str(e))
        raise typer.Exit(code=1)

    bot.run()


@app.command()
def run(
    dev: bool = typer.Option(False, "--dev", help="Run in development mode"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Set log level"),
) -> None:
    """Run the Discord bot."""
    if dev:
        os.environ["ENVIRONMENT"] = "development"
        settings.environment = "development"
        settings.debug = True

    setup_logging(log_level or ("DEBUG" if dev else settings.log_level))
    start_bot()


@app.command()
def init(directory: Optional[str] = typer.Option(None, help="Directory to initialize")) -> None:
    """Initialize a new bot project."""
    target_dir = Path(directory) if directory else Path.cwd()
    target_dir.mkdir(parents=True, exist_ok=True)
    (target_dir / "plugins").mkdir(exist_ok=True)

    env_file = target_dir / ".env"
    if env_file.exists():
        typer.echo(f"⚠️  {env_file} already exists, leaving it untouched")
    else:
        env_file.write_text(ENV_TEMPLATE)

    typer.echo(f"✅ Bot project initialized in {target_dir}")


@app.command()
def plugins(action: str = typer.Argument(help="Action: list")) -> None:
    """Inspect the plugins found in the configured plugin directories."""
    if action != "list":
        typer.echo(f"Unknown action: {action}")
        raise typer.Exit(code=2)

    typer.echo("📦 Available Plugins:")
    for directory in settings.plugin_directories:
        plugin_dir = Path(directory)
        if not plugin_dir.is_dir():
            continue
        for plugin_path in sorted(plugin_dir.iterdir()):
            if plugin_path.is_dir() and (plugin_path / "__init__.py").exists():
                enabled = "✅" if plugin_path.name in settings.enabled_plugins else "❌"
                typer.echo(f"  {enabled} {plugin_path.name}")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
