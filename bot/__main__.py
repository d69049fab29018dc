import logging
import sys
from pathlib import Path

# Add the project root to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from bot.core import DiscordBot
from config.settings import MissingTokenError, settings

logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point for the Discord bot."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    logger.info("Initializing Discord bot...")
    try:
        bot = DiscordBot()
    except MissingTokenError as e:
        logger.error(str(e))
        sys.exit(1)

    bot.run()


if __name__ == "__main__":
    main()
