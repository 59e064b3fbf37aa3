"""
Main entry point for the stacker game.

Loads settings from the environment (and .env), configures logging and
runs the pygame window.
"""

import asyncio
import logging

from dotenv import load_dotenv

from stacker.settings import get_settings


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


async def run_game() -> None:
    """Create the window and run it until closed."""
    from stacker.simulator.window import GameWindow

    window = GameWindow(settings=get_settings())
    await window.run()


def main() -> None:
    load_dotenv()
    settings = get_settings()
    setup_logging(settings.debug)

    logger = logging.getLogger(__name__)
    logger.info("Starting Tower Stacker")

    try:
        asyncio.run(run_game())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")


if __name__ == "__main__":
    main()
