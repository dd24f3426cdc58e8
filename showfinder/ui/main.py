"""Interactive console entry point.

Run with ``python -m showfinder.ui.main`` (or the ``showfinder`` script).
Prompts for a search term, prints matching shows, then offers to list the
episodes of one of them. An empty search ends the session.
"""

import asyncio
import sys
from typing import NoReturn

from showfinder.config import settings
from showfinder.logger import configure_logging, get_logger
from showfinder.media.envelope import Found
from showfinder.media.tvmaze import TVMazeClient
from showfinder.ui.controller import ShowFinder
from showfinder.ui.render import TextSink

logger = get_logger(__name__)


def prompt(message: str) -> str:
    """Read a line on the main thread, so Ctrl-C interrupts the prompt."""
    return input(message)


async def main_async() -> None:
    """Main async entry point."""
    logger.info("showfinder_starting", **settings.get_safe_dict())

    async with TVMazeClient() as client:
        finder = ShowFinder(client, TextSink())

        while True:
            query = prompt("Search shows (empty to quit): ").strip()
            if not query:
                break

            result = await finder.on_search_submit(query)
            if not isinstance(result, Found):
                continue

            names = {show.id: show.name for show in result.records}
            choice = prompt("Show id for episodes (empty to skip): ").strip()
            if not choice:
                continue
            if not choice.isdigit() or int(choice) not in names:
                print(f"'{choice}' is not one of the listed show ids.")
                continue

            show_id = int(choice)
            await finder.on_episodes_requested(show_id, names[show_id])

    logger.info("showfinder_stopped")


def main() -> NoReturn:
    """Main entry point."""
    configure_logging()
    try:
        asyncio.run(main_async())
    except (KeyboardInterrupt, EOFError):
        logger.info("showfinder_interrupted")
        sys.exit(0)
    except Exception as e:
        logger.exception("showfinder_crashed", error=str(e))
        sys.exit(1)
    sys.exit(0)


if __name__ == "__main__":
    main()
