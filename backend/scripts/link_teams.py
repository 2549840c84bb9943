"""Store league links for the static teams.

Run after adding or renaming custom leagues so league listings use the stored
links instead of name matching.

Usage:
    python -m scripts.link_teams
"""

import asyncio
import logging

from storefront.database.mongodb import mongodb
from storefront.services.catalog_service import catalog_service
from storefront.utils.logger import setup_logging

setup_logging()
logger = logging.getLogger(__name__)


async def link_teams() -> None:
    try:
        await mongodb.connect()
        links, unmatched = await catalog_service.link_static_teams()
        for team_id in unmatched:
            logger.warning("No custom league matches static team %s", team_id)
        logger.info("Linked %d teams", len(links))
    finally:
        await mongodb.disconnect()


if __name__ == "__main__":
    asyncio.run(link_teams())
