"""Database initialization script.

Creates indexes, seeds the default delivery prices and one custom league per
canonical league name, then links the static teams to those leagues.

Usage:
    python -m scripts.init_db
"""

import asyncio
import logging

from storefront.database.mongodb import mongodb
from storefront.models.league import CustomLeagueCreate
from storefront.services.catalog_service import catalog_service
from storefront.services.data_loader import DataLoader
from storefront.services.league_matcher import LEAGUE_ALIASES, normalize_league_name
from storefront.utils.logger import setup_logging

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

DEFAULT_DELIVERY_PRICES = {
    "Accra": 15.0,
    "Tema": 20.0,
    "Kasoa": 20.0,
    "Kumasi": 30.0,
    "Cape Coast": 30.0,
    "Takoradi": 35.0,
    "Ho": 35.0,
    "Tamale": 45.0,
}

LEAGUE_SPORTS = {"NBA": "basketball"}


async def init_databases() -> None:
    """Initialize the database and seed catalog defaults."""
    try:
        logger.info("Initializing database...")

        # Indexes are created on connect
        await mongodb.connect()
        logger.info("Database connected successfully")

        for price in DataLoader.parse_delivery_prices(DEFAULT_DELIVERY_PRICES):
            await catalog_service.upsert_delivery_price(price)
        logger.info("Seeded %d delivery prices", len(DEFAULT_DELIVERY_PRICES))

        existing = {
            normalize_league_name(league.name)
            for league in await catalog_service.list_custom_leagues()
        }
        for name in LEAGUE_ALIASES:
            if normalize_league_name(name) in existing:
                logger.info("League already exists: %s", name)
                continue
            await catalog_service.create_league(
                CustomLeagueCreate(name=name, sport=LEAGUE_SPORTS.get(name, "football"))
            )

        links, unmatched = await catalog_service.link_static_teams()
        if unmatched:
            logger.warning("Static teams without a league: %s", unmatched)

        logger.info("Database initialization completed successfully (%d team links)", len(links))

    except Exception as e:
        logger.error("Error initializing database: %s", e)
        raise

    finally:
        await mongodb.disconnect()


if __name__ == "__main__":
    asyncio.run(init_databases())
