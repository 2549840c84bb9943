"""Product data loading script.

Loads product JSON files from backend/data/products/ into MongoDB. Existing
products with the same id are replaced, so the script can be re-run whenever
the files change.

Usage:
    python -m scripts.load_products
    python -m scripts.load_products --dir path/to/products
"""

import argparse
import asyncio
import logging
from pathlib import Path

from storefront.database.mongodb import mongodb, product_repository
from storefront.services.data_loader import DataLoader
from storefront.utils.logger import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

DEFAULT_PRODUCTS_DIR = Path(__file__).parent.parent / "data" / "products"


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Load product data into MongoDB")
    parser.add_argument(
        "--dir",
        type=Path,
        default=DEFAULT_PRODUCTS_DIR,
        help="Directory of product JSON files",
    )
    return parser.parse_args()


async def load_products(data_dir: Path = DEFAULT_PRODUCTS_DIR) -> int:
    """Load products from JSON files into MongoDB. Returns the number written."""
    try:
        logger.info("Starting product data loading...")

        if not data_dir.exists():
            logger.error("Products directory not found: %s", data_dir)
            return 0

        await mongodb.connect()

        logger.info("Loading products from: %s", data_dir)
        products = await DataLoader.load_products_from_directory(data_dir)

        if not products:
            logger.warning("No products found to load")
            return 0

        for product in products:
            await product_repository.upsert(product)

        logger.info("Product loading completed successfully! %d products written", len(products))
        return len(products)

    except Exception as e:
        logger.error("Error loading products: %s", e)
        raise
    finally:
        await mongodb.disconnect()


if __name__ == "__main__":
    args = _parse_args()
    asyncio.run(load_products(args.dir))
