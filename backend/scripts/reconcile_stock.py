"""Stock reconciliation sweep.

Re-applies stock decrements that failed while orders were created. Safe to
run on a schedule: adjustments already applied are skipped.

Usage:
    python -m scripts.reconcile_stock
"""

import asyncio
import logging

from storefront.database.mongodb import mongodb
from storefront.services.order_service import order_service
from storefront.utils.logger import setup_logging

setup_logging()
logger = logging.getLogger(__name__)


async def reconcile_stock() -> None:
    try:
        await mongodb.connect()
        result = await order_service.reconcile_stock()
        if result.adjustmentsPending:
            logger.warning("%d stock adjustments are still pending", result.adjustmentsPending)
    finally:
        await mongodb.disconnect()


if __name__ == "__main__":
    asyncio.run(reconcile_stock())
