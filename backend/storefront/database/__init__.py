"""Database package."""

from storefront.database.mongodb import (
    MongoCartRepository,
    MongoCatalogRepository,
    MongoDB,
    MongoDeliveryPriceRepository,
    MongoOrderRepository,
    MongoProductRepository,
    cart_repository,
    catalog_repository,
    delivery_price_repository,
    mongodb,
    order_repository,
    product_repository,
)
from storefront.database.repositories import (
    CartRepository,
    CatalogRepository,
    DeliveryPriceRepository,
    OrderRepository,
    ProductRepository,
)

__all__ = [
    "MongoDB",
    "mongodb",
    "OrderRepository",
    "ProductRepository",
    "CartRepository",
    "CatalogRepository",
    "DeliveryPriceRepository",
    "MongoOrderRepository",
    "MongoProductRepository",
    "MongoCartRepository",
    "MongoCatalogRepository",
    "MongoDeliveryPriceRepository",
    "order_repository",
    "product_repository",
    "cart_repository",
    "catalog_repository",
    "delivery_price_repository",
]
