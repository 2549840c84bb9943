"""Data loader service for importing catalog data."""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from storefront.data.teams import find_static_team
from storefront.models.delivery import DeliveryPrice
from storefront.models.product import Product

logger = logging.getLogger(__name__)


class DataLoader:
    """Service for loading products and delivery prices from JSON files."""

    @staticmethod
    def load_json_file(file_path: str | Path, key: str = "products") -> list[dict[str, Any]]:
        """Load records from a single JSON file.

        Supports both:
        - Wrapped format: { "<key>": [...] }
        - Flat array [...] or a single object
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if file_path.suffix.lower() != ".json":
            raise ValueError(f"File must be a JSON file: {file_path}")

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error("Invalid JSON in file %s: %s", file_path, e)
            raise

        if isinstance(data, dict) and key in data:
            data = data[key]
        elif isinstance(data, dict):
            data = [data]
        elif not isinstance(data, list):
            raise ValueError(f"JSON must contain a '{key}' array, an object, or an array")

        logger.info("Loaded %d records from %s", len(data), file_path)
        return data

    @staticmethod
    def transform_product(raw: dict[str, Any]) -> dict[str, Any]:
        """Transform a raw product record into a Product-compatible dict.

        Accepts a single ``image`` in place of ``images`` and ``inStock`` in
        place of ``available``. Team name and league are filled in from the
        static team list when only ``teamId`` is given.
        """
        images = raw.get("images") or ([raw["image"]] if raw.get("image") else [])
        record = {
            "id": str(raw.get("id", "")),
            "name": raw.get("name", ""),
            "price": float(raw.get("price", 0.0)),
            "stock": int(raw.get("stock", 0)),
            "available": bool(raw.get("available", raw.get("inStock", True))),
            "category": raw.get("category", ""),
            "teamId": raw.get("teamId"),
            "team": raw.get("team"),
            "league": raw.get("league"),
            "images": images,
            "description": raw.get("description", ""),
            "colors": raw.get("colors") or [],
            "sizes": raw.get("sizes") or [],
        }

        team = find_static_team(record["teamId"]) if record["teamId"] else None
        if team is not None:
            record["team"] = record["team"] or team.name
            record["league"] = record["league"] or team.league
        return record

    @staticmethod
    def load_directory(directory_path: str | Path) -> list[dict[str, Any]]:
        """Load all JSON files from a directory."""
        directory_path = Path(directory_path)

        if not directory_path.exists():
            raise FileNotFoundError(f"Directory not found: {directory_path}")

        if not directory_path.is_dir():
            raise ValueError(f"Path is not a directory: {directory_path}")

        all_data: list[dict[str, Any]] = []
        json_files = sorted(directory_path.glob("*.json"))

        if not json_files:
            logger.warning("No JSON files found in %s", directory_path)
            return all_data

        for json_file in json_files:
            try:
                all_data.extend(DataLoader.load_json_file(json_file))
            except (OSError, ValueError) as e:
                logger.error("Skipping file %s: %s", json_file, e)
                continue

        logger.info("Loaded %d total records from %d files", len(all_data), len(json_files))
        return all_data

    @staticmethod
    def validate_and_parse_products(data: list[dict[str, Any]]) -> list[Product]:
        """Validate and parse raw records into Product models."""
        products: list[Product] = []
        errors: list[str] = []

        for idx, item in enumerate(data):
            try:
                products.append(Product(**DataLoader.transform_product(item)))
            except (ValidationError, TypeError, ValueError) as e:
                errors.append(f"Record {idx}: {e}")
                logger.warning("Invalid product data at index %d: %s", idx, e)

        if errors:
            logger.warning("Failed to parse %d out of %d records", len(errors), len(data))

        logger.info("Successfully validated %d products", len(products))
        return products

    @staticmethod
    def parse_delivery_prices(data: dict[str, Any] | list[dict[str, Any]]) -> list[DeliveryPrice]:
        """Parse delivery prices given as ``{location: price}`` or ``[{location, price}]``."""
        if isinstance(data, dict):
            return [DeliveryPrice(location=loc, price=price) for loc, price in data.items()]
        return [DeliveryPrice(**entry) for entry in data]

    @staticmethod
    async def load_products_from_directory(directory_path: str | Path) -> list[Product]:
        """Load and validate products from directory."""
        raw_data = DataLoader.load_directory(directory_path)
        return DataLoader.validate_and_parse_products(raw_data)

    @staticmethod
    async def load_products_from_file(file_path: str | Path) -> list[Product]:
        """Load and validate products from a single file."""
        raw_data = DataLoader.load_json_file(file_path)
        return DataLoader.validate_and_parse_products(raw_data)
