"""Tests for catalog file loading."""

import json

import pytest

from storefront.services.data_loader import DataLoader


def write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_transform_fills_team_details_from_static_list():
    record = DataLoader.transform_product(
        {"id": "kotoko-1", "name": "Kotoko Jersey", "price": "75", "teamId": "asante-kotoko",
         "image": "https://x/kotoko.png", "inStock": False}
    )

    assert record["team"] == "Asante Kotoko"
    assert record["league"] == "Ghana Premier League"
    assert record["images"] == ["https://x/kotoko.png"]
    assert record["price"] == 75.0
    assert record["available"] is False


async def test_load_directory_skips_invalid_records(tmp_path):
    write_json(
        tmp_path / "products.json",
        {"products": [
            {"id": "p1", "name": "Scarf", "price": 15, "stock": 4},
            {"id": "p2", "name": "", "price": 10},
        ]},
    )
    write_json(tmp_path / "single.json", {"id": "p3", "name": "Cap", "price": 24.99})
    (tmp_path / "notes.txt").write_text("ignored")

    products = await DataLoader.load_products_from_directory(tmp_path)

    assert sorted(p.id for p in products) == ["p1", "p3"]


def test_load_json_file_rejects_non_json(tmp_path):
    path = tmp_path / "products.csv"
    path.write_text("id,name")

    with pytest.raises(ValueError):
        DataLoader.load_json_file(path)


def test_parse_delivery_prices_from_mapping_and_list():
    from_mapping = DataLoader.parse_delivery_prices({"Accra": 15, "Kumasi": 30})
    from_list = DataLoader.parse_delivery_prices([{"location": "Tema", "price": 20}])

    assert [(p.location, p.price) for p in from_mapping] == [("Accra", 15.0), ("Kumasi", 30.0)]
    assert from_list[0].location == "Tema"
