"""Tests for cart reconciliation and cart operations."""

from storefront.models.cart import MAX_CART_QUANTITY, CartItem
from storefront.services.cart_service import reconcile_carts


def item(product_id, color_id=None, quantity=1, size=None, price=10.0):
    return CartItem(
        productId=product_id,
        productName=product_id.title(),
        price=price,
        colorId=color_id,
        size=size,
        quantity=quantity,
    )


def test_local_items_absent_remotely_are_added():
    remote = [item("a", "red")]
    local = [item("b"), item("c", "blue")]

    merged, additions = reconcile_carts(remote, local)

    assert [i.merge_key for i in merged] == [("a", "red"), ("b", None), ("c", "blue")]
    assert [i.productId for i in additions] == ["b", "c"]


def test_remote_line_wins_over_local_line_with_same_key():
    remote = [item("a", "red", quantity=2, price=50.0)]
    local = [item("a", "red", quantity=5, price=1.0)]

    merged, additions = reconcile_carts(remote, local)

    assert additions == []
    assert len(merged) == 1
    assert merged[0].quantity == 2
    assert merged[0].price == 50.0


def test_duplicates_are_summed_into_first_seen_entry():
    remote = [item("a", "red", quantity=1, size="M"), item("a", "red", quantity=2, size="L")]
    local = [item("b", quantity=1), item("b", quantity=3)]

    merged, _ = reconcile_carts(remote, local)

    by_key = {i.merge_key: i for i in merged}
    assert len(merged) == 2
    assert by_key[("a", "red")].quantity == 3
    assert by_key[("a", "red")].size == "M"
    assert by_key[("b", None)].quantity == 4


def test_every_key_appears_once_with_summed_quantity():
    remote = [item("a", "red", 1), item("b", None, 2), item("a", "red", 4)]
    local = [item("c", "green", 1), item("c", "green", 1), item("b", None, 9)]

    merged, _ = reconcile_carts(remote, local)

    keys = [i.merge_key for i in merged]
    assert len(keys) == len(set(keys))
    quantities = {i.merge_key: i.quantity for i in merged}
    assert quantities == {("a", "red"): 5, ("b", None): 2, ("c", "green"): 2}


def test_empty_carts():
    assert reconcile_carts([], []) == ([], [])


async def test_merge_guest_cart_persists_additions(cart_service, carts):
    await carts.add_item("user-1", item("a", "red"))

    merged = await cart_service.merge_guest_cart("user-1", [item("a", "red", 3), item("b")])

    assert {i.merge_key: i.quantity for i in merged} == {("a", "red"): 1, ("b", None): 1}
    stored = await carts.list_items("user-1")
    assert sorted(i.productId for i in stored) == ["a", "b"]


async def test_adding_same_line_sums_quantity(cart_service):
    await cart_service.add_item("user-1", item("a", "red", 1, size="M"))
    await cart_service.add_item("user-1", item("a", "red", 2, size="M"))
    await cart_service.add_item("user-1", item("a", "red", 1, size="L"))

    lines = await cart_service.get_cart("user-1")

    assert {i.line_key: i.quantity for i in lines} == {("a", "red", "M"): 3, ("a", "red", "L"): 1}


async def test_update_quantity_is_clamped(cart_service):
    await cart_service.add_item("user-1", item("a", "red"))

    assert await cart_service.update_quantity("user-1", "a", "red", None, 50)
    assert (await cart_service.get_cart("user-1"))[0].quantity == MAX_CART_QUANTITY

    assert await cart_service.update_quantity("user-1", "a", "red", None, 0)
    assert (await cart_service.get_cart("user-1"))[0].quantity == 1


async def test_update_missing_line(cart_service):
    assert not await cart_service.update_quantity("user-1", "a", "red", None, 2)


async def test_remove_and_clear(cart_service):
    await cart_service.add_item("user-1", item("a"))
    await cart_service.add_item("user-1", item("b"))

    assert await cart_service.remove_item("user-1", "a", None, None)
    assert not await cart_service.remove_item("user-1", "a", None, None)
    assert await cart_service.clear_cart("user-1") == 1
    assert await cart_service.get_cart("user-1") == []


async def test_replace_cart(cart_service):
    await cart_service.add_item("user-1", item("a"))

    lines = await cart_service.replace_cart("user-1", [item("b", quantity=2)])

    assert [(i.productId, i.quantity) for i in lines] == [("b", 2)]
