import logging
from numbers import Number

from mongoengine.errors import ValidationError

from Models.orderModel import CartItem
from Models.productModel import Product
from Models.shopModel import Shop
from Utils.appError import AppError

orders_logger = logging.getLogger("orders")

SERVICE_CHARGE_RATE = 0.10


def build_cart_items(client_cart):
    """Validate the raw cart sent by the client.

    Returns a list of CartItem in cart order. Raises ValueError if an item
    is missing its seller or price.
    """
    if not isinstance(client_cart, list) or not client_cart:
        raise ValueError("Cart is empty")

    items = []
    for raw in client_cart:
        if not isinstance(raw, dict):
            raise ValueError("Invalid cart item")
        shop_id = raw.get("shopId")
        price = raw.get("discountPrice")
        if not shop_id:
            raise ValueError("Cart item is missing shopId")
        if isinstance(price, bool) or not isinstance(price, Number):
            raise ValueError("Cart item is missing a numeric discountPrice")
        try:
            qty = int(raw.get("qty", 1))
        except (TypeError, ValueError):
            raise ValueError("Invalid quantity")
        if qty < 1:
            raise ValueError("Invalid quantity")
        images = raw.get("images") or []
        items.append(CartItem(
            product_id=str(raw.get("_id") or raw.get("productId") or "") or None,
            shop_id=str(shop_id),
            name=raw.get("name"),
            qty=qty,
            discount_price=float(price),
            image=images[0] if images else raw.get("image"),
        ))
    return items


def group_by_shop(items):
    """Group cart items by seller, keeping first-seen seller order."""
    groups = {}
    for item in items:
        groups.setdefault(item.shop_id, []).append(item)
    return groups


def order_total(items):
    """Sum of the items' discount prices (quantity is not factored in)."""
    return round(sum(item.discount_price for item in items), 2)


def service_charge(total, rate=SERVICE_CHARGE_RATE):
    return round(total * rate, 2)


def _load_products(order):
    products = {}
    for item in order.cart:
        try:
            product = Product.objects(id=item.product_id).first() if item.product_id else None
        except ValidationError:
            product = None
        if not product:
            raise AppError(f"Product not found with id {item.product_id}", 404)
        products[item.product_id] = product
    return products


def adjust_inventory(order, direction):
    """Apply the stock/sold_out side effect of a status change.

    direction = -1 moves stock into sold_out (hand-over to delivery),
    direction = +1 moves it back (refund). Every product is checked before
    any is modified; each product is then updated with one atomic $inc.
    """
    _load_products(order)
    for item in order.cart:
        Product.objects(id=item.product_id).update_one(
            inc__stock=direction * item.qty,
            inc__sold_out=-direction * item.qty,
        )
        orders_logger.info(
            f"📦 Order {order.id}: product {item.product_id} stock {direction * item.qty:+d}, "
            f"sold_out {-direction * item.qty:+d}"
        )


def credit_seller(shop_id, amount):
    """Add ``amount`` to the seller's available balance with an atomic $inc."""
    try:
        updated = Shop.objects(id=shop_id).update_one(inc__available_balance=amount)
    except ValidationError:
        updated = 0
    if not updated:
        raise AppError("Seller not found with this id", 404)
    orders_logger.info(f"💰 Seller {shop_id} credited {amount:.2f}")


def debit_seller(shop_id, amount):
    """Subtract ``amount`` if the balance covers it; returns False otherwise."""
    updated = Shop.objects(id=shop_id, available_balance__gte=amount).update_one(
        dec__available_balance=amount
    )
    if updated:
        orders_logger.info(f"💸 Seller {shop_id} debited {amount:.2f}")
    return bool(updated)
