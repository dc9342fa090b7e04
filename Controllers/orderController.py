import logging
from datetime import datetime

from flask import request, jsonify, current_app
from mongoengine.errors import ValidationError

from Models.orderModel import Order, OrderStatus, PaymentInfo
from Utils.appError import AppError
from Utils.auth_decorator import token_required, seller_required, roles_required
from Utils.orders import (
    build_cart_items, group_by_shop, order_total, service_charge,
    adjust_inventory, credit_seller
)

logger = logging.getLogger(__name__)
orders_logger = logging.getLogger("orders")


def _find_order(order_id):
    try:
        order = Order.objects(id=order_id).first()
    except ValidationError:
        order = None
    if not order:
        raise AppError("Order not found with this id", 400)
    return order


def _status_from_body():
    status = (request.get_json(silent=True) or {}).get("status")
    if not isinstance(status, str) or not status.strip():
        raise AppError("Status is required", 400)
    return status


def _claim_delivery(order):
    now = datetime.utcnow()
    if not Order.objects(id=order.id, delivered_at=None).update_one(set__delivered_at=now):
        return False
    order.delivered_at = now
    return True


def _purchaser(raw_user):
    if isinstance(raw_user, dict):
        user_id = raw_user.get("_id") or raw_user.get("id")
        return (str(user_id) if user_id else None), raw_user
    if isinstance(raw_user, str) and raw_user:
        return raw_user, {"_id": raw_user}
    return None, {}


# =====================================================
# CREATE ORDER (one per seller in the cart)
# =====================================================
def create_order():
    data = request.get_json(silent=True) or {}
    shipping_address = data.get("shippingAddress")
    payment_info = data.get("paymentInfo") or {}

    try:
        items = build_cart_items(data.get("cart"))
    except ValueError as ve:
        raise AppError(str(ve), 400)

    user_id, user_snapshot = _purchaser(data.get("user"))
    if not user_id:
        raise AppError("User is required", 400)
    if not isinstance(shipping_address, dict) or not shipping_address:
        raise AppError("Shipping address is required", 400)

    orders = []
    try:
        for shop_id, shop_items in group_by_shop(items).items():
            order = Order(
                cart=shop_items,
                shipping_address=shipping_address,
                user_id=user_id,
                user=user_snapshot,
                total_price=order_total(shop_items),
                payment_info=PaymentInfo(
                    payment_id=payment_info.get("id"),
                    status=payment_info.get("status"),
                    type=payment_info.get("type"),
                ),
            )
            order.save()
            orders.append(order)
            orders_logger.info(f"🧾 Order {order.id} created for shop {shop_id}: {order.total_price:.2f}")
    except (AppError, ValidationError):
        raise
    except Exception as e:
        logger.exception("🔥 Order creation failed")
        raise AppError(str(e), 500)

    return jsonify({
        "success": True,
        "orders": [o.to_json() for o in orders],
    }), 201


# =====================================================
# QUERIES
# =====================================================
def get_all_orders(user_id):
    orders = Order.objects(user_id=user_id).order_by("-created_at")
    return jsonify({"success": True, "orders": [o.to_json() for o in orders]}), 200


def get_seller_all_orders(shop_id):
    orders = Order.objects(cart__shop_id=shop_id).order_by("-created_at")
    return jsonify({"success": True, "orders": [o.to_json() for o in orders]}), 200


@roles_required("Admin")
def admin_all_orders(admin):
    orders = Order.objects.order_by("-delivered_at", "-created_at")
    return jsonify({"success": True, "orders": [o.to_json() for o in orders]}), 201


# =====================================================
# STATUS TRANSITIONS (seller)
# =====================================================
@seller_required
def update_order_status(seller, order_id):
    order = _find_order(order_id)
    status = _status_from_body()

    if order.shop_id != str(seller.id):
        raise AppError("You can only update orders of your own shop", 403)

    if status == OrderStatus.TRANSFERRED.value:
        adjust_inventory(order, -1)

    order.status = status

    # The seller is credited once per order; the first delivery claims delivered_at
    if status == OrderStatus.DELIVERED.value and _claim_delivery(order):
        if order.payment_info is None:
            order.payment_info = PaymentInfo()
        order.payment_info.status = "Succeeded"
        rate = current_app.config.get("SERVICE_CHARGE_RATE", 0.10)
        charge = service_charge(order.total_price, rate)
        credit_seller(order.shop_id, round(order.total_price - charge, 2))

    order.save()
    orders_logger.info(f"🔁 Order {order.id} status → {status} by seller {seller.id}")

    return jsonify({"success": True, "order": order.to_json()}), 200


# =====================================================
# REFUNDS
# =====================================================
@token_required
def order_refund(user, order_id):
    order = _find_order(order_id)
    status = _status_from_body()

    if order.user_id != str(user.id):
        raise AppError("You can only request a refund for your own orders", 403)

    order.status = status
    order.save()
    orders_logger.info(f"↩️ Refund requested on order {order.id} by user {user.id}")

    return jsonify({
        "success": True,
        "order": order.to_json(),
        "message": "Order Refund Request successfully!",
    }), 200


@seller_required
def order_refund_success(seller, order_id):
    order = _find_order(order_id)
    status = _status_from_body()

    if order.shop_id != str(seller.id):
        raise AppError("You can only refund orders of your own shop", 403)

    # Inventory is restored before the response is sent
    if status == OrderStatus.REFUND_SUCCESS.value:
        adjust_inventory(order, +1)

    order.status = status
    order.save()
    orders_logger.info(f"✅ Order {order.id} refund status → {status} by seller {seller.id}")

    return jsonify({
        "success": True,
        "message": "Order Refund successfull!",
    }), 200
