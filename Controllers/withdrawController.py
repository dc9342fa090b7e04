import logging
from datetime import datetime
from numbers import Number

from flask import request, jsonify
from mongoengine.errors import ValidationError

from Models.shopModel import Shop, Transaction
from Models.withdrawModel import Withdraw, PROCESSING, SUCCEED
from Utils.appError import AppError
from Utils.auth_decorator import seller_required, roles_required
from Utils.email import send_mail
from Utils.orders import debit_seller

logger = logging.getLogger(__name__)
orders_logger = logging.getLogger("orders")


# =====================================================
# CREATE WITHDRAW REQUEST (seller)
# =====================================================
@seller_required
def create_withdraw_request(seller):
    amount = (request.get_json(silent=True) or {}).get("amount")
    if isinstance(amount, bool) or not isinstance(amount, Number) or amount <= 0:
        raise AppError("Amount must be a positive number", 400)

    if not debit_seller(seller.id, float(amount)):
        raise AppError("Insufficient balance for this withdraw request", 400)

    # A failed notification does not stop the request
    try:
        send_mail(
            email=seller.email,
            subject="Withdraw Request",
            message=(f"Hello {seller.name}, Your withdraw request of {amount}$ is processing. "
                     f"It will take 3days to 7days to processing! "),
        )
    except Exception as e:
        logger.warning(f"📧 Withdraw request mail to {seller.email} failed: {e}")

    withdraw = Withdraw(
        seller_id=str(seller.id),
        seller=seller.snapshot(),
        amount=float(amount),
        status=PROCESSING,
    )
    withdraw.save()
    orders_logger.info(f"🏦 Withdraw {withdraw.id} of {amount} requested by seller {seller.id}")

    return jsonify({"success": True, "withdraw": withdraw.to_json()}), 201


# =====================================================
# LIST WITHDRAW REQUESTS (admin)
# =====================================================
@roles_required("Admin")
def get_all_withdraw_request(admin):
    withdraws = Withdraw.objects.order_by("-created_at")
    return jsonify({"success": True, "withdraws": [w.to_json() for w in withdraws]}), 201


# =====================================================
# APPROVE WITHDRAW REQUEST (admin)
# =====================================================
@roles_required("Admin")
def update_withdraw_request(admin, withdraw_id):
    try:
        withdraw = Withdraw.objects(id=withdraw_id).first()
    except ValidationError:
        withdraw = None
    if not withdraw:
        raise AppError("Withdraw request not found with this id", 404)
    if withdraw.status == SUCCEED:
        raise AppError("Withdraw request has already been approved", 400)

    seller_id = (request.get_json(silent=True) or {}).get("sellerId") or withdraw.seller_id
    if str(seller_id) != withdraw.seller_id:
        raise AppError("Seller does not match this withdraw request", 400)

    seller = Shop.objects(id=withdraw.seller_id).first()
    if not seller:
        raise AppError("Seller not found with this id", 404)

    withdraw.status = SUCCEED
    withdraw.updated_at = datetime.utcnow()
    withdraw.save()

    Shop.objects(id=seller.id).update_one(push__transactions=Transaction(
        withdraw_id=str(withdraw.id),
        amount=withdraw.amount,
        status=withdraw.status,
        updated_at=withdraw.updated_at,
    ))
    orders_logger.info(f"✅ Withdraw {withdraw.id} approved by admin {admin.id}")

    try:
        send_mail(
            email=seller.email,
            subject="Payment confirmation",
            message=(f"Hello {seller.name}, Your withdraw request of {withdraw.amount}$ is on the way. "
                     f"Delivery time depends on your bank's rules it usually takes 3days to 7days."),
        )
    except Exception as e:
        logger.error(f"📧 Payment confirmation mail to {seller.email} failed: {e}")
        raise AppError(str(e), 500)

    return jsonify({"success": True, "withdraw": withdraw.to_json()}), 201
