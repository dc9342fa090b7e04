from flask import request, jsonify
from mongoengine.errors import ValidationError, NotUniqueError

from Models.couponCodeModel import CouponCode
from Utils.appError import AppError
from Utils.auth_decorator import seller_required
from Utils.forms import as_float


@seller_required
def create_coupon_code(seller):
    data = request.get_json(silent=True) or {}
    name = (data.get("name") or "").strip()
    value = as_float(data.get("value"), "Value")

    if not name or value is None:
        raise AppError("Coupon name and value are required", 400)
    if CouponCode.objects(name=name).first():
        raise AppError("Coupoun code already exists!", 400)

    min_amount = as_float(data.get("minAmount"), "Min amount")
    max_amount = as_float(data.get("maxAmount"), "Max amount")
    if min_amount is not None and max_amount is not None and min_amount > max_amount:
        raise AppError("Min amount can not be greater than max amount", 400)

    try:
        coupon = CouponCode(
            name=name,
            value=value,
            min_amount=min_amount,
            max_amount=max_amount,
            shop_id=str(seller.id),
            selected_product=data.get("selectedProduct"),
        )
        coupon.save()
    except NotUniqueError:
        raise AppError("Coupoun code already exists!", 400)

    return jsonify({"success": True, "coupounCode": coupon.to_json()}), 201


@seller_required
def get_coupons(seller, shop_id):
    coupons = CouponCode.objects(shop_id=str(seller.id)).order_by("-created_at")
    return jsonify({"success": True, "couponCodes": [c.to_json() for c in coupons]}), 201


@seller_required
def delete_coupon(seller, coupon_id):
    try:
        coupon = CouponCode.objects(id=coupon_id, shop_id=str(seller.id)).first()
    except ValidationError:
        coupon = None
    if not coupon:
        raise AppError("Coupon code dosen't exists!", 400)

    coupon.delete()
    return jsonify({"success": True, "message": "Coupon code deleted successfully!"}), 201


def get_coupon_value(name):
    coupon = CouponCode.objects(name=name).first()
    return jsonify({"success": True, "couponCode": coupon.to_json() if coupon else None}), 200
