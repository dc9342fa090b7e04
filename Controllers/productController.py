import logging

from flask import request, jsonify
from mongoengine.errors import ValidationError

from Controllers.shopController import find_shop
from Models.orderModel import Order
from Models.productModel import Product
from Utils.appError import AppError
from Utils.auth_decorator import token_required, seller_required, roles_required
from Utils.forms import form_or_json, as_int, as_float
from Utils.uploads import save_images, delete_image

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "description", "category", "discountPrice", "stock")


def listing_fields(data):
    """Validated listing fields shared by products and events."""
    for field in REQUIRED_FIELDS:
        if data.get(field) in (None, ""):
            raise AppError(f"{field} is required", 400)

    stock = as_int(data.get("stock"), "Stock")
    if stock < 0:
        raise AppError("Stock can not be negative", 400)

    return {
        "name": data["name"],
        "description": data["description"],
        "category": data["category"],
        "tags": data.get("tags"),
        "original_price": as_float(data.get("originalPrice"), "Original price"),
        "discount_price": as_float(data.get("discountPrice"), "Discount price"),
        "stock": stock,
    }


def listing_shop(data):
    shop = find_shop(data.get("shopId")) if data.get("shopId") else None
    if not shop:
        raise AppError("Shop Id is invalid!", 400)
    return shop


def _find_product(product_id):
    try:
        return Product.objects(id=product_id).first()
    except ValidationError:
        return None


def create_product():
    data = form_or_json()
    shop = listing_shop(data)
    fields = listing_fields(data)

    product = Product(
        **fields,
        images=save_images(request.files.getlist("images"), owner_id=str(shop.id)),
        shop_id=str(shop.id),
        shop=shop.snapshot(),
    )
    product.save()
    logger.info(f"🛍️ Product {product.id} created for shop {shop.id}")

    return jsonify({"success": True, "product": product.to_json()}), 201


def get_all_products_shop(shop_id):
    products = Product.objects(shop_id=shop_id).order_by("-created_at")
    return jsonify({"success": True, "products": [p.to_json() for p in products]}), 201


def get_all_products():
    products = Product.objects.order_by("-created_at")
    return jsonify({"success": True, "products": [p.to_json() for p in products]}), 201


@seller_required
def delete_shop_product(seller, product_id):
    product = _find_product(product_id)
    if not product:
        raise AppError("Product not found with this id!", 404)
    if product.shop_id != str(seller.id):
        raise AppError("You can only delete products of your own shop", 403)

    for filename in product.images:
        delete_image(filename)
    product.delete()
    logger.info(f"🗑️ Product {product_id} deleted by seller {seller.id}")

    return jsonify({"success": True, "message": "Product Deleted successfully!"}), 201


@token_required
def create_new_review(user):
    data = request.get_json(silent=True) or {}
    rating = as_float(data.get("rating"), "Rating")
    if rating is None or not 0 <= rating <= 5:
        raise AppError("Rating must be between 0 and 5", 400)

    product = _find_product(data.get("productId"))
    if not product:
        raise AppError("Product not found with this id!", 404)

    reviewer = {**user.snapshot(), "avatar": user.avatar}
    product.upsert_review(reviewer, rating, data.get("comment"))
    product.save()

    order_id = data.get("orderId")
    if order_id:
        try:
            order = Order.objects(id=order_id, user_id=str(user.id)).first()
        except ValidationError:
            order = None
        if order:
            for item in order.cart:
                if item.product_id == str(product.id):
                    item.is_reviewed = True
            order.save()

    return jsonify({"success": True, "message": "Reviwed succesfully!"}), 200


@roles_required("Admin")
def admin_all_products(admin):
    products = Product.objects.order_by("-created_at")
    return jsonify({"success": True, "products": [p.to_json() for p in products]}), 201
