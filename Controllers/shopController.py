import logging

from flask import request, jsonify, current_app, make_response
from mongoengine.errors import ValidationError, NotUniqueError

from Models.shopModel import Shop
from Utils.appError import AppError
from Utils.auth_decorator import seller_required, roles_required
from Utils.email import send_mail
from Utils.forms import form_or_json, as_int
from Utils.jwt_utils import create_activation_token, decode_activation_token, send_token
from Utils.uploads import save_image, delete_image

logger = logging.getLogger(__name__)


def find_shop(shop_id):
    try:
        return Shop.objects(id=shop_id).first()
    except ValidationError:
        return None


# =====================================================
# REGISTER SHOP (activation mail)
# =====================================================
def create_shop():
    data = form_or_json()
    name = (data.get("name") or "").strip()
    email = (data.get("email") or "").strip().lower()
    password = data.get("password")
    address = data.get("address")

    if not all([name, email, password, address, data.get("phoneNumber"), data.get("zipCode")]):
        raise AppError("Please provide the all fields!", 400)
    if Shop.objects(email=email).first():
        raise AppError("Seller already exists", 400)

    avatar = "default.jpg"
    if "file" in request.files:
        avatar = save_image(request.files["file"])

    activation_token = create_activation_token({
        "name": name,
        "email": email,
        "password": Shop.hash_password(password),
        "avatar": avatar,
        "address": address,
        "phoneNumber": as_int(data.get("phoneNumber"), "Phone number"),
        "zipCode": as_int(data.get("zipCode"), "Zip code"),
    })
    activation_url = f"{current_app.config['CLIENT_URL']}/seller/activation/{activation_token}"

    try:
        send_mail(
            email=email,
            subject="Activate your Shop",
            message=f"Hello {name.split(' ')[0]}, please click on the link to activate your shop: {activation_url}",
        )
    except Exception as e:
        logger.error(f"📧 Shop activation mail to {email} failed: {e}")
        delete_image(avatar)
        raise AppError(str(e), 500)

    logger.info(f"✉️ Shop activation link sent to {email}")
    return jsonify({
        "success": True,
        "message": f"please check your email:- {email} to activate your shop!",
    }), 201


def activation():
    token = (request.get_json(silent=True) or {}).get("activation_token")
    new_seller = decode_activation_token(token) if token else None
    if not new_seller:
        raise AppError("Invalid token", 400)

    if Shop.objects(email=new_seller["email"]).first():
        raise AppError("User already exists", 400)

    try:
        seller = Shop(
            name=new_seller["name"],
            email=new_seller["email"],
            password=new_seller["password"],
            avatar=new_seller.get("avatar", "default.jpg"),
            address=new_seller["address"],
            phone_number=new_seller["phoneNumber"],
            zip_code=new_seller["zipCode"],
        )
        seller.save()
    except NotUniqueError:
        raise AppError("User already exists", 400)

    logger.info(f"✅ New shop activated: {seller.email}")
    return send_token(seller, 201, "seller", "seller_token", "seller")


# =====================================================
# LOGIN / LOGOUT / CURRENT SELLER
# =====================================================
def login_shop():
    data = request.get_json(silent=True) or {}
    email = (data.get("email") or "").strip().lower()
    password = data.get("password")

    if not email or not password:
        raise AppError("Please provide the all fields!", 400)

    seller = Shop.objects(email=email).first()
    if not seller:
        raise AppError("User doesn't exists!", 400)
    if not seller.correct_password(password):
        raise AppError("Please provide the correct information", 400)

    logger.info(f"✅ Shop login successful for {email}")
    return send_token(seller, 201, "seller", "seller_token", "seller")


@seller_required
def get_seller(seller):
    return jsonify({"success": True, "seller": seller.to_json()}), 200


def logout():
    resp = make_response(jsonify({"success": True, "message": "Log out successful!"}), 201)
    resp.delete_cookie("seller_token")
    return resp


def get_shop_info(shop_id):
    shop = find_shop(shop_id)
    if not shop:
        raise AppError("Shop not found", 404)
    return jsonify({"success": True, "shop": shop.to_json()}), 201


# =====================================================
# PROFILE
# =====================================================
@seller_required
def update_shop_avatar(seller):
    if "image" not in request.files:
        raise AppError("No image file provided", 400)

    filename = save_image(request.files["image"], owner_id=str(seller.id))
    delete_image(seller.avatar)
    seller.avatar = filename
    seller.save()

    return jsonify({"success": True, "seller": seller.to_json()}), 200


@seller_required
def update_seller_info(seller):
    data = request.get_json(silent=True) or {}

    if data.get("name"):
        seller.name = data["name"]
    if "description" in data:
        seller.description = data["description"]
    if data.get("address"):
        seller.address = data["address"]
    if data.get("phoneNumber") not in (None, ""):
        seller.phone_number = as_int(data["phoneNumber"], "Phone number")
    if data.get("zipCode") not in (None, ""):
        seller.zip_code = as_int(data["zipCode"], "Zip code")
    seller.save()

    return jsonify({"success": True, "shop": seller.to_json()}), 201


@seller_required
def update_payment_methods(seller):
    withdraw_method = (request.get_json(silent=True) or {}).get("withdrawMethod")
    if not isinstance(withdraw_method, dict) or not withdraw_method:
        raise AppError("Withdraw method is required", 400)

    seller.withdraw_method = withdraw_method
    seller.save()
    return jsonify({"success": True, "seller": seller.to_json()}), 201


@seller_required
def delete_withdraw_method(seller):
    seller.withdraw_method = None
    seller.save()
    return jsonify({"success": True, "seller": seller.to_json()}), 201


# =====================================================
# ADMIN
# =====================================================
@roles_required("Admin")
def admin_all_sellers(admin):
    sellers = Shop.objects.order_by("-created_at")
    return jsonify({"success": True, "sellers": [s.to_json() for s in sellers]}), 201


@roles_required("Admin")
def delete_seller(admin, shop_id):
    seller = find_shop(shop_id)
    if not seller:
        raise AppError("Seller is not available with this id", 400)

    delete_image(seller.avatar)
    seller.delete()
    logger.info(f"🗑️ Seller {shop_id} deleted by admin {admin.id}")

    return jsonify({"success": True, "message": "Seller deleted successfully!"}), 201
