import logging
from datetime import datetime

from flask import request, jsonify, current_app

from Models.shopModel import Shop
from Models.userModel import User
from Utils.appError import AppError
from Utils.email import send_mail

logger = logging.getLogger(__name__)

ACCOUNT_MODELS = {"user": User, "seller": Shop}


def reset():
    data = request.get_json(silent=True) or {}
    role = data.get("role")
    email = (data.get("email") or "").strip().lower()

    if not role:
        raise AppError("Role is not mentioned!", 400)
    if not email:
        raise AppError("Email not Provided!", 400)

    model = ACCOUNT_MODELS.get(str(role).lower())
    if model is None:
        raise AppError("Role is not valid!", 400)

    person = model.objects(email=email).first()
    if not person:
        raise AppError("Email does not exist!", 400)

    token = person.create_password_reset_token()
    person.save()

    reset_url = f"{current_app.config['CLIENT_URL']}/reset/{token}"
    try:
        send_mail(
            email=person.email,
            subject="Reset Your Password",
            message=(f"Hello {person.first_name},\nPlease click on the link to reset your Password: "
                     f"{reset_url}\nThis link is valid for 5 minutes only."),
        )
    except Exception as e:
        logger.error(f"📧 Reset mail to {person.email} failed: {e}")
        raise AppError(str(e), 500)

    logger.info(f"🔑 Password reset link sent to {person.email}")
    return jsonify({
        "success": True,
        "message": f"please check your email:- {person.email} to Reset your password!",
    }), 201


def change_password():
    data = request.get_json(silent=True) or {}
    token = data.get("token")
    password = data.get("password")

    if not token:
        raise AppError("token is not provided!", 400)
    if not password:
        raise AppError("password is not provided!", 400)

    now = datetime.utcnow()
    person = (User.objects(reset_token=token, reset_token_expiration__gt=now).first()
              or Shop.objects(reset_token=token, reset_token_expiration__gt=now).first())
    if not person:
        raise AppError("Invalid token or token expired!", 400)

    person.set_password(password)
    person.clear_password_reset_token()
    person.save()
    logger.info(f"🔐 Password reset successfully for {person.email}")

    try:
        send_mail(
            email=person.email,
            subject="Password Changed Successfully",
            message=f"Hello {person.first_name}, Your Password has been changed successfully.",
        )
    except Exception as e:
        logger.error(f"📧 Password change mail to {person.email} failed: {e}")
        raise AppError(str(e), 500)

    return jsonify({"success": True, "message": "password changed successfully!"}), 201
