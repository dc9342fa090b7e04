import logging
from numbers import Number

import stripe
from flask import request, jsonify, current_app

from Utils.appError import AppError

logger = logging.getLogger(__name__)


def process_payment():
    data = request.get_json(silent=True) or {}
    shipping_details = data.get("shippingDetails") or {}
    shipping_address = shipping_details.get("shippingAddress") or {}
    amount = (data.get("paymentData") or {}).get("amount")

    if isinstance(amount, bool) or not isinstance(amount, Number) or amount <= 0:
        raise AppError("Payment amount must be a positive number", 400)

    try:
        payment = stripe.PaymentIntent.create(
            api_key=current_app.config.get("STRIPE_SECRET_KEY"),
            amount=int(amount),
            currency="usd",
            description="Products money earned",
            shipping={
                "name": shipping_details.get("name"),
                "address": {
                    "line1": shipping_address.get("address1"),
                    "postal_code": shipping_address.get("zipCode"),
                    "city": shipping_address.get("city"),
                    "state": shipping_address.get("city"),
                    "country": shipping_address.get("country"),
                },
            },
        )
    except stripe.StripeError as e:
        logger.warning(f"💳 Stripe payment intent failed: {e}")
        raise AppError(getattr(e, "user_message", None) or str(e), 401)

    logger.info(f"💳 Payment intent {payment.id} created for {amount}")
    return jsonify({"success": True, "client_secret": payment.client_secret}), 200


def stripe_api_key():
    return jsonify({"stripeApikey": current_app.config.get("STRIPE_API_KEY")}), 200
