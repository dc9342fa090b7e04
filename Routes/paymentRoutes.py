from flask import Blueprint
from Controllers.paymentController import process_payment, stripe_api_key

payment_routes = Blueprint('payment_routes', __name__, url_prefix='/api/v2/payment')

payment_routes.add_url_rule('/process', view_func=process_payment, methods=['POST'])
payment_routes.add_url_rule('/stripeapikey', view_func=stripe_api_key, methods=['GET'])
