from flask import Blueprint
from Controllers.shopController import (
    create_shop, activation, login_shop, get_seller, logout, get_shop_info,
    update_shop_avatar, update_seller_info, update_payment_methods,
    delete_withdraw_method, admin_all_sellers, delete_seller
)
from Utils.limiter import limiter, LOGIN_LIMIT

shop_routes = Blueprint('shop_routes', __name__, url_prefix='/api/v2/shop')

shop_routes.add_url_rule('/create-shop', view_func=create_shop, methods=['POST'])
shop_routes.add_url_rule('/activation', view_func=activation, methods=['POST'])
shop_routes.add_url_rule('/login-shop', view_func=limiter.limit(LOGIN_LIMIT)(login_shop), methods=['POST'])
shop_routes.add_url_rule('/getSeller', view_func=get_seller, methods=['GET'])
shop_routes.add_url_rule('/logout', view_func=logout, methods=['GET'])
shop_routes.add_url_rule('/get-shop-info/<shop_id>', view_func=get_shop_info, methods=['GET'])

shop_routes.add_url_rule('/update-shop-avatar', view_func=update_shop_avatar, methods=['PUT'])
shop_routes.add_url_rule('/update-seller-info', view_func=update_seller_info, methods=['PUT'])
shop_routes.add_url_rule('/update-payment-methods', view_func=update_payment_methods, methods=['PUT'])
shop_routes.add_url_rule('/delete-withdraw-method', view_func=delete_withdraw_method, methods=['DELETE'])

# Admin
shop_routes.add_url_rule('/admin-all-sellers', view_func=admin_all_sellers, methods=['GET'])
shop_routes.add_url_rule('/delete-seller/<shop_id>', view_func=delete_seller, methods=['DELETE'])
