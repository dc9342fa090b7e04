from flask import Blueprint
from Controllers.couponController import (
    create_coupon_code, get_coupons, delete_coupon, get_coupon_value
)

coupon_routes = Blueprint('coupon_routes', __name__, url_prefix='/api/v2/coupon')

coupon_routes.add_url_rule('/create-coupon-code', view_func=create_coupon_code, methods=['POST'])
coupon_routes.add_url_rule('/get-coupon/<shop_id>', view_func=get_coupons, methods=['GET'])
coupon_routes.add_url_rule('/delete-coupon/<coupon_id>', view_func=delete_coupon, methods=['DELETE'])
coupon_routes.add_url_rule('/get-coupon-value/<name>', view_func=get_coupon_value, methods=['GET'])
