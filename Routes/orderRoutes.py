from flask import Blueprint
from Controllers.orderController import (
    create_order, get_all_orders, get_seller_all_orders, update_order_status,
    order_refund, order_refund_success, admin_all_orders
)

order_routes = Blueprint('order_routes', __name__, url_prefix='/api/v2/order')

# ----------------------------
# Checkout & queries
# ----------------------------
order_routes.add_url_rule('/create-order', view_func=create_order, methods=['POST'])
order_routes.add_url_rule('/get-all-orders/<user_id>', view_func=get_all_orders, methods=['GET'])
order_routes.add_url_rule('/get-seller-all-orders/<shop_id>', view_func=get_seller_all_orders, methods=['GET'])
order_routes.add_url_rule('/admin-all-orders', view_func=admin_all_orders, methods=['GET'])

# ----------------------------
# Status transitions
# ----------------------------
order_routes.add_url_rule('/update-order-status/<order_id>', view_func=update_order_status, methods=['PUT'])
order_routes.add_url_rule('/order-refund/<order_id>', view_func=order_refund, methods=['PUT'])
order_routes.add_url_rule('/order-refund-success/<order_id>', view_func=order_refund_success, methods=['PUT'])
