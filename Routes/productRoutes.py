from flask import Blueprint
from Controllers.productController import (
    create_product, get_all_products_shop, get_all_products, delete_shop_product,
    create_new_review, admin_all_products
)

product_routes = Blueprint('product_routes', __name__, url_prefix='/api/v2/product')

product_routes.add_url_rule('/create-product', view_func=create_product, methods=['POST'])
product_routes.add_url_rule('/get-all-products-shop/<shop_id>', view_func=get_all_products_shop, methods=['GET'])
product_routes.add_url_rule('/get-all-products', view_func=get_all_products, methods=['GET'])
product_routes.add_url_rule('/delete-shop-product/<product_id>', view_func=delete_shop_product, methods=['DELETE'])
product_routes.add_url_rule('/create-new-review', view_func=create_new_review, methods=['PUT'])
product_routes.add_url_rule('/admin-all-products', view_func=admin_all_products, methods=['GET'])
