from flask import Blueprint
from Controllers.withdrawController import (
    create_withdraw_request, get_all_withdraw_request, update_withdraw_request
)

withdraw_routes = Blueprint('withdraw_routes', __name__, url_prefix='/api/v2/withdraw')

withdraw_routes.add_url_rule('/create-withdraw-request', view_func=create_withdraw_request, methods=['POST'])
withdraw_routes.add_url_rule('/get-all-withdraw-request', view_func=get_all_withdraw_request, methods=['GET'])
withdraw_routes.add_url_rule('/update-withdraw-request/<withdraw_id>', view_func=update_withdraw_request, methods=['PUT'])
