from flask import Blueprint
from Controllers.userController import (
    create_user, activation, login_user, get_user, logout,
    update_user_info, update_avatar, update_user_addresses, delete_user_address,
    update_user_password, user_info, admin_all_users, delete_user
)
from Utils.limiter import limiter, LOGIN_LIMIT

user_routes = Blueprint('user_routes', __name__, url_prefix='/api/v2/user')

# ----------------------------
# Registration & session
# ----------------------------
user_routes.add_url_rule('/create-user', view_func=create_user, methods=['POST'])
user_routes.add_url_rule('/activation', view_func=activation, methods=['POST'])
user_routes.add_url_rule('/login-user', view_func=limiter.limit(LOGIN_LIMIT)(login_user), methods=['POST'])
user_routes.add_url_rule('/getuser', view_func=get_user, methods=['GET'])
user_routes.add_url_rule('/logout', view_func=logout, methods=['GET'])

# ----------------------------
# Profile
# ----------------------------
user_routes.add_url_rule('/update-user-info', view_func=update_user_info, methods=['PUT'])
user_routes.add_url_rule('/update-avatar', view_func=update_avatar, methods=['PUT'])
user_routes.add_url_rule('/update-user-addresses', view_func=update_user_addresses, methods=['PUT'])
user_routes.add_url_rule('/delete-user-address/<address_id>', view_func=delete_user_address, methods=['DELETE'])
user_routes.add_url_rule('/update-user-password', view_func=update_user_password, methods=['PUT'])
user_routes.add_url_rule('/user-info/<user_id>', view_func=user_info, methods=['GET'])

# ----------------------------
# Admin
# ----------------------------
user_routes.add_url_rule('/admin-all-users', view_func=admin_all_users, methods=['GET'])
user_routes.add_url_rule('/delete-user/<user_id>', view_func=delete_user, methods=['DELETE'])
