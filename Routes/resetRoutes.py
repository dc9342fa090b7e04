from flask import Blueprint
from Controllers.resetController import reset, change_password
from Utils.limiter import limiter, LOGIN_LIMIT

reset_routes = Blueprint('reset_routes', __name__, url_prefix='/api/v2/auth')

reset_routes.add_url_rule('/reset', view_func=limiter.limit(LOGIN_LIMIT)(reset), methods=['POST'])
reset_routes.add_url_rule('/change-password', view_func=change_password, methods=['POST'])
