from flask import Blueprint
from Controllers.eventController import (
    create_event, get_all_events, get_all_events_shop, delete_shop_event, admin_all_events
)

event_routes = Blueprint('event_routes', __name__, url_prefix='/api/v2/event')

event_routes.add_url_rule('/create-event', view_func=create_event, methods=['POST'])
event_routes.add_url_rule('/get-all-events', view_func=get_all_events, methods=['GET'])
event_routes.add_url_rule('/get-all-events/<shop_id>', view_func=get_all_events_shop, methods=['GET'])
event_routes.add_url_rule('/delete-shop-event/<event_id>', view_func=delete_shop_event, methods=['DELETE'])
event_routes.add_url_rule('/admin-all-events', view_func=admin_all_events, methods=['GET'])
