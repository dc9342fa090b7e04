import logging

from flask import request, jsonify
from mongoengine.errors import ValidationError

from Controllers.productController import listing_fields, listing_shop
from Models.eventModel import Event
from Utils.appError import AppError
from Utils.auth_decorator import seller_required, roles_required
from Utils.forms import form_or_json, as_datetime
from Utils.uploads import save_images, delete_image

logger = logging.getLogger(__name__)


def create_event():
    data = form_or_json()
    shop = listing_shop(data)
    fields = listing_fields(data)

    start_date = as_datetime(data.get("start_Date"), "start_Date")
    finish_date = as_datetime(data.get("Finish_Date") or data.get("finish_Date"), "Finish_Date")
    if finish_date < start_date:
        raise AppError("Finish_Date must be after start_Date", 400)

    event = Event(
        **fields,
        start_date=start_date,
        finish_date=finish_date,
        images=save_images(request.files.getlist("images"), owner_id=str(shop.id)),
        shop_id=str(shop.id),
        shop=shop.snapshot(),
    )
    event.save()
    logger.info(f"🎉 Event {event.id} created for shop {shop.id}")

    return jsonify({"success": True, "event": event.to_json()}), 201


def get_all_events():
    events = Event.objects.order_by("-created_at")
    return jsonify({"success": True, "events": [e.to_json() for e in events]}), 201


def get_all_events_shop(shop_id):
    events = Event.objects(shop_id=shop_id).order_by("-created_at")
    return jsonify({"success": True, "events": [e.to_json() for e in events]}), 201


@seller_required
def delete_shop_event(seller, event_id):
    try:
        event = Event.objects(id=event_id).first()
    except ValidationError:
        event = None
    if not event:
        raise AppError("Event not found with this id!", 404)
    if event.shop_id != str(seller.id):
        raise AppError("You can only delete events of your own shop", 403)

    for filename in event.images:
        delete_image(filename)
    event.delete()

    return jsonify({"success": True, "message": "Event Deleted successfully!"}), 201


@roles_required("Admin")
def admin_all_events(admin):
    events = Event.objects.order_by("-created_at")
    return jsonify({"success": True, "events": [e.to_json() for e in events]}), 201
