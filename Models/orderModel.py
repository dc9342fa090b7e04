from mongoengine import (
    Document, EmbeddedDocument, EmbeddedDocumentField, EmbeddedDocumentListField,
    StringField, FloatField, IntField, BooleanField, DictField, DateTimeField
)
from datetime import datetime
from enum import Enum

from Models.accountModel import isoformat


class OrderStatus(Enum):
    """Statuses the order flow attaches behaviour to.

    The stored status is a free-form string; values outside this set are
    persisted as-is with no side effect.
    """
    PROCESSING = "Processing"
    TRANSFERRED = "Transferred to delivery partner"
    SHIPPING = "Shipping"
    ON_THE_WAY = "On the way"
    DELIVERED = "Delivered"
    REFUND_REQUESTED = "Refund Requested"
    REFUND_SUCCESS = "Refund Success"


class CartItem(EmbeddedDocument):
    product_id = StringField()
    shop_id = StringField(required=True)
    name = StringField()
    qty = IntField(default=1, min_value=1)
    discount_price = FloatField(required=True)
    image = StringField()
    is_reviewed = BooleanField(default=False)

    def to_json(self) -> dict:
        return {
            '_id': self.product_id,
            'shopId': self.shop_id,
            'name': self.name,
            'qty': self.qty,
            'discountPrice': self.discount_price,
            'image': self.image,
            'isReviewed': self.is_reviewed,
        }


class PaymentInfo(EmbeddedDocument):
    payment_id = StringField()
    status = StringField()
    type = StringField()

    def to_json(self) -> dict:
        return {'id': self.payment_id, 'status': self.status, 'type': self.type}


class Order(Document):
    cart = EmbeddedDocumentListField(CartItem, required=True)
    shipping_address = DictField(required=True)
    user_id = StringField(required=True)
    user = DictField()
    total_price = FloatField(required=True)
    status = StringField(default=OrderStatus.PROCESSING.value)
    payment_info = EmbeddedDocumentField(PaymentInfo, default=PaymentInfo)
    paid_at = DateTimeField(default=datetime.utcnow)
    delivered_at = DateTimeField()
    created_at = DateTimeField(default=datetime.utcnow)

    meta = {
        'collection': 'orders',
        'indexes': ['user_id', 'cart.shop_id', '-created_at']
    }

    @property
    def shop_id(self):
        """Seller of this order; every line item belongs to the same shop."""
        return self.cart[0].shop_id if self.cart else None

    def to_json(self) -> dict:
        return {
            '_id': str(self.id),
            'cart': [item.to_json() for item in self.cart],
            'shippingAddress': self.shipping_address,
            'user': self.user or {'_id': self.user_id},
            'totalPrice': self.total_price,
            'status': self.status,
            'paymentInfo': self.payment_info.to_json() if self.payment_info else {},
            'paidAt': isoformat(self.paid_at),
            'deliveredAt': isoformat(self.delivered_at),
            'createdAt': isoformat(self.created_at),
        }
