from mongoengine import Document, StringField, FloatField, DateTimeField
from datetime import datetime

from Models.accountModel import isoformat


class CouponCode(Document):
    name = StringField(required=True, unique=True)
    value = FloatField(required=True)
    min_amount = FloatField()
    max_amount = FloatField()
    shop_id = StringField(required=True)
    selected_product = StringField()
    created_at = DateTimeField(default=datetime.utcnow)

    meta = {
        'collection': 'coupon_codes',
        'indexes': ['shop_id']
    }

    def to_json(self) -> dict:
        return {
            '_id': str(self.id),
            'name': self.name,
            'value': self.value,
            'minAmount': self.min_amount,
            'maxAmount': self.max_amount,
            'shopId': self.shop_id,
            'selectedProduct': self.selected_product,
            'createdAt': isoformat(self.created_at),
        }
