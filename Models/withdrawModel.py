from mongoengine import Document, StringField, FloatField, DictField, DateTimeField
from datetime import datetime

from Models.accountModel import isoformat

PROCESSING = "Processing"
SUCCEED = "succeed"


class Withdraw(Document):
    seller_id = StringField(required=True)
    seller = DictField(required=True)
    amount = FloatField(required=True)
    status = StringField(default=PROCESSING)
    created_at = DateTimeField(default=datetime.utcnow)
    updated_at = DateTimeField(default=datetime.utcnow)

    meta = {
        'collection': 'withdraws',
        'indexes': ['seller_id', '-created_at']
    }

    def to_json(self) -> dict:
        return {
            '_id': str(self.id),
            'seller': self.seller,
            'amount': self.amount,
            'status': self.status,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }
