from mongoengine import DateTimeField, StringField

from Models.accountModel import isoformat
from Models.productModel import ShopItem


class Event(ShopItem):
    start_date = DateTimeField(required=True)
    finish_date = DateTimeField(required=True)
    status = StringField(default="Running")

    meta = {
        'collection': 'events',
        'indexes': ['shop_id', '-created_at']
    }

    def to_json(self) -> dict:
        data = super().to_json()
        data['start_Date'] = isoformat(self.start_date)
        data['Finish_Date'] = isoformat(self.finish_date)
        data['status'] = self.status
        return data
