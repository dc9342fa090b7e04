from mongoengine import (
    EmbeddedDocument, EmbeddedDocumentListField, StringField, IntField,
    FloatField, DateTimeField, DictField
)
from datetime import datetime

from Models.accountModel import Account, isoformat


class Transaction(EmbeddedDocument):
    """A settled withdrawal, appended when an admin approves the request."""
    withdraw_id = StringField(required=True)
    amount = FloatField(required=True)
    status = StringField(default="Processing")
    updated_at = DateTimeField()
    created_at = DateTimeField(default=datetime.utcnow)

    def to_json(self) -> dict:
        return {
            '_id': self.withdraw_id,
            'amount': self.amount,
            'status': self.status,
            'updatedAt': isoformat(self.updated_at),
            'createdAt': isoformat(self.created_at),
        }


class Shop(Account):
    description = StringField(max_length=2000)
    address = StringField(required=True)
    phone_number = IntField(required=True)
    role = StringField(default="Seller")
    zip_code = IntField(required=True)
    withdraw_method = DictField(null=True)
    available_balance = FloatField(default=0)
    transactions = EmbeddedDocumentListField(Transaction)

    meta = {
        'collection': 'shops',
        'indexes': ['email', 'reset_token', '-created_at']
    }

    def to_json(self) -> dict:
        return {
            '_id': str(self.id),
            'name': self.name,
            'email': self.email,
            'description': self.description,
            'address': self.address,
            'phoneNumber': self.phone_number,
            'role': self.role,
            'avatar': self.avatar,
            'zipCode': self.zip_code,
            'withdrawMethod': self.withdraw_method,
            'availableBalance': self.available_balance,
            'transections': [t.to_json() for t in self.transactions],
            'createdAt': isoformat(self.created_at),
        }

    def snapshot(self) -> dict:
        return {
            '_id': str(self.id),
            'name': self.name,
            'email': self.email,
            'avatar': self.avatar,
            'createdAt': isoformat(self.created_at),
        }
