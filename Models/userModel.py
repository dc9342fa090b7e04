from mongoengine import (
    EmbeddedDocument, EmbeddedDocumentListField, StringField, IntField, EnumField
)
from bson import ObjectId
from enum import Enum

from Models.accountModel import Account, isoformat


# =====================================
#  ROLE ENUM
# =====================================
class Role(Enum):
    USER = "user"
    ADMIN = "Admin"


class Address(EmbeddedDocument):
    address_id = StringField(default=lambda: str(ObjectId()))
    country = StringField()
    city = StringField()
    address1 = StringField()
    address2 = StringField()
    zip_code = StringField()
    address_type = StringField()

    def update_from(self, data: dict):
        for key, attr in ADDRESS_FIELDS.items():
            if key in data:
                value = data[key]
                setattr(self, attr, str(value) if value is not None else None)

    def to_json(self) -> dict:
        return {
            '_id': self.address_id,
            'country': self.country,
            'city': self.city,
            'address1': self.address1,
            'address2': self.address2,
            'zipCode': self.zip_code,
            'addressType': self.address_type,
        }


# wire key -> attribute
ADDRESS_FIELDS = {
    'country': 'country',
    'city': 'city',
    'address1': 'address1',
    'address2': 'address2',
    'zipCode': 'zip_code',
    'addressType': 'address_type',
}


# =====================================
#  USER MODEL
# =====================================
class User(Account):
    phone_number = IntField()
    addresses = EmbeddedDocumentListField(Address)
    role = EnumField(Role, default=Role.USER)

    meta = {
        'collection': 'users',
        'indexes': ['email', 'reset_token', '-created_at']
    }

    @property
    def role_value(self):
        return getattr(self.role, "value", self.role)

    def find_address(self, address_id):
        for address in self.addresses:
            if address.address_id == address_id:
                return address
        return None

    def to_json(self) -> dict:
        """Convert user document to JSON-friendly dict."""
        return {
            '_id': str(self.id),
            'name': self.name,
            'email': self.email,
            'phoneNumber': self.phone_number,
            'addresses': [a.to_json() for a in self.addresses],
            'role': self.role_value,
            'avatar': self.avatar,
            'createdAt': isoformat(self.created_at),
        }

    def snapshot(self) -> dict:
        return {'_id': str(self.id), 'name': self.name, 'email': self.email}
