from mongoengine import (
    Document, EmbeddedDocument, EmbeddedDocumentListField, StringField,
    FloatField, IntField, ListField, DictField, DateTimeField
)
from datetime import datetime

from Models.accountModel import isoformat


class Review(EmbeddedDocument):
    user = DictField(required=True)
    rating = FloatField(required=True, min_value=0, max_value=5)
    comment = StringField()
    product_id = StringField()
    created_at = DateTimeField(default=datetime.utcnow)

    @property
    def user_id(self):
        return str((self.user or {}).get('_id', ''))

    def to_json(self) -> dict:
        return {
            'user': self.user,
            'rating': self.rating,
            'comment': self.comment,
            'productId': self.product_id,
            'createdAt': isoformat(self.created_at),
        }


class ShopItem(Document):
    """Something a shop lists for sale: a regular product or a timed event."""
    name = StringField(required=True)
    description = StringField(required=True)
    category = StringField(required=True)
    tags = StringField()
    original_price = FloatField()
    discount_price = FloatField(required=True)
    stock = IntField(required=True)
    images = ListField(StringField())
    shop_id = StringField(required=True)
    shop = DictField(required=True)
    sold_out = IntField(default=0)
    created_at = DateTimeField(default=datetime.utcnow)

    meta = {'abstract': True}

    def to_json(self) -> dict:
        return {
            '_id': str(self.id),
            'name': self.name,
            'description': self.description,
            'category': self.category,
            'tags': self.tags,
            'originalPrice': self.original_price,
            'discountPrice': self.discount_price,
            'stock': self.stock,
            'images': list(self.images),
            'shopId': self.shop_id,
            'shop': self.shop,
            'sold_out': self.sold_out,
            'createdAt': isoformat(self.created_at),
        }


class Product(ShopItem):
    reviews = EmbeddedDocumentListField(Review)
    ratings = FloatField()

    meta = {
        'collection': 'products',
        'indexes': ['shop_id', '-created_at']
    }

    def upsert_review(self, user: dict, rating, comment):
        """Replace the caller's review or add a new one, then refresh the average."""
        user_id = str(user.get('_id', ''))
        for review in self.reviews:
            if review.user_id == user_id:
                review.user = user
                review.rating = rating
                review.comment = comment
                break
        else:
            self.reviews.append(Review(user=user, rating=rating, comment=comment,
                                       product_id=str(self.id)))

        self.ratings = sum(r.rating for r in self.reviews) / len(self.reviews)

    def to_json(self) -> dict:
        data = super().to_json()
        data['reviews'] = [r.to_json() for r in self.reviews]
        data['ratings'] = self.ratings
        return data
