from mongoengine import Document, StringField, FileField, DateTimeField
from datetime import datetime


class AllImgs(Document):
    """Uploaded avatars and listing images, stored in GridFS."""
    filename = StringField(required=True, unique=True)
    file = FileField(required=True)
    content_type = StringField(default="image/jpeg")
    owner_id = StringField()
    uploaded_at = DateTimeField(default=datetime.utcnow)

    meta = {'collection': 'all_imgs', 'indexes': ['owner_id']}
