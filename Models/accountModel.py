from mongoengine import Document, EmailField, StringField, DateTimeField, ValidationError
from bcrypt import hashpw, gensalt, checkpw
from datetime import datetime, timedelta
import os
import uuid

MIN_PASSWORD_LENGTH = 4


def isoformat(value):
    return value.isoformat() if value else None


class Account(Document):
    """Fields and password helpers shared by buyer and seller accounts."""
    name = StringField(required=True, max_length=100)
    email = EmailField(required=True, unique=True)
    password = StringField(required=True)
    avatar = StringField(default="default.jpg")
    created_at = DateTimeField(default=datetime.utcnow)
    reset_token = StringField()
    reset_token_expiration = DateTimeField()

    meta = {'abstract': True}

    def clean(self):
        if self.email:
            self.email = self.email.strip().lower()

    def set_password(self, raw_password: str):
        """Store the bcrypt hash of a clear-text password."""
        self.password = self.hash_password(raw_password)

    @staticmethod
    def hash_password(password: str) -> str:
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        return hashpw(password.encode('utf-8'), gensalt(int(os.getenv("BCRYPT_ROUNDS", 12)))).decode('utf-8')

    def correct_password(self, candidate_password: str) -> bool:
        if not candidate_password or not self.password:
            return False
        return checkpw(candidate_password.encode('utf-8'), self.password.encode('utf-8'))

    def create_password_reset_token(self, minutes=5) -> str:
        self.reset_token = str(uuid.uuid4())
        self.reset_token_expiration = datetime.utcnow() + timedelta(minutes=minutes)
        return self.reset_token

    def clear_password_reset_token(self):
        self.reset_token = None
        self.reset_token_expiration = None

    @property
    def first_name(self):
        return (self.name or "").split(" ")[0]
