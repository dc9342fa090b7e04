import os

os.environ.setdefault("BCRYPT_ROUNDS", "4")

import mongomock
import pytest
from mongoengine import disconnect

from app import create_app
from Models.allImgsModel import AllImgs
from Models.couponCodeModel import CouponCode
from Models.eventModel import Event
from Models.orderModel import Order
from Models.productModel import Product
from Models.shopModel import Shop
from Models.userModel import User, Role
from Models.withdrawModel import Withdraw
from Utils.jwt_utils import create_access_token

MODELS = (User, Shop, Product, Event, Order, CouponCode, Withdraw, AllImgs)
MAIL_MODULES = (
    "Controllers.userController",
    "Controllers.shopController",
    "Controllers.withdrawController",
    "Controllers.resetController",
)


@pytest.fixture(scope="session")
def app(tmp_path_factory):
    app = create_app({
        "TESTING": True,
        "MONGODB_URI": "mongodb://localhost:27017/marketplace_test",
        "MONGO_CLIENT_CLASS": mongomock.MongoClient,
        "RATELIMIT_ENABLED": False,
        "LOG_DIR": str(tmp_path_factory.mktemp("logs")),
        "JWT_SECRET": "test-jwt-secret",
        "ACTIVATION_SECRET": "test-activation-secret",
        "CLIENT_URL": "http://client.test",
    })
    yield app
    disconnect(alias="default")


@pytest.fixture(autouse=True)
def clean_db(app):
    yield
    for model in MODELS:
        model.drop_collection()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def outbox(monkeypatch):
    """Capture outgoing mail instead of talking to SMTP."""
    sent = []

    def fake_send_mail(email, subject, message):
        sent.append({"email": email, "subject": subject, "message": message})

    for module in MAIL_MODULES:
        monkeypatch.setattr(f"{module}.send_mail", fake_send_mail)
    return sent


@pytest.fixture
def failing_mail(monkeypatch):
    def broken_send_mail(email, subject, message):
        raise ConnectionRefusedError("SMTP server unavailable")

    for module in MAIL_MODULES:
        monkeypatch.setattr(f"{module}.send_mail", broken_send_mail)


# ----------------------------
# Principals
# ----------------------------
@pytest.fixture
def make_user():
    def _make(name="Jane Buyer", email="jane@example.com", password="secret123", role=Role.USER):
        user = User(name=name, email=email, password=User.hash_password(password), role=role)
        user.save()
        return user
    return _make


@pytest.fixture
def make_seller():
    def _make(name="Acme Store", email="acme@example.com", password="secret123", balance=0):
        shop = Shop(
            name=name, email=email, password=Shop.hash_password(password),
            address="1 Market St", phone_number=5551234, zip_code=10001,
            available_balance=balance,
        )
        shop.save()
        return shop
    return _make


@pytest.fixture
def auth_headers(app):
    def _headers(principal, kind):
        with app.app_context():
            role = getattr(principal, "role_value", None) or principal.role
            token = create_access_token(principal.id, kind, role)
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def admin(make_user):
    return make_user(name="Ada Admin", email="admin@example.com", role=Role.ADMIN)


@pytest.fixture
def seller(make_seller):
    return make_seller()


@pytest.fixture
def user_headers(user, auth_headers):
    return auth_headers(user, "user")


@pytest.fixture
def admin_headers(admin, auth_headers):
    return auth_headers(admin, "user")


@pytest.fixture
def seller_headers(seller, auth_headers):
    return auth_headers(seller, "seller")


# ----------------------------
# Catalog
# ----------------------------
@pytest.fixture
def make_product():
    def _make(shop, name="Mug", discount_price=10.0, stock=20, sold_out=0):
        product = Product(
            name=name, description=f"A {name.lower()}", category="Home",
            discount_price=discount_price, stock=stock, sold_out=sold_out,
            shop_id=str(shop.id), shop=shop.snapshot(),
        )
        product.save()
        return product
    return _make


def cart_item(product, qty=1, price=None):
    return {
        "_id": str(product.id),
        "shopId": product.shop_id,
        "name": product.name,
        "qty": qty,
        "discountPrice": product.discount_price if price is None else price,
    }
