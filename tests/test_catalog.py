from conftest import cart_item
from Models.couponCodeModel import CouponCode
from Models.eventModel import Event
from Models.orderModel import Order
from Models.productModel import Product

LISTING = {
    "name": "Desk Lamp",
    "description": "Warm light",
    "category": "Home",
    "tags": "lighting",
    "originalPrice": "49.99",
    "discountPrice": "39.99",
    "stock": "12",
}


class TestProducts:
    def test_create_product(self, client, seller):
        resp = client.post("/api/v2/product/create-product", json={**LISTING, "shopId": str(seller.id)})

        assert resp.status_code == 201
        product = resp.get_json()["product"]
        assert product["discountPrice"] == 39.99
        assert product["stock"] == 12
        assert product["sold_out"] == 0
        assert product["shop"]["_id"] == str(seller.id)

    def test_create_product_with_unknown_shop(self, client):
        resp = client.post("/api/v2/product/create-product",
                           json={**LISTING, "shopId": "64b7f0c2a1b2c3d4e5f60718"})

        assert resp.status_code == 400
        assert resp.get_json()["message"] == "Shop Id is invalid!"

    def test_create_product_validates_numbers(self, client, seller):
        resp = client.post("/api/v2/product/create-product",
                           json={**LISTING, "stock": "many", "shopId": str(seller.id)})

        assert resp.status_code == 400

    def test_create_product_requires_fields(self, client, seller):
        resp = client.post("/api/v2/product/create-product",
                           json={**LISTING, "category": "", "shopId": str(seller.id)})

        assert resp.status_code == 400
        assert Product.objects.count() == 0

    def test_listing_by_shop_and_overall(self, client, make_seller, make_product, admin_headers):
        s1 = make_seller(name="Shop One", email="one@example.com")
        s2 = make_seller(name="Shop Two", email="two@example.com")
        make_product(s1, name="Lamp")
        make_product(s2, name="Vase")

        by_shop = client.get(f"/api/v2/product/get-all-products-shop/{s1.id}").get_json()["products"]
        everything = client.get("/api/v2/product/get-all-products").get_json()["products"]
        admin = client.get("/api/v2/product/admin-all-products", headers=admin_headers)

        assert [p["name"] for p in by_shop] == ["Lamp"]
        assert {p["name"] for p in everything} == {"Lamp", "Vase"}
        assert admin.status_code == 201

    def test_owner_deletes_product(self, client, seller, seller_headers, make_product):
        product = make_product(seller)

        resp = client.delete(f"/api/v2/product/delete-shop-product/{product.id}", headers=seller_headers)

        assert resp.status_code == 201
        assert Product.objects.count() == 0

    def test_other_seller_can_not_delete_product(self, client, seller, make_seller, auth_headers, make_product):
        product = make_product(seller)
        intruder = make_seller(name="Intruder", email="intruder@example.com")

        resp = client.delete(f"/api/v2/product/delete-shop-product/{product.id}",
                             headers=auth_headers(intruder, "seller"))

        assert resp.status_code == 403
        assert Product.objects.count() == 1

    def test_delete_unknown_product(self, client, seller_headers):
        resp = client.delete("/api/v2/product/delete-shop-product/64b7f0c2a1b2c3d4e5f60718",
                             headers=seller_headers)

        assert resp.status_code == 404


class TestReviews:
    def test_review_updates_rating_and_marks_order_item(self, client, user, user_headers, seller, make_product):
        product = make_product(seller)
        order_id = client.post("/api/v2/order/create-order", json={
            "cart": [cart_item(product)],
            "shippingAddress": {"city": "Springfield"},
            "user": {"_id": str(user.id), "name": user.name},
        }).get_json()["orders"][0]["_id"]

        resp = client.put("/api/v2/product/create-new-review", headers=user_headers, json={
            "rating": 4, "comment": "Nice", "productId": str(product.id), "orderId": order_id,
        })

        assert resp.status_code == 200
        product.reload()
        assert product.ratings == 4
        assert product.reviews[0].user["_id"] == str(user.id)
        assert Order.objects.get(id=order_id).cart[0].is_reviewed is True

    def test_reviewing_again_replaces_review(self, client, user, user_headers, make_user, auth_headers,
                                             seller, make_product):
        product = make_product(seller)
        other = make_user(name="Other", email="other@example.com")
        url = "/api/v2/product/create-new-review"

        client.put(url, headers=user_headers, json={"rating": 5, "productId": str(product.id)})
        client.put(url, headers=auth_headers(other, "user"), json={"rating": 2, "productId": str(product.id)})
        client.put(url, headers=user_headers, json={"rating": 3, "productId": str(product.id)})

        product.reload()
        assert len(product.reviews) == 2
        assert product.ratings == 2.5

    def test_rating_out_of_range(self, client, user_headers, seller, make_product):
        product = make_product(seller)

        resp = client.put("/api/v2/product/create-new-review", headers=user_headers,
                          json={"rating": 7, "productId": str(product.id)})

        assert resp.status_code == 400


class TestEvents:
    def _event(self, seller, **overrides):
        return {
            **LISTING,
            "shopId": str(seller.id),
            "start_Date": "2026-11-01T00:00:00Z",
            "Finish_Date": "2026-11-08T00:00:00Z",
            **overrides,
        }

    def test_create_event(self, client, seller):
        resp = client.post("/api/v2/event/create-event", json=self._event(seller))

        assert resp.status_code == 201
        event = resp.get_json()["event"]
        assert event["start_Date"] == "2026-11-01T00:00:00"
        assert event["Finish_Date"] == "2026-11-08T00:00:00"
        assert event["status"] == "Running"

    def test_finish_before_start(self, client, seller):
        resp = client.post("/api/v2/event/create-event",
                           json=self._event(seller, Finish_Date="2026-10-01T00:00:00Z"))

        assert resp.status_code == 400
        assert Event.objects.count() == 0

    def test_bad_date(self, client, seller):
        resp = client.post("/api/v2/event/create-event", json=self._event(seller, start_Date="next week"))

        assert resp.status_code == 400

    def test_listing_and_deleting_events(self, client, seller, seller_headers, admin_headers):
        event_id = client.post("/api/v2/event/create-event", json=self._event(seller)).get_json()["event"]["_id"]

        assert len(client.get("/api/v2/event/get-all-events").get_json()["events"]) == 1
        assert len(client.get(f"/api/v2/event/get-all-events/{seller.id}").get_json()["events"]) == 1
        assert client.get("/api/v2/event/admin-all-events", headers=admin_headers).status_code == 201

        resp = client.delete(f"/api/v2/event/delete-shop-event/{event_id}", headers=seller_headers)
        assert resp.status_code == 201
        assert Event.objects.count() == 0

    def test_other_seller_can_not_delete_event(self, client, seller, make_seller, auth_headers):
        event_id = client.post("/api/v2/event/create-event", json=self._event(seller)).get_json()["event"]["_id"]
        intruder = make_seller(name="Intruder", email="intruder@example.com")

        resp = client.delete(f"/api/v2/event/delete-shop-event/{event_id}",
                             headers=auth_headers(intruder, "seller"))

        assert resp.status_code == 403


class TestCoupons:
    def _create(self, client, headers, **overrides):
        payload = {"name": "SAVE10", "value": 10, "minAmount": 20, "maxAmount": 200, **overrides}
        return client.post("/api/v2/coupon/create-coupon-code", json=payload, headers=headers)

    def test_create_and_look_up_coupon(self, client, seller, seller_headers):
        resp = self._create(client, seller_headers)

        assert resp.status_code == 201
        assert resp.get_json()["coupounCode"]["shopId"] == str(seller.id)

        resp = client.get("/api/v2/coupon/get-coupon-value/SAVE10")
        assert resp.status_code == 200
        assert resp.get_json()["couponCode"]["value"] == 10

    def test_unknown_coupon_value_is_null(self, client):
        resp = client.get("/api/v2/coupon/get-coupon-value/NOPE")

        assert resp.status_code == 200
        assert resp.get_json() == {"success": True, "couponCode": None}

    def test_duplicate_name(self, client, seller_headers):
        self._create(client, seller_headers)

        resp = self._create(client, seller_headers)

        assert resp.status_code == 400
        assert resp.get_json()["message"] == "Coupoun code already exists!"

    def test_min_above_max(self, client, seller_headers):
        assert self._create(client, seller_headers, minAmount=300).status_code == 400

    def test_seller_lists_only_own_coupons(self, client, seller, seller_headers, make_seller, auth_headers):
        other = make_seller(name="Other", email="other@example.com")
        self._create(client, seller_headers)
        self._create(client, auth_headers(other, "seller"), name="OTHER5")

        resp = client.get(f"/api/v2/coupon/get-coupon/{seller.id}", headers=seller_headers)

        assert [c["name"] for c in resp.get_json()["couponCodes"]] == ["SAVE10"]

    def test_delete_coupon(self, client, seller_headers):
        coupon_id = self._create(client, seller_headers).get_json()["coupounCode"]["_id"]

        resp = client.delete(f"/api/v2/coupon/delete-coupon/{coupon_id}", headers=seller_headers)

        assert resp.status_code == 201
        assert CouponCode.objects.count() == 0

    def test_delete_missing_coupon(self, client, seller_headers):
        resp = client.delete("/api/v2/coupon/delete-coupon/64b7f0c2a1b2c3d4e5f60718", headers=seller_headers)

        assert resp.status_code == 400
