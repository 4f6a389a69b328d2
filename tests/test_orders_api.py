"""Tests for the order endpoints."""

import pytest

from conftest import order_payload

ORDERS = "/api/orders/"


def create_order(client, headers, *items, **overrides):
    response = client.post(ORDERS, json=order_payload(*items, **overrides), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["order"]


def set_status(client, headers, order_id, **body):
    return client.put(f"/api/orders/{order_id}/status", json=body, headers=headers)


@pytest.mark.usefixtures("catalog")
class TestCreateOrder:
    def test_create_prices_from_catalog(self, client, user_headers):
        response = client.post(ORDERS, json=order_payload((1, 1), (4, 2)), headers=user_headers)
        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Order created successfully"

        order = data["order"]
        assert order["orderNumber"].startswith("ART-")
        assert order["orderNumber"].endswith("-0001")
        assert order["userId"] == "user-1"
        assert order["status"] == "pending"
        assert order["paymentStatus"] == "pending"
        assert order["paymentMethod"] == "credit-card"
        assert order["itemCount"] == 3
        assert order["subtotal"] == 209.99
        assert order["tax"] == 16.80
        assert order["shipping"] == 0
        assert order["total"] == 226.79
        assert order["shippingAddress"]["zipCode"] == "SW1Y 4JH"

        first = order["items"][0]
        assert first["artworkId"] == 1
        assert first["price"] == 89.99
        assert first["quantity"] == 1
        assert first["artwork"]["title"] == "The Starry Night (Print)"
        assert first["artwork"]["imageUrl"] == "https://images.example.com/starry-night.jpg"
        assert first["artwork"]["artist"] == {"id": 1, "name": "Vincent Van Gogh"}

    def test_small_order_pays_shipping(self, client, user_headers):
        order = create_order(client, user_headers, (5, 1))
        assert order["subtotal"] == 30
        assert order["tax"] == 2.40
        assert order["shipping"] == 10
        assert order["total"] == 42.40

    def test_client_submitted_prices_are_ignored(self, client, user_headers):
        payload = order_payload((5, 1), total=1)
        payload["items"][0]["price"] = 0.01
        response = client.post(ORDERS, json=payload, headers=user_headers)
        assert response.status_code == 201
        assert response.json()["order"]["total"] == 42.40

    def test_repeated_artwork_is_kept_as_separate_lines(self, client, user_headers):
        order = create_order(client, user_headers, (1, 1), (1, 2))
        assert len(order["items"]) == 2
        assert order["itemCount"] == 3
        assert order["subtotal"] == 269.97

    def test_order_numbers_follow_the_order_count(self, client, user_headers, other_user_headers):
        first = create_order(client, user_headers, (5, 1))
        second = create_order(client, other_user_headers, (5, 1))
        assert first["orderNumber"].endswith("-0001")
        assert second["orderNumber"].endswith("-0002")

    def test_notes_and_payment_method_are_kept(self, client, user_headers):
        order = create_order(client, user_headers, (5, 1), notes="Gift wrap please", paymentMethod="paypal")
        assert order["notes"] == "Gift wrap please"
        assert order["paymentMethod"] == "paypal"

    def test_requires_authentication(self, client):
        response = client.post(ORDERS, json=order_payload((5, 1)))
        assert response.status_code == 401


@pytest.mark.usefixtures("catalog")
class TestCreateOrderRejections:
    def test_missing_address_field_is_named(self, client, user_headers):
        payload = order_payload((5, 1))
        del payload["shippingAddress"]["city"]
        response = client.post(ORDERS, json=payload, headers=user_headers)
        assert response.status_code == 400
        data = response.json()
        assert data["detail"] == "Validation failed"
        assert "shippingAddress.city" in [error["field"] for error in data["errors"]]

    def test_blank_address_field_is_named(self, client, user_headers):
        payload = order_payload((5, 1))
        payload["shippingAddress"]["zipCode"] = "   "
        response = client.post(ORDERS, json=payload, headers=user_headers)
        assert response.status_code == 400
        assert "shippingAddress.zipCode" in [error["field"] for error in response.json()["errors"]]

    def test_empty_items_are_rejected(self, client, user_headers):
        response = client.post(ORDERS, json=order_payload(), headers=user_headers)
        assert response.status_code == 400
        assert "items" in [error["field"] for error in response.json()["errors"]]

    def test_non_positive_quantity_is_rejected(self, client, user_headers):
        response = client.post(ORDERS, json=order_payload((5, 0)), headers=user_headers)
        assert response.status_code == 400
        assert "items.0.quantity" in [error["field"] for error in response.json()["errors"]]

    def test_overlong_notes_are_rejected(self, client, user_headers):
        response = client.post(ORDERS, json=order_payload((5, 1), notes="x" * 501), headers=user_headers)
        assert response.status_code == 400
        assert "notes" in [error["field"] for error in response.json()["errors"]]

    def test_unknown_payment_method_is_rejected(self, client, user_headers):
        response = client.post(ORDERS, json=order_payload((5, 1), paymentMethod="barter"), headers=user_headers)
        assert response.status_code == 400

    def test_unavailable_artwork_rejects_the_whole_order(self, client, user_headers, admin_headers):
        response = client.post(ORDERS, json=order_payload((1, 1), (6, 1)), headers=user_headers)
        assert response.status_code == 400
        assert "6" in response.json()["detail"]

        orders = client.get(ORDERS, headers=admin_headers).json()
        assert orders["count"] == 0

    def test_missing_artwork_rejects_the_whole_order(self, client, user_headers, admin_headers):
        response = client.post(ORDERS, json=order_payload((1, 1), (999, 1), (998, 2)), headers=user_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "One or more artworks are not available: 998, 999"
        assert client.get(ORDERS, headers=admin_headers).json()["count"] == 0


@pytest.mark.usefixtures("catalog")
class TestQuote:
    def test_quote_prices_without_writing(self, client, user_headers, admin_headers):
        response = client.post("/api/orders/quote", json={"items": [{"artwork": 4, "quantity": 2}]}, headers=user_headers)
        assert response.status_code == 200
        assert response.json() == {
            "itemCount": 2,
            "subtotal": 120.0,
            "tax": 9.6,
            "shipping": 0.0,
            "total": 129.6,
        }
        assert client.get(ORDERS, headers=admin_headers).json()["count"] == 0

    def test_quote_rejects_unavailable_artwork(self, client, user_headers):
        response = client.post("/api/orders/quote", json={"items": [{"artwork": 6, "quantity": 1}]}, headers=user_headers)
        assert response.status_code == 400


@pytest.mark.usefixtures("catalog")
class TestReadOrders:
    def test_owner_can_read_order(self, client, user_headers):
        order = create_order(client, user_headers, (5, 1))
        response = client.get(f"/api/orders/{order['id']}", headers=user_headers)
        assert response.status_code == 200
        assert response.json()["order"]["orderNumber"] == order["orderNumber"]

    def test_other_users_order_looks_missing(self, client, user_headers, other_user_headers):
        order = create_order(client, user_headers, (5, 1))
        foreign = client.get(f"/api/orders/{order['id']}", headers=other_user_headers)
        missing = client.get("/api/orders/9999", headers=other_user_headers)

        assert foreign.status_code == 404
        assert foreign.json() == missing.json() == {"detail": "Order not found"}

    def test_admin_can_read_any_order(self, client, user_headers, admin_headers):
        order = create_order(client, user_headers, (5, 1))
        response = client.get(f"/api/orders/{order['id']}", headers=admin_headers)
        assert response.status_code == 200

    def test_list_is_scoped_to_the_caller(self, client, user_headers, other_user_headers, admin_headers):
        create_order(client, user_headers, (5, 1))
        create_order(client, user_headers, (4, 1))
        create_order(client, other_user_headers, (1, 1))

        mine = client.get(ORDERS, headers=user_headers).json()
        assert mine["count"] == 2
        assert {order["userId"] for order in mine["orders"]} == {"user-1"}
        # Newest first
        assert mine["orders"][0]["items"][0]["artworkId"] == 4

        assert client.get(ORDERS, headers=other_user_headers).json()["count"] == 1
        assert client.get(ORDERS, headers=admin_headers).json()["count"] == 3

    def test_admin_can_filter_by_status(self, client, user_headers, admin_headers):
        first = create_order(client, user_headers, (5, 1))
        create_order(client, user_headers, (4, 1))
        set_status(client, admin_headers, first["id"], status="processing")

        processing = client.get(ORDERS, params={"status": "processing"}, headers=admin_headers).json()
        assert processing["count"] == 1
        assert processing["orders"][0]["id"] == first["id"]

    def test_totals_survive_catalog_price_changes(self, client, user_headers, admin_headers):
        order = create_order(client, user_headers, (1, 1))
        response = client.put("/api/artworks/1", json={"price": 500}, headers=admin_headers)
        assert response.status_code == 200

        again = client.get(f"/api/orders/{order['id']}", headers=user_headers).json()["order"]
        for field in ("subtotal", "tax", "shipping", "total"):
            assert again[field] == order[field]
        assert again["items"][0]["price"] == 89.99

    def test_deleted_artwork_keeps_the_line(self, client, user_headers, admin_headers):
        order = create_order(client, user_headers, (1, 2))
        assert client.delete("/api/artworks/1", headers=admin_headers).status_code == 200

        again = client.get(f"/api/orders/{order['id']}", headers=user_headers).json()["order"]
        assert again["items"][0]["artwork"] is None
        assert again["items"][0]["price"] == 89.99
        assert again["total"] == order["total"]


@pytest.mark.usefixtures("catalog")
class TestUpdateStatus:
    def test_admin_updates_status(self, client, user_headers, admin_headers):
        order = create_order(client, user_headers, (5, 1))
        response = set_status(client, admin_headers, order["id"], status="shipped")
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Order status updated successfully"
        assert data["order"]["status"] == "shipped"
        # Omitted field is left untouched
        assert data["order"]["paymentStatus"] == "pending"

    def test_any_transition_is_allowed(self, client, user_headers, admin_headers):
        order = create_order(client, user_headers, (5, 1))
        assert set_status(client, admin_headers, order["id"], status="cancelled").status_code == 200
        response = set_status(client, admin_headers, order["id"], status="pending", paymentStatus="refunded")
        assert response.status_code == 200
        assert response.json()["order"]["status"] == "pending"
        assert response.json()["order"]["paymentStatus"] == "refunded"

    def test_non_admin_is_forbidden(self, client, user_headers):
        order = create_order(client, user_headers, (5, 1))
        response = set_status(client, user_headers, order["id"], status="delivered")
        assert response.status_code == 403
        assert "order" not in response.json()

    def test_unknown_order(self, client, admin_headers):
        response = set_status(client, admin_headers, 9999, status="shipped")
        assert response.status_code == 404

    def test_empty_update_is_rejected(self, client, user_headers, admin_headers):
        order = create_order(client, user_headers, (5, 1))
        response = set_status(client, admin_headers, order["id"])
        assert response.status_code == 400

    def test_unknown_status_is_rejected(self, client, user_headers, admin_headers):
        order = create_order(client, user_headers, (5, 1))
        response = set_status(client, admin_headers, order["id"], status="lost")
        assert response.status_code == 400
        assert "status" in [error["field"] for error in response.json()["errors"]]

    def test_totals_do_not_change_on_status_update(self, client, user_headers, admin_headers):
        order = create_order(client, user_headers, (1, 1), (4, 2))
        updated = set_status(client, admin_headers, order["id"], status="delivered", paymentStatus="paid").json()
        for field in ("subtotal", "tax", "shipping", "total", "orderNumber"):
            assert updated["order"][field] == order[field]


@pytest.mark.usefixtures("catalog")
class TestOrderStats:
    def test_overview(self, client, user_headers, admin_headers):
        create_order(client, user_headers, (5, 1))  # 42.40
        paid = create_order(client, user_headers, (4, 1))  # 74.80
        set_status(client, admin_headers, paid["id"], status="delivered", paymentStatus="paid")

        response = client.get("/api/orders/stats/overview", headers=admin_headers)
        assert response.status_code == 200
        stats = response.json()["stats"]
        assert stats["totalOrders"] == 2
        assert stats["pendingOrders"] == 1
        assert stats["deliveredOrders"] == 1
        assert stats["processingOrders"] == 0
        assert stats["totalRevenue"] == 74.80
        assert stats["averageOrderValue"] == 58.60
        assert stats["recentOrders"] == 2

    def test_overview_is_admin_only(self, client, user_headers):
        response = client.get("/api/orders/stats/overview", headers=user_headers)
        assert response.status_code == 403


def test_health(client):
    assert client.get("/api/orders/health").json() == {"service": "order", "status": "running"}
