"""HTTP tests for /api/cards."""

from datetime import date, timedelta
from decimal import Decimal

from app.db.models.card_model import CardStatus
from app.db.models.user_model import UserRole, UserStatus


class TestCardEndpoints:

    def test_create_card_for_caller(self, client, db, headers_for) -> None:
        user = db.add_user()
        response = client.post("/api/cards/", json={"currency": "eur", "type": "visa"},
                               headers=headers_for(user))
        assert response.status_code == 201
        card = response.json()
        assert card["user_id"] == user["id"]
        assert card["currency_type"] == "EUR"
        assert Decimal(card["balance"]) == 0

    def test_blocked_user_gets_400(self, client, db, headers_for) -> None:
        user = db.add_user(status=UserStatus.STATUS_BLOCKED.value)
        response = client.post("/api/cards/", json={"currency": "USD", "type": "VISA"},
                               headers=headers_for(user))
        assert response.status_code == 400
        assert response.json()["detail"] == "Creating card is unavailable for blocked user."

    def test_refill_with_wrong_pin(self, client, db, headers_for) -> None:
        user = db.add_user()
        card = db.add_card(user["id"], balance=Decimal("5.00"))
        response = client.patch(f"/api/cards/{card['id']}/refill", json={"pin": 4321, "amount": "10"},
                                headers=headers_for(user))
        assert response.status_code == 400
        assert db.cards[card["id"]]["balance"] == Decimal("5.00")

    def test_refill(self, client, db, headers_for) -> None:
        user = db.add_user()
        card = db.add_card(user["id"], currency_type="EUR")
        response = client.patch(f"/api/cards/{card['id']}/refill", json={"pin": 1234, "amount": "100"},
                                headers=headers_for(user))
        assert response.status_code == 202
        assert Decimal(response.json()["balance"]) == Decimal("92.00")

    def test_toggle_status_on_expired_card(self, client, db, headers_for) -> None:
        user = db.add_user()
        card = db.add_card(user["id"], card_expiration_date=date.today() - timedelta(days=1))
        response = client.patch(f"/api/cards/{card['id']}/status", headers=headers_for(user))
        assert response.status_code == 400
        assert db.cards[card["id"]]["status"] == CardStatus.STATUS_CARD_DEFAULT.value

    def test_change_type(self, client, db, headers_for) -> None:
        user = db.add_user()
        card = db.add_card(user["id"])
        response = client.patch(f"/api/cards/{card['id']}/type", json={"type": "mastercard"},
                                headers=headers_for(user))
        assert response.status_code == 202
        assert response.json()["card_type"] == "MASTERCARD"

    def test_delete_non_empty_card(self, client, db, headers_for) -> None:
        user = db.add_user()
        card = db.add_card(user["id"], balance=Decimal("1.00"))
        response = client.delete(f"/api/cards/{card['id']}", headers=headers_for(user))
        assert response.status_code == 400
        assert card["id"] in db.cards

    def test_delete_empty_card(self, client, db, headers_for) -> None:
        user = db.add_user()
        card = db.add_card(user["id"])
        assert client.delete(f"/api/cards/{card['id']}", headers=headers_for(user)).status_code == 204
        assert card["id"] not in db.cards

    def test_my_cards(self, client, db, headers_for) -> None:
        user = db.add_user()
        other = db.add_user()
        db.add_card(user["id"])
        db.add_card(other["id"])
        response = client.get("/api/cards/my", headers=headers_for(user))
        assert [c["user_id"] for c in response.json()] == [user["id"]]

    def test_listing_is_staff_only(self, client, db, headers_for) -> None:
        user = db.add_user()
        admin = db.add_user(user_role=UserRole.ROLE_ADMIN.value)
        card = db.add_card(user["id"])
        assert client.get("/api/cards/", headers=headers_for(user)).status_code == 403
        assert len(client.get("/api/cards/", headers=headers_for(admin)).json()) == 1
        response = client.get(f"/api/cards/number/{card['card_number']}", headers=headers_for(admin))
        assert response.json()["id"] == card["id"]

    def test_missing_card(self, client, db, headers_for) -> None:
        user = db.add_user()
        assert client.get("/api/cards/77", headers=headers_for(user)).status_code == 404
