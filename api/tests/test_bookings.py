"""Booking lifecycle tests: create, query, approve, confirm, cancel."""

from unittest.mock import patch

import pytest
from sqlalchemy import select

from conftest import auth_headers, make_user
from courthub.core.database import database
from courthub.models import Booking, BookingStatus, User, UserRole
from courthub.services.bookings import calc_total_price

PLAYER = "player@example.com"


def booking_payload(**overrides) -> dict:
    payload = {
        "court_id": 1,
        "user_name": "Pat Player",
        "user_email": PLAYER,
        "date": "2026-11-02",
        "slots": ["10:00", "11:00"],
        "price_per_slot": 20,
    }
    payload.update(overrides)
    return payload


async def create_booking(client, headers, **overrides) -> int:
    resp = await client.post("/bookings", json=booking_payload(**overrides), headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["booking_id"]


async def load_booking(booking_id: int) -> Booking | None:
    async with database.session_factory() as db:
        return await db.get(Booking, booking_id)


async def load_user(email: str) -> User:
    async with database.session_factory() as db:
        result = await db.execute(select(User).where(User.email == email))
        return result.scalar_one()


# ---------------------------------------------------------------------------
# Unit tests: pricing
# ---------------------------------------------------------------------------


class TestTotalPrice:
    def test_slots_times_price(self):
        assert calc_total_price(["10:00", "11:00"], 20) == 40

    def test_single_slot(self):
        assert calc_total_price(["18:00"], 12.5) == 12.5

    def test_numeric_string_price(self):
        assert calc_total_price(["08:00", "09:00", "10:00"], "15") == 45


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_create_booking_computes_total_and_starts_pending(client, player_headers):
    resp = await client.post("/bookings", json=booking_payload(), headers=player_headers)
    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    assert body["total_price"] == 40

    booking = await load_booking(body["booking_id"])
    assert booking.status == BookingStatus.PENDING
    assert booking.total_price == 40
    assert booking.slots == ["10:00", "11:00"]
    assert booking.created_at is not None
    assert booking.transaction_id is None


@pytest.mark.asyncio
async def test_create_booking_lists_exactly_the_missing_fields(client, player_headers):
    resp = await client.post("/bookings", json={"court_id": 1, "slots": [], "user_name": "Pat"}, headers=player_headers)
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["fields"] == ["slots", "date", "price_per_slot", "user_email"]
    assert body["message"] == "Missing required fields: slots, date, price_per_slot, user_email"


@pytest.mark.asyncio
async def test_create_booking_requires_authentication(client):
    resp = await client.post("/bookings", json=booking_payload())
    assert resp.status_code == 401
    assert resp.json()["success"] is False


@pytest.mark.asyncio
async def test_same_slot_can_be_booked_twice(client, player_headers):
    """No inventory check on creation: double booking is a known gap."""
    first = await create_booking(client, player_headers)
    second = await create_booking(client, player_headers)
    assert first != second


# ---------------------------------------------------------------------------
# Read
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_get_booking(client, player_headers):
    booking_id = await create_booking(client, player_headers)
    resp = await client.get(f"/bookings/{booking_id}", headers=player_headers)
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["id"] == booking_id
    assert data["booking_date"] == "2026-11-02"
    assert data["status"] == "pending"


@pytest.mark.asyncio
async def test_get_booking_malformed_or_missing_id_is_404(client, player_headers):
    for booking_id in ("not-an-id", "0", "99999"):
        resp = await client.get(f"/bookings/{booking_id}", headers=player_headers)
        assert resp.status_code == 404
        assert resp.json() == {"success": False, "message": "Booking not found"}


@pytest.mark.asyncio
async def test_list_by_email_returns_only_pending(client, player_headers, admin_headers):
    pending_id = await create_booking(client, player_headers)
    approved_id = await create_booking(client, player_headers)
    await client.put(f"/bookings/approve/{approved_id}", headers=admin_headers)

    resp = await client.get("/bookings", params={"email": PLAYER}, headers=player_headers)
    assert resp.status_code == 200
    assert [b["id"] for b in resp.json()["data"]] == [pending_id]

    resp = await client.get("/bookings/approved", params={"email": PLAYER}, headers=player_headers)
    assert [b["id"] for b in resp.json()["data"]] == [approved_id]


@pytest.mark.asyncio
async def test_list_by_status_is_global_and_admin_only(client, player_headers, admin_headers):
    await make_user("other@example.com")
    first = await create_booking(client, player_headers)
    second = await create_booking(client, auth_headers("other@example.com"), user_email="other@example.com")

    resp = await client.get("/bookings", params={"status": "pending"}, headers=admin_headers)
    assert resp.status_code == 200
    assert [b["id"] for b in resp.json()["data"]] == [first, second]

    resp = await client.get("/bookings", params={"status": "pending"}, headers=player_headers)
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_list_requires_a_filter(client, admin_headers):
    resp = await client.get("/bookings", headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["success"] is False


@pytest.mark.asyncio
async def test_list_rejects_unknown_status(client, admin_headers):
    resp = await client.get("/bookings", params={"status": "archived"}, headers=admin_headers)
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_cannot_list_someone_elses_bookings(client, player_headers):
    resp = await client.get("/bookings", params={"email": "someone@example.com"}, headers=player_headers)
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_empty_list(client, player_headers):
    resp = await client.get("/bookings", params={"email": PLAYER}, headers=player_headers)
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "data": []}


# ---------------------------------------------------------------------------
# Approve
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_approve_promotes_user_to_member(client, player_headers, admin_headers):
    booking_id = await create_booking(client, player_headers)

    resp = await client.put(f"/bookings/approve/{booking_id}", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Booking approved"}

    assert (await load_booking(booking_id)).status == BookingStatus.APPROVED

    resp = await client.get(f"/users/role/{PLAYER}")
    assert resp.json()["role"] == "member"
    assert (await load_user(PLAYER)).member_since is not None


@pytest.mark.asyncio
async def test_approve_leaves_admin_role_alone(client, admin_headers):
    booking_id = await create_booking(client, admin_headers, user_email="admin@example.com")
    resp = await client.put(f"/bookings/approve/{booking_id}", headers=admin_headers)
    assert resp.status_code == 200

    admin = await load_user("admin@example.com")
    assert admin.role == UserRole.ADMIN
    assert admin.member_since is None


@pytest.mark.asyncio
async def test_approve_leaves_existing_member_alone(client, admin_headers):
    await make_user("member@example.com", role=UserRole.MEMBER)
    booking_id = await create_booking(client, admin_headers, user_email="member@example.com")

    resp = await client.put(f"/bookings/approve/{booking_id}", headers=admin_headers)
    assert resp.status_code == 200

    member = await load_user("member@example.com")
    assert member.role == UserRole.MEMBER
    assert member.member_since is None


@pytest.mark.asyncio
async def test_approve_for_unregistered_requester_still_succeeds(client, admin_headers):
    booking_id = await create_booking(client, admin_headers, user_email="walkin@example.com")
    resp = await client.put(f"/bookings/approve/{booking_id}", headers=admin_headers)
    assert resp.status_code == 200
    assert (await load_booking(booking_id)).status == BookingStatus.APPROVED


@pytest.mark.asyncio
async def test_missing_and_already_approved_share_one_not_found_response(client, player_headers, admin_headers):
    """Current behaviour: an already-approved booking is reported exactly like a missing one."""
    booking_id = await create_booking(client, player_headers)
    first = await client.put(f"/bookings/approve/{booking_id}", headers=admin_headers)
    assert first.status_code == 200

    again = await client.put(f"/bookings/approve/{booking_id}", headers=admin_headers)
    missing = await client.put("/bookings/approve/99999", headers=admin_headers)

    assert again.status_code == missing.status_code == 404
    assert again.json() == missing.json() == {"success": False, "message": "Booking not found"}


@pytest.mark.asyncio
async def test_approve_requires_admin(client, player_headers):
    booking_id = await create_booking(client, player_headers)
    resp = await client.put(f"/bookings/approve/{booking_id}", headers=player_headers)
    assert resp.status_code == 403
    assert (await load_booking(booking_id)).status == BookingStatus.PENDING


@pytest.mark.asyncio
async def test_failed_promotion_does_not_undo_approval(client, player_headers, admin_headers):
    booking_id = await create_booking(client, player_headers)

    with patch("courthub.services.bookings.promote_if_eligible", side_effect=RuntimeError("users table down")):
        resp = await client.put(f"/bookings/approve/{booking_id}", headers=admin_headers)

    assert resp.status_code == 200
    assert (await load_booking(booking_id)).status == BookingStatus.APPROVED
    assert (await load_user(PLAYER)).role == UserRole.USER


# ---------------------------------------------------------------------------
# Confirm
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_confirm_records_transaction(client, player_headers, admin_headers):
    booking_id = await create_booking(client, player_headers)
    await client.put(f"/bookings/approve/{booking_id}", headers=admin_headers)

    resp = await client.patch(
        f"/bookings/confirm/{booking_id}", json={"transaction_id": "tx_1"}, headers=player_headers
    )
    assert resp.status_code == 200

    booking = await load_booking(booking_id)
    assert booking.status == BookingStatus.CONFIRMED
    assert booking.transaction_id == "tx_1"
    assert booking.paid_at is not None


@pytest.mark.asyncio
async def test_confirm_does_not_require_prior_approval(client, player_headers):
    booking_id = await create_booking(client, player_headers)
    resp = await client.patch(
        f"/bookings/confirm/{booking_id}", json={"transaction_id": "tx_2"}, headers=player_headers
    )
    assert resp.status_code == 200
    assert (await load_booking(booking_id)).status == BookingStatus.CONFIRMED


@pytest.mark.asyncio
async def test_confirmed_booking_cannot_transition_again(client, player_headers, admin_headers):
    booking_id = await create_booking(client, player_headers)
    await client.patch(f"/bookings/confirm/{booking_id}", json={"transaction_id": "tx_3"}, headers=player_headers)

    resp = await client.patch(
        f"/bookings/confirm/{booking_id}", json={"transaction_id": "tx_4"}, headers=player_headers
    )
    assert resp.status_code == 404
    resp = await client.put(f"/bookings/approve/{booking_id}", headers=admin_headers)
    assert resp.status_code == 404

    booking = await load_booking(booking_id)
    assert booking.status == BookingStatus.CONFIRMED
    assert booking.transaction_id == "tx_3"


@pytest.mark.asyncio
async def test_confirm_requires_transaction_id(client, player_headers):
    booking_id = await create_booking(client, player_headers)
    resp = await client.patch(f"/bookings/confirm/{booking_id}", json={}, headers=player_headers)
    assert resp.status_code == 400
    assert resp.json()["fields"] == ["transaction_id"]


@pytest.mark.asyncio
async def test_confirmed_listings(client, player_headers, admin_headers):
    booking_id = await create_booking(client, player_headers)
    await create_booking(client, player_headers)
    await client.patch(f"/bookings/confirm/{booking_id}", json={"transaction_id": "tx_5"}, headers=player_headers)

    resp = await client.get("/booking/confirmed", params={"email": PLAYER}, headers=player_headers)
    assert [b["id"] for b in resp.json()["data"]] == [booking_id]

    resp = await client.get("/admin/confirmed/bookings", headers=admin_headers)
    assert [b["id"] for b in resp.json()["data"]] == [booking_id]

    resp = await client.get("/admin/confirmed/bookings", headers=player_headers)
    assert resp.status_code == 403


# ---------------------------------------------------------------------------
# Cancel
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.parametrize("target", ["pending", "approved", "confirmed"])
async def test_cancel_in_any_status(client, player_headers, admin_headers, target):
    booking_id = await create_booking(client, player_headers)
    if target in ("approved", "confirmed"):
        await client.put(f"/bookings/approve/{booking_id}", headers=admin_headers)
    if target == "confirmed":
        await client.patch(f"/bookings/confirm/{booking_id}", json={"transaction_id": "tx"}, headers=player_headers)
    assert (await load_booking(booking_id)).status == target

    resp = await client.delete(f"/bookings/{booking_id}", headers=player_headers)
    assert resp.status_code == 200
    assert resp.json()["message"] == "Booking cancelled successfully"
    assert await load_booking(booking_id) is None


@pytest.mark.asyncio
async def test_cancel_missing_booking(client, player_headers):
    resp = await client.delete("/bookings/99999", headers=player_headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_cancel_someone_elses_booking(client, player_headers, admin_headers):
    booking_id = await create_booking(client, admin_headers, user_email="admin@example.com")
    resp = await client.delete(f"/bookings/{booking_id}", headers=player_headers)
    assert resp.status_code == 403

    # admins can cancel anyone's
    resp = await client.delete(f"/bookings/{booking_id}", headers=admin_headers)
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_cannot_confirm_someone_elses_booking(client, player_headers, admin_headers):
    booking_id = await create_booking(client, player_headers)
    await make_user("mallory@example.com")

    resp = await client.patch(
        f"/bookings/confirm/{booking_id}", json={"transaction_id": "tx_m"}, headers=auth_headers("mallory@example.com")
    )
    assert resp.status_code == 403
    assert (await load_booking(booking_id)).status == BookingStatus.PENDING

    resp = await client.patch(f"/bookings/confirm/{booking_id}", json={"transaction_id": "tx_a"}, headers=admin_headers)
    assert resp.status_code == 200
    assert (await load_booking(booking_id)).transaction_id == "tx_a"


@pytest.mark.asyncio
async def test_confirm_missing_booking_is_404(client, player_headers):
    resp = await client.patch("/bookings/confirm/99999", json={"transaction_id": "tx"}, headers=player_headers)
    assert resp.status_code == 404
    assert resp.json()["message"] == "Booking not found"


@pytest.mark.asyncio
async def test_requester_email_is_matched_case_insensitively(client, player_headers):
    booking_id = await create_booking(client, player_headers, user_email="Player@Example.com")
    assert (await load_booking(booking_id)).user_email == PLAYER

    resp = await client.get("/bookings", params={"email": "PLAYER@example.com"}, headers=player_headers)
    assert resp.status_code == 200
    assert [b["id"] for b in resp.json()["data"]] == [booking_id]
