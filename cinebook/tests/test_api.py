from datetime import date

from cinebook.tests.conftest import ADMIN_TOKEN, OTHER_TOKEN, USER_TOKEN, auth

API = "/api/v1"


def booking_payload(data, seat_ids, food_items=None):
    return {
        "showtime_id": data["showtime_id"],
        "seat_ids": seat_ids,
        "food_items": {str(food_id): quantity for food_id, quantity in (food_items or {}).items()},
        "payment_method": "card",
    }


async def test_root(client):
    response = await client.get("/")
    assert response.status_code == 200


async def test_create_and_fetch_booking(client, seeded_test_data):
    seat_ids = seeded_test_data["seat_ids"][:2]
    response = await client.post(
        f"{API}/booking/",
        json=booking_payload(seeded_test_data, seat_ids, {seeded_test_data["popcorn_id"]: 2}),
        headers=auth(USER_TOKEN))
    assert response.status_code == 201
    booking = response.json()
    assert booking["total_amount"] == 3400
    assert booking["status"] == "confirmed"

    fetched = await client.get(f"{API}/booking/{booking['id']}", headers=auth(USER_TOKEN))
    assert fetched.status_code == 200
    assert fetched.json() == booking

    seats = (await client.get(f"{API}/seat/showtime/{seeded_test_data['showtime_id']}")).json()
    booked = [seat for seat in seats if seat["id"] in seat_ids]
    assert all(seat["is_booked"] and seat["booking_id"] == booking["id"] for seat in booked)


async def test_seats_ordered_by_row_then_number(client, seeded_test_data):
    response = await client.get(f"{API}/seat/showtime/{seeded_test_data['showtime_id']}")
    labels = [seat["label"] for seat in response.json()]
    assert labels == [f"A{n}" for n in range(1, 11)] + [f"B{n}" for n in range(1, 11)]


async def test_seats_for_unknown_showtime(client, seeded_test_data):
    response = await client.get(f"{API}/seat/showtime/999999")
    assert response.status_code == 404
    assert response.json()["code"] == "SHOWTIME_NOT_FOUND"


async def test_double_booking_returns_conflict(client, seeded_test_data):
    seat_ids = seeded_test_data["seat_ids"][:2]
    first = await client.post(f"{API}/booking/", json=booking_payload(seeded_test_data, seat_ids),
                              headers=auth(USER_TOKEN))
    assert first.status_code == 201

    second = await client.post(f"{API}/booking/", json=booking_payload(seeded_test_data, seat_ids[1:] + [seeded_test_data["seat_ids"][5]]),
                               headers=auth(OTHER_TOKEN))
    assert second.status_code == 409
    assert second.json()["code"] == "SEAT_ALREADY_BOOKED"

    mine = await client.get(f"{API}/booking/me", headers=auth(OTHER_TOKEN))
    assert mine.json() == []


async def test_cancel_and_cancel_again(client, seeded_test_data):
    seat_ids = seeded_test_data["seat_ids"][:2]
    booking = (await client.post(f"{API}/booking/", json=booking_payload(seeded_test_data, seat_ids),
                                 headers=auth(USER_TOKEN))).json()

    response = await client.post(f"{API}/booking/{booking['id']}/cancel", headers=auth(USER_TOKEN))
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["booking"]["status"] == "cancelled"

    again = await client.post(f"{API}/booking/{booking['id']}/cancel", headers=auth(USER_TOKEN))
    assert again.status_code == 409
    assert again.json() == {"error": "Booking is already cancelled", "code": "BOOKING_ALREADY_CANCELLED"}

    showtime = (await client.get(f"{API}/showtime/{seeded_test_data['showtime_id']}")).json()
    assert showtime["available_seats"] == 20


async def test_cancel_someone_elses_booking_is_not_found(client, seeded_test_data):
    booking = (await client.post(f"{API}/booking/", json=booking_payload(seeded_test_data, seeded_test_data["seat_ids"][:1]),
                                 headers=auth(USER_TOKEN))).json()
    response = await client.post(f"{API}/booking/{booking['id']}/cancel", headers=auth(OTHER_TOKEN))
    assert response.status_code == 404
    assert response.json()["code"] == "BOOKING_NOT_FOUND"


async def test_idempotent_booking_replays_response(client, seeded_test_data):
    headers = {**auth(USER_TOKEN), "X-Idempotency-Key": "checkout-1"}
    payload = booking_payload(seeded_test_data, seeded_test_data["seat_ids"][:2])

    first = await client.post(f"{API}/booking/", json=payload, headers=headers)
    second = await client.post(f"{API}/booking/", json=payload, headers=headers)
    assert first.status_code == 201
    assert second.status_code == 201
    assert second.json() == first.json()

    mine = (await client.get(f"{API}/booking/me", headers=auth(USER_TOKEN))).json()
    assert len(mine) == 1


async def test_quote_endpoint(client, seeded_test_data):
    payload = booking_payload(seeded_test_data, seeded_test_data["seat_ids"][:2], {seeded_test_data["popcorn_id"]: 2})
    payload.pop("payment_method")
    response = await client.post(f"{API}/booking/quote", json=payload)
    assert response.status_code == 200
    assert response.json()["total"] == 3400


async def test_missing_or_expired_token(client, seeded_test_data):
    payload = booking_payload(seeded_test_data, seeded_test_data["seat_ids"][:1])
    response = await client.post(f"{API}/booking/", json=payload)
    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"

    response = await client.get(f"{API}/booking/me", headers=auth("expired-token"))
    assert response.status_code == 401


async def test_all_bookings_requires_admin(client, seeded_test_data):
    await client.post(f"{API}/booking/", json=booking_payload(seeded_test_data, seeded_test_data["seat_ids"][:1]),
                      headers=auth(USER_TOKEN))

    forbidden = await client.get(f"{API}/booking/all", headers=auth(USER_TOKEN))
    assert forbidden.status_code == 403
    assert forbidden.json()["code"] == "FORBIDDEN"

    response = await client.get(f"{API}/booking/all", params={"user_id": "user-1"}, headers=auth(ADMIN_TOKEN))
    assert response.status_code == 200
    assert len(response.json()) == 1


async def test_invalid_input_error_shape(client, seeded_test_data):
    payload = booking_payload(seeded_test_data, [])
    response = await client.post(f"{API}/booking/", json=payload, headers=auth(USER_TOKEN))
    assert response.status_code == 400
    body = response.json()
    assert set(body) == {"error", "code"}
    assert body["code"] == "INVALID_INPUT"


async def test_zero_food_quantity_rejected(client, seeded_test_data):
    payload = booking_payload(seeded_test_data, seeded_test_data["seat_ids"][:1], {seeded_test_data["popcorn_id"]: 0})
    response = await client.post(f"{API}/booking/", json=payload, headers=auth(USER_TOKEN))
    assert response.status_code == 400


async def test_movie_limit_is_capped(client, seeded_test_data):
    for n in range(105):
        response = await client.post(f"{API}/movie/", json={
            "title": f"Movie {n}",
            "duration": 90,
            "genre": "Comedy",
            "rating": "PG",
            "release_date": str(date(2024, 1, 1)),
        })
        assert response.status_code == 201

    response = await client.get(f"{API}/movie/", params={"limit": 1000})
    assert response.status_code == 200
    assert len(response.json()) == 100

    default_page = await client.get(f"{API}/movie/")
    assert len(default_page.json()) == 10


async def test_movie_not_found_body(client):
    response = await client.get(f"{API}/movie/424242")
    assert response.status_code == 404
    assert response.json() == {"error": "Movie not found", "code": "MOVIE_NOT_FOUND"}


async def test_create_showtime_generates_seats(client, seeded_test_data):
    response = await client.post(f"{API}/showtime/", json={
        "movie_id": seeded_test_data["movie_id"],
        "show_date": "2030-02-01",
        "show_time": "20:00:00",
        "screen_number": 2,
        "price": 1000,
        "total_seats": 15,
        "seats_per_row": 6,
    })
    assert response.status_code == 201
    showtime = response.json()
    assert showtime["available_seats"] == 15

    seats = (await client.get(f"{API}/seat/showtime/{showtime['id']}")).json()
    assert len(seats) == 15
    assert seats[-1]["label"] == "C3"


async def test_draft_endpoints(client, seeded_test_data):
    response = await client.post(f"{API}/booking/draft/actions",
                                 json={"type": "set_showtime", "showtime_id": seeded_test_data["showtime_id"]},
                                 headers=auth(USER_TOKEN))
    assert response.status_code == 200
    response = await client.post(f"{API}/booking/draft/actions",
                                 json={"type": "toggle_seat", "seat_id": seeded_test_data["seat_ids"][0]},
                                 headers=auth(USER_TOKEN))
    assert response.json()["selected_seat_ids"] == [seeded_test_data["seat_ids"][0]]

    draft = (await client.get(f"{API}/booking/draft", headers=auth(USER_TOKEN))).json()
    assert draft["showtime_id"] == seeded_test_data["showtime_id"]

    assert (await client.delete(f"{API}/booking/draft", headers=auth(USER_TOKEN))).status_code == 204
    draft = (await client.get(f"{API}/booking/draft", headers=auth(USER_TOKEN))).json()
    assert draft["selected_seat_ids"] == []


async def showtime_counts(client, showtime_id):
    showtime = (await client.get(f"{API}/showtime/{showtime_id}")).json()
    seats = (await client.get(f"{API}/seat/showtime/{showtime_id}")).json()
    booked = sum(1 for seat in seats if seat["is_booked"])
    return showtime["available_seats"], showtime["total_seats"], booked


async def test_seat_update_keeps_available_seats_in_step(client, seeded_test_data):
    showtime_id = seeded_test_data["showtime_id"]
    seat_id = seeded_test_data["seat_ids"][0]

    response = await client.put(f"{API}/seat/{seat_id}", json={"is_booked": True})
    assert response.status_code == 200
    available, total, booked = await showtime_counts(client, showtime_id)
    assert (available, booked) == (19, 1)
    assert available == total - booked

    # setting the same value again does not move the counter
    await client.put(f"{API}/seat/{seat_id}", json={"is_booked": True})
    assert (await showtime_counts(client, showtime_id))[0] == 19

    await client.put(f"{API}/seat/{seat_id}", json={"is_booked": False})
    available, total, booked = await showtime_counts(client, showtime_id)
    assert (available, booked) == (20, 0)


async def test_seat_update_ignores_other_fields(client, seeded_test_data):
    seat_id = seeded_test_data["seat_ids"][0]
    response = await client.put(f"{API}/seat/{seat_id}",
                                json={"is_booked": True, "row": "Z", "seat_number": 99, "showtime_id": 424242})
    assert response.status_code == 200
    seat = response.json()
    assert seat["is_booked"] is True
    assert seat["label"] == "A1"
    assert seat["showtime_id"] == seeded_test_data["showtime_id"]


async def test_seat_update_with_unknown_booking(client, seeded_test_data):
    seat_id = seeded_test_data["seat_ids"][0]
    response = await client.put(f"{API}/seat/{seat_id}", json={"is_booked": True, "booking_id": 999999})
    assert response.status_code == 404
    assert response.json()["code"] == "BOOKING_NOT_FOUND"

    seat = (await client.get(f"{API}/seat/{seat_id}")).json()
    assert seat["is_booked"] is False
    assert seat["booking_id"] is None
    assert (await showtime_counts(client, seeded_test_data["showtime_id"]))[0] == 20


async def test_non_numeric_id_is_invalid_input(client):
    response = await client.get(f"{API}/seat/abc")
    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_INPUT"


async def test_seat_from_another_showtime_rejected(client, seeded_test_data):
    other = (await client.post(f"{API}/showtime/", json={
        "movie_id": seeded_test_data["movie_id"],
        "show_date": "2030-03-01",
        "show_time": "15:00:00",
        "screen_number": 3,
        "price": 800,
        "total_seats": 5,
    })).json()
    foreign_seat = (await client.get(f"{API}/seat/showtime/{other['id']}")).json()[0]

    response = await client.post(
        f"{API}/booking/",
        json=booking_payload(seeded_test_data, [seeded_test_data["seat_ids"][0], foreign_seat["id"]]),
        headers=auth(USER_TOKEN))
    assert response.status_code == 400
    assert response.json()["code"] == "SEAT_SHOWTIME_MISMATCH"
    assert (await showtime_counts(client, seeded_test_data["showtime_id"]))[2] == 0
