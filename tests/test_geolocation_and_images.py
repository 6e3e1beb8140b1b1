from __future__ import annotations

import pytest

from app.core.errors import LocationUnavailableError
from app.utils.geolocation import (
    build_profile_address,
    geocode_address,
    get_city_coordinates,
    haversine_km,
)
from app.utils.images import image_or_fallback


def test_city_lookup_is_case_insensitive_and_prefers_longest_match():
    assert get_city_coordinates("mumbai") == (19.0760, 72.8777)
    assert get_city_coordinates("South New Delhi") == (28.6139, 77.2090)
    assert get_city_coordinates("") is None


def test_geocode_tries_parts_from_most_general():
    assert geocode_address("221B Baker Street, London") == (51.5074, -0.1278)


@pytest.mark.parametrize("address", ["", "   ", "Zzzz Road, Qqqq"])
def test_geocode_without_match_raises(address):
    with pytest.raises(LocationUnavailableError):
        geocode_address(address)


def test_build_profile_address():
    assert build_profile_address("12 Janpath", "New Delhi", "Delhi") == "12 Janpath, New Delhi"
    assert build_profile_address("12 Janpath", None, "Delhi") == "12 Janpath, Delhi"
    assert build_profile_address(" ", None, None) is None


def test_haversine_known_distance():
    # Delhi -> Mumbai ~ 1150 km
    assert 1100 < haversine_km(28.7041, 77.1025, 19.0760, 72.8777) < 1200
    assert haversine_km(10.0, 10.0, 10.0, 10.0) == 0


@pytest.mark.parametrize("src, expected", [
    ("https://res.cloudinary.com/demo/a.png", "https://res.cloudinary.com/demo/a.png"),
    ("/static/doctor.png", "/static/doctor.png"),
    (None, "/placeholder.svg"),
    ("   ", "/placeholder.svg"),
    ("javascript:alert(1)", "/placeholder.svg"),
])
def test_image_or_fallback(src, expected):
    assert image_or_fallback(src) == expected


def test_image_or_fallback_custom_placeholder():
    assert image_or_fallback("", fallback="/avatar.svg") == "/avatar.svg"


def test_doctor_directory_applies_photo_fallback(client, doctor):
    (d,) = client.get("/doctors/").json()
    assert d["id"] == doctor
    assert d["photo_url"] == "/placeholder.svg"
    assert client.get("/doctors/missing").status_code == 404


def test_profile_is_created_on_first_access_and_patched(client, auth_headers):
    h = auth_headers("fresh-user")
    r = client.get("/profiles/me", headers=h)
    assert r.status_code == 200
    assert r.json()["avatar_url"] == "/placeholder.svg"

    r = client.patch("/profiles/me", json={"address": "12 Janpath", "city": "New Delhi"}, headers=h)
    assert r.json()["city"] == "New Delhi"
    assert r.json()["first_name"] is None
