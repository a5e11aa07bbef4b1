import pytest

from marketplace.db.models.category import DEFAULT_CATEGORIES, seed_categories
from marketplace.db.models.service import Service


def review_service(client, book, set_status, vendor_headers, buyer_headers, service_id, rating):
    booking = book(buyer_headers, service_id)
    assert set_status(vendor_headers, booking["id"], "completed", totalAmount=40).status_code == 200
    response = client.post(
        "/api/reviews",
        json={"bookingId": booking["id"], "rating": rating},
        headers=buyer_headers,
    )
    assert response.status_code == 201, response.text


def test_categories_seeded_and_sorted(client, db):
    response = client.get("/api/categories")
    assert response.status_code == 200
    names = [c["name"] for c in response.json()]
    assert len(names) == len(DEFAULT_CATEGORIES)
    assert names == sorted(names)

    # seeding again adds nothing
    assert seed_categories(db) == 0


def test_create_service_requires_vendor(client, register):
    response = client.post(
        "/api/services",
        json={"title": "T", "description": "D", "pricePerHour": 25, "categoryId": "tutoring"},
    )
    assert response.status_code == 401

    _, headers = register("buyer@shop.com")
    response = client.post(
        "/api/services",
        json={"title": "T", "description": "D", "pricePerHour": 25, "categoryId": "tutoring"},
        headers=headers,
    )
    assert response.status_code == 403
    assert response.json() == {"error": "Only vendors can perform this action"}


def test_create_service(client, make_vendor):
    vendor, headers = make_vendor("vendor@shop.com")
    response = client.post(
        "/api/services",
        json={"title": "T", "description": "D", "pricePerHour": 25, "categoryId": "tutoring"},
        headers=headers,
    )
    assert response.status_code == 201
    payload = response.json()
    assert payload["message"] == "Service created successfully"
    service = payload["service"]
    assert service["price"] == 25
    assert service["category"] == "tutoring"
    assert service["vendorId"] == vendor["id"]
    assert service["photos"] == ["📋"]


@pytest.mark.parametrize(
    "body",
    [
        {"title": "T", "description": "D", "pricePerHour": 0, "categoryId": "tutoring"},
        {"title": "T", "description": "D", "pricePerHour": "cheap", "categoryId": "tutoring"},
        {"title": "", "description": "D", "pricePerHour": 10, "categoryId": "tutoring"},
        {"description": "D", "pricePerHour": 10, "categoryId": "tutoring"},
    ],
)
def test_create_service_invalid_body(client, make_vendor, body):
    _, headers = make_vendor("vendor@shop.com")
    response = client.post("/api/services", json=body, headers=headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid input"


def test_create_service_unknown_category(client, make_vendor):
    _, headers = make_vendor("vendor@shop.com")
    response = client.post(
        "/api/services",
        json={"title": "T", "description": "D", "pricePerHour": 10, "categoryId": "astrology"},
        headers=headers,
    )
    assert response.status_code == 404
    assert response.json() == {"error": "Category not found"}


def test_listing_row_shape_without_reviews(client, make_vendor, create_service):
    vendor, headers = make_vendor("vendor@shop.com", name="Vera", bio="Patient tutor")
    created = create_service(headers)

    response = client.get("/api/services")
    assert response.status_code == 200
    [item] = response.json()
    assert item["id"] == created["id"]
    assert item["price"] == 25.0
    assert item["category"] == "tutoring"
    assert item["categoryName"] == "Tutoring"
    assert item["categoryIcon"] == "📚"
    assert item["vendorId"] == vendor["id"]
    assert item["vendorName"] == "Vera"
    assert item["vendorBio"] == "Patient tutor"
    assert item["photos"] == ["📋"]
    assert item["rating"] == 0
    assert item["reviewCount"] == 0
    assert item["location"] == "Leuven"
    assert item["createdAt"]


def test_listing_excludes_inactive(client, db, make_vendor, create_service):
    _, headers = make_vendor("vendor@shop.com")
    hidden = create_service(headers, title="Hidden")
    shown = create_service(headers, title="Shown")

    db.get(Service, hidden["id"]).is_active = False
    db.commit()

    ids = [item["id"] for item in client.get("/api/services").json()]
    assert ids == [shown["id"]]


def test_listing_category_filter(client, make_vendor, create_service):
    _, headers = make_vendor("vendor@shop.com")
    tutoring = create_service(headers, categoryId="tutoring")
    cleaning = create_service(headers, categoryId="cleaning")

    everything = {tutoring["id"], cleaning["id"]}
    assert {s["id"] for s in client.get("/api/services").json()} == everything
    assert {s["id"] for s in client.get("/api/services", params={"category": "all"}).json()} == everything

    only_tutoring = client.get("/api/services", params={"category": "tutoring"}).json()
    assert [s["id"] for s in only_tutoring] == [tutoring["id"]]

    assert client.get("/api/services", params={"category": "moving"}).json() == []


def test_listing_search_is_case_insensitive(client, make_vendor, create_service):
    _, headers = make_vendor("vendor@shop.com")
    by_title = create_service(headers, title="Piano lessons", description="Beginners welcome")
    by_description = create_service(headers, title="Lessons", description="Classical PIANO and theory")
    create_service(headers, title="Window cleaning", description="Streak free")

    found = client.get("/api/services", params={"search": "piano"}).json()
    assert {s["id"] for s in found} == {by_title["id"], by_description["id"]}


def test_listing_search_wildcards_match_literally(client, make_vendor, create_service):
    _, headers = make_vendor("vendor@shop.com")
    create_service(headers, title="Piano", description="Lessons for beginners")
    discount = create_service(headers, title="Guitar", description="50% off the first lesson")

    assert client.get("/api/services", params={"search": "_"}).json() == []
    assert client.get("/api/services", params={"search": "Pi_no"}).json() == []

    found = client.get("/api/services", params={"search": "50%"}).json()
    assert [s["id"] for s in found] == [discount["id"]]

    found = client.get("/api/services", params={"search": "%"}).json()
    assert [s["id"] for s in found] == [discount["id"]]


def test_listing_price_bounds(client, make_vendor, create_service):
    _, headers = make_vendor("vendor@shop.com")
    cheap = create_service(headers, pricePerHour=10)
    mid = create_service(headers, pricePerHour=25)
    pricey = create_service(headers, pricePerHour=40)

    def ids(**params):
        return {s["id"] for s in client.get("/api/services", params=params).json()}

    assert ids(minPrice=20, maxPrice=30) == {mid["id"]}
    assert ids(minPrice=25) == {mid["id"], pricey["id"]}
    assert ids(maxPrice=25) == {cheap["id"], mid["id"]}


@pytest.mark.parametrize("param", ["minPrice", "maxPrice", "minRating"])
def test_listing_rejects_non_numeric_filters(client, param):
    response = client.get("/api/services", params={param: "abc"})
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid input"


def test_listing_min_rating(client, register, make_vendor, create_service, book, set_status):
    _, vendor_headers = make_vendor("vendor@shop.com")
    _, buyer_headers = register("buyer@shop.com")
    great = create_service(vendor_headers, title="Great")
    poor = create_service(vendor_headers, title="Poor")
    unrated = create_service(vendor_headers, title="Unrated")

    review_service(client, book, set_status, vendor_headers, buyer_headers, great["id"], 5)
    review_service(client, book, set_status, vendor_headers, buyer_headers, great["id"], 4)
    review_service(client, book, set_status, vendor_headers, buyer_headers, poor["id"], 2)

    listing = {s["id"]: s for s in client.get("/api/services").json()}
    assert listing[great["id"]]["rating"] == 4.5
    assert listing[great["id"]]["reviewCount"] == 2
    assert listing[poor["id"]]["rating"] == 2
    assert listing[unrated["id"]]["rating"] == 0

    above_three = client.get("/api/services", params={"minRating": 3}).json()
    assert [s["id"] for s in above_three] == [great["id"]]
    assert all(s["rating"] >= 3 for s in above_three)

    assert len(client.get("/api/services", params={"minRating": 0}).json()) == 3


def test_listing_pagination_newest_first(client, make_vendor, create_service):
    _, headers = make_vendor("vendor@shop.com")
    created = [create_service(headers, title=f"Service {n}")["id"] for n in range(3)]

    first_page = client.get("/api/services", params={"limit": 2}).json()
    second_page = client.get("/api/services", params={"limit": 2, "offset": 2}).json()
    assert [s["id"] for s in first_page] == [created[2], created[1]]
    assert [s["id"] for s in second_page] == [created[0]]

    assert client.get("/api/services", params={"limit": 0}).status_code == 400
    assert client.get("/api/services", params={"offset": -1}).status_code == 400


def test_service_reviews(client, register, make_vendor, create_service, book, set_status):
    _, vendor_headers = make_vendor("vendor@shop.com")
    _, buyer_headers = register("buyer@shop.com")
    service = create_service(vendor_headers)
    review_service(client, book, set_status, vendor_headers, buyer_headers, service["id"], 4)

    response = client.get(f"/api/services/{service['id']}/reviews")
    assert response.status_code == 200
    [review] = response.json()
    assert review["rating"] == 4
    assert review["serviceId"] == service["id"]

    assert client.get("/api/services/9999/reviews").status_code == 404
