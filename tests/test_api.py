"""Integration tests for the BookScout API."""

from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from bookscout.api.dependencies import get_recommender
from bookscout.main import app
from bookscout.ports.recommender import RecommenderPort

BASE = "http://test"


@pytest.fixture
async def client(setup_db):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE) as c:
        yield c


@pytest.fixture
async def auth_client(client: AsyncClient):
    """Register a user and return a client with auth headers."""
    email = f"test_{uuid4().hex[:8]}@example.com"
    username = f"user_{uuid4().hex[:8]}"
    await client.post(
        "/auth/signup",
        json={"email": email, "username": username, "password": "securepass123"},
    )
    resp = await client.post(
        "/auth/login",
        json={"email": email, "password": "securepass123"},
    )
    token = resp.json()["access_token"]
    client.headers["Authorization"] = f"Bearer {token}"
    return client


async def view(client: AsyncClient, book_id: int) -> None:
    resp = await client.post(
        "/interactions", json={"event": "view_details", "book_id": book_id}
    )
    assert resp.status_code == 201


async def wishlist(client: AsyncClient, book_id: int) -> None:
    resp = await client.post("/wishlist", json={"book_id": book_id})
    assert resp.status_code == 201


# ── Auth Tests ─────────────────────────────────────


async def test_signup(client: AsyncClient):
    resp = await client.post(
        "/auth/signup",
        json={
            "email": f"new_{uuid4().hex[:8]}@example.com",
            "username": f"new_{uuid4().hex[:8]}",
            "password": "strongpass123",
        },
    )
    assert resp.status_code == 201
    data = resp.json()
    assert "id" in data
    assert "hashed_password" not in data


async def test_signup_duplicate_email(client: AsyncClient):
    email = f"dup_{uuid4().hex[:8]}@example.com"
    payload = {"email": email, "username": "user1", "password": "strongpass123"}
    await client.post("/auth/signup", json=payload)
    payload["username"] = "user2"
    resp = await client.post("/auth/signup", json=payload)
    assert resp.status_code == 409
    assert resp.json()["detail"] == "Email already registered"


async def test_signup_duplicate_username(client: AsyncClient):
    payload = {"email": "first@example.com", "username": "reader", "password": "strongpass123"}
    await client.post("/auth/signup", json=payload)
    payload["email"] = "second@example.com"
    resp = await client.post("/auth/signup", json=payload)
    assert resp.status_code == 409
    assert resp.json()["detail"] == "Username already taken"


async def test_signup_username_checked_before_email(client: AsyncClient):
    payload = {"email": "same@example.com", "username": "same", "password": "strongpass123"}
    await client.post("/auth/signup", json=payload)
    resp = await client.post("/auth/signup", json=payload)
    assert resp.json()["detail"] == "Username already taken"


@pytest.mark.parametrize(
    "payload",
    [
        {"email": "a@example.com", "username": "ab", "password": "strongpass"},
        {"email": "a@example.com", "username": "abc", "password": "short"},
        {"email": "not-an-email", "username": "abc", "password": "strongpass"},
    ],
)
async def test_signup_validation(client: AsyncClient, payload):
    resp = await client.post("/auth/signup", json=payload)
    assert resp.status_code == 422


async def test_login_invalid_credentials(client: AsyncClient):
    resp = await client.post(
        "/auth/login",
        json={"email": "nonexistent@example.com", "password": "wrong"},
    )
    assert resp.status_code == 401


async def test_profile(auth_client: AsyncClient):
    resp = await auth_client.get("/auth/profile")
    assert resp.status_code == 200
    assert "email" in resp.json()


async def test_bad_token_rejected(client: AsyncClient):
    resp = await client.get(
        "/auth/profile", headers={"Authorization": "Bearer not-a-token"}
    )
    assert resp.status_code == 401


async def test_test_identity_header(client: AsyncClient):
    resp = await client.post(
        "/auth/signup",
        json={"email": "hdr@example.com", "username": "header", "password": "strongpass"},
    )
    user_id = resp.json()["id"]
    resp = await client.get("/auth/profile", headers={"X-Test-User-Id": user_id})
    assert resp.status_code == 200
    assert resp.json()["username"] == "header"

    resp = await client.get("/auth/profile", headers={"X-Test-User-Id": str(uuid4())})
    assert resp.status_code == 401


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("get", "/recommendations"),
        ("get", "/wishlist"),
        ("post", "/wishlist"),
        ("delete", "/wishlist/1"),
        ("post", "/interactions"),
    ],
)
async def test_unauthenticated_access(client: AsyncClient, method, path):
    resp = await client.request(method, path)
    assert resp.status_code == 401


# ── Books Tests ────────────────────────────────────


async def test_book_details(client: AsyncClient, catalog):
    resp = await client.get("/books/10")
    assert resp.status_code == 200
    data = resp.json()
    assert data["title"] == "Ten"
    assert data["authors"] == "Alice, Bob"
    assert data["isbn13"] == "9780000000010"
    assert data["publication_year"] == 2001
    assert data["similar_books"] == [20]


async def test_book_details_default_author(client: AsyncClient, catalog):
    resp = await client.get("/books/40")
    assert resp.json()["authors"] == "Author"


async def test_book_details_malformed_similarity(client: AsyncClient, catalog):
    resp = await client.get("/books/5")
    assert resp.status_code == 200
    assert resp.json()["similar_books"] == []


async def test_book_not_found(client: AsyncClient, catalog):
    resp = await client.get("/books/12345")
    assert resp.status_code == 404


async def test_trending(client: AsyncClient, catalog):
    resp = await client.get("/books/trending")
    assert resp.status_code == 200
    ids = [b["book_id"] for b in resp.json()]
    # Unrated and zero-count books are left out; equal counts fall back to rating.
    assert ids == [10, 2, 1, 3, 30, 40]


async def test_category(client: AsyncClient, catalog):
    resp = await client.get("/books/category/FICTION")
    assert resp.status_code == 200
    assert [b["book_id"] for b in resp.json()] == [10, 1, 3]


async def test_invalid_category(client: AsyncClient, catalog):
    resp = await client.get("/books/category/cookbooks")
    assert resp.status_code == 400
    assert "fiction" in resp.json()["detail"]


# ── Wishlist Tests ─────────────────────────────────


async def test_wishlist_add_list_remove(auth_client: AsyncClient, catalog):
    await wishlist(auth_client, 1)
    await wishlist(auth_client, 10)

    resp = await auth_client.get("/wishlist")
    assert resp.status_code == 200
    books = resp.json()["wishlist"]
    assert {b["book_id"] for b in books} == {1, 10}
    assert {b["authors"] for b in books} == {"Alice", "Alice, Bob"}

    resp = await auth_client.delete("/wishlist/1")
    assert resp.status_code == 204
    resp = await auth_client.get("/wishlist")
    assert [b["book_id"] for b in resp.json()["wishlist"]] == [10]


async def test_wishlist_lists_full_details(auth_client: AsyncClient, catalog):
    await wishlist(auth_client, 10)

    resp = await auth_client.get("/wishlist")
    [entry] = resp.json()["wishlist"]
    assert entry["publisher"] == "Pub"
    assert entry["publication_year"] == 2001
    assert entry["num_pages"] == 321
    assert entry["language_code"] == "eng"
    assert entry["similar_books"] == [20]


async def test_wishlist_duplicate(auth_client: AsyncClient, catalog):
    await wishlist(auth_client, 1)
    resp = await auth_client.post("/wishlist", json={"book_id": 1})
    assert resp.status_code == 409


async def test_wishlist_unknown_book(auth_client: AsyncClient, catalog):
    resp = await auth_client.post("/wishlist", json={"book_id": 12345})
    assert resp.status_code == 404


async def test_wishlist_missing_book_id(auth_client: AsyncClient, catalog):
    resp = await auth_client.post("/wishlist", json={})
    assert resp.status_code == 422


async def test_wishlist_remove_absent(auth_client: AsyncClient, catalog):
    resp = await auth_client.delete("/wishlist/1")
    assert resp.status_code == 404


# ── Interaction Tests ──────────────────────────────


async def test_log_interaction(auth_client: AsyncClient):
    resp = await auth_client.post(
        "/interactions", json={"event": "view_details", "book_id": 3}
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data["event"] == "view_details"
    assert data["book_id"] == 3


async def test_interaction_requires_event(auth_client: AsyncClient):
    resp = await auth_client.post("/interactions", json={"book_id": 3})
    assert resp.status_code == 422


# ── Recommendation Tests ───────────────────────────


async def test_recommendations_empty(auth_client: AsyncClient, catalog):
    resp = await auth_client.get("/recommendations")
    assert resp.status_code == 200
    assert resp.json() == {"recommendations": []}


async def test_recommendations_ranked(auth_client: AsyncClient, catalog):
    await wishlist(auth_client, 1)
    await wishlist(auth_client, 2)
    await view(auth_client, 3)
    await view(auth_client, 3)

    resp = await auth_client.get("/recommendations")
    assert resp.status_code == 200
    recs = resp.json()["recommendations"]
    # 10: 2+2, 20: 2+1, 30: 2+1, 40: 1; 50 has no catalog record.
    assert [b["book_id"] for b in recs] == [10, 20, 30, 40]
    assert recs[0]["authors"] == "Alice, Bob"
    assert recs[2]["authors"] == "Author"
    assert set(recs[0]) == {
        "book_id",
        "title",
        "average_rating",
        "ratings_count",
        "description",
        "authors",
        "isbn13",
        "genre",
    }


async def test_recommendations_exclude_wishlist(auth_client: AsyncClient, catalog):
    await wishlist(auth_client, 1)
    await wishlist(auth_client, 10)

    resp = await auth_client.get("/recommendations")
    ids = [b["book_id"] for b in resp.json()["recommendations"]]
    assert 10 not in ids
    assert ids == [20]


async def test_recommendations_only_count_view_details(auth_client: AsyncClient, catalog):
    resp = await auth_client.post(
        "/interactions", json={"event": "add_to_cart", "book_id": 3}
    )
    assert resp.status_code == 201

    resp = await auth_client.get("/recommendations")
    assert resp.json()["recommendations"] == []


async def test_recommendations_malformed_seed(auth_client: AsyncClient, catalog):
    await wishlist(auth_client, 5)
    await view(auth_client, 10)

    resp = await auth_client.get("/recommendations")
    assert resp.status_code == 200
    assert [b["book_id"] for b in resp.json()["recommendations"]] == [20]


async def test_recommendations_overflowing_seed(auth_client: AsyncClient, catalog):
    await wishlist(auth_client, 6)
    await wishlist(auth_client, 1)

    resp = await auth_client.get("/recommendations")
    assert resp.status_code == 200
    assert [b["book_id"] for b in resp.json()["recommendations"]] == [10, 20]


async def test_recommendations_are_per_user(client: AsyncClient, catalog):
    users = []
    for name in ("alpha", "beta"):
        resp = await client.post(
            "/auth/signup",
            json={"email": f"{name}@example.com", "username": name, "password": "strongpass"},
        )
        users.append({"X-Test-User-Id": resp.json()["id"]})

    resp = await client.post("/wishlist", json={"book_id": 1}, headers=users[0])
    assert resp.status_code == 201

    resp = await client.get("/recommendations", headers=users[1])
    assert resp.json()["recommendations"] == []
    resp = await client.get("/recommendations", headers=users[0])
    assert [b["book_id"] for b in resp.json()["recommendations"]] == [10, 20]


class FailingRecommender(RecommenderPort):
    async def recommend(self, user_id):
        raise OperationalError("SELECT 1", {}, Exception("database is gone"))


async def test_recommendations_storage_failure(auth_client: AsyncClient):
    app.dependency_overrides[get_recommender] = lambda: FailingRecommender()
    try:
        resp = await auth_client.get("/recommendations")
    finally:
        app.dependency_overrides.pop(get_recommender, None)
    assert resp.status_code == 500
    assert resp.json() == {"detail": "Internal storage error"}


# ── Health Check ───────────────────────────────────


async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"
