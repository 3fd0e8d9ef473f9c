"""
Integration tests for the REST API.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import sessionmaker

from catalog.config import clear_settings_cache
from catalog.domain.identifiers import is_valid_object_id
from catalog.presentation.api.dependencies import (
    get_book_read_service,
    get_db_session,
    get_notification_sender,
)
from catalog.presentation.api.main import create_app

AUTH = {"X-API-Key": "test-api-key"}


@pytest.fixture
def app(async_engine, mock_notification_sender):
    factory = sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_session():
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def override_sender():
        yield mock_notification_sender

    application = create_app()
    application.dependency_overrides[get_db_session] = override_session
    application.dependency_overrides[get_notification_sender] = override_sender
    return application


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def _create_book(client, candidate) -> str:
    response = await client.post("/api/v1/books", json=candidate, headers=AUTH)
    assert response.status_code == 201
    return response.headers["Location"].rsplit("/", 1)[-1]


class TestHealth:
    """Tests for the health endpoint."""

    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
        assert response.headers["X-Content-Type-Options"] == "nosniff"


class TestAuthentication:
    """Tests for the API key middleware."""

    @pytest.mark.asyncio
    async def test_write_without_key(self, client, book_candidate):
        response = await client.post("/api/v1/books", json=book_candidate())

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_write_with_wrong_key(self, client, book_candidate):
        response = await client.post(
            "/api/v1/books", json=book_candidate(), headers={"X-API-Key": "wrong"},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_key_not_configured(self, client, monkeypatch, book_candidate):
        monkeypatch.delenv("SECURITY_API_KEY")
        clear_settings_cache()

        response = await client.post("/api/v1/books", json=book_candidate(), headers=AUTH)

        assert response.status_code == 503

    @pytest.mark.asyncio
    async def test_reads_are_public(self, client, book_candidate):
        book_id = await _create_book(client, book_candidate())

        response = await client.get(f"/api/v1/books/{book_id}")

        assert response.status_code == 200


class TestCreateBook:
    """Tests for POST /api/v1/books."""

    @pytest.mark.asyncio
    async def test_create(self, client, book_candidate):
        response = await client.post("/api/v1/books", json=book_candidate(), headers=AUTH)

        assert response.status_code == 201
        location = response.headers["Location"]
        assert location.startswith("http://test/api/v1/books/")
        assert is_valid_object_id(location.rsplit("/", 1)[-1])

    @pytest.mark.asyncio
    async def test_create_invalid(self, client, book_candidate):
        response = await client.post(
            "/api/v1/books", json=book_candidate(rating=7, kind="AUDIO"), headers=AUTH,
        )

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "INVALID"
        assert body["messages"] == [
            "A rating must be between 0 and 5.",
            "The kind of a book must be KINDLE or PRINT.",
        ]

    @pytest.mark.asyncio
    async def test_create_duplicate_title(self, client, book_candidate):
        await _create_book(client, book_candidate())

        response = await client.post(
            "/api/v1/books", json=book_candidate(isbn="0-306-40615-2"), headers=AUTH,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "KEY_EXISTS"

    @pytest.mark.asyncio
    async def test_create_duplicate_isbn(self, client, book_candidate):
        await _create_book(client, book_candidate())

        response = await client.post(
            "/api/v1/books", json=book_candidate(title="Beta"), headers=AUTH,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "EXTERNAL_ID_EXISTS"


class TestGetBook:
    """Tests for GET /api/v1/books."""

    @pytest.mark.asyncio
    async def test_get_by_id(self, client, book_candidate):
        book_id = await _create_book(client, book_candidate())

        response = await client.get(f"/api/v1/books/{book_id}")

        assert response.status_code == 200
        assert response.headers["ETag"] == '"0"'
        body = response.json()
        assert body["id"] == book_id
        assert body["title"] == "Alpha"
        assert body["kind"] == "PRINT"
        assert body["published"] == "2022-02-01"
        assert body["version"] == 0

    @pytest.mark.asyncio
    async def test_not_modified(self, client, book_candidate):
        book_id = await _create_book(client, book_candidate())

        response = await client.get(f"/api/v1/books/{book_id}", headers={"If-None-Match": '"0"'})

        assert response.status_code == 304

    @pytest.mark.asyncio
    async def test_stale_if_none_match(self, client, book_candidate):
        book_id = await _create_book(client, book_candidate())

        response = await client.get(f"/api/v1/books/{book_id}", headers={"If-None-Match": '"7"'})

        assert response.status_code == 200

    @pytest.mark.asyncio
    @pytest.mark.parametrize("book_id", ["0" * 24, "malformed"])
    async def test_not_found(self, client, book_id):
        response = await client.get(f"/api/v1/books/{book_id}")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_find(self, client, book_candidate):
        await _create_book(client, book_candidate())
        await _create_book(client, book_candidate(title="Beta", isbn="0-306-40615-2", keywords=[]))

        response = await client.get("/api/v1/books", params={"javascript": "true"})

        assert response.status_code == 200
        assert [b["title"] for b in response.json()] == ["Alpha"]

    @pytest.mark.asyncio
    async def test_find_all_sorted(self, client, book_candidate):
        await _create_book(client, book_candidate(title="Beta", isbn="0-306-40615-2"))
        await _create_book(client, book_candidate())

        response = await client.get("/api/v1/books")

        assert [b["title"] for b in response.json()] == ["Alpha", "Beta"]

    @pytest.mark.asyncio
    async def test_find_nothing(self, client, book_candidate):
        await _create_book(client, book_candidate())

        assert (await client.get("/api/v1/books", params={"unknown": "x"})).status_code == 404
        assert (await client.get("/api/v1/books", params={"title": "zzz"})).status_code == 404


class TestUpdateBook:
    """Tests for PUT /api/v1/books/{id}."""

    @pytest.mark.asyncio
    async def test_update(self, client, book_candidate):
        book_id = await _create_book(client, book_candidate())

        response = await client.put(
            f"/api/v1/books/{book_id}",
            json=book_candidate(price=20.0),
            headers={**AUTH, "If-Match": '"0"'},
        )

        assert response.status_code == 204
        assert response.headers["ETag"] == '"1"'
        body = (await client.get(f"/api/v1/books/{book_id}")).json()
        assert body["price"] == 20.0
        assert body["version"] == 1

    @pytest.mark.asyncio
    async def test_put_back_read_body(self, client, book_candidate):
        book_id = await _create_book(client, book_candidate())
        read = await client.get(f"/api/v1/books/{book_id}")
        body = {**read.json(), "price": 30.0}

        response = await client.put(
            f"/api/v1/books/{book_id}",
            json=body,
            headers={**AUTH, "If-Match": read.headers["ETag"]},
        )

        assert response.status_code == 204
        assert response.headers["ETag"] == '"1"'
        stored = (await client.get(f"/api/v1/books/{book_id}")).json()
        assert stored["price"] == 30.0
        assert stored["version"] == 1

    @pytest.mark.asyncio
    async def test_negative_body_version(self, client, book_candidate):
        book_id = await _create_book(client, book_candidate())

        response = await client.put(
            f"/api/v1/books/{book_id}",
            json=book_candidate(version=-1),
            headers={**AUTH, "If-Match": '"0"'},
        )

        assert response.status_code == 400
        assert response.json()["messages"] == ["The version must be at least 0."]

    @pytest.mark.asyncio
    async def test_missing_if_match(self, client, book_candidate):
        book_id = await _create_book(client, book_candidate())

        response = await client.put(f"/api/v1/books/{book_id}", json=book_candidate(), headers=AUTH)

        assert response.status_code == 428

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token,code", [
        ('"x"', "VERSION_INVALID"),
        ("0", "VERSION_INVALID"),
    ])
    async def test_invalid_version(self, client, book_candidate, token, code):
        book_id = await _create_book(client, book_candidate())

        response = await client.put(
            f"/api/v1/books/{book_id}", json=book_candidate(), headers={**AUTH, "If-Match": token},
        )

        assert response.status_code == 412
        assert response.json()["code"] == code

    @pytest.mark.asyncio
    async def test_outdated_version(self, client, book_candidate):
        book_id = await _create_book(client, book_candidate())
        headers = {**AUTH, "If-Match": '"0"'}
        await client.put(f"/api/v1/books/{book_id}", json=book_candidate(), headers=headers)

        response = await client.put(f"/api/v1/books/{book_id}", json=book_candidate(), headers=headers)

        assert response.status_code == 412
        assert response.json()["code"] == "VERSION_OUTDATED"

    @pytest.mark.asyncio
    async def test_unknown_id(self, client, book_candidate):
        response = await client.put(
            f"/api/v1/books/{'0' * 24}", json=book_candidate(), headers={**AUTH, "If-Match": '"0"'},
        )

        assert response.status_code == 412
        assert response.json()["code"] == "NOT_EXISTS"

    @pytest.mark.asyncio
    async def test_invalid_body(self, client, book_candidate):
        book_id = await _create_book(client, book_candidate())

        response = await client.put(
            f"/api/v1/books/{book_id}",
            json=book_candidate(discount=2),
            headers={**AUTH, "If-Match": '"0"'},
        )

        assert response.status_code == 400
        assert response.json()["messages"] == ["The discount must be a value between 0 and 1."]


class TestDeleteBook:
    """Tests for DELETE /api/v1/books/{id}."""

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, client, book_candidate):
        book_id = await _create_book(client, book_candidate())

        first = await client.delete(f"/api/v1/books/{book_id}", headers=AUTH)
        second = await client.delete(f"/api/v1/books/{book_id}", headers=AUTH)

        assert first.status_code == 204
        assert second.status_code == 204
        assert (await client.get(f"/api/v1/books/{book_id}")).status_code == 404


class TestCars:
    """Tests for /api/v1/cars."""

    @pytest.mark.asyncio
    async def test_create_and_find(self, client, car_candidate):
        response = await client.post("/api/v1/cars", json=car_candidate(), headers=AUTH)
        assert response.status_code == 201

        response = await client.get("/api/v1/cars", params={"esslingen": "true", "brand": "BMW"})

        assert response.status_code == 200
        cars = response.json()
        assert [c["model"] for c in cars] == ["Roadster"]
        assert cars[0]["car_type"] == "SPORTS_CAR"
        assert cars[0]["plants"] == ["ESSLINGEN"]

    @pytest.mark.asyncio
    async def test_frankfurt_filter(self, client, car_candidate):
        await client.post("/api/v1/cars", json=car_candidate(), headers=AUTH)

        response = await client.get("/api/v1/cars", params={"frankfurt": "true"})

        assert response.status_code == 404


class TestErrorHandling:
    """Tests for the global exception handler."""

    @pytest.mark.asyncio
    async def test_unhandled_exception(self, app):
        async def broken_service():
            raise RuntimeError("storage unavailable")

        app.dependency_overrides[get_book_read_service] = broken_service
        transport = ASGITransport(app=app, raise_app_exceptions=False)

        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/api/v1/books")

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}
