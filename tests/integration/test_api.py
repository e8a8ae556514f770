"""
Integration tests for the API layer.

The coordinator and image storage are replaced through dependency overrides,
so no database or geocoding provider is needed.
"""
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from sneakers.api.dependencies import get_image_storage, get_sneaker_coordinator
from sneakers.api.main import app
from sneakers.domain.entities.sneaker import Location, Sneaker
from sneakers.domain.exceptions import (
    GeocodingError,
    OwnerNotFoundError,
    SneakerNotFoundError,
    TransientFailureError,
    UnauthorizedError,
)

AUTH = {"X-User-Id": "u1"}


def _make_sneaker() -> Sneaker:
    return Sneaker.create(
        owner_id="u1",
        title="Air Jordan 1",
        description="Deadstock, original box",
        address="1600 Amphitheatre Parkway",
        location=Location(lat=37.42, lng=-122.08),
        url="https://example.com/aj1",
        image="uploads/images/aj1.png",
    )


def _create_form() -> dict[str, str]:
    return {
        "title": "Air Jordan 1",
        "description": "Deadstock, original box",
        "address": "1600 Amphitheatre Parkway",
        "url": "https://example.com/aj1",
    }


@pytest.fixture()
def coordinator() -> MagicMock:
    mock = MagicMock()
    mock.get_by_id = AsyncMock()
    mock.get_by_owner = AsyncMock()
    mock.create = AsyncMock()
    mock.update = AsyncMock()
    mock.delete = AsyncMock()
    return mock


@pytest.fixture()
def storage() -> MagicMock:
    mock = MagicMock()
    mock.store = AsyncMock(return_value="uploads/images/new.png")
    mock.delete = AsyncMock()
    return mock


@pytest.fixture()
def client(coordinator: MagicMock, storage: MagicMock):
    app.dependency_overrides[get_sneaker_coordinator] = lambda: coordinator
    app.dependency_overrides[get_image_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestGetSneaker:
    def test_returns_sneaker(self, client: TestClient, coordinator: MagicMock) -> None:
        sneaker = _make_sneaker()
        coordinator.get_by_id = AsyncMock(return_value=sneaker)

        response = client.get(f"/api/sneakers/{sneaker.id}")

        assert response.status_code == 200
        data = response.json()["sneaker"]
        assert data["id"] == sneaker.id
        assert data["location"] == {"lat": 37.42, "lng": -122.08}

    def test_returns_404_if_not_found(self, client: TestClient, coordinator: MagicMock) -> None:
        coordinator.get_by_id = AsyncMock(side_effect=SneakerNotFoundError())

        response = client.get("/api/sneakers/missing")

        assert response.status_code == 404
        assert response.json()["detail"] == "Could not find sneaker for the provided id."

    def test_returns_500_on_transient_failure(
        self, client: TestClient, coordinator: MagicMock
    ) -> None:
        coordinator.get_by_id = AsyncMock(
            side_effect=TransientFailureError("Something went wrong, could not find a sneaker.")
        )

        response = client.get("/api/sneakers/s1")

        assert response.status_code == 500


class TestGetSneakersByOwner:
    def test_returns_list(self, client: TestClient, coordinator: MagicMock) -> None:
        coordinator.get_by_owner = AsyncMock(return_value=[_make_sneaker(), _make_sneaker()])

        response = client.get("/api/sneakers/user/u1")

        assert response.status_code == 200
        assert len(response.json()["sneakers"]) == 2
        coordinator.get_by_owner.assert_awaited_once_with("u1")

    def test_unknown_owner_returns_404(self, client: TestClient, coordinator: MagicMock) -> None:
        coordinator.get_by_owner = AsyncMock(side_effect=OwnerNotFoundError())

        response = client.get("/api/sneakers/user/ghost")

        assert response.status_code == 404


class TestCreateSneaker:
    def test_creates_for_caller(
        self, client: TestClient, coordinator: MagicMock, storage: MagicMock
    ) -> None:
        coordinator.create = AsyncMock(return_value=_make_sneaker())

        response = client.post(
            "/api/sneakers",
            data=_create_form(),
            files={"image": ("aj1.png", b"\x89PNG", "image/png")},
            headers=AUTH,
        )

        assert response.status_code == 201
        assert response.json()["sneaker"]["title"] == "Air Jordan 1"
        storage.store.assert_awaited_once_with("aj1.png", "image/png", b"\x89PNG")
        input_data = coordinator.create.await_args.args[0]
        assert input_data.owner_id == "u1"
        assert input_data.image == "uploads/images/new.png"

    def test_requires_caller_identity(self, client: TestClient, coordinator: MagicMock) -> None:
        response = client.post(
            "/api/sneakers",
            data=_create_form(),
            files={"image": ("aj1.png", b"\x89PNG", "image/png")},
        )

        assert response.status_code == 401
        coordinator.create.assert_not_awaited()

    def test_rejects_short_description(self, client: TestClient, coordinator: MagicMock) -> None:
        form = _create_form()
        form["description"] = "new"

        response = client.post(
            "/api/sneakers",
            data=form,
            files={"image": ("aj1.png", b"\x89PNG", "image/png")},
            headers=AUTH,
        )

        assert response.status_code == 422
        coordinator.create.assert_not_awaited()

    def test_geocoding_failure_returns_422_and_discards_image(
        self, client: TestClient, coordinator: MagicMock, storage: MagicMock
    ) -> None:
        coordinator.create = AsyncMock(side_effect=GeocodingError())

        response = client.post(
            "/api/sneakers",
            data=_create_form(),
            files={"image": ("aj1.png", b"\x89PNG", "image/png")},
            headers=AUTH,
        )

        assert response.status_code == 422
        assert response.json()["detail"] == "Could not find location for the specified address."
        storage.delete.assert_awaited_once_with("uploads/images/new.png")


    def test_image_write_failure_returns_500(
        self, client: TestClient, coordinator: MagicMock, storage: MagicMock
    ) -> None:
        storage.store = AsyncMock(
            side_effect=TransientFailureError("Storing image failed, please try again.")
        )

        response = client.post(
            "/api/sneakers",
            data=_create_form(),
            files={"image": ("aj1.png", b"\x89PNG", "image/png")},
            headers=AUTH,
        )

        assert response.status_code == 500
        assert response.json()["detail"] == "Storing image failed, please try again."
        coordinator.create.assert_not_awaited()


class TestUpdateSneaker:
    def test_updates(self, client: TestClient, coordinator: MagicMock) -> None:
        updated = _make_sneaker()
        updated.update_details(title="Yeezy 350", description="Worn twice")
        coordinator.update = AsyncMock(return_value=updated)

        response = client.patch(
            f"/api/sneakers/{updated.id}",
            json={"title": "Yeezy 350", "description": "Worn twice"},
            headers=AUTH,
        )

        assert response.status_code == 200
        assert response.json()["sneaker"]["title"] == "Yeezy 350"
        input_data = coordinator.update.await_args.args[0]
        assert input_data.caller_id == "u1"
        assert input_data.sneaker_id == updated.id

    def test_non_owner_gets_401(self, client: TestClient, coordinator: MagicMock) -> None:
        coordinator.update = AsyncMock(
            side_effect=UnauthorizedError("You are not allowed to edit this sneaker.")
        )

        response = client.patch(
            "/api/sneakers/s1",
            json={"title": "Hijacked", "description": "Not mine"},
            headers={"X-User-Id": "u2"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "You are not allowed to edit this sneaker."

    def test_rejects_empty_title(self, client: TestClient, coordinator: MagicMock) -> None:
        response = client.patch(
            "/api/sneakers/s1",
            json={"title": "", "description": "Worn twice"},
            headers=AUTH,
        )

        assert response.status_code == 422
        coordinator.update.assert_not_awaited()


class TestDeleteSneaker:
    def test_deletes(self, client: TestClient, coordinator: MagicMock) -> None:
        response = client.delete("/api/sneakers/s1", headers=AUTH)

        assert response.status_code == 200
        assert response.json() == {"message": "Deleted sneaker."}
        coordinator.delete.assert_awaited_once_with("s1", "u1")

    def test_not_found(self, client: TestClient, coordinator: MagicMock) -> None:
        coordinator.delete = AsyncMock(side_effect=SneakerNotFoundError())

        response = client.delete("/api/sneakers/missing", headers=AUTH)

        assert response.status_code == 404
