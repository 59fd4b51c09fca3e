"""
Route tests for the admin listing endpoints.

Runs the real use cases against InMemoryCarRepository and a
LocalFileStorage rooted in a temporary directory.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from httpx import Response

from car_market.adapters.in_memory_car_repository import InMemoryCarRepository
from car_market.adapters.local_file_storage import LocalFileStorage
from car_market.domain.car import Car, CarCategory, CarSpecification, CarType
from car_market.entrypoints.http.dependencies import get_car_repository, get_file_storage
from car_market.entrypoints.http.exception_handlers import register_exception_handlers
from car_market.entrypoints.http.routes.admin_cars import router

JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF"


@pytest.fixture
def repository() -> InMemoryCarRepository:
    return InMemoryCarRepository(
        cars=[
            Car(
                id=1,
                title="Kia Rio 2022",
                description="City car",
                type=CarType.USED,
                category=CarCategory.ECONOMY,
                make="Kia",
                model="Rio",
                year=2022,
                price=Decimal("12000.00"),
                contact_number="+966500000001",
                specifications=(CarSpecification(id=1, car_id=1, key="Airbags", value="6"),),
            )
        ]
    )


@pytest.fixture
def storage(tmp_path: Path) -> LocalFileStorage:
    return LocalFileStorage(root=tmp_path, clock=lambda: 1718000000000)


@pytest.fixture
def client(repository: InMemoryCarRepository, storage: LocalFileStorage) -> TestClient:
    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(router, prefix="/v1")

    test_app.dependency_overrides[get_car_repository] = lambda: repository
    test_app.dependency_overrides[get_file_storage] = lambda: storage
    return TestClient(test_app, raise_server_exceptions=False)


def _create_payload(**overrides: object) -> dict:
    payload: dict[str, object] = {
        "title": "Toyota Camry 2020",
        "description": "One owner, full service history",
        "type": "used",
        "category": "SEDAN",
        "make": "Toyota",
        "model": "Camry",
        "year": 2020,
        "price": "27500.00",
        "contact_number": "+966500000000",
        "dimensions": {"length": "4.88", "width": "1.84"},
        "specifications": [{"key": "Sunroof", "value": "Yes"}],
    }
    payload.update(overrides)
    return payload


def _upload(
    client: TestClient,
    car_id: int = 1,
    file: tuple[str, bytes, str] = ("Front View.JPG", JPEG_BYTES, "image/jpeg"),
) -> Response:
    return client.post(
        f"/v1/admin/cars/{car_id}/images",
        files={"file": file},
        data={"is_main": "true"},
    )


# ==============================================================================
# POST /v1/admin/cars
# ==============================================================================


class TestCreateCar:
    def test_creates_listing(self, client: TestClient, repository: InMemoryCarRepository) -> None:
        response = client.post("/v1/admin/cars", json=_create_payload())

        assert response.status_code == 201
        body = response.json()
        assert body["id"] == 2
        assert body["type"] == "USED"
        assert body["price"] == "27500.00"
        assert body["views"] == 0
        assert body["dimensions"] == {"length": "4.88", "width": "1.84", "height": None}
        assert [(s["key"], s["value"]) for s in body["specifications"]] == [("Sunroof", "Yes")]
        assert repository.get_by_id(2) is not None

    def test_unknown_category_returns_422(self, client: TestClient) -> None:
        response = client.post("/v1/admin/cars", json=_create_payload(category="VAN"))

        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "category"

    def test_malformed_price_is_rejected_at_the_boundary(self, client: TestClient) -> None:
        response = client.post("/v1/admin/cars", json=_create_payload(price="27,500"))

        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "price"

    def test_business_rules_are_enforced(self, client: TestClient) -> None:
        response = client.post(
            "/v1/admin/cars", json=_create_payload(year=1850, price="0", title="  ")
        )

        assert response.status_code == 422
        fields = {error["field"] for error in response.json()["errors"]}
        assert fields == {"title", "year", "price"}

    def test_missing_required_field_returns_422(self, client: TestClient) -> None:
        payload = _create_payload()
        del payload["make"]

        response = client.post("/v1/admin/cars", json=payload)

        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "make"

    @pytest.mark.parametrize(
        ("overrides", "field"),
        [
            ({"title": "T" * 201}, "title"),
            ({"make": "M" * 51}, "make"),
            ({"fuel": "F" * 31}, "fuel"),
            ({"price": "12345678901.00"}, "price"),
            ({"price": "100.123"}, "price"),
            ({"doors": 2**31}, "doors"),
            ({"mileage": 2**31}, "mileage"),
            ({"dimensions": {"length": "1234567.00"}}, "dimensions.length"),
            ({"specifications": [{"key": "K" * 101, "value": "Yes"}]}, "specifications.0.key"),
        ],
    )
    def test_values_beyond_column_limits_return_422(
        self, client: TestClient, repository: InMemoryCarRepository, overrides: dict, field: str
    ) -> None:
        response = client.post("/v1/admin/cars", json=_create_payload(**overrides))

        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == field
        assert repository.count([]) == 1

    def test_values_at_column_limits_are_accepted(self, client: TestClient) -> None:
        response = client.post(
            "/v1/admin/cars",
            json=_create_payload(title="T" * 200, price="9999999999.99", doors=2_147_483_647),
        )

        assert response.status_code == 201
        assert response.json()["price"] == "9999999999.99"

    def test_blank_optional_text_is_stored_as_null(self, client: TestClient) -> None:
        response = client.post("/v1/admin/cars", json=_create_payload(fuel="", vin="  "))

        assert response.status_code == 201
        assert response.json()["fuel"] is None
        assert response.json()["vin"] is None


# ==============================================================================
# PUT /v1/admin/cars/{car_id}
# ==============================================================================


class TestUpdateCar:
    def test_changes_only_supplied_fields(self, client: TestClient) -> None:
        response = client.put("/v1/admin/cars/1", json={"price": "11500.00", "is_featured": True})

        assert response.status_code == 200
        body = response.json()
        assert body["price"] == "11500.00"
        assert body["is_featured"] is True
        assert body["title"] == "Kia Rio 2022"
        assert [s["key"] for s in body["specifications"]] == ["Airbags"]

    def test_specifications_replace_the_whole_set(self, client: TestClient) -> None:
        response = client.put(
            "/v1/admin/cars/1",
            json={"specifications": [{"key": "Sunroof", "value": "No"}]},
        )

        assert response.status_code == 200
        assert [(s["key"], s["value"]) for s in response.json()["specifications"]] == [
            ("Sunroof", "No")
        ]

    def test_invalid_year_returns_422(self, client: TestClient) -> None:
        response = client.put("/v1/admin/cars/1", json={"year": 1850})

        assert response.status_code == 422
        assert response.json()["errors"][0]["code"] == "OUT_OF_RANGE"

    def test_oversized_vin_returns_422(self, client: TestClient) -> None:
        response = client.put("/v1/admin/cars/1", json={"vin": "V" * 51})

        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "vin"

    def test_blank_fuel_clears_the_value(
        self, client: TestClient, repository: InMemoryCarRepository
    ) -> None:
        client.put("/v1/admin/cars/1", json={"fuel": "Petrol"})

        response = client.put("/v1/admin/cars/1", json={"fuel": " "})

        assert response.status_code == 200
        assert response.json()["fuel"] is None
        assert repository.get_by_id(1).fuel is None  # type: ignore[union-attr]

    def test_missing_car_returns_404(self, client: TestClient) -> None:
        response = client.put("/v1/admin/cars/999", json={"price": "100.00"})

        assert response.status_code == 404


# ==============================================================================
# DELETE /v1/admin/cars/{car_id}
# ==============================================================================


class TestDeleteCar:
    def test_deletes_listing_and_image_files(
        self,
        client: TestClient,
        repository: InMemoryCarRepository,
        tmp_path: Path,
    ) -> None:
        _upload(client)
        image_file = tmp_path / "car-images" / "1718000000000_front_view.jpg"
        assert image_file.exists()

        response = client.delete("/v1/admin/cars/1")

        assert response.status_code == 204
        assert response.content == b""
        assert repository.get_by_id(1) is None
        assert not image_file.exists()

    def test_missing_car_returns_404(self, client: TestClient) -> None:
        response = client.delete("/v1/admin/cars/999")

        assert response.status_code == 404


# ==============================================================================
# Images
# ==============================================================================


class TestCarImages:
    def test_upload_stores_file_and_row(
        self,
        client: TestClient,
        repository: InMemoryCarRepository,
        tmp_path: Path,
    ) -> None:
        response = _upload(client)

        assert response.status_code == 201
        body = response.json()
        assert body["url"] == "/uploads/car-images/1718000000000_front_view.jpg"
        assert body["car_id"] == 1
        assert body["is_main"] is True
        assert body["is_360_view"] is False
        assert (tmp_path / "car-images" / "1718000000000_front_view.jpg").read_bytes() == JPEG_BYTES
        assert len(repository.get_by_id(1).images) == 1  # type: ignore[union-attr]

    def test_unsupported_type_returns_422(self, client: TestClient, tmp_path: Path) -> None:
        response = _upload(client, file=("notes.txt", b"hello", "text/plain"))

        assert response.status_code == 422
        assert response.json()["errors"][0]["code"] == "UNSUPPORTED_MEDIA_TYPE"
        assert not (tmp_path / "car-images").exists()

    def test_oversized_file_returns_422(
        self, client: TestClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("MAX_FILE_SIZE", "8")

        response = _upload(client, file=("big.png", b"\x89PNG" * 4, "image/png"))

        assert response.status_code == 422
        assert response.json()["errors"][0]["code"] == "FILE_TOO_LARGE"

    def test_missing_file_returns_422(self, client: TestClient) -> None:
        response = client.post("/v1/admin/cars/1/images", data={"is_main": "true"})

        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "file"

    def test_missing_car_returns_404_without_writing(
        self, client: TestClient, tmp_path: Path
    ) -> None:
        response = _upload(client, car_id=999)

        assert response.status_code == 404
        assert not (tmp_path / "car-images").exists()

    def test_delete_image_removes_file(self, client: TestClient, tmp_path: Path) -> None:
        image_id = _upload(client).json()["id"]

        response = client.delete(f"/v1/admin/cars/images/{image_id}")

        assert response.status_code == 204
        assert not (tmp_path / "car-images" / "1718000000000_front_view.jpg").exists()

    def test_delete_missing_image_returns_404(self, client: TestClient) -> None:
        response = client.delete("/v1/admin/cars/images/999")

        assert response.status_code == 404
        assert response.json()["detail"] == "CarImage with identifier '999' not found"


# ==============================================================================
# Specifications
# ==============================================================================


class TestCarSpecifications:
    def test_add_specification(self, client: TestClient) -> None:
        response = client.post(
            "/v1/admin/cars/1/specifications", json={"key": " Sunroof ", "value": "Yes"}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["key"] == "Sunroof"
        assert body["value"] == "Yes"
        assert body["car_id"] == 1

    def test_blank_value_returns_422(self, client: TestClient) -> None:
        response = client.post(
            "/v1/admin/cars/1/specifications", json={"key": "Sunroof", "value": " "}
        )

        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "value"

    def test_add_to_missing_car_returns_404(self, client: TestClient) -> None:
        response = client.post(
            "/v1/admin/cars/999/specifications", json={"key": "Sunroof", "value": "Yes"}
        )

        assert response.status_code == 404

    def test_delete_specification(
        self, client: TestClient, repository: InMemoryCarRepository
    ) -> None:
        response = client.delete("/v1/admin/cars/specifications/1")

        assert response.status_code == 204
        assert repository.get_by_id(1).specifications == ()  # type: ignore[union-attr]

    def test_delete_missing_specification_returns_404(self, client: TestClient) -> None:
        response = client.delete("/v1/admin/cars/specifications/999")

        assert response.status_code == 404
