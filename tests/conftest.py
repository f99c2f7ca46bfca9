"""Pytest configuration and fixtures."""

import base64
import json
import os
import tempfile
import threading
from pathlib import Path
from typing import AsyncGenerator, Callable, Dict, Optional

# Settings are read once; point the app at a scratch directory before import
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="food-gateway-uploads-"))

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from food_gateway.clients.classification_client import ClassificationClient
from food_gateway.clients.nutritionix_client import NutritionixClient
from food_gateway.clients.volume_client import VolumeEstimationClient
from food_gateway.core import dependencies
from food_gateway.main import app
from food_gateway.services.nutrition import NutritionEditService
from food_gateway.services.pipeline import AnalysisPipeline
from food_gateway.storage.artifacts import ArtifactStore
from food_gateway.storage.local import UploadStore

BUCKET = "test-bucket"
PREFIX = "segmented_images/"
VOLUME_URL = "http://volume.test"
CLASSIFICATION_URL = "http://classification.test"
NUTRITIONIX_URL = "http://nutritionix.test/v2/natural/nutrients"

# Sample test image (1x1 red pixel PNG)
TINY_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8z8DwHwAFBQIAX8jx0gAAAABJRU5ErkJggg=="
)


class FakeS3Client:
    """In-memory stand-in for S3Client."""

    def __init__(self, objects: Optional[Dict[str, bytes]] = None):
        self.objects: Dict[str, bytes] = dict(objects or {})
        self.fail_list = False
        self.fail_download: set = set()
        self.fail_delete: set = set()
        self.downloads: list = []
        self.deleted: list = []
        self._lock = threading.Lock()

    def list_files(self, bucket: str, prefix: str = "") -> list:
        if self.fail_list:
            raise RuntimeError("listing denied")
        return sorted(key for key in self.objects if key.startswith(prefix))

    def download_file(self, bucket: str, key: str, destination) -> str:
        with self._lock:
            self.downloads.append(key)
        if key in self.fail_download:
            raise OSError(f"cannot download {key}")
        Path(destination).write_bytes(self.objects[key])
        return str(destination)

    def delete_file(self, bucket: str, key: str) -> dict:
        if key in self.fail_delete:
            raise RuntimeError(f"cannot delete {key}")
        with self._lock:
            self.objects.pop(key, None)
            self.deleted.append(key)
        return {"success": True, "bucket": bucket, "key": key}

    def file_exists(self, bucket: str, key: str) -> bool:
        return key in self.objects

    def bucket_reachable(self, bucket: str) -> bool:
        return True


def volume_payload(filename: str) -> dict:
    return {
        "path": f"{PREFIX}{filename}",
        "segments": [{"volume": 120.5, "mask": f"{PREFIX}mask-0-{filename}"}],
    }


def default_handler(request: httpx.Request) -> httpx.Response:
    """Downstream services: volume estimation, classification and Nutritionix."""
    if request.url.path == "/estimate_volume":
        return httpx.Response(200, json=volume_payload("plate.png"))
    if request.url.path == "/predict":
        volume = json.loads(request.content)
        return httpx.Response(200, json={
            "path": volume["path"],
            "volume": [120.5],
            "list": [["apple", {"calories": 52}]],
        })
    if request.url.path == "/v2/natural/nutrients":
        return httpx.Response(200, json={"foods": [{
            "food_name": "apple",
            "serving_weight_grams": 100,
            "nf_calories": 52,
            "nf_total_fat": 0.2,
            "nf_cholesterol": 0,
            "nf_sodium": 1,
            "nf_total_carbohydrate": 14,
            "nf_sugars": 10,
            "nf_protein": 0.3,
        }]})
    return httpx.Response(404, json={"message": "unknown route"})


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def fake_s3() -> FakeS3Client:
    return FakeS3Client({
        PREFIX: b"",
        f"{PREFIX}seg-1.png": b"segment one",
        f"{PREFIX}seg-2.png": b"segment two",
    })


@pytest.fixture
def artifact_store(fake_s3: FakeS3Client) -> ArtifactStore:
    return ArtifactStore(fake_s3, bucket=BUCKET, prefix=PREFIX)


@pytest.fixture
def downstream() -> Dict[str, Callable]:
    """Mutable routing table; tests swap the handler to simulate failures."""
    return {"handler": default_handler}


@pytest.fixture
async def http_client(downstream) -> AsyncGenerator[httpx.AsyncClient, None]:
    transport = httpx.MockTransport(lambda request: downstream["handler"](request))
    async with httpx.AsyncClient(transport=transport) as client:
        yield client


@pytest.fixture
def sync_enabled() -> bool:
    return True


@pytest.fixture
async def client(
    upload_dir: Path,
    artifact_store: ArtifactStore,
    http_client: httpx.AsyncClient,
    sync_enabled: bool,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create async test client with downstream services and storage faked.

    Usage:
        async def test_endpoint(client: AsyncClient):
            response = await client.get("/api/images")
            assert response.status_code == 200
    """
    def pipeline() -> AnalysisPipeline:
        return AnalysisPipeline(
            volume_client=VolumeEstimationClient(http_client, VOLUME_URL),
            classification_client=ClassificationClient(http_client, CLASSIFICATION_URL),
            artifact_store=artifact_store if sync_enabled else None,
            local_dir=upload_dir,
        )

    def nutrition_service() -> NutritionEditService:
        return NutritionEditService(
            NutritionixClient(http_client, url=NUTRITIONIX_URL, app_id="id", app_key="key")
        )

    app.dependency_overrides[dependencies.get_upload_store] = lambda: UploadStore(upload_dir)
    app.dependency_overrides[dependencies.get_artifact_store] = lambda: artifact_store
    app.dependency_overrides[dependencies.get_pipeline] = pipeline
    app.dependency_overrides[dependencies.get_nutrition_service] = nutrition_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


def local_names(directory: Path) -> set:
    return {entry.name for entry in directory.iterdir()}
