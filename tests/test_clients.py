"""Tests for the downstream service clients."""

import json
from datetime import datetime, timezone

import httpx
import pytest

from conftest import CLASSIFICATION_URL, NUTRITIONIX_URL, TINY_PNG, VOLUME_URL
from food_gateway.clients.classification_client import ClassificationClient
from food_gateway.clients.nutritionix_client import NutritionixClient
from food_gateway.clients.volume_client import VolumeEstimationClient
from food_gateway.models.upload import UploadedImage


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def stored_image(tmp_path) -> UploadedImage:
    now = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    image = UploadedImage.create(tmp_path, "plate.png", "image/png", now=now)
    image.local_path.write_bytes(TINY_PNG)
    return image


class TestVolumeEstimationClient:
    """Tests for VolumeEstimationClient."""

    @pytest.mark.asyncio
    async def test_posts_image_as_img_field(self, stored_image):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = request.content
            return httpx.Response(200, json={"path": "segmented_images/x.png"})

        async with mock_client(handler) as http:
            client = VolumeEstimationClient(http, f"{VOLUME_URL}/")
            result = await client.estimate(stored_image)

        assert result == {"path": "segmented_images/x.png"}
        assert seen["url"] == f"{VOLUME_URL}/estimate_volume"
        assert b'name="img"' in seen["body"]
        assert b'filename="2024-01-02T03-04-05.000Z-plate.png"' in seen["body"]
        assert TINY_PNG in seen["body"]

    @pytest.mark.asyncio
    async def test_error_status_raises(self, stored_image):
        async with mock_client(lambda request: httpx.Response(500)) as http:
            client = VolumeEstimationClient(http, VOLUME_URL)
            with pytest.raises(httpx.HTTPStatusError):
                await client.estimate(stored_image)


class TestClassificationClient:
    """Tests for ClassificationClient."""

    @pytest.mark.asyncio
    async def test_posts_volume_result_verbatim(self):
        volume = {"path": "p", "segments": [{"volume": 1.5}], "extra": None}
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            seen["content_type"] = request.headers["content-type"]
            return httpx.Response(200, json={"list": []})

        async with mock_client(handler) as http:
            result = await ClassificationClient(http, CLASSIFICATION_URL).classify(volume)

        assert result == {"list": []}
        assert seen["url"] == f"{CLASSIFICATION_URL}/predict"
        assert seen["body"] == volume
        assert seen["content_type"] == "application/json"

    @pytest.mark.asyncio
    async def test_network_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with mock_client(handler) as http:
            with pytest.raises(httpx.ConnectError):
                await ClassificationClient(http, CLASSIFICATION_URL).classify({})


class TestNutritionixClient:
    """Tests for NutritionixClient."""

    @pytest.mark.asyncio
    async def test_not_found_is_empty(self):
        async with mock_client(lambda request: httpx.Response(404, json={})) as http:
            client = NutritionixClient(http, NUTRITIONIX_URL, "id", "key")
            assert await client.search("Nothing") == []

    @pytest.mark.asyncio
    async def test_missing_foods_key_is_empty(self):
        async with mock_client(lambda request: httpx.Response(200, json={})) as http:
            client = NutritionixClient(http, NUTRITIONIX_URL, "id", "key")
            assert await client.search("Apple") == []

    @pytest.mark.asyncio
    async def test_server_error_raises(self):
        async with mock_client(lambda request: httpx.Response(503)) as http:
            client = NutritionixClient(http, NUTRITIONIX_URL, "id", "key")
            with pytest.raises(httpx.HTTPStatusError):
                await client.search("Apple")
