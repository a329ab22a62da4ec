"""API tests for /images: base64 upload and the file route."""

import base64

import pytest

from lorekeeper.api.conftest import bearer
from lorekeeper.core.shared_models import Visibility
from lorekeeper.domains.resources.tests.conftest import OTHER_ID, _row
from lorekeeper.models import Image

PNG = b"\x89PNG\r\n\x1a\nfake"


def _image(repo, **kwargs) -> Image:
    return repo.seed(
        _row(
            Image,
            description="Portrait",
            mime_type="image/png",
            width=16,
            height=16,
            blob=PNG,
            size=len(PNG),
            **kwargs,
        )
    )


class TestUpload:
    @pytest.mark.asyncio
    async def test_upload(self, client, fake_image_repo):
        response = await client.post(
            "/images",
            json={
                "description": "Portrait",
                "mimeType": "image/png",
                "data": base64.b64encode(PNG).decode(),
                "width": 16,
                "height": 16,
            },
            headers=bearer("owner-token"),
        )

        assert response.status_code == 201
        body = response.json()
        assert body["size"] == len(PNG)
        assert body["mimeType"] == "image/png"
        assert "data" not in body

    @pytest.mark.asyncio
    async def test_unsupported_mime_type_is_400(self, client):
        response = await client.post(
            "/images",
            json={"mimeType": "text/plain", "data": "aGVsbG8=", "width": 1, "height": 1},
            headers=bearer("owner-token"),
        )

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"


class TestFile:
    @pytest.mark.asyncio
    async def test_serves_bytes_with_mime_type(self, client, fake_image_repo):
        image = _image(fake_image_repo)

        response = await client.get(f"/images/{image.id}/file")

        assert response.status_code == 200
        assert response.content == PNG
        assert response.headers["content-type"] == "image/png"

    @pytest.mark.asyncio
    async def test_private_image_is_404(self, client, fake_image_repo):
        image = _image(fake_image_repo, owner_id=OTHER_ID, visibility=Visibility.PRIVATE)

        response = await client.get(f"/images/{image.id}/file", headers=bearer("owner-token"))

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_dimension_filter_validated(self, client):
        response = await client.get("/images", params={"minWidth": 100, "maxWidth": 10})

        assert response.status_code == 400
