"""Unit tests for upload file naming and storage."""

import io
import re

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from kasupe.config import settings
from kasupe.exceptions.custom import UploadRejectedError
from kasupe.services.storage_service import MAX_UPLOAD_BYTES, save_image, stored_filename


def _upload(data: bytes, filename: str = "photo.jpg", content_type: str = "image/jpeg") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(data),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


class TestStoredFilename:
    def test_slug_and_extension(self):
        name = stored_filename("Land Cruiser (Front).JPG", "image/jpeg")
        assert re.fullmatch(r"land-cruiser-front-\d+\.jpg", name)

    def test_extension_from_content_type(self):
        assert re.fullmatch(r"upload-\d+\.webp", stored_filename(None, "image/webp"))

    def test_client_suffix_ignored(self):
        assert re.fullmatch(r"evil-\d+\.png", stored_filename("evil.html", "image/png"))
        assert re.fullmatch(r"photo-\d+\.gif", stored_filename("photo.jpg", "image/gif"))

    def test_unsluggable_name(self):
        assert re.fullmatch(r"upload-\d+\.png", stored_filename("###.png", "image/png"))


class TestSaveImage:
    async def test_writes_file_under_folder(self, tmp_path, monkeypatch):
        monkeypatch.setattr(settings, "upload_dir", str(tmp_path))

        relative = await save_image(_upload(b"jpeg-bytes"), "blogs")

        folder, name = relative.split("/")
        assert folder == "blogs"
        assert (tmp_path / "blogs" / name).read_bytes() == b"jpeg-bytes"

    async def test_oversized_file(self, tmp_path, monkeypatch):
        monkeypatch.setattr(settings, "upload_dir", str(tmp_path))

        with pytest.raises(UploadRejectedError) as exc_info:
            await save_image(_upload(b"x" * (MAX_UPLOAD_BYTES + 1)), "cars")
        assert exc_info.value.status_code == 413
        assert not (tmp_path / "cars").exists()

    async def test_unknown_folder(self):
        with pytest.raises(UploadRejectedError) as exc_info:
            await save_image(_upload(b"data"), "avatars")
        assert exc_info.value.status_code == 404
