"""
Tests for photo storage
"""
import asyncio
import io

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from civic_reports.services.storage_service import PhotoRejected, PhotoStorage


def make_upload(content=b"\xff\xd8\xff\xe0jpeg", filename="photo.jpg", content_type="image/jpeg") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


def test_staged_upload_keeps_file_on_success(tmp_path):
    storage = PhotoStorage(root=str(tmp_path))

    async def scenario():
        async with storage.staged_upload(make_upload()) as url:
            return url

    url = asyncio.run(scenario())
    assert url.startswith("/uploads/")
    stored = list(tmp_path.iterdir())
    assert len(stored) == 1
    assert url.endswith(stored[0].name)
    assert stored[0].read_bytes() == b"\xff\xd8\xff\xe0jpeg"


def test_staged_upload_removes_file_on_error(tmp_path):
    storage = PhotoStorage(root=str(tmp_path))

    async def scenario():
        async with storage.staged_upload(make_upload()):
            assert len(list(tmp_path.iterdir())) == 1
            raise RuntimeError("insert failed")

    with pytest.raises(RuntimeError):
        asyncio.run(scenario())
    assert list(tmp_path.iterdir()) == []


def test_rejected_upload_is_closed(tmp_path):
    storage = PhotoStorage(root=str(tmp_path))
    upload = make_upload(content_type="application/pdf")

    async def scenario():
        async with storage.staged_upload(upload):
            pytest.fail("block must not run for a rejected photo")

    with pytest.raises(PhotoRejected):
        asyncio.run(scenario())
    assert upload.file.closed
    assert list(tmp_path.iterdir()) == []


def test_no_photo_yields_none(tmp_path):
    storage = PhotoStorage(root=str(tmp_path))

    async def scenario():
        async with storage.staged_upload(None) as url:
            return url

    assert asyncio.run(scenario()) is None


def test_empty_file_field_yields_none(tmp_path):
    storage = PhotoStorage(root=str(tmp_path))

    async def scenario():
        async with storage.staged_upload(make_upload(b"", filename="")) as url:
            return url

    assert asyncio.run(scenario()) is None


@pytest.mark.parametrize("upload", [
    make_upload(content_type="application/pdf"),
    make_upload(content=b""),
    make_upload(content=b"x" * 2048),
], ids=["not-an-image", "empty", "too-large"])
def test_rejected_photos_leave_nothing_behind(tmp_path, upload):
    storage = PhotoStorage(root=str(tmp_path), max_bytes=1024)
    with pytest.raises(PhotoRejected):
        asyncio.run(storage.save(upload))
    assert list(tmp_path.iterdir()) == []


def test_filename_is_sanitized(tmp_path):
    storage = PhotoStorage(root=str(tmp_path))
    path = asyncio.run(storage.save(make_upload(filename="../../etc/foto e re.jpg")))
    assert path.parent == tmp_path
    assert path.name.endswith("-foto_e_re.jpg")
