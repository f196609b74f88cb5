import asyncio
from io import BytesIO

from fastapi import UploadFile
from shared.uploads import ImageStore


def _upload(content, filename="pepper seeds.jpg"):
    return UploadFile(file=BytesIO(content), filename=filename)


def test_save_writes_file_and_returns_url(tmp_path):
    store = ImageStore(tmp_path / "uploads", "/uploads/")

    url = asyncio.run(store.save(_upload(b"jpeg-bytes")))

    assert url.startswith("/uploads/")
    assert url.endswith("-pepper_seeds.jpg")
    stored = tmp_path / "uploads" / url.rsplit("/", 1)[1]
    assert stored.read_bytes() == b"jpeg-bytes"


def test_empty_parts_are_skipped(tmp_path):
    store = ImageStore(tmp_path)
    assert asyncio.run(store.save(_upload(b""))) is None
    assert asyncio.run(store.save(None)) is None


def test_path_components_are_stripped(tmp_path):
    store = ImageStore(tmp_path)
    url = asyncio.run(store.save(_upload(b"x", filename="../../etc/passwd")))
    assert url.endswith("-passwd")
    assert list(tmp_path.iterdir())[0].name.endswith("-passwd")


def test_save_all_keeps_order_and_drops_empties(tmp_path):
    store = ImageStore(tmp_path)
    urls = asyncio.run(store.save_all([_upload(b"a", "a.jpg"), _upload(b"", "b.jpg"), _upload(b"c", "c.jpg")]))
    assert len(urls) == 2
    assert urls[0].endswith("-a.jpg")
    assert urls[1].endswith("-c.jpg")


def test_same_name_in_the_same_millisecond_does_not_collide(tmp_path, monkeypatch):
    monkeypatch.setattr("shared.uploads.time.time", lambda: 1700000000.0)
    store = ImageStore(tmp_path)

    first = asyncio.run(store.save(_upload(b"first", "bag.jpg")))
    second = asyncio.run(store.save(_upload(b"second", "bag.jpg")))

    assert first != second
    assert sorted(p.read_bytes() for p in tmp_path.iterdir()) == [b"first", b"second"]


def test_subdirectory_saves(tmp_path):
    store = ImageStore(tmp_path / "uploads", "/uploads")
    url = asyncio.run(store.save(_upload(b"x", "bag.jpg"), "import-products"))
    assert url.startswith("/uploads/import-products/")
    assert (tmp_path / "uploads" / "import-products" / url.rsplit("/", 1)[1]).exists()
