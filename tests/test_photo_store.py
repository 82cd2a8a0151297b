import os
import re
from unittest.mock import patch

import pytest

from inventory_service.core.errors import NotFoundError, StorageError


def test_store_creates_directory_and_writes(photo_store, cache_dir):
    assert not cache_dir.exists()
    name = photo_store.store("chair.png", b"\x89PNG data")

    assert re.fullmatch(r"\d+_chair\.png", name)
    assert (cache_dir / name).read_bytes() == b"\x89PNG data"
    assert os.listdir(cache_dir) == [name]


def test_store_keeps_only_base_name(photo_store, cache_dir):
    name = photo_store.store("C:\\Users\\me\\../desk.jpg", b"x")
    assert name.endswith("_desk.jpg")
    assert (cache_dir / name).is_file()


@pytest.mark.parametrize("filename", [None, "", "  "])
def test_store_without_filename(photo_store, filename):
    assert photo_store.store(filename, b"x").endswith("_photo")


def test_names_are_unique(photo_store):
    names = {photo_store.store("same.png", b"x") for _ in range(20)}
    assert len(names) == 20


def test_failed_write_raises_storage_error_and_leaves_nothing(photo_store, cache_dir):
    real_open = open

    class FailingWriter:
        """Writes one byte to the real file, then fails like a full disk."""

        def __init__(self, fh):
            self.fh = fh

        def __enter__(self):
            return self

        def __exit__(self, *exc_info):
            self.fh.close()
            return False

        def write(self, data):
            self.fh.write(data[:1])
            raise OSError("No space left on device")

    def failing_open(path, mode="r", *args, **kwargs):
        return FailingWriter(real_open(path, mode, *args, **kwargs))

    with patch("inventory_service.services.photo_store.open", failing_open, create=True):
        with pytest.raises(StorageError):
            photo_store.store("a.png", b"abc")
    assert list(cache_dir.iterdir()) == []


def test_resolve(photo_store):
    name = photo_store.store("a.png", b"abc")
    path = photo_store.resolve(name)
    assert path.is_absolute()
    assert path.read_bytes() == b"abc"
    assert photo_store.exists(name)


@pytest.mark.parametrize("ref", [None, "", "123_missing.png"])
def test_resolve_missing(photo_store, ref):
    photo_store.ensure_directory()
    with pytest.raises(NotFoundError):
        photo_store.resolve(ref)
    assert not photo_store.exists(ref)


def test_path_for_stays_in_cache_dir(photo_store, cache_dir):
    assert photo_store.path_for("../../etc/passwd") == cache_dir.resolve() / "passwd"


def test_open_photo_reads_content(photo_store):
    name = photo_store.store("a.png", b"abc")
    with photo_store.open_photo(name) as fh:
        assert fh.read() == b"abc"


def test_open_photo_removed_after_check(photo_store, monkeypatch):
    name = photo_store.store("a.png", b"abc")
    real_resolve = type(photo_store).resolve

    def resolve_then_remove(self, ref):
        path = real_resolve(self, ref)
        path.unlink()
        return path

    monkeypatch.setattr(type(photo_store), "resolve", resolve_then_remove)
    with pytest.raises(NotFoundError):
        photo_store.open_photo(name)
