"""Shared pytest fixtures for all tests."""

import io

import pytest
from PIL import Image

from fragments.storage import create_memory_backend, create_sqlite_backend


@pytest.fixture
def backend():
    """
    Fresh in-memory storage backend per test.
    """
    store = create_memory_backend()
    yield store
    store.close()


@pytest.fixture
def sqlite_backend(tmp_path):
    """
    SQLite metadata + disk payload backend under a temporary directory.

    Args:
        tmp_path: pytest tmp_path fixture
    """
    store = create_sqlite_backend(
        str(tmp_path / "data" / "fragments.db"),
        str(tmp_path / "data" / "payloads"),
    )
    yield store
    store.close()


def _encode_image(fmt: str, mode: str = "RGB") -> bytes:
    color = (200, 30, 30, 128) if mode == "RGBA" else (200, 30, 30)
    img = Image.new(mode, (8, 6), color)
    buffer = io.BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def png_bytes():
    return _encode_image("PNG")


@pytest.fixture
def rgba_png_bytes():
    return _encode_image("PNG", mode="RGBA")


@pytest.fixture
def jpeg_bytes():
    return _encode_image("JPEG")


@pytest.fixture
def gif_bytes():
    return _encode_image("GIF")
