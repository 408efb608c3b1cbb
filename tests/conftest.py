import struct

import pytest

from chunk_model import Chunk
from png_funs import PNG_SIGNATURE, PngContainer


@pytest.fixture
def ihdr():
    return Chunk.new("IHDR", struct.pack(">IIBBBBB", 1, 1, 8, 2, 0, 0, 0))


@pytest.fixture
def iend():
    return Chunk.new("IEND", b"")


@pytest.fixture
def png_bytes(ihdr, iend):
    return PNG_SIGNATURE + ihdr.encode() + iend.encode()


@pytest.fixture
def png(png_bytes):
    return PngContainer.decode(png_bytes)


@pytest.fixture
def png_file(tmp_path, png_bytes):
    path = tmp_path / "image.png"
    path.write_bytes(png_bytes)
    return path
