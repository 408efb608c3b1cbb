import logging

import pytest

from chunk_model import Chunk
from chunk_type import ChunkType
from png_errors import (
    ChunkNotFound,
    EmptyContainer,
    InvalidCrc,
    InvalidSignature,
    PngError,
)
from png_funs import PNG_SIGNATURE, PngContainer


def types(png):
    return [chunk.chunk_type.to_string() for chunk in png.chunks()]


def test_decode(png, ihdr, iend):
    assert png.chunks() == (ihdr, iend)
    assert png.signature == PNG_SIGNATURE


def test_encode_round_trip(png, png_bytes):
    assert png.encode() == png_bytes
    assert PngContainer.decode(png.encode()) == png


def test_invalid_signature(png_bytes):
    with pytest.raises(InvalidSignature):
        PngContainer.decode(b"\x89PNG\r\n\x1a\x00" + png_bytes[8:])


def test_short_input_is_invalid_signature():
    with pytest.raises(InvalidSignature):
        PngContainer.decode(b"\x89PN")


def test_signature_only_is_empty():
    with pytest.raises(EmptyContainer):
        PngContainer.decode(PNG_SIGNATURE)


def test_lenient_decode_drops_trailing_garbage(png_bytes, ihdr, iend):
    png = PngContainer.decode(png_bytes + b"hidden after IEND")
    assert png.chunks() == (ihdr, iend)


def test_strict_decode_raises(ihdr):
    raw = PNG_SIGNATURE + ihdr.encode() + b"\x00\x00\x00\x00IEND\x00\x00\x00\x00"
    with pytest.raises(InvalidCrc):
        PngContainer.decode(raw, strict=True)
    assert types(PngContainer.decode(raw)) == ["IHDR"]


def test_decode_logs_to_injected_logger(png_bytes, caplog):
    log = logging.getLogger("tests.container")
    with caplog.at_level(logging.DEBUG, logger="tests.container"):
        PngContainer.decode(png_bytes, log=log)
    assert "Decoded 2 chunks" in caplog.text


def test_chunk_by_type(png, ihdr):
    assert png.chunk_by_type("IHDR") == ihdr
    assert png.chunk_by_type("ruSt") is None


def test_append_goes_before_iend(png):
    png.append_chunk(Chunk.new("ruSt", b"hello"))
    assert types(png) == ["IHDR", "ruSt", "IEND"]


def test_append_without_end_marker(ihdr):
    png = PngContainer.from_chunks([ihdr])
    png.append_chunk(Chunk.new("ruSt", b"hello"))
    assert types(png) == ["IHDR", "ruSt"]


def test_append_then_remove_restores(png):
    before = png.chunks()
    png.append_chunk(Chunk.new("ruSt", b"hello"))
    removed = png.remove_chunk("ruSt")
    assert removed == Chunk.new("ruSt", b"hello")
    assert png.chunks() == before


def test_remove_only_first_match(png):
    png.append_chunk(Chunk.new("ruSt", b"one"))
    png.append_chunk(Chunk.new("ruSt", b"two"))
    png.remove_chunk("ruSt")
    assert [chunk.data for chunk in png.chunks_by_type("ruSt")] == [b"two"]
    assert types(png) == ["IHDR", "ruSt", "IEND"]


def test_remove_missing(png):
    before = png.chunks()
    with pytest.raises(ChunkNotFound) as excinfo:
        png.remove_chunk("ruSt")
    assert excinfo.value.chunk_type == "ruSt"
    assert isinstance(excinfo.value, LookupError)
    assert png.chunks() == before


def test_remove_last_chunk_refused(ihdr):
    png = PngContainer.from_chunks([ihdr])
    with pytest.raises(EmptyContainer):
        png.remove_chunk("IHDR")
    assert len(png) == 1


def test_constructed_chunk_survives_round_trip(png):
    png.append_chunk(Chunk(ChunkType.from_string("ruSt"), b"hello"))
    again = PngContainer.decode(png.encode())
    assert types(again) == ["IHDR", "ruSt", "IEND"]
    assert again == png


def test_chunks_view_is_read_only(png):
    assert isinstance(png.chunks(), tuple)


def test_secret_survives_round_trip(png):
    png.append_chunk(Chunk.new("ruSt", "secret".encode()))
    again = PngContainer.decode(png.encode())
    assert again.chunk_by_type("ruSt").data_as_text() == "secret"
    assert types(again) == ["IHDR", "ruSt", "IEND"]


def test_load_from_path(png_file, png):
    assert PngContainer.load_from_path(png_file) == png


def test_load_missing_file_is_os_error(tmp_path):
    with pytest.raises(OSError) as excinfo:
        PngContainer.load_from_path(tmp_path / "missing.png")
    assert not isinstance(excinfo.value, PngError)


def test_load_not_a_png(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_bytes(b"just some text")
    with pytest.raises(InvalidSignature):
        PngContainer.load_from_path(path)


def test_write_to_path(tmp_path, png, png_bytes):
    path = tmp_path / "out.png"
    png.write_to_path(path)
    assert path.read_bytes() == png_bytes
