import logging

from chunk_model import Chunk
from chunk_type import ChunkType
from png_funs import PngContainer

logger = logging.getLogger(__name__)


def encode(file_path, chunk_type, message, output=None, strict=False):
    """Hide `message` in a new chunk and save the result.

    Writes to `output` when given, otherwise back over `file_path`.
    Returns the path written.
    """
    png = PngContainer.load_from_path(file_path, strict)
    chunk = Chunk.new(ChunkType.from_string(chunk_type), message.encode("utf-8"))
    png.append_chunk(chunk)

    path = output or file_path
    png.write_to_path(path)
    logger.info("Wrote %s chunk (%d bytes) to %s", chunk_type, chunk.length, path)
    return path


def decode(file_path, chunk_type, strict=False):
    """Return the text of the first `chunk_type` chunk, or None if absent."""
    png = PngContainer.load_from_path(file_path, strict)
    chunk = png.chunk_by_type(chunk_type)
    if chunk is None:
        return None
    return chunk.data_as_text()


def remove(file_path, chunk_type, strict=False):
    png = PngContainer.load_from_path(file_path, strict)
    removed = png.remove_chunk(chunk_type)
    png.write_to_path(file_path)
    logger.info("Removed %s chunk from %s", chunk_type, file_path)
    return removed


def print_chunks(file_path, strict=False):
    """Return one display line per chunk, in file order."""
    png = PngContainer.load_from_path(file_path, strict)
    lines = []
    for chunk in png.chunks():
        line = str(chunk)
        if not chunk.is_known() and chunk.length:
            line += f" Text:{chunk.guess_text()!r}"
        lines.append(line)
    return lines
