import io
import logging

from chunk_model import Chunk
from png_errors import ChunkNotFound, EmptyContainer, InvalidSignature

logger = logging.getLogger(__name__)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
END_CHUNK_TYPE = "IEND"


def read_file(path):
    with open(path, "rb") as file:
        return file.read()


def write_file(path, data):
    with open(path, "wb") as file:
        file.write(data)


def _matches(chunk, code):
    return chunk.chunk_type.to_string() == code


class PngContainer:
    """A PNG file as its signature plus an ordered list of chunks.

    Chunk order is preserved. New chunks go in front of a trailing IEND
    chunk so the end marker stays last; without one they go at the end.
    """

    signature = PNG_SIGNATURE

    def __init__(self, chunks):
        self._chunks = list(chunks)
        if not self._chunks:
            raise EmptyContainer()

    @classmethod
    def from_chunks(cls, chunks):
        return cls(chunks)

    @classmethod
    def decode(cls, raw, strict=False, log=None):
        log = log or logger
        raw = bytes(raw)
        found = raw[: len(PNG_SIGNATURE)]
        # Check if the file is a valid PNG file
        if found != PNG_SIGNATURE:
            raise InvalidSignature(found)

        chunks = Chunk.decode_sequence(raw[len(PNG_SIGNATURE) :], strict, log)
        log.debug("Decoded %d chunks from %d bytes", len(chunks), len(raw))
        return cls(chunks)

    @classmethod
    def load_from_path(cls, path, strict=False, log=None):
        # OSError from the read is not a PNG error and is left to the caller
        return cls.decode(read_file(path), strict, log)

    def chunks(self):
        return tuple(self._chunks)

    def __len__(self):
        return len(self._chunks)

    def __iter__(self):
        return iter(self._chunks)

    def chunk_by_type(self, code):
        return next((chunk for chunk in self._chunks if _matches(chunk, code)), None)

    def chunks_by_type(self, code):
        return [chunk for chunk in self._chunks if _matches(chunk, code)]

    def append_chunk(self, chunk):
        if self._chunks and _matches(self._chunks[-1], END_CHUNK_TYPE):
            self._chunks.insert(len(self._chunks) - 1, chunk)
        else:
            self._chunks.append(chunk)
        logger.debug("Appended %s chunk", chunk.chunk_type)

    def remove_chunk(self, code):
        """Remove and return the first chunk whose type is `code`."""
        for index, chunk in enumerate(self._chunks):
            if _matches(chunk, code):
                if len(self._chunks) == 1:
                    raise EmptyContainer()
                del self._chunks[index]
                logger.debug("Removed %s chunk at index %d", code, index)
                return chunk
        raise ChunkNotFound(code)

    def write_to_file(self, file):
        file.write(self.signature)
        for chunk in self._chunks:
            chunk.write_to_file(file)

    def encode(self):
        buffer = io.BytesIO()
        self.write_to_file(buffer)
        return buffer.getvalue()

    def write_to_path(self, path):
        write_file(path, self.encode())

    def __eq__(self, other):
        if isinstance(other, PngContainer):
            return self._chunks == other._chunks
        return NotImplemented

    __hash__ = None

    def __repr__(self):
        types = ", ".join(str(chunk.chunk_type) for chunk in self._chunks)
        return f"PngContainer([{types}])"
