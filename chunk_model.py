import logging
import struct
import zlib

import chardet

from chunk_type import ChunkType
from png_errors import ChunkTextError, InvalidChunkDataLength, InvalidCrc

logger = logging.getLogger(__name__)

# CC - critical chunk | AC - ancillary chunk
chunk_types = {
    "49484452": "IHDR",  # CC
    "504c5445": "PLTE",  # CC
    "49444154": "IDAT",  # CC
    "49454e44": "IEND",  # CC
    "73524742": "sRGB",  # AC
    "67414d41": "gAMA",  # AC
    "70485973": "pHYs",  # AC
    "73424954": "sBIT",  # AC
    "73504c54": "sPLT",  # AC
    "74494d45": "tIME",  # AC
    "6348524d": "cHRM",  # AC
    "74455874": "tEXt",  # AC
    "69545874": "iTXt",  # AC
    "7a545874": "zTXt",  # AC
    "69434350": "iCCP",  # AC
    "624b4744": "bKGD",  # AC
    "74524e53": "tRNS",  # AC
    "68495354": "hIST",  # AC
}

# length(4) + type(4) + crc(4)
CHUNK_OVERHEAD = 12
MAX_CHUNK_LENGTH = 2**32 - 1


class Chunk:
    """One length-prefixed, typed, CRC-checked unit of a PNG file.

    Chunks are immutable: a changed chunk is a new Chunk.
    """

    __slots__ = ("_chunk_type", "_data", "_crc")

    def __init__(self, chunk_type, data):
        if isinstance(chunk_type, str):
            chunk_type = ChunkType.from_string(chunk_type)
        data = bytes(data)
        if len(data) > MAX_CHUNK_LENGTH:
            raise OverflowError(
                f"Chunk data of {len(data)} bytes does not fit a 32-bit length"
            )
        self._chunk_type = chunk_type
        self._data = data
        self._crc = Chunk.crc_for(chunk_type, data)

    @classmethod
    def _from_verified(cls, chunk_type, data, crc):
        # Only for decode_one, after the wire CRC has been checked
        chunk = cls.__new__(cls)
        chunk._chunk_type = chunk_type
        chunk._data = data
        chunk._crc = crc
        return chunk

    @classmethod
    def new(cls, chunk_type, data):
        return cls(chunk_type, data)

    @staticmethod
    def crc_for(chunk_type, data):
        """CRC-32 (ISO-HDLC) over the type bytes followed by the data."""
        if isinstance(chunk_type, ChunkType):
            chunk_type = chunk_type.to_bytes()
        return zlib.crc32(data, zlib.crc32(chunk_type)) & 0xFFFFFFFF

    @classmethod
    def decode_one(cls, raw):
        """Decode `raw` as exactly one encoded chunk.

        The declared length must account for every byte between the type
        field and the trailing CRC, so a declared length that is too short
        or too long is reported as InvalidChunkDataLength.
        """
        raw = bytes(raw)
        if len(raw) < CHUNK_OVERHEAD:
            declared = struct.unpack(">I", raw[:4])[0] if len(raw) >= 4 else 0
            raise InvalidChunkDataLength(declared, max(len(raw) - CHUNK_OVERHEAD, 0))

        declared, type_bytes = struct.unpack(">I4s", raw[:8])
        data = raw[8:-4]
        if declared != len(data):
            raise InvalidChunkDataLength(declared, len(data))

        (crc,) = struct.unpack(">I", raw[-4:])
        # CRC covers the raw type bytes; letter validation comes after
        calc_crc = Chunk.crc_for(type_bytes, data)
        if crc != calc_crc:
            raise InvalidCrc(calc_crc, crc)

        return cls._from_verified(ChunkType.from_bytes(type_bytes), data, crc)

    @classmethod
    def decode_prefix(cls, raw):
        """Decode the chunk at the start of `raw`.

        Returns (chunk, consumed); bytes after the chunk are left alone.
        """
        if len(raw) < 4:
            raise InvalidChunkDataLength(0, 0)
        (declared,) = struct.unpack(">I", raw[:4])
        end = CHUNK_OVERHEAD + declared
        if len(raw) < end:
            raise InvalidChunkDataLength(declared, max(len(raw) - CHUNK_OVERHEAD, 0))
        return cls.decode_one(raw[:end]), end

    @classmethod
    def decode_sequence(cls, raw, strict=False, log=None):
        """Decode back-to-back chunks until `raw` is used up.

        By default the sequence stops at the first malformed chunk and the
        chunks read so far are returned. With strict=True the error is raised.
        """
        log = log or logger
        raw = bytes(raw)
        chunks = []
        offset = 0
        while offset < len(raw):
            try:
                chunk, consumed = cls.decode_prefix(raw[offset:])
            except ValueError as e:
                if strict:
                    raise
                log.warning(
                    "Stopped reading chunks at offset %d after %d chunks: %s",
                    offset,
                    len(chunks),
                    e,
                )
                break
            log.debug("Read %s chunk at offset %d", chunk.chunk_type, offset)
            chunks.append(chunk)
            offset += consumed
        return chunks

    @property
    def length(self):
        return len(self._data)

    @property
    def chunk_type(self):
        return self._chunk_type

    @property
    def data(self):
        return self._data

    @property
    def crc(self):
        return self._crc

    def encode(self):
        return (
            struct.pack(">I", self.length)
            + self._chunk_type.to_bytes()
            + self._data
            + struct.pack(">I", self._crc)
        )

    def write_to_file(self, file):
        file.write(self.encode())

    def data_as_text(self):
        try:
            return self._data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ChunkTextError(str(self._chunk_type), e.reason) from e

    def guess_text(self):
        """Best-effort text for display; never raises on undecodable data."""
        try:
            return self._data.decode("utf-8")
        except UnicodeDecodeError:
            pass
        detected_encoding = chardet.detect(self._data)["encoding"]
        if detected_encoding:
            try:
                return self._data.decode(detected_encoding)
            except (UnicodeDecodeError, LookupError):
                logger.debug(
                    "chardet guessed %s but decoding failed", detected_encoding
                )
        return self._data.decode("utf-8", errors="replace")

    def is_known(self):
        return self._chunk_type.to_bytes().hex() in chunk_types

    def __eq__(self, other):
        if isinstance(other, Chunk):
            return (
                self._chunk_type == other._chunk_type
                and self._data == other._data
                and self._crc == other._crc
            )
        return NotImplemented

    def __hash__(self):
        return hash((self._chunk_type, self._data, self._crc))

    def __repr__(self):
        return f"Chunk({self._chunk_type.to_string()!r}, length={self.length})"

    def __str__(self):
        type = self._chunk_type.to_string()
        crc = f"{self._crc:08x}"

        if not self.is_known():
            return f"Type:{type} Length:{self.length} CRC:{crc} (unknown)"

        return f"Type:{type}    Length:{self.length}    CRC:{crc}"
