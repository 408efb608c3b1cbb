from png_errors import ByteLengthError, InvalidCharacter

# Bit 5 of each type byte: lowercase letter when set
PROPERTY_BIT = 0x20


def _is_letter(byte):
    return 65 <= byte <= 90 or 97 <= byte <= 122


class ChunkType:
    """Four-letter chunk type code.

    Each byte carries one property in its 0x20 bit:
    byte 0 ancillary, byte 1 private, byte 2 reserved, byte 3 safe-to-copy.
    """

    __slots__ = ("_bytes",)

    def __init__(self, type_bytes):
        values = list(type_bytes)
        if len(values) != 4:
            raise ByteLengthError(len(values))
        # Any int outside the letter ranges, 300 included, is InvalidCharacter
        for byte in values:
            if not _is_letter(byte):
                raise InvalidCharacter(byte)
        self._bytes = bytes(values)

    @classmethod
    def from_bytes(cls, type_bytes):
        return cls(type_bytes)

    @classmethod
    def from_string(cls, code):
        # Non-ASCII characters count by their encoded length
        raw = code.encode("utf-8")
        if len(raw) != 4:
            raise ByteLengthError(len(raw))
        return cls(raw)

    def to_bytes(self):
        return self._bytes

    def to_string(self):
        return self._bytes.decode("ascii")

    def is_critical(self):
        return not self._bytes[0] & PROPERTY_BIT

    def is_public(self):
        return not self._bytes[1] & PROPERTY_BIT

    def is_reserved_bit_valid(self):
        return not self._bytes[2] & PROPERTY_BIT

    def is_safe_to_copy(self):
        return bool(self._bytes[3] & PROPERTY_BIT)

    def is_valid(self):
        return self.is_reserved_bit_valid()

    def __eq__(self, other):
        if isinstance(other, ChunkType):
            return self._bytes == other._bytes
        return NotImplemented

    def __hash__(self):
        return hash(self._bytes)

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f"ChunkType({self.to_string()!r})"
