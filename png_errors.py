class PngError(ValueError):
    """Base class for everything that makes a byte stream a bad PNG."""


class InvalidCharacter(PngError):
    def __init__(self, byte):
        self.byte = byte
        super().__init__(f"Invalid chunk type byte: {byte} (0x{byte:02x})")


class ByteLengthError(PngError):
    def __init__(self, actual):
        self.actual = actual
        super().__init__(f"Chunk type must be 4 bytes long, got {actual}")


class InvalidCrc(PngError):
    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Invalid CRC when constructing chunk. Expected {expected:08x} "
            f"but found {actual:08x}"
        )


class InvalidChunkDataLength(PngError):
    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Chunk declares {expected} data bytes but {actual} are available"
        )


class InvalidSignature(PngError):
    def __init__(self, found):
        self.found = found
        super().__init__(f"Not a valid PNG file (signature {found.hex()})")


class EmptyContainer(PngError):
    def __init__(self):
        super().__init__("PNG file contains no readable chunks")


class ChunkNotFound(PngError, LookupError):
    def __init__(self, chunk_type):
        self.chunk_type = chunk_type
        super().__init__(f"Chunk {chunk_type} not found")


class ChunkTextError(PngError, UnicodeError):
    def __init__(self, chunk_type, reason):
        self.chunk_type = chunk_type
        super().__init__(f"Chunk {chunk_type} data is not valid UTF-8: {reason}")
