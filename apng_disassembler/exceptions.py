"""Errors raised while disassembling PNG / APNG streams."""


class ApngError(Exception):
    """Base class, every fatal decode condition derives from it."""

    def __init__(self, message: str, details: str = None):
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self):
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class NotPngError(ApngError):
    """First 8 bytes are not the PNG signature."""

    def __init__(self, message: str = "Invalid PNG signature", details: str = None):
        super().__init__(message, details)


class BadCrcError(ApngError):
    """Stored CRC-32 of a chunk does not match type + data."""

    def __init__(self, message: str = "Chunk checksum failed", details: str = None):
        super().__init__(message, details)


class BadApngError(ApngError):
    """Chunks are well formed but violate PNG / APNG structure."""

    def __init__(self, message: str = "Malformed APNG", details: str = None):
        super().__init__(message, details)


class TruncatedChunkError(ApngError):
    """Input ended in the middle of a chunk or before IEND."""

    def __init__(self, message: str = "Truncated PNG stream", details: str = None):
        super().__init__(message, details)


class RasterDecodeError(ApngError):
    """Finished PNG bytes could not be decoded into pixels."""

    def __init__(self, message: str = "Could not decode raster", details: str = None):
        super().__init__(message, details)
