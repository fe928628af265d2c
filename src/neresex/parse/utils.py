from contextlib import contextmanager
from struct import Struct
from typing import Any, BinaryIO, Iterator, Tuple

from ..errors import NEReadError, assert_lt

UINT8 = Struct("<B")
UINT16 = Struct("<H")
UINT32 = Struct("<I")

# Windows 3.x ANSI code page
CODEPAGE = "cp1252"

# one length byte limits names to 255 characters, plus the terminator
MAX_STRING_BUFFER = 256


class StreamReader:
    """A little-endian reader over a seekable binary stream.

    Unlike reading from a ``bytes`` buffer, every read and seek moves the
    stream's single cursor. Short reads and failed seeks are raised as
    :class:`NEReadError`. Lookups elsewhere in the file should happen inside
    :meth:`preserve_position`, so the cursor is never displaced.
    """

    def __init__(self, f: BinaryIO):
        self.f = f
        self.prev = 0

    def tell(self) -> int:
        try:
            return self.f.tell()
        except (OSError, ValueError) as e:
            raise NEReadError(f"tell failed: {e}") from e

    def seek(self, offset: int) -> None:
        try:
            self.f.seek(offset)
        except (OSError, ValueError, OverflowError) as e:
            raise NEReadError(f"seek failed (at {offset})") from e

    def read_bytes(self, length: int) -> bytes:
        self.prev = self.tell()
        try:
            value = self.f.read(length)
        except OSError as e:
            raise NEReadError(f"read failed (at {self.prev})") from e
        if len(value) != length:
            raise NEReadError(
                f"Expected {length} bytes, but read {len(value)} (at {self.prev})"
            )
        return value

    def read(self, struct: Struct) -> Tuple[Any, ...]:
        data = self.read_bytes(struct.size)
        return struct.unpack(data)

    def read_u8(self) -> int:
        (value,) = self.read(UINT8)
        return value  # type: ignore

    def read_u16(self) -> int:
        (value,) = self.read(UINT16)
        return value  # type: ignore

    def read_u32(self) -> int:
        (value,) = self.read(UINT32)
        return value  # type: ignore

    @contextmanager
    def preserve_position(self) -> Iterator["StreamReader"]:
        """Restore the stream position when the block exits."""
        position = self.tell()
        prev = self.prev
        try:
            yield self
        finally:
            self.seek(position)
            self.prev = prev

    def read_counted_string(
        self, offset: int, max_length: int = MAX_STRING_BUFFER
    ) -> bytes:
        """Read a counted string at an absolute offset without moving the cursor.

        A counted string is one length byte, followed by that many bytes. It
        is not null-terminated.

        :raises NEFormatError: If the string and terminator exceed ``max_length``.
        :raises NEReadError: On a short read or failed seek.
        """
        with self.preserve_position():
            self.seek(offset)
            length = self.read_u8()
            assert_lt("string length", max_length, length, self.prev)
            return self.read_bytes(length)


def decode_name(raw: bytes) -> str:
    return raw.decode(CODEPAGE, errors="replace")
