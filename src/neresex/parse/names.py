"""Resolve type and resource identifiers.

Both type IDs and resource IDs are 16-bit values. If the high bit is set, the
low 15 bits are an integer ID. Otherwise, the value is an offset from the start
of the resource table to a counted string.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .resource_types import ID_MASK, builtin_type, is_integer_id
from .utils import MAX_STRING_BUFFER, StreamReader, decode_name

LOG = logging.getLogger(__name__)


@dataclass
class ResolvedType:
    name: str
    extension: str
    builtin_id: Optional[int] = None
    raw_name: Optional[bytes] = None


@dataclass
class ResolvedName:
    numeric_id: Optional[int] = None
    name: Optional[str] = None
    raw_name: Optional[bytes] = None

    def __str__(self) -> str:
        if self.name is not None:
            return self.name
        return f"{self.numeric_id:05d}"


def read_offset_name(
    reader: StreamReader, offset: int, base: int, max_length: int = MAX_STRING_BUFFER
) -> Tuple[str, bytes]:
    """Return a counted string as text for display, and its raw bytes."""
    raw = reader.read_counted_string(base + offset, max_length)
    name = decode_name(raw)
    LOG.debug("Name '%s' at %d", name, base + offset)
    return name, raw


def resolve_type(reader: StreamReader, type_id: int, base: int) -> ResolvedType:
    if is_integer_id(type_id):
        index = type_id & ID_MASK
        name, extension = builtin_type(index)
        return ResolvedType(name, extension, index)

    # custom types also use their name as the file extension
    name, raw = read_offset_name(reader, type_id, base)
    return ResolvedType(name, name, raw_name=raw)


def resolve_resource_id(
    reader: StreamReader, resource_id: int, base: int
) -> ResolvedName:
    if is_integer_id(resource_id):
        return ResolvedName(numeric_id=resource_id & ID_MASK)
    name, raw = read_offset_name(reader, resource_id, base)
    return ResolvedName(name=name, raw_name=raw)
