"""Walk the resource table of an NE file.

The table starts with a shift count for resource data offsets, followed by
one type block per resource type. Each type block is followed by its resource
blocks. A type block with a type ID of zero ends the table. The resident name
table directly follows, which bounds the table's size.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from struct import Struct
from typing import Iterator, List, Optional, Union

from ..errors import NEFormatError
from .header import NEHeader
from .names import ResolvedName, resolve_resource_id, resolve_type
from .utils import StreamReader

TYPE_BLOCK = Struct("<2H 4x")
assert TYPE_BLOCK.size == 8, TYPE_BLOCK.size

RESOURCE_BLOCK = Struct("<4H 4x")
assert RESOURCE_BLOCK.size == 12, RESOURCE_BLOCK.size

LOG = logging.getLogger(__name__)


@dataclass
class ResourceEntry:
    type_index: int
    index: int
    flags: int
    resource_id: ResolvedName
    offset: int
    length: int


@dataclass
class TypeEntry:
    index: int
    type_id: int
    name: str
    extension: str
    builtin_id: Optional[int]
    resource_count: int
    raw_name: Optional[bytes] = None
    resources: List[ResourceEntry] = field(default_factory=list)


TableItem = Union[TypeEntry, ResourceEntry]


def walk_resource_table(reader: StreamReader, header: NEHeader) -> Iterator[TableItem]:
    """Yield each type entry, followed by its resource entries, in file order.

    Name lookups do not move the reader, so the consumer may also use the
    reader (e.g. to extract resource data) between items, as long as it
    restores the position.

    :raises NEFormatError: If the table is not terminated within its bounds.
    :raises NEReadError: On a short read.
    """
    base = header.res_table_offset
    max_bytes = header.max_bytes
    size_shift_count = header.size_shift_count

    LOG.debug("Reading resource table at %d, %d bytes...", base, max_bytes)
    reader.seek(base)
    offset_shift_count = reader.read_u16()
    LOG.info("Offset alignment shift count: 0x%04X", offset_shift_count)
    byte_count = 2

    type_index = 0
    while byte_count < max_bytes:
        type_id, resource_count = reader.read(TYPE_BLOCK)
        if type_id == 0:
            LOG.debug("End of type table at %d, %d types", reader.prev, type_index)
            return

        resolved = resolve_type(reader, type_id, base)
        byte_count += TYPE_BLOCK.size
        LOG.debug(
            "Type %d '%s' (0x%04X), %d resources at %d",
            type_index,
            resolved.name,
            type_id,
            resource_count,
            reader.prev,
        )
        yield TypeEntry(
            index=type_index,
            type_id=type_id,
            name=resolved.name,
            extension=resolved.extension,
            builtin_id=resolved.builtin_id,
            resource_count=resource_count,
            raw_name=resolved.raw_name,
        )

        for i in range(resource_count):
            data_offset, data_length, flags, resource_id = reader.read(RESOURCE_BLOCK)
            byte_count += RESOURCE_BLOCK.size
            resolved_id = resolve_resource_id(reader, resource_id, base)
            entry = ResourceEntry(
                type_index=type_index,
                index=i,
                flags=flags,
                resource_id=resolved_id,
                offset=data_offset << offset_shift_count,
                length=data_length << size_shift_count,
            )
            LOG.debug(
                "Resource %d '%s', data from %d to %d",
                i,
                resolved_id,
                entry.offset,
                entry.offset + entry.length,
            )
            yield entry

        type_index += 1

    # no terminator within the bounds of the table
    raise NEFormatError(
        f"Unexpected overflow of resource area: {byte_count} >= {max_bytes} bytes "
        f"without a terminator (at {reader.tell()})"
    )


def read_resource_table(reader: StreamReader, header: NEHeader) -> List[TypeEntry]:
    types: List[TypeEntry] = []
    for item in walk_resource_table(reader, header):
        if isinstance(item, TypeEntry):
            types.append(item)
        else:
            types[-1].resources.append(item)
    return types
