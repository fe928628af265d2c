from pathlib import Path
from struct import Struct
from typing import List, Optional, Sequence, Tuple, Union

import pytest

from neresex.parse.header import NE_HEADER

EXT_HEADER_OFFSET = 0x40
RES_TABLE_FIELD = 0x40
RES_TABLE_OFFSET = EXT_HEADER_OFFSET + RES_TABLE_FIELD

UINT16 = Struct("<H")
UINT32 = Struct("<I")
TYPE_BLOCK = Struct("<2HI")
RESOURCE_BLOCK = Struct("<4HI")

# (resource ID or name, data, flags)
Resource = Tuple[Union[int, str, bytes], bytes, int]
# (built-in type index or custom type name, resources)
ResourceType = Tuple[Union[int, str, bytes], Sequence[Resource]]


def _pad(data: bytearray, alignment: int) -> None:
    remainder = len(data) % alignment
    if remainder:
        data.extend(b"\0" * (alignment - remainder))


def build_ne(  # pylint: disable=too-many-arguments,too-many-locals
    types: Sequence[ResourceType] = (),
    offset_shift: int = 4,
    size_shift: int = 4,
    terminate: bool = True,
    max_bytes: Optional[int] = None,
    mz_signature: bytes = b"MZ",
    ne_signature: bytes = b"NE",
) -> bytes:
    """Build a minimal NE image with a resource table.

    Resource data lengths must be multiples of ``1 << size_shift``.
    """
    table_size = 2 + sum(
        TYPE_BLOCK.size + RESOURCE_BLOCK.size * len(res) for _, res in types
    )
    if terminate:
        table_size += 2

    names = bytearray()

    def _name_offset(name: Union[str, bytes]) -> int:
        offset = table_size + len(names)
        raw = name if isinstance(name, bytes) else name.encode("ascii")
        names.append(len(raw))
        names.extend(raw)
        return offset

    type_ids = [
        type_id | 0x8000 if isinstance(type_id, int) else _name_offset(type_id)
        for type_id, _ in types
    ]
    resource_ids = [
        [
            res_id | 0x8000 if isinstance(res_id, int) else _name_offset(res_id)
            for res_id, _, _ in resources
        ]
        for _, resources in types
    ]

    if max_bytes is None:
        max_bytes = table_size + len(names)

    # the table, names, and enough padding to read a whole terminating type block
    data_start = RES_TABLE_OFFSET + table_size + len(names) + 8
    alignment = 1 << offset_shift
    data_start += (-data_start) % alignment

    blob = bytearray()
    blocks = []
    for type_id, ids, (_, resources) in zip(type_ids, resource_ids, types):
        blocks.append(TYPE_BLOCK.pack(type_id, len(resources), 0))
        for res_id, (_, data, flags) in zip(ids, resources):
            assert len(data) % (1 << size_shift) == 0, len(data)
            offset = data_start + len(blob)
            blocks.append(
                RESOURCE_BLOCK.pack(
                    offset >> offset_shift, len(data) >> size_shift, flags, res_id, 0
                )
            )
            blob.extend(data)
            _pad(blob, alignment)

    table = bytearray(UINT16.pack(offset_shift))
    for block in blocks:
        table.extend(block)
    if terminate:
        table.extend(UINT16.pack(0))
    table.extend(names)

    header = NE_HEADER.pack(
        ne_signature,
        5,  # linker version
        10,
        0,  # entry table
        0,
        0,  # CRC
        0,
        0,
        0,
        0,
        0,
        0,
        0,
        0,  # segments
        0,
        0,
        0,
        RES_TABLE_FIELD,
        RES_TABLE_FIELD + max_bytes,
        0,
        0,
        0,
        0,
        size_shift,
        sum(len(res) for _, res in types),
        2,  # Windows
        0,
        0,
        0,
        0,
        0,  # Windows 3.0
        3,
    )

    image = bytearray(mz_signature)
    image.extend(b"\0" * (EXT_HEADER_OFFSET - len(image)))
    image[0x3C:0x40] = UINT32.pack(EXT_HEADER_OFFSET)
    image.extend(header)
    image.extend(b"\0" * (RES_TABLE_OFFSET - len(image)))
    image.extend(table)
    image.extend(b"\0" * (data_start - len(image)))
    image.extend(blob)
    return bytes(image)


@pytest.fixture
def make_ne(tmp_path: Path):
    counter: List[int] = []

    def _make_ne(**kwargs) -> Path:
        counter.append(1)
        path = tmp_path / f"input{len(counter)}.exe"
        path.write_bytes(build_ne(**kwargs))
        return path

    return _make_ne
