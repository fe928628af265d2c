"""Locate and read the NE extended header.

An NE file starts with a DOS-compatible stub ("MZ"). A pointer at a fixed
offset in the stub gives the location of the NE header, and all table offsets
in the NE header are relative to the start of the NE header.
"""
import logging
from dataclasses import dataclass
from struct import Struct
from typing import Tuple

from ..errors import assert_eq
from .utils import StreamReader

MZ_SIGNATURE = b"MZ"
NE_SIGNATURE = b"NE"
EXT_HEADER_POINTER = 0x3C

NE_HEADER = Struct("<2s 2B 2H I 2B 3H 2I 8H I 3H 2B 3H 2B")
assert NE_HEADER.size == 64, NE_HEADER.size

# 512 byte sectors
DEFAULT_SHIFT_COUNT = 9

LOG = logging.getLogger(__name__)


@dataclass
class NEHeader:
    ext_header_offset: int
    linker_version: Tuple[int, int]
    res_table_offset: int
    res_name_table_offset: int
    size_shift_count: int
    res_table_entries: int
    target_os: int
    expected_win_version: Tuple[int, int]

    @property
    def max_bytes(self) -> int:
        """The byte budget of the resource table.

        The resident name table directly follows the resource table.
        """
        return self.res_name_table_offset - self.res_table_offset


def locate_extended_header(reader: StreamReader) -> int:
    reader.seek(0)
    signature = reader.read_bytes(2)
    assert_eq("MZ signature", MZ_SIGNATURE, signature, reader.prev)

    reader.seek(EXT_HEADER_POINTER)
    ext_header_offset = reader.read_u32()
    LOG.info("Extended header offset: 0x%08X", ext_header_offset)
    return ext_header_offset


def read_ne_header(reader: StreamReader, ext_header_offset: int) -> NEHeader:
    reader.seek(ext_header_offset)
    (
        signature,
        major_linker,
        minor_linker,
        _entry_table_offset,
        _entry_table_length,
        _crc,
        _prog_flags,
        _appl_flags,
        _auto_data_seg,
        _heap_size,
        _stack_size,
        _entry_point,
        _init_stack,
        _seg_count,
        _mod_refs,
        _non_res_names_size,
        _seg_table_offset,
        res_table_field,
        res_name_table_field,
        _mod_ref_table,
        _import_name_table,
        _non_res_names_offset,
        _moveable_entries,
        alignment_shift,
        res_table_entries,
        target_os,
        _os2_flags,
        _ret_thunks,
        _seg_ref_thunks,
        _min_code_swap,
        win_minor,
        win_major,
    ) = reader.read(NE_HEADER)

    assert_eq("NE signature", NE_SIGNATURE, signature, reader.prev)

    res_table_offset = res_table_field + ext_header_offset
    res_name_table_offset = res_name_table_field + ext_header_offset
    size_shift_count = alignment_shift or DEFAULT_SHIFT_COUNT

    header = NEHeader(
        ext_header_offset=ext_header_offset,
        linker_version=(major_linker, minor_linker),
        res_table_offset=res_table_offset,
        res_name_table_offset=res_name_table_offset,
        size_shift_count=size_shift_count,
        res_table_entries=res_table_entries,
        target_os=target_os,
        expected_win_version=(win_major, win_minor),
    )

    LOG.info("Resource table offset: 0x%04X", res_table_offset)
    LOG.info("Resource table entries: %d", res_table_entries)
    LOG.info("Resident name table offset: 0x%04X", res_name_table_offset)
    LOG.info("Leaving %d maximum bytes in resource table", header.max_bytes)
    LOG.info("Size alignment shift count: 0x%04X", size_shift_count)
    return header


def read_header(reader: StreamReader) -> NEHeader:
    ext_header_offset = locate_extended_header(reader)
    return read_ne_header(reader, ext_header_offset)
