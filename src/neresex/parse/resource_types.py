from __future__ import annotations

from enum import IntEnum
from typing import NamedTuple, Tuple

BUILTIN_FLAG = 0x8000
ID_MASK = 0x7FFF


class BuiltinType(NamedTuple):
    name: str
    extension: str


class ResourceType(IntEnum):
    Cursor = 1
    Bitmap = 2
    Icon = 3
    Menu = 4
    Dialog = 5
    String = 6
    FontDir = 7
    Font = 8
    Accelerator = 9
    RCData = 10
    MessageTable = 11
    GroupCursor = 12
    GroupIcon = 13
    Version = 16
    DlgInclude = 17
    PlugPlay = 19
    VxD = 20
    AniCursor = 21
    AniIcon = 22
    HTML = 23
    Manifest = 24

    def __str__(self) -> str:  # pylint: disable=invalid-str-returned
        return self.name


# indexed by the low 15 bits of a built-in type ID
BUILTIN_TYPES: Tuple[BuiltinType, ...] = (
    BuiltinType("unknown(0)", "bin"),
    BuiltinType("cursor", "cur"),
    BuiltinType("bitmap", "bmp"),
    BuiltinType("icon", "ico"),
    BuiltinType("menu", "menu.rc"),
    BuiltinType("dialog", "dlg"),
    BuiltinType("string", "string.rc"),
    BuiltinType("fontdir", "fontdir.fnt"),
    BuiltinType("font", "font.fnt"),
    BuiltinType("accelerator", "accelerator.rc"),
    BuiltinType("rcdata", "rcdata.rc"),
    BuiltinType("messagetable", "mc"),
    BuiltinType("group_cursor", "group_cursor"),
    BuiltinType("group_icon", "group_icon"),
    BuiltinType("unknown(14)", "bin"),
    BuiltinType("unknown(15)", "bin"),
    BuiltinType("version", "version.rc"),
    BuiltinType("dlginclude", "dlginclude.rc"),
    BuiltinType("unknown(18)", "bin"),
    BuiltinType("plugplay", "plugplay"),
    BuiltinType("vxd", "vxd"),
    BuiltinType("anicursor", "anicursor"),
    BuiltinType("aniicon", "aniicon"),
    BuiltinType("html", "htm"),
    BuiltinType("manifest", "manifest"),
)
assert len(BUILTIN_TYPES) == 25, len(BUILTIN_TYPES)


def is_integer_id(raw_id: int) -> bool:
    return raw_id & BUILTIN_FLAG == BUILTIN_FLAG


def builtin_type(raw_id: int) -> BuiltinType:
    """Look up a built-in type by ID. The high bit is ignored."""
    index = raw_id & ID_MASK
    if index >= len(BUILTIN_TYPES):
        return BuiltinType(f"unknown({index})", "bin")
    return BUILTIN_TYPES[index]
