from __future__ import annotations

from dataclasses import asdict
from typing import List, Optional, Tuple

from pydantic import BaseModel

from ..parse.header import NEHeader
from ..parse.resources import ResourceEntry, TypeEntry


def _hex(raw: Optional[bytes]) -> Optional[str]:
    return None if raw is None else raw.hex()


class HeaderInfo(BaseModel):
    ext_header_offset: int
    linker_version: Tuple[int, int]
    res_table_offset: int
    res_name_table_offset: int
    size_shift_count: int
    res_table_entries: int
    target_os: int
    expected_win_version: Tuple[int, int]

    @classmethod
    def from_header(cls, header: NEHeader) -> HeaderInfo:
        return cls(**asdict(header))


class ResourceInfo(BaseModel):
    index: int
    resource_id: Optional[int] = None
    name: Optional[str] = None
    raw_name: Optional[str] = None
    flags: int
    offset: int
    length: int
    filename: Optional[str] = None

    @classmethod
    def from_entry(
        cls, entry: ResourceEntry, filename: Optional[str] = None
    ) -> ResourceInfo:
        return cls(
            index=entry.index,
            resource_id=entry.resource_id.numeric_id,
            name=entry.resource_id.name,
            raw_name=_hex(entry.resource_id.raw_name),
            flags=entry.flags,
            offset=entry.offset,
            length=entry.length,
            filename=filename,
        )


class TypeInfo(BaseModel):
    index: int
    type_id: int
    name: str
    extension: str
    builtin_id: Optional[int] = None
    raw_name: Optional[str] = None
    resources: List[ResourceInfo] = []

    @classmethod
    def from_entry(cls, entry: TypeEntry) -> TypeInfo:
        return cls(
            index=entry.index,
            type_id=entry.type_id,
            name=entry.name,
            extension=entry.extension,
            builtin_id=entry.builtin_id,
            raw_name=_hex(entry.raw_name),
        )


class ResourceManifest(BaseModel):
    header: HeaderInfo
    types: List[TypeInfo] = []

    @property
    def resource_count(self) -> int:
        return sum(len(info.resources) for info in self.types)
