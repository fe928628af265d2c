"""Extract resources from Windows 3.x 16-bit New Executable (NE) files.

Lists the resource table, and optionally dumps each resource's raw data to a
file. Use on Windows 3.x era .DLL and .EXE files.
"""
import logging
from argparse import ArgumentParser, Namespace
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..errors import NEReadError, wrap_os_error
from ..parse.extract import BLOCK_SIZE, dump_resource
from ..parse.header import read_header
from ..parse.resources import ResourceEntry, TypeEntry, walk_resource_table
from ..parse.utils import StreamReader
from .manifest import HeaderInfo, ResourceInfo, ResourceManifest, TypeInfo
from .utils import json_write

MAX_PREFIX_LENGTH = 256

LOG = logging.getLogger(__name__)


@dataclass
class DumpOptions:
    prefix: str = ""
    use_names: bool = False
    block_size: int = BLOCK_SIZE


def resource_filename(
    prefix: str, type_entry: TypeEntry, entry: ResourceEntry, use_names: bool
) -> str:
    if use_names:
        return f"{prefix}{entry.resource_id}.{type_entry.extension}"
    return f"{prefix}{type_entry.index:05d}-{entry.index:05d}.bin"


def _print_type(entry: TypeEntry) -> None:
    if entry.builtin_id is None:
        quoted = f"'{entry.name}'"
        print(f"\nType: {quoted:<23}  Resource count: {entry.resource_count}")
    else:
        print(
            f"\nType: 0x{entry.builtin_id:04X} {entry.name:<16}  "
            f"Resource count: {entry.resource_count}"
        )


def _print_resource(entry: ResourceEntry) -> None:
    print(
        f"    resource {entry.type_index:05d}-{entry.index:05d}  "
        f"flags=0x{entry.flags:04X}  "
        f"length=0x{entry.length:08X} ({entry.length})  "
        f"offset=0x{entry.offset:08X} ({entry.offset})"
    )
    if entry.resource_id.name is not None:
        print(f"        id='{entry.resource_id.name}'")
    else:
        print(f"        id={entry.resource_id}")


def resources_ne_to_files(
    input_path: Path,
    options: Optional[DumpOptions] = None,
    manifest_path: Optional[Path] = None,
) -> ResourceManifest:
    """List the resource table of an NE file, and dump resources if requested.

    Stops on the first error. Resources dumped before the error are kept.
    """
    with wrap_os_error("open input file", str(input_path), NEReadError):
        f = input_path.open("rb")

    with f:
        reader = StreamReader(f)
        header = read_header(reader)
        manifest = ResourceManifest(header=HeaderInfo.from_header(header))

        type_entries: List[TypeEntry] = []
        for item in walk_resource_table(reader, header):
            if isinstance(item, TypeEntry):
                type_entries.append(item)
                manifest.types.append(TypeInfo.from_entry(item))
                _print_type(item)
                continue

            _print_resource(item)
            filename = None
            if options is not None:
                filename = resource_filename(
                    options.prefix, type_entries[-1], item, options.use_names
                )
                dump_resource(
                    reader, item.offset, item.length, Path(filename), options.block_size
                )
                print(f"        dumped to {filename}")
            manifest.types[-1].resources.append(ResourceInfo.from_entry(item, filename))

    print(f"\nEnd of type table, {len(manifest.types)} types")
    LOG.debug(
        "Read %d types, %d resources", len(manifest.types), manifest.resource_count
    )

    if manifest_path is not None:
        with wrap_os_error("write manifest file", str(manifest_path)):
            json_write(
                manifest_path, manifest.model_dump_json(exclude_none=True, indent=2)
            )
        LOG.debug("Wrote manifest to '%s'", manifest_path)

    return manifest


def resources_command(args: Namespace) -> None:
    options = None
    if args.dump is not None:
        options = DumpOptions(prefix=args.dump, use_names=args.use_names)
    resources_ne_to_files(args.input_file, options, args.manifest)


def resources_arguments(parser: ArgumentParser) -> None:
    parser.set_defaults(command=resources_command)
    parser.add_argument(
        "input_file", type=Path, default=None, nargs="?", help="An NE file"
    )
    parser.add_argument(
        "--dump",
        "-dump",
        metavar="PREFIX",
        default=None,
        help="Dump the resources with the specified prefix, e.g. 'output_folder/'",
    )
    parser.add_argument(
        "--use-names",
        "-usenames",
        action="store_true",
        help="When dumping, use resource names as filenames",
    )
    parser.add_argument(
        "--manifest",
        type=Path,
        default=None,
        help="Write the resource table to a JSON file",
    )
