import logging
from pathlib import Path

from ..errors import NEOutputError, wrap_os_error
from .utils import StreamReader

BLOCK_SIZE = 4096

LOG = logging.getLogger(__name__)


def dump_resource(
    reader: StreamReader,
    offset: int,
    length: int,
    path: Path,
    block_size: int = BLOCK_SIZE,
) -> None:
    """Copy ``length`` bytes at ``offset`` from the input to a new file.

    The reader's position is restored afterwards. On error, a partially
    written file may remain.

    :raises NEOutputError: If the output file cannot be created or written.
    :raises NEReadError: On a short read or failed seek.
    """
    LOG.debug("Dumping %d bytes from %d to '%s'", length, offset, path)
    with wrap_os_error("create output file", str(path)):
        fout = path.open("wb")

    try:
        with reader.preserve_position():
            reader.seek(offset)
            remaining = length
            while remaining > 0:
                count = min(block_size, remaining)
                data = reader.read_bytes(count)
                with wrap_os_error("write output file", str(path)):
                    written = fout.write(data)
                if written != count:  # pragma: no cover
                    raise NEOutputError(
                        f"Expected to write {count} bytes, but wrote {written} (at {path})"
                    )
                remaining -= count
    except Exception:
        # the first error is the one reported
        try:
            fout.close()
        except OSError as e:
            LOG.warning("Failed to close '%s': %s", path, e)
        raise

    with wrap_os_error("close output file", str(path)):
        fout.close()
