from contextlib import contextmanager
from typing import Any, Iterator, Type, TypeVar, Union

from typing_extensions import Protocol

T = TypeVar("T", bound="Comparable")


class Comparable(Protocol):
    def __lt__(self: T, other: T) -> bool:
        pass  # pragma: no cover

    def __le__(self: T, other: T) -> bool:
        pass  # pragma: no cover

    def __gt__(self: T, other: T) -> bool:
        pass  # pragma: no cover

    def __ge__(self: T, other: T) -> bool:
        pass  # pragma: no cover


class NEError(Exception):
    """Base error for all errors in the library."""


class NEFormatError(NEError):
    """The data does not have the structure of an NE file."""


class NEReadError(NEError):
    """A short read or failed seek on the input."""


class NEOutputError(NEError):
    """An output file could not be created, written, or closed."""


def _assert_base(  # pylint: disable=too-many-arguments
    result: bool,
    operator: str,
    name: str,
    expected: Any,
    actual: Any,
    location: Union[int, str],
    error_class: Type[NEError] = NEFormatError,
) -> None:
    if not result:
        raise error_class(f"{name}: {actual!r} {operator} {expected!r} (at {location})")


def assert_eq(
    name: str,
    expected: T,
    actual: T,
    location: Union[int, str],
    error_class: Type[NEError] = NEFormatError,
) -> None:
    result = actual == expected
    _assert_base(result, "==", name, expected, actual, location, error_class)


def assert_lt(
    name: str,
    expected: T,
    actual: T,
    location: Union[int, str],
    error_class: Type[NEError] = NEFormatError,
) -> None:
    result = actual < expected
    _assert_base(result, "<", name, expected, actual, location, error_class)


@contextmanager
def wrap_os_error(
    name: str,
    location: Union[int, str],
    error_class: Type[NEError] = NEOutputError,
) -> Iterator[None]:
    try:
        yield
    except OSError as e:
        raise error_class(f"{name}: {e.strerror or e} (at {location})") from e
