"""Library version information."""

MAJOR_VERSION = 2
MINOR_VERSION = 14
MICRO_VERSION = 1

VERSION = f"{MAJOR_VERSION}.{MINOR_VERSION}.{MICRO_VERSION}"


def version_str() -> str:
    """Return the library version as text."""
    return VERSION


def version_cmp(major: int, minor: int, micro: int) -> int:
    """Compare the library version with the given one.

    The result is negative, zero or positive when the library is older than,
    equal to or newer than the given version.
    """
    diff = MAJOR_VERSION - major
    if diff:
        return diff
    diff = MINOR_VERSION - minor
    if diff:
        return diff
    return MICRO_VERSION - micro