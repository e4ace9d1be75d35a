"""Library version information."""

_VERSION_CODE = 0x00000200


def core_version() -> int:
    """The library version packed one part per byte."""
    return _VERSION_CODE


def version_string() -> str:
    """The library version as readable text."""
    parts = ".".join(
        str((_VERSION_CODE >> shift) & 0xFF) for shift in (24, 16, 8, 0)
    )
    return f"observa v{parts}"