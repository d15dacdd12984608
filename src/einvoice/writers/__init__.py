"""Invoice writers."""

from ..core.errors import UnsupportedFormatError
from ..core.profiles import SchemaType
from .base import BaseWriter
from .cii import CIIWriter, format_amount, format_percent, format_price, format_quantity


def get_writer(schema: SchemaType = SchemaType.CII) -> BaseWriter:
    """
    Return the writer for an output syntax.

    Raises:
        UnsupportedFormatError: For UBL, which cannot be written yet
    """
    if schema is SchemaType.CII:
        return CIIWriter()
    raise UnsupportedFormatError()


__all__ = [
    "BaseWriter",
    "CIIWriter",
    "format_amount",
    "format_percent",
    "format_price",
    "format_quantity",
    "get_writer",
]
