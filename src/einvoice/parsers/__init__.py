"""Invoice parsers for CII and UBL."""

from .base import BaseParser, read_xml
from .cii import CII_NAMESPACES, CIIParser
from .router import get_parser, parse_document, parse_reader, parse_xml_file
from .ubl import UBL_NAMESPACES, UBLParser

__all__ = [
    "BaseParser",
    "CIIParser",
    "CII_NAMESPACES",
    "UBLParser",
    "UBL_NAMESPACES",
    "get_parser",
    "parse_document",
    "parse_reader",
    "parse_xml_file",
    "read_xml",
]
