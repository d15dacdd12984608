"""Detect the invoice syntax from the root element and dispatch to its parser."""

import logging
from pathlib import Path
from typing import BinaryIO

from lxml import etree

from ..core.errors import ParseError, UnknownFormatError
from ..core.models import Invoice
from .base import BaseParser, read_xml
from .cii import NS_RSM, CIIParser
from .ubl import NS_UBL_CREDIT_NOTE, NS_UBL_INVOICE, UBLParser

logger = logging.getLogger(__name__)

PARSERS: dict[str, type[BaseParser]] = {
    NS_RSM: CIIParser,
    NS_UBL_INVOICE: UBLParser,
    NS_UBL_CREDIT_NOTE: UBLParser,
}


def get_parser(namespace: str) -> BaseParser:
    """
    Return the parser for a root element namespace.

    Raises:
        UnknownFormatError: If the namespace is neither CII nor UBL
    """
    parser_class = PARSERS.get(namespace)
    if parser_class is None:
        raise UnknownFormatError(namespace)
    return parser_class()


def parse_document(root: etree._Element) -> Invoice:
    namespace = etree.QName(root).namespace or ""
    parser = get_parser(namespace)
    logger.info(f"Detected {parser.format_name} invoice")
    return parser.parse(root)


def parse_reader(source: bytes | str | BinaryIO) -> Invoice:
    """
    Read an invoice from bytes, a string or a binary file object.

    Args:
        source: Complete XML document

    Returns:
        Freshly built Invoice

    Raises:
        ParseError: If the document cannot be read or converted
    """
    if isinstance(source, str):
        content = source.encode("utf-8")
    elif isinstance(source, bytes):
        content = source
    else:
        try:
            content = source.read()
        except OSError as e:
            raise ParseError(f"cannot read from reader: {e}") from e
    return parse_document(read_xml(content))


def parse_xml_file(path: str | Path) -> Invoice:
    """Read an invoice from an XML file on disk."""
    try:
        content = Path(path).read_bytes()
    except OSError as e:
        raise ParseError(f"cannot read file {path}: {e}") from e
    return parse_reader(content)
