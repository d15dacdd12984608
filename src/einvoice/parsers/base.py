"""Base parser interface and XPath helpers shared by the CII and UBL readers."""

import base64
import binascii
import logging
import re
from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal, InvalidOperation

from lxml import etree

from ..core.errors import InvalidAttachmentError, InvalidDateError, InvalidDecimalError, ParseError
from ..core.models import Invoice

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

# Entity expansion and network access stay off for untrusted uploads.
XML_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)


def read_xml(content: bytes) -> etree._Element:
    """
    Parse raw bytes into an lxml element tree.

    Args:
        content: XML document bytes

    Returns:
        Root element of the document

    Raises:
        ParseError: If the bytes are not well-formed XML
    """
    try:
        return etree.fromstring(content, parser=XML_PARSER)
    except etree.XMLSyntaxError as e:
        raise ParseError(f"cannot read XML: {e}") from e


class BaseParser(ABC):
    """
    Abstract base class for invoice syntax parsers.

    Subclasses declare their namespace prefixes and the shape of a date
    literal; the helpers below evaluate XPath expressions relative to a
    context element and convert the result. A ``None`` context behaves like
    an absent element: strings are empty, decimals zero, dates ``None``.
    """

    namespaces: dict[str, str] = {}
    date_pattern: re.Pattern = re.compile(r"^\d{4}-\d{2}-\d{2}$")

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Return the name of the syntax read by this parser."""
        pass

    @abstractmethod
    def parse(self, root: etree._Element) -> Invoice:
        """
        Read a complete invoice from the document's root element.

        Raises:
            ParseError: On the first value that cannot be converted
        """
        pass

    def _parse_date_literal(self, value: str) -> date:
        return date.fromisoformat(value)

    def _nodes(self, node: etree._Element | None, path: str) -> list[etree._Element]:
        if node is None:
            return []
        return node.xpath(path, namespaces=self.namespaces)

    def _node(self, node: etree._Element | None, path: str) -> etree._Element | None:
        found = self._nodes(node, path)
        return found[0] if found else None

    def _exists(self, node: etree._Element | None, path: str) -> bool:
        return bool(self._nodes(node, path))

    def _text(self, node: etree._Element | None, path: str) -> str:
        """String value of the first match of ``path``; attributes are addressed with ``@name``."""
        found = self._nodes(node, path)
        if not found:
            return ""
        first = found[0]
        if isinstance(first, str):
            return str(first).strip()
        return "".join(first.itertext()).strip()

    def _texts(self, node: etree._Element | None, path: str) -> list[str]:
        return ["".join(found.itertext()).strip() for found in self._nodes(node, path)]

    def _int(self, node: etree._Element | None, path: str) -> int:
        value = self._text(node, path)
        return int(value) if value.isdigit() else 0

    def _decimal(self, node: etree._Element | None, path: str) -> Decimal:
        value = self._text(node, path)
        if not value:
            return ZERO
        try:
            parsed = Decimal(value)
        except InvalidOperation as e:
            raise InvalidDecimalError(value, path) from e
        if not parsed.is_finite():
            raise InvalidDecimalError(value, path)
        return parsed

    def _date(self, node: etree._Element | None, path: str) -> date | None:
        value = self._text(node, path)
        if not value:
            return None
        if not self.date_pattern.match(value):
            raise InvalidDateError(value, path)
        try:
            return self._parse_date_literal(value)
        except ValueError as e:
            raise InvalidDateError(value, path) from e

    def _binary(self, node: etree._Element | None, path: str) -> bytes:
        encoded = "".join(self._text(node, path).split())
        if not encoded:
            return b""
        try:
            return base64.b64decode(encoded, validate=True)
        except binascii.Error as e:
            raise InvalidAttachmentError(path, str(e)) from e
