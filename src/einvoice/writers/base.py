"""Base writer interface."""

import io
from abc import ABC, abstractmethod
from typing import BinaryIO

from ..core.models import Invoice


class BaseWriter(ABC):
    """Abstract base class for invoice serialisers."""

    @abstractmethod
    def write(self, invoice: Invoice, sink: BinaryIO) -> None:
        """
        Serialise an invoice into a binary sink.

        Args:
            invoice: Invoice to write; it is only read
            sink: Writable binary stream

        Raises:
            WriteError: If the document cannot be produced or written
        """
        pass

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Return the name of the output format."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for the output format."""
        pass

    @property
    @abstractmethod
    def mime_type(self) -> str:
        """Return the MIME type for the output format."""
        pass

    def to_bytes(self, invoice: Invoice) -> bytes:
        buffer = io.BytesIO()
        self.write(invoice, buffer)
        return buffer.getvalue()
