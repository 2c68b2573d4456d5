# This file is Copyright 2019 Volatility Foundation and licensed under the Volatility Software License 1.0
# which is available at https://www.volatilityfoundation.org/license/vsl-v1.0
#
"""Defines layers for reading data, and the capabilities that produce a
memory layout from them."""
import logging
from abc import ABCMeta, abstractmethod
from typing import Optional

from pagedump.framework import interfaces
from pagedump.framework.layers import runs

vollog = logging.getLogger(__name__)


class DataLayerInterface(metaclass=ABCMeta):
    """A Layer that directly holds data."""

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        """Returns the layer name."""
        return self._name

    @property
    @abstractmethod
    def maximum_address(self) -> int:
        """Returns the maximum valid address of the space."""

    @property
    @abstractmethod
    def minimum_address(self) -> int:
        """Returns the minimum valid address of the space."""

    @abstractmethod
    def is_valid(self, offset: int, length: int = 1) -> bool:
        """Returns a boolean based on whether the entire chunk of data (from
        offset to length) is valid or not.

        Args:
            offset: The address to start determining whether bytes are readable/valid
            length: The number of bytes from offset of which to test the validity

        Returns:
            Whether the bytes are valid and accessible
        """

    @abstractmethod
    def read(self, offset: int, length: int, pad: bool = False) -> bytes:
        """Reads an offset for length bytes and returns 'bytes' (not 'str') of
        length size.

        If there is a fault of any kind (such as a page fault), an exception will be thrown
        unless pad is set, in which case the read errors will be replaced by null characters.

        Args:
            offset: The offset at which to being reading within the layer
            length: The number of bytes to read within the layer
            pad: A boolean indicating whether exceptions should be raised or bad bytes replaced with null characters

        Returns:
            The bytes read from the layer, starting at offset for length bytes
        """

    def close(self) -> None:
        """Releases any resources held by the layer."""

    def __enter__(self) -> "DataLayerInterface":
        return self

    def __exit__(self, type, value, traceback) -> None:
        self.close()


class LayoutScannerInterface(metaclass=ABCMeta):
    """Class for generic scanners that produce a best-effort memory layout
    for a file, without knowledge of its format."""

    @abstractmethod
    def extract(
        self,
        context: "interfaces.context.ContextInterface",
        source: runs.CrashDumpSource,
    ) -> Optional[runs.MemoryDescriptor]:
        """Produces a memory layout for the source, or None if no layout can
        be determined."""


class FormatDetectorInterface(metaclass=ABCMeta):
    """Class that determines whether a file is of a particular format and,
    if so, extracts its physical memory layout.

    stack_order determines the order (from low to high) in which detectors
    are attempted by the dispatcher; more specific formats should have
    lower `stack_orders`
    """

    stack_order = 0
    """The order in which to attempt detection, the lower the earlier"""

    @abstractmethod
    def detect(
        self,
        context: "interfaces.context.ContextInterface",
        source: runs.CrashDumpSource,
    ) -> runs.ParseOutcome:
        """Determines whether the source is of this format.

        Returns an unsupported outcome if it is not, so that the next format
        can be tried.  Read failures once the format has been recognized are
        raised rather than reported as unsupported.

        Args:
           context: Context providing the platform components (such as the layout scanner)
           source: The file to examine
        """
