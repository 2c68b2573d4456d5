# This file is Copyright 2019 Volatility Foundation and licensed under the Volatility Software License 1.0
# which is available at https://www.volatilityfoundation.org/license/vsl-v1.0
#
import logging
import os
from typing import IO, Any, Optional

from pagedump.framework import exceptions, interfaces

vollog = logging.getLogger(__name__)


class BufferDataLayer(interfaces.layers.DataLayerInterface):
    """A DataLayer class backed by a buffer in memory, designed for testing and
    swift data access."""

    def __init__(self, name: str, buffer: bytes, offset: int = 0) -> None:
        super().__init__(name)
        self._buffer = buffer
        self._offset = offset

    @property
    def maximum_address(self) -> int:
        """Returns the largest available address in the space."""
        return self.minimum_address + len(self._buffer) - 1

    @property
    def minimum_address(self) -> int:
        """Returns the smallest available address in the space."""
        return self._offset

    def is_valid(self, offset: int, length: int = 1) -> bool:
        """Returns whether the offset is valid or not."""
        return bool(
            self.minimum_address <= offset <= self.maximum_address
            and self.minimum_address <= offset + length - 1 <= self.maximum_address
        )

    def read(self, offset: int, length: int, pad: bool = False) -> bytes:
        """Reads the data from the buffer."""
        if not self.is_valid(offset, length):
            if pad:
                real_offset = max(offset - self.minimum_address, 0)
                data = self._buffer[real_offset : real_offset + length]
                return data + b"\x00" * (length - len(data))
            invalid_address = offset
            if self.minimum_address < offset <= self.maximum_address:
                invalid_address = self.maximum_address + 1
            raise exceptions.InvalidAddressException(
                self.name, invalid_address, "Offset outside of the buffer boundaries"
            )
        real_offset = offset - self.minimum_address
        return self._buffer[real_offset : real_offset + length]


class FileLayer(interfaces.layers.DataLayerInterface):
    """a DataLayer backed by a file on the filesystem.

    The file is opened for reading when the layer is constructed, and
    released by :meth:`close` (or by leaving a ``with`` block).
    """

    def __init__(self, location: str, name: Optional[str] = None) -> None:
        super().__init__(name or os.path.basename(location))
        self._location = location
        self._file: Optional[IO[Any]] = open(location, "rb")
        self._size: Optional[int] = None

    @property
    def location(self) -> str:
        """Returns the location on which this Layer abstracts."""
        return self._location

    @property
    def closed(self) -> bool:
        return self._file is None

    def _get_file(self) -> IO[Any]:
        if self._file is None:
            raise ValueError(f"Layer {self.name} has been closed")
        return self._file

    @property
    def maximum_address(self) -> int:
        """Returns the largest available address in the space."""
        # Zero based, so we return the size of the file minus 1
        if self._size is None:
            handle = self._get_file()
            orig = handle.tell()
            handle.seek(0, 2)
            self._size = handle.tell()
            handle.seek(orig)
        return self._size - 1

    @property
    def minimum_address(self) -> int:
        """Returns the smallest available address in the space."""
        return 0

    def is_valid(self, offset: int, length: int = 1) -> bool:
        """Returns whether the offset is valid or not."""
        if length <= 0:
            raise ValueError("Length must be positive")
        return bool(
            self.minimum_address <= offset <= self.maximum_address
            and self.minimum_address <= offset + length - 1 <= self.maximum_address
        )

    def read(self, offset: int, length: int, pad: bool = False) -> bytes:
        """Reads from the file at offset for length."""
        if offset < self.minimum_address:
            raise exceptions.InvalidAddressException(
                self.name, offset, "Offset outside of the file boundaries"
            )

        handle = self._get_file()
        handle.seek(offset)
        data = handle.read(length)

        if len(data) < length:
            if pad:
                data += b"\x00" * (length - len(data))
            else:
                raise exceptions.InvalidAddressException(
                    self.name,
                    offset + len(data),
                    "Could not read sufficient bytes from the " + self.name + " file",
                )
        return data

    def close(self) -> None:
        """Closes the underlying file, if it is still open."""
        if self._file is not None:
            self._file.close()
            self._file = None
