# This file is Copyright 2019 Volatility Foundation and licensed under the Volatility Software License 1.0
# which is available at https://www.volatilityfoundation.org/license/vsl-v1.0
#
"""Value types describing the physical memory layout held within a dump
file.

All of these are immutable: a detector builds them once during a parse and
hands them on to consumers, which must not alter them.
"""
import dataclasses
import os
from bisect import bisect_right
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pagedump import schemas
from pagedump.framework import constants, exceptions


@dataclasses.dataclass(frozen=True)
class MemoryRun:
    """A contiguous span of physical pages (measured in pages, not bytes)."""

    base_page: int
    page_count: int


@dataclasses.dataclass(frozen=True)
class MemoryDescriptor:
    """The layout of physical memory within a file.

    The runs are kept in the order they were read, which is the order in
    which their pages are placed within the body of the dump.
    """

    start_of_memory: int
    number_of_runs: int
    number_of_pages: int
    runs: Tuple[MemoryRun, ...] = ()

    def with_start_of_memory(self, start_of_memory: int) -> "MemoryDescriptor":
        """Returns a copy of this descriptor whose body starts at a different
        file offset."""
        return dataclasses.replace(self, start_of_memory=start_of_memory)

    def skip_counts(self) -> Iterator[int]:
        """Yields, for each run, the number of pages skipped since the end of
        the previous run."""
        end_of_previous = 0
        for run in self.runs:
            yield run.base_page - end_of_previous
            end_of_previous = run.base_page + run.page_count

    def segments(
        self, page_size: int = constants.PAGE_SIZE
    ) -> List[Tuple[int, int, int, int]]:
        """Returns the runs as (address, mapped_offset, length, mapped_length)
        segments, where mapped_offset is the byte offset within the file."""
        segments = []
        offset = self.start_of_memory
        for run in self.runs:
            length = run.page_count * page_size
            segments.append((run.base_page * page_size, offset, length, length))
            offset += length
        return segments

    def file_offset(
        self, physical_address: int, page_size: int = constants.PAGE_SIZE
    ) -> int:
        """Maps a physical address to the byte offset in the file holding it.

        Raises:
            InvalidAddressException: if the address falls outside every run
        """
        segments = sorted(self.segments(page_size))
        # Find rightmost value less than or equal to x
        i = bisect_right(segments, (physical_address, float("inf")))
        if i:
            address, mapped_offset, length, _ = segments[i - 1]
            if address <= physical_address < address + length:
                return mapped_offset + (physical_address - address)
        raise exceptions.InvalidAddressException(
            "MemoryDescriptor",
            physical_address,
            f"Physical address {physical_address:#x} is not held in any run",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metadata": {
                "format": constants.DESCRIPTOR_FORMAT,
                "version": constants.PACKAGE_VERSION,
            },
            "start_of_memory": self.start_of_memory,
            "number_of_runs": self.number_of_runs,
            "number_of_pages": self.number_of_pages,
            "runs": [
                {"base_page": run.base_page, "page_count": run.page_count}
                for run in self.runs
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MemoryDescriptor":
        """Rebuilds a descriptor from the output of :meth:`to_dict`.

        Raises:
            ValueError: if the data does not declare a known format
            jsonschema.ValidationError: if the data does not match the schema
        """
        if not schemas.validate(data):
            raise ValueError("Data is not a recognized memory descriptor")
        return cls(
            start_of_memory=data["start_of_memory"],
            number_of_runs=data["number_of_runs"],
            number_of_pages=data["number_of_pages"],
            runs=tuple(
                MemoryRun(run["base_page"], run["page_count"]) for run in data["runs"]
            ),
        )


@dataclasses.dataclass(frozen=True)
class CrashDumpSource:
    """A candidate dump file, sized once when it is constructed."""

    file_path: str
    file_size: int
    max_page_count: int

    @classmethod
    def from_path(cls, file_path: str) -> "CrashDumpSource":
        """Records the file's size from the filesystem without reading it.

        A path that does not (yet) exist is recorded with a size of zero.
        """
        file_size = os.path.getsize(file_path) if os.path.isfile(file_path) else 0
        return cls(file_path, file_size, file_size >> constants.PAGE_SHIFT)

    @property
    def exists(self) -> bool:
        return os.path.isfile(self.file_path)


@dataclasses.dataclass(frozen=True)
class ParseOutcome:
    """The result of running a format detector against a source."""

    supported: bool
    physical_descriptor: Optional[MemoryDescriptor] = None
    logical_descriptor: Optional[MemoryDescriptor] = None

    @classmethod
    def unsupported(cls) -> "ParseOutcome":
        return cls(supported=False)
