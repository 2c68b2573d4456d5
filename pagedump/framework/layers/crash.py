# This file is Copyright 2021 Volatility Foundation and licensed under the Volatility Software License 1.0
# which is available at https://www.volatilityfoundation.org/license/vsl-v1.0
#
import logging
import struct
from typing import Optional

from pagedump.framework import constants, contexts, exceptions, interfaces
from pagedump.framework.layers import physical, runs
from pagedump.framework.layers.runs import CrashDumpSource, ParseOutcome

vollog = logging.getLogger(__name__)


class CrashDumpFormatException(exceptions.LayerException):
    """Thrown when an error occurs with the underlying Crash file format."""


class WindowsCrashDump64Detector(interfaces.layers.FormatDetectorInterface):
    """Detects Windows 64-bit complete memory dumps and extracts the
    physical memory layout from their header.

    The header holds a table of up to 32 memory runs.  When the table's run
    count conforms to that limit the table is used as is, otherwise the
    baseline layout from the context's layout scanner is promoted in its
    place.
    """

    stack_order = 11

    SIGNATURE = "PAGEDU64"
    HEADER_SIZE = 0x2000
    START_OF_MEMORY_OFFSET = 0x2020
    RUN_DESCRIPTOR_OFFSET = 0x88
    MAX_RUNS = 32

    _magic_struct = struct.Struct("<8s")
    _start_struct = struct.Struct("<I")
    # NumberOfRuns, NumberOfPages
    _descriptor_struct = struct.Struct("<qq")
    # BasePage, PageCount
    _run_struct = struct.Struct("<qq")

    def detect(
        self,
        context: interfaces.context.ContextInterface,
        source: CrashDumpSource,
    ) -> ParseOutcome:
        if not source.exists:
            vollog.log(
                constants.LOGLEVEL_VVVV, f"Crashdump file not found: {source.file_path}"
            )
            return ParseOutcome.unsupported()

        baseline = context.layout_scanner.extract(context, source)

        with physical.FileLayer(source.file_path) as base_layer:
            try:
                self.check_header(base_layer)
            except CrashDumpFormatException as excp:
                vollog.log(
                    constants.LOGLEVEL_VVVV, f"Exception reading crashdump: {excp}"
                )
                return ParseOutcome.unsupported()
            return self.parse(base_layer, baseline)

    @classmethod
    def check_header(
        cls, base_layer: interfaces.layers.DataLayerInterface, offset: int = 0
    ) -> str:
        # Verify the Window's crash dump file magic
        try:
            header_data = base_layer.read(offset, cls._magic_struct.size)
        except exceptions.InvalidAddressException:
            raise CrashDumpFormatException(
                base_layer.name, f"Crashdump header not found at offset {offset}"
            )
        (magic,) = cls._magic_struct.unpack(header_data)
        signature = magic.decode("ascii", errors="replace")

        if signature != cls.SIGNATURE:
            raise CrashDumpFormatException(
                base_layer.name,
                f"Bad signature {signature!r} at file offset 0x{offset:x}",
            )
        return signature

    @classmethod
    def parse(
        cls,
        base_layer: interfaces.layers.DataLayerInterface,
        baseline: Optional[runs.MemoryDescriptor],
    ) -> ParseOutcome:
        """Reads the memory layout from a layer whose header has already been
        checked.

        Raises:
            InvalidAddressException: if the header cannot be read in full
        """
        (start_of_memory,) = cls._start_struct.unpack(
            base_layer.read(cls.START_OF_MEMORY_OFFSET, cls._start_struct.size)
        )
        number_of_runs, number_of_pages = cls._descriptor_struct.unpack(
            base_layer.read(cls.RUN_DESCRIPTOR_OFFSET, cls._descriptor_struct.size)
        )

        # The run table has to fit in the header, which is only 0x2000 in total size
        if number_of_runs > cls.MAX_RUNS or number_of_runs < 0:
            vollog.log(
                constants.LOGLEVEL_VV,
                f"Run count {number_of_runs} out of range in {base_layer.name}, "
                f"using baseline layout from 0x{start_of_memory:x}",
            )
            if baseline is None:
                vollog.warning(
                    f"No baseline layout available for {base_layer.name}, memory runs are unknown"
                )
                baseline = runs.MemoryDescriptor(
                    start_of_memory=start_of_memory,
                    number_of_runs=0,
                    number_of_pages=0,
                )
            # The baseline is promoted to the physical layout rather than duplicated
            return ParseOutcome(
                supported=True,
                physical_descriptor=baseline.with_start_of_memory(start_of_memory),
                logical_descriptor=None,
            )

        vollog.log(
            constants.LOGLEVEL_VV,
            f"Using {number_of_runs} embedded runs ({number_of_pages} pages) from {base_layer.name}",
        )
        memory_runs = []
        offset = cls.RUN_DESCRIPTOR_OFFSET + cls._descriptor_struct.size
        for index in range(number_of_runs):
            base_page, page_count = cls._run_struct.unpack(
                base_layer.read(offset, cls._run_struct.size)
            )
            vollog.log(
                constants.LOGLEVEL_VVVV,
                f"Run {index}: BasePage {base_page:#x} PageCount {page_count:#x}",
            )
            memory_runs.append(runs.MemoryRun(base_page, page_count))
            offset += cls._run_struct.size

        return ParseOutcome(
            supported=True,
            physical_descriptor=runs.MemoryDescriptor(
                start_of_memory=cls.HEADER_SIZE,
                number_of_runs=number_of_runs,
                number_of_pages=number_of_pages,
                runs=tuple(memory_runs),
            ),
            logical_descriptor=baseline,
        )


class CrashDump:
    """A crash dump file, as seen by the surrounding platform.

    Construction only records the file's size; :meth:`is_supported_format`
    performs the parse and, if successful, makes the descriptors available.
    """

    detector_class = WindowsCrashDump64Detector

    def __init__(self, file_path: str) -> None:
        self._source = CrashDumpSource.from_path(file_path)
        self._outcome: Optional[ParseOutcome] = None

    @property
    def source(self) -> CrashDumpSource:
        return self._source

    @property
    def file_path(self) -> str:
        return self._source.file_path

    @property
    def file_size(self) -> int:
        return self._source.file_size

    @property
    def max_page_count(self) -> int:
        return self._source.max_page_count

    @property
    def outcome(self) -> Optional[ParseOutcome]:
        """The result of the last successful parse, if any."""
        return self._outcome

    @property
    def phys_mem_desc(self) -> Optional[runs.MemoryDescriptor]:
        if self._outcome is None:
            return None
        return self._outcome.physical_descriptor

    @property
    def logical_phys_mem_desc(self) -> Optional[runs.MemoryDescriptor]:
        if self._outcome is None:
            return None
        return self._outcome.logical_descriptor

    def is_supported_format(
        self, context: Optional[interfaces.context.ContextInterface] = None
    ) -> bool:
        """Determines whether the file is a supported crash dump, extracting
        its memory layout if so.

        Raises:
            InvalidAddressException: if the file is a crash dump but its header is truncated
        """
        if context is None:
            context = contexts.Context()
        outcome = self.detector_class().detect(context, self._source)
        if outcome.supported:
            self._outcome = outcome
        return outcome.supported
