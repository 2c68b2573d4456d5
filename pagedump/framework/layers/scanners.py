# This file is Copyright 2019 Volatility Foundation and licensed under the Volatility Software License 1.0
# which is available at https://www.volatilityfoundation.org/license/vsl-v1.0
#
"""Generic layout scanners, which produce a best-effort memory layout for a
file without knowing its format."""
import logging
from typing import Optional

from pagedump.framework import constants, interfaces
from pagedump.framework.layers import runs

vollog = logging.getLogger(__name__)


class FlatLayoutScanner(interfaces.layers.LayoutScannerInterface):
    """Treats the whole file as a single run of physical memory starting at
    page zero, as for a raw physical image."""

    def extract(
        self,
        context: interfaces.context.ContextInterface,
        source: runs.CrashDumpSource,
    ) -> Optional[runs.MemoryDescriptor]:
        if not source.max_page_count:
            vollog.log(
                constants.LOGLEVEL_VVV,
                f"No whole pages in {source.file_path}, unable to produce a flat layout",
            )
            return None
        return runs.MemoryDescriptor(
            start_of_memory=0,
            number_of_runs=1,
            number_of_pages=source.max_page_count,
            runs=(runs.MemoryRun(0, source.max_page_count),),
        )
