# This file is Copyright 2019 Volatility Foundation and licensed under the Volatility Software License 1.0
# which is available at https://www.volatilityfoundation.org/license/vsl-v1.0
#
import logging

from pagedump.framework import constants, interfaces
from pagedump.framework.layers.runs import CrashDumpSource, ParseOutcome

vollog = logging.getLogger(__name__)


class RawFormatDetector(interfaces.layers.FormatDetectorInterface):
    """Accepts any file the layout scanner can describe, using the scanner's
    layout as the physical layout.

    This is tried last, once every more specific format has declined.
    """

    stack_order = 100

    def detect(
        self,
        context: interfaces.context.ContextInterface,
        source: CrashDumpSource,
    ) -> ParseOutcome:
        if not source.exists:
            return ParseOutcome.unsupported()
        descriptor = context.layout_scanner.extract(context, source)
        if descriptor is None:
            vollog.log(
                constants.LOGLEVEL_VVVV,
                f"Layout scanner produced no layout for {source.file_path}",
            )
            return ParseOutcome.unsupported()
        return ParseOutcome(supported=True, physical_descriptor=descriptor)
