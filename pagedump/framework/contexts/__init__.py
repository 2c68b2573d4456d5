# This file is Copyright 2019 Volatility Foundation and licensed under the Volatility Software License 1.0
# which is available at https://www.volatilityfoundation.org/license/vsl-v1.0
#
"""A `Context` maintains the platform components a detector may rely upon.

Currently this is only the generic layout scanner, which produces the
baseline descriptor used when a dump's own run table cannot be trusted.
"""
from typing import Optional

from pagedump.framework import interfaces
from pagedump.framework.layers import scanners


class Context(interfaces.context.ContextInterface):
    """Maintains the context within which to detect formats and extract
    memory layouts."""

    def __init__(
        self, layout_scanner: Optional[interfaces.layers.LayoutScannerInterface] = None
    ) -> None:
        """Initializes the context.

        Args:
            layout_scanner: The generic scanner to produce baseline layouts (defaults to a flat, whole-file layout)
        """
        super().__init__()
        self._layout_scanner = layout_scanner or scanners.FlatLayoutScanner()

    @property
    def layout_scanner(self) -> interfaces.layers.LayoutScannerInterface:
        """The generic scanner used to produce best-effort layouts."""
        return self._layout_scanner
