# This file is Copyright 2019 Volatility Foundation and licensed under the Volatility Software License 1.0
# which is available at https://www.volatilityfoundation.org/license/vsl-v1.0
#
"""Defines an interface for contexts, which hold the platform components
that a format detector may call upon while parsing."""
from abc import ABCMeta, abstractmethod

from pagedump.framework import interfaces


class ContextInterface(metaclass=ABCMeta):
    """All context-like objects must adhere to the following interface.

    This interface is present to avoid import dependency cycles.
    """

    @property
    @abstractmethod
    def layout_scanner(self) -> "interfaces.layers.LayoutScannerInterface":
        """Returns the generic scanner used to produce a best-effort memory
        layout for a file."""
