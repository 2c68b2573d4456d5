# This file is Copyright 2019 Volatility Foundation and licensed under the Volatility Software License 1.0
# which is available at https://www.volatilityfoundation.org/license/vsl-v1.0
#
"""A list of potential exceptions that pagedump can throw.

Format mismatches are not errors: detectors report them by returning an
unsupported :class:`~pagedump.framework.layers.crash.ParseOutcome`.  Once a
file has been positively identified, any failure to read it is raised as
an :class:`InvalidAddressException` and left for the caller to handle.
"""


class PageDumpException(Exception):
    """Class to allow filtering of all PageDumpExceptions."""


class LayerException(PageDumpException):
    """Thrown when an error occurs dealing with memory and layers."""

    def __init__(self, layer_name: str, *args) -> None:
        super().__init__(*args)
        self.layer_name = layer_name


class InvalidAddressException(LayerException):
    """Thrown when an address is not valid in the layer it was requested."""

    def __init__(self, layer_name: str, invalid_address: int, *args) -> None:
        super().__init__(layer_name, *args)
        self.invalid_address = invalid_address


class UnsupportedFormatException(PageDumpException):
    """Thrown when no format detector accepts a file."""

    def __init__(self, location: str, *args) -> None:
        super().__init__(*args)
        self.location = location
