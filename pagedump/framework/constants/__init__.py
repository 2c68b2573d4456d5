# This file is Copyright 2019 Volatility Foundation and licensed under the Volatility Software License 1.0
# which is available at https://www.volatilityfoundation.org/license/vsl-v1.0
#
"""Pagedump constants.

Stores the constant values that are fixed throughout the framework,
such as the page geometry and the extra logging levels.
"""
from pagedump.framework.constants._version import (
    PACKAGE_VERSION,
    VERSION_MAJOR,
    VERSION_MINOR,
    VERSION_PATCH,
    VERSION_SUFFIX,
)

PAGE_SHIFT = 12
"""Number of bits to shift a byte offset by to get a page number"""

PAGE_SIZE = 1 << PAGE_SHIFT
"""Size in bytes of a single physical page"""

LOGLEVEL_INFO = 20
"""Logging level for information data, showed when use the requests any logging: -v"""
LOGLEVEL_DEBUG = 10
"""Logging level for debugging data, showed when the user requests more logging detail: -vv"""
LOGLEVEL_V = 9
"""Logging level for the lowest "extra" level of logging: -vvv"""
LOGLEVEL_VV = 8
"""Logging level for two levels of detail: -vvvv"""
LOGLEVEL_VVV = 7
"""Logging level for three levels of detail: -vvvvv"""
LOGLEVEL_VVVV = 6
"""Logging level for four levels of detail: -vvvvvv"""

DESCRIPTOR_FORMAT = "memory-descriptor"
"""Format name recorded in the metadata of exported memory descriptors"""
