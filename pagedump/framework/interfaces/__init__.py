# This file is Copyright 2019 Volatility Foundation and licensed under the Volatility Software License 1.0
# which is available at https://www.volatilityfoundation.org/license/vsl-v1.0
#
"""The interfaces module contains the API interface for the core pagedump
framework.

These interfaces describe the seams at which the surrounding platform
plugs in its own components: the context, the generic layout scanner and
the per-format detectors.
"""

# Import the submodules we want people to be able to use without importing them themselves
from pagedump.framework.interfaces import context, layers
