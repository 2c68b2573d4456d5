# This file is Copyright 2019 Volatility Foundation and licensed under the Volatility Software License 1.0
# which is available at https://www.volatilityfoundation.org/license/vsl-v1.0
#
"""This module attempts to automatically determine the format of a file.

Each format is represented by a
:class:`~pagedump.framework.interfaces.layers.FormatDetectorInterface`.
Detectors are attempted in `stack_order`, and the first one to report
support provides the memory layout.  A detector that declines lets the
next one be tried; a detector that raises (because a recognized file could
not be read) stops the process, and the exception reaches the caller.
"""

import logging
from typing import Iterable, List, Optional, Tuple, Type

from pagedump.framework import constants, contexts, interfaces
from pagedump.framework.layers import crash, raw
from pagedump.framework.layers.runs import CrashDumpSource, ParseOutcome

vollog = logging.getLogger(__name__)

DETECTORS: List[Type[interfaces.layers.FormatDetectorInterface]] = [
    crash.WindowsCrashDump64Detector,
    raw.RawFormatDetector,
]
"""The format detectors attempted by default"""


class LayoutStacker:
    """Tries a set of format detectors against a file, in order, until one
    of them supports it."""

    def __init__(
        self,
        detectors: Optional[
            Iterable[Type[interfaces.layers.FormatDetectorInterface]]
        ] = None,
        names: Optional[Iterable[str]] = None,
    ) -> None:
        """
        Args:
            detectors: The detector classes to attempt (defaults to :data:`DETECTORS`)
            names: If provided, only the detectors whose class names appear here are attempted
        """
        self._detectors = self.create_detectors_list(detectors, names)

    @property
    def detectors(self) -> List[Type[interfaces.layers.FormatDetectorInterface]]:
        return list(self._detectors)

    @classmethod
    def create_detectors_list(
        cls,
        detectors: Optional[
            Iterable[Type[interfaces.layers.FormatDetectorInterface]]
        ] = None,
        names: Optional[Iterable[str]] = None,
    ) -> List[Type[interfaces.layers.FormatDetectorInterface]]:
        """Creates the list of detectors to use, ordered by stack_order"""
        if detectors is None:
            detectors = DETECTORS
        detectors = list(detectors)
        for detector in detectors:
            if not issubclass(detector, interfaces.layers.FormatDetectorInterface):
                raise TypeError(
                    f"Detector {detector.__name__} is not a descendent of FormatDetectorInterface"
                )
        detect_set = sorted(set(detectors), key=lambda x: (x.stack_order, x.__name__))
        if names is not None:
            names = list(names)
            detect_set = [
                detector for detector in detect_set if detector.__name__ in names
            ]
        return detect_set

    def stack(
        self,
        source: CrashDumpSource,
        context: Optional[interfaces.context.ContextInterface] = None,
    ) -> Optional[Tuple[str, ParseOutcome]]:
        """Determines the format of the source.

        Args:
            source: The file to examine
            context: Context providing platform components (a default context is used if not provided)

        Returns:
            The name of the detector that supports the source and its outcome, or None if no detector does
        """
        if context is None:
            context = contexts.Context()

        for detector_cls in self._detectors:
            vollog.log(
                constants.LOGLEVEL_VV,
                f"Attempting to detect format using {detector_cls.__name__}",
            )
            outcome = detector_cls().detect(context, source)
            if outcome.supported:
                vollog.log(
                    constants.LOGLEVEL_VV,
                    f"Detected {source.file_path} using {detector_cls.__name__}",
                )
                return detector_cls.__name__, outcome
            vollog.log(
                constants.LOGLEVEL_VVVV,
                f"{detector_cls.__name__} does not support {source.file_path}",
            )
        vollog.debug(f"No detector supports {source.file_path}")
        return None
