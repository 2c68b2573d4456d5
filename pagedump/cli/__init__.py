# This file is Copyright 2019 Volatility Foundation and licensed under the Volatility Software License 1.0
# which is available at https://www.volatilityfoundation.org/license/vsl-v1.0
#
"""A command line interface for extracting the memory layout of a dump file.

The file is handed to the :class:`~pagedump.framework.automagic.stacker.LayoutStacker`,
and the physical memory descriptor of the first format that supports it is
written to standard output as JSON.
"""
import argparse
import json
import logging
import sys
from typing import List, Optional

import pagedump.framework
from pagedump.framework import constants, contexts, exceptions
from pagedump.framework.automagic import stacker
from pagedump.framework.layers.runs import CrashDumpSource

# Make sure we log everything

rootlog = logging.getLogger()
vollog = logging.getLogger(__name__)
console = logging.StreamHandler()
console.setLevel(logging.WARNING)
formatter = logging.Formatter("%(levelname)-8s %(name)-12s: %(message)s")
# Trim the console down by default
console.setFormatter(formatter)


class CommandLine:
    """Constructs a command-line interface object for users to extract memory
    layouts."""

    CLI_NAME = "pagedump"

    def __init__(self):
        self.setup_logging()

    @classmethod
    def setup_logging(cls):
        rootlog.setLevel(1)
        if console not in rootlog.handlers:
            rootlog.addHandler(console)

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog=self.CLI_NAME,
            description="Extracts the physical memory layout from a Windows crash dump",
        )
        parser.add_argument(
            "-v",
            "--verbosity",
            help="Increase output verbosity",
            default=0,
            action="count",
        )
        parser.add_argument(
            "-l",
            "--log",
            help="Log output to a file as well as the console",
            default=None,
            type=str,
        )
        parser.add_argument(
            "-d",
            "--detectors",
            metavar="DETECTOR",
            help=f"Only attempt the named detectors ({', '.join(x.__name__ for x in stacker.DETECTORS)})",
            default=None,
            nargs="+",
        )
        parser.add_argument("file", metavar="FILE", help="The dump file to examine")
        return parser

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Executes the command line module, taking the system arguments,
        and writing the memory layout of the file to stdout.

        Returns:
            The exit code: 0 on success, 1 if no format matched, 2 if the file could not be read
        """
        pagedump.framework.require_interface_version(1, 0, 0)

        parser = self.build_parser()
        args = parser.parse_args(argv)

        ### Start up logging
        if args.log:
            file_logger = logging.FileHandler(args.log)
            file_logger.setLevel(1)
            file_formatter = logging.Formatter(
                datefmt="%y-%m-%d %H:%M:%S",
                fmt="%(asctime)s %(name)-12s %(levelname)-8s %(message)s",
            )
            file_logger.setFormatter(file_formatter)
            rootlog.addHandler(file_logger)
            vollog.info("Logging started")

        self.order_extra_verbose_levels()
        if args.verbosity < 3:
            console.setLevel(logging.WARNING - (args.verbosity * 10))
        else:
            console.setLevel(logging.DEBUG - (args.verbosity - 2))

        vollog.info(f"Pagedump {constants.PACKAGE_VERSION}")

        source = CrashDumpSource.from_path(args.file)
        layout_stacker = stacker.LayoutStacker(names=args.detectors)
        try:
            result = layout_stacker.stack(source, contexts.Context())
            if result is None:
                raise exceptions.UnsupportedFormatException(
                    source.file_path,
                    f"No detector supports the file {source.file_path}",
                )
        except exceptions.UnsupportedFormatException as excp:
            vollog.error(str(excp))
            return 1
        except (exceptions.LayerException, OSError) as excp:
            vollog.error(f"Unable to read {source.file_path}: {excp}")
            vollog.debug("Read failure", exc_info=True)
            return 2

        detector_name, outcome = result
        output = {
            "detector": detector_name,
            "file_size": source.file_size,
            "max_page_count": source.max_page_count,
            "physical": outcome.physical_descriptor.to_dict(),
            "logical": (
                outcome.logical_descriptor.to_dict()
                if outcome.logical_descriptor is not None
                else None
            ),
        }
        json.dump(output, sys.stdout, indent=2)
        sys.stdout.write("\n")
        return 0

    def order_extra_verbose_levels(self):
        for level, level_value in enumerate(
            [
                constants.LOGLEVEL_V,
                constants.LOGLEVEL_VV,
                constants.LOGLEVEL_VVV,
                constants.LOGLEVEL_VVVV,
            ]
        ):
            logging.addLevelName(level_value, f"DETAIL {level+1}")


def main():
    """A convenience function for constructing and running the
    :class:`CommandLine`'s run method."""
    sys.exit(CommandLine().run())
