# This file is used to augment the test configuration

import struct

import pytest

from pagedump.framework import interfaces
from pagedump.framework.layers import physical, runs

HEADER_SIZE = 0x2000
START_OF_MEMORY_OFFSET = 0x2020


def build_dump(
    signature=b"PAGEDU64",
    number_of_runs=0,
    number_of_pages=0,
    memory_runs=(),
    start_of_memory=HEADER_SIZE,
    size=HEADER_SIZE + 0x1000,
):
    """Builds the bytes of a 64-bit crash dump with the given header fields,
    cut (or padded) to size bytes."""
    data = bytearray(max(size, START_OF_MEMORY_OFFSET + 4))
    data[0 : len(signature)] = signature
    struct.pack_into("<qq", data, 0x88, number_of_runs, number_of_pages)
    for index, (base_page, page_count) in enumerate(memory_runs):
        struct.pack_into("<qq", data, 0x98 + index * 16, base_page, page_count)
    struct.pack_into("<I", data, START_OF_MEMORY_OFFSET, start_of_memory)
    return bytes(data[:size])


class FixedLayoutScanner(interfaces.layers.LayoutScannerInterface):
    """A layout scanner that always produces the same descriptor, and counts
    how often it was asked."""

    def __init__(self, descriptor):
        self.descriptor = descriptor
        self.calls = 0

    def extract(self, context, source):
        self.calls += 1
        return self.descriptor


class RecordingFileLayer(physical.FileLayer):
    """A FileLayer that records every read and every instance created."""

    instances = []

    def __init__(self, location, name=None):
        super().__init__(location, name)
        self.reads = []
        RecordingFileLayer.instances.append(self)

    def read(self, offset, length, pad=False):
        self.reads.append((offset, length))
        return super().read(offset, length, pad)


@pytest.fixture
def make_dump(tmp_path):
    """Returns a function that writes a crash dump to a temporary file and
    returns its path."""
    counter = [0]

    def _make_dump(**kwargs):
        counter[0] += 1
        path = tmp_path / f"memory{counter[0]}.dmp"
        path.write_bytes(build_dump(**kwargs))
        return str(path)

    return _make_dump


@pytest.fixture
def baseline():
    return runs.MemoryDescriptor(
        start_of_memory=0,
        number_of_runs=2,
        number_of_pages=30,
        runs=(runs.MemoryRun(0, 10), runs.MemoryRun(0x100, 20)),
    )


@pytest.fixture
def recording_layer(monkeypatch):
    """Replaces the FileLayer used by the crash dump detector with one that
    records its reads."""
    from pagedump.framework.layers import crash

    RecordingFileLayer.instances = []
    monkeypatch.setattr(crash.physical, "FileLayer", RecordingFileLayer)
    return RecordingFileLayer


@pytest.fixture
def dump_bytes():
    return build_dump


@pytest.fixture
def fixed_scanner():
    return FixedLayoutScanner
