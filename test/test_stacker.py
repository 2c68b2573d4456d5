import pytest

from pagedump.framework import contexts, exceptions, interfaces
from pagedump.framework.automagic import stacker
from pagedump.framework.layers import crash, raw, runs


def test_default_detectors_are_ordered():
    detectors = stacker.LayoutStacker().detectors
    assert detectors == [crash.WindowsCrashDump64Detector, raw.RawFormatDetector]


def test_crash_dump_is_detected_first(make_dump):
    path = make_dump(number_of_runs=1, number_of_pages=2, memory_runs=[(0x10, 2)])
    result = stacker.LayoutStacker().stack(runs.CrashDumpSource.from_path(path))
    assert result is not None
    name, outcome = result
    assert name == "WindowsCrashDump64Detector"
    assert outcome.physical_descriptor.runs == (runs.MemoryRun(0x10, 2),)


def test_other_files_fall_through_to_raw(make_dump):
    path = make_dump(signature=b"ELF\x00\x00\x00\x00\x00", size=0x4000)
    name, outcome = stacker.LayoutStacker().stack(runs.CrashDumpSource.from_path(path))
    assert name == "RawFormatDetector"
    assert outcome.physical_descriptor.runs == (runs.MemoryRun(0, 4),)
    assert outcome.logical_descriptor is None


def test_names_restrict_detectors(make_dump):
    path = make_dump(signature=b"ELF\x00\x00\x00\x00\x00")
    layout_stacker = stacker.LayoutStacker(names=["WindowsCrashDump64Detector"])
    assert layout_stacker.detectors == [crash.WindowsCrashDump64Detector]
    assert layout_stacker.stack(runs.CrashDumpSource.from_path(path)) is None


def test_missing_file_is_not_supported(tmp_path):
    source = runs.CrashDumpSource.from_path(str(tmp_path / "absent.raw"))
    assert stacker.LayoutStacker().stack(source) is None


def test_read_failure_stops_detection(make_dump):
    path = make_dump(number_of_runs=1, memory_runs=[(0, 1)], size=0x1000)
    with pytest.raises(exceptions.InvalidAddressException):
        stacker.LayoutStacker().stack(runs.CrashDumpSource.from_path(path))


def test_context_scanner_is_used(make_dump, fixed_scanner, baseline):
    path = make_dump(number_of_runs=99, start_of_memory=0x6000)
    context = contexts.Context(layout_scanner=fixed_scanner(baseline))
    name, outcome = stacker.LayoutStacker().stack(
        runs.CrashDumpSource.from_path(path), context
    )
    assert name == "WindowsCrashDump64Detector"
    assert outcome.physical_descriptor == baseline.with_start_of_memory(0x6000)


def test_explicit_detectors_are_sorted(make_dump):
    class Declines(interfaces.layers.FormatDetectorInterface):
        stack_order = 1

        def detect(self, context, source):
            return runs.ParseOutcome.unsupported()

    layout_stacker = stacker.LayoutStacker(
        detectors=[raw.RawFormatDetector, Declines, crash.WindowsCrashDump64Detector]
    )
    assert layout_stacker.detectors == [
        Declines,
        crash.WindowsCrashDump64Detector,
        raw.RawFormatDetector,
    ]
    path = make_dump(number_of_runs=0)
    name, _ = layout_stacker.stack(runs.CrashDumpSource.from_path(path))
    assert name == "WindowsCrashDump64Detector"


def test_non_detector_is_rejected():
    with pytest.raises(TypeError):
        stacker.LayoutStacker(detectors=[contexts.Context])
