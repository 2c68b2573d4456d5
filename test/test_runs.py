import jsonschema
import pytest

from pagedump import schemas
from pagedump.framework import exceptions
from pagedump.framework.layers import runs


@pytest.fixture
def descriptor():
    return runs.MemoryDescriptor(
        start_of_memory=0x2000,
        number_of_runs=3,
        number_of_pages=110,
        runs=(
            runs.MemoryRun(0, 50),
            runs.MemoryRun(200, 50),
            runs.MemoryRun(1000, 10),
        ),
    )


def test_runs_are_immutable(descriptor):
    with pytest.raises(AttributeError):
        descriptor.runs[0].base_page = 7
    with pytest.raises(AttributeError):
        descriptor.start_of_memory = 0


def test_with_start_of_memory(descriptor):
    moved = descriptor.with_start_of_memory(0x4000)
    assert moved.start_of_memory == 0x4000
    assert moved.runs == descriptor.runs
    assert descriptor.start_of_memory == 0x2000


def test_skip_counts(descriptor):
    assert list(descriptor.skip_counts()) == [0, 150, 750]


def test_segments(descriptor):
    assert descriptor.segments() == [
        (0, 0x2000, 50 * 0x1000, 50 * 0x1000),
        (200 * 0x1000, 0x2000 + 50 * 0x1000, 50 * 0x1000, 50 * 0x1000),
        (1000 * 0x1000, 0x2000 + 100 * 0x1000, 10 * 0x1000, 10 * 0x1000),
    ]


def test_file_offset(descriptor):
    assert descriptor.file_offset(0) == 0x2000
    assert descriptor.file_offset(0x1234) == 0x3234
    assert descriptor.file_offset(200 * 0x1000) == 0x2000 + 50 * 0x1000
    assert descriptor.file_offset(1009 * 0x1000 + 0xFFF) == 0x2000 + 109 * 0x1000 + 0xFFF


@pytest.mark.parametrize("address", [50 * 0x1000, 199 * 0x1000, 1010 * 0x1000])
def test_file_offset_in_gap(descriptor, address):
    with pytest.raises(exceptions.InvalidAddressException) as excinfo:
        descriptor.file_offset(address)
    assert excinfo.value.invalid_address == address


def test_file_offset_without_runs():
    descriptor = runs.MemoryDescriptor(0x2000, 0, 0)
    with pytest.raises(exceptions.InvalidAddressException):
        descriptor.file_offset(0)


def test_dict_round_trip(descriptor):
    data = descriptor.to_dict()
    assert data["metadata"]["format"] == "memory-descriptor"
    assert data["runs"][1] == {"base_page": 200, "page_count": 50}
    assert runs.MemoryDescriptor.from_dict(data) == descriptor


def test_from_dict_rejects_malformed(descriptor):
    data = descriptor.to_dict()
    data["runs"][0]["page_count"] = "fifty"
    with pytest.raises(jsonschema.ValidationError):
        runs.MemoryDescriptor.from_dict(data)


def test_from_dict_rejects_unknown_format(descriptor):
    data = descriptor.to_dict()
    data["metadata"]["format"] = "not-a-format"
    with pytest.raises(ValueError):
        runs.MemoryDescriptor.from_dict(data)


def test_validate_without_format():
    assert not schemas.validate({"runs": []})


def test_validate_caches_results(descriptor):
    data = descriptor.to_dict()
    assert schemas.validate(data)
    schema = schemas.load_schema("memory-descriptor")
    assert schemas.create_json_hash(data, schema) in schemas.cached_validations


def test_valid_with_broken_schema(descriptor):
    assert not schemas.valid(
        descriptor.to_dict(), {"type": "no-such-type"}, use_cache=False
    )
