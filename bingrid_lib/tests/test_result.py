"""Tests for operation results, errors and entry records."""

import pytest
import numpy as np
from bingrid_lib import (
    Bin,
    Entry,
    ErrorCode,
    GridError,
    IndexOutOfBoundsError,
    InvalidDimensionError,
    OperationResult,
    OperationStatus,
)


def test_failure_records_error_code():
    result = OperationResult.failure("outside", code=ErrorCode.OUT_OF_RANGE)

    assert result.status == OperationStatus.FAILURE
    assert result.errors == ["outside"]
    assert result.error_codes == ["OUT_OF_RANGE"]
    assert result.has_error(ErrorCode.OUT_OF_RANGE)
    assert not result.has_error(ErrorCode.INDEX_OUT_OF_BOUNDS)


def test_result_roundtrip():
    result = OperationResult.success("ok", new_ids={"entry_id": 3, "bin_index": 12})

    restored = OperationResult.from_dict(result.to_dict())

    assert restored == result
    assert restored.is_success()


def test_error_hierarchy():
    assert issubclass(InvalidDimensionError, ValueError)
    assert issubclass(IndexOutOfBoundsError, IndexError)
    assert issubclass(InvalidDimensionError, GridError)
    assert InvalidDimensionError.code == ErrorCode.INVALID_DIMENSION
    assert IndexOutOfBoundsError.code == ErrorCode.INDEX_OUT_OF_BOUNDS


def test_entry_is_immutable_copy():
    coords = [1, 2.5]
    entry = Entry.create(4, coords)
    coords[0] = 99

    assert entry.x == (1.0, 2.5)
    with pytest.raises(AttributeError):
        entry.id = 5

    arr = entry.to_array()
    arr[0] = -1.0
    assert entry.x == (1.0, 2.5)


@pytest.mark.parametrize("entry_id", [1.7, 2.0, "3", None])
def test_entry_rejects_non_integer_id(entry_id):
    """Test ids are never truncated or coerced."""
    with pytest.raises(TypeError):
        Entry.create(entry_id, (0.0, 0.0))


def test_entry_accepts_numpy_integer_id():
    entry = Entry.create(np.int64(9), (0.0, 0.0))

    assert entry.id == 9
    assert type(entry.id) is int


def test_bin_roundtrip():
    b = Bin(idx=3)
    b.append(Entry.create(1, (0.5, 0.5)))
    b.append(Entry.create(2, (0.7, 0.1)))

    restored = Bin.from_dict(b.to_dict())

    assert restored == b
    assert restored.ids() == [1, 2]
    assert restored.coords().shape == (2, 2)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
