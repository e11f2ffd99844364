import uuid

import pytest

from streamwrap import FileHandle, MemoryHandle, Registry


@pytest.fixture
def registry():
    # A scheme per test keeps the process-wide fsspec table from leaking between tests.
    return Registry(scheme=f"wraptest{uuid.uuid4().hex[:8]}")


@pytest.fixture
def memory():
    return MemoryHandle()


@pytest.fixture
def file_handle(tmp_path):
    handle = FileHandle(str(tmp_path / "data.bin"))
    yield handle
    if not handle.closed:
        handle.close()
