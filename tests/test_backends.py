"""Tests for the handle backends and as_handle coercion."""

import io
import os
import socket
import stat
import tempfile

import pytest

from streamwrap import FileHandle, InvalidInput, MemoryHandle, SocketHandle, StatRecord, TempHandle, as_handle
from streamwrap.backends.file import FileObjectHandle


class TestAsHandle:

    def test_handle_passes_through(self, memory):
        assert as_handle(memory) is memory

    def test_bytes_buffer(self):
        buffer = io.BytesIO()
        handle = as_handle(buffer)
        assert isinstance(handle, MemoryHandle)
        assert handle.real_path is None

    def test_socket(self):
        left, right = socket.socketpair()
        try:
            assert isinstance(as_handle(left), SocketHandle)
        finally:
            left.close()
            right.close()

    def test_anonymous_temp_file_has_no_path(self):
        with tempfile.TemporaryFile() as f:
            handle = as_handle(f)
            assert isinstance(handle, FileObjectHandle)
            assert handle.real_path is None

    def test_named_temp_file_keeps_path(self):
        with tempfile.NamedTemporaryFile() as f:
            assert as_handle(f).real_path == os.path.abspath(f.name)

    def test_text_stream_rejected(self):
        with pytest.raises(InvalidInput):
            as_handle(io.StringIO())

    def test_closed_socket_rejected(self):
        left, right = socket.socketpair()
        left.close()
        right.close()
        with pytest.raises(InvalidInput):
            as_handle(left)


class TestMemoryHandle:

    def test_stat_is_synthesized(self):
        handle = MemoryHandle(io.BytesIO(b"abcd"))
        st = handle.stat()
        assert st.st_size == 4
        assert stat.S_ISREG(st.st_mode)
        assert handle.tell() == 0

    def test_eof(self):
        handle = MemoryHandle(io.BytesIO(b"ab"))
        assert not handle.eof()
        handle.read()
        assert handle.eof()

    def test_no_descriptor(self, memory):
        with pytest.raises(OSError):
            memory.fileno()


class TestTempHandle:

    def test_round_trip(self):
        handle = TempHandle("unit")
        handle.write(b"payload")
        handle.flush()
        handle.seek(0)
        assert handle.read() == b"payload"
        assert handle.getvalue() == b"payload"
        assert handle.real_path is None
        handle.close()
        assert handle.closed


class TestFileHandle:

    def test_creates_parent_directories(self, tmp_path):
        target = tmp_path / "a" / "b" / "c.bin"
        handle = FileHandle(str(target))
        try:
            assert target.exists()
            assert handle.real_path == str(target)
        finally:
            handle.close()

    def test_text_mode_becomes_binary(self, tmp_path):
        handle = FileHandle(str(tmp_path / "t.bin"), "w+")
        try:
            assert handle.write(b"bytes") == 5
        finally:
            handle.close()


class TestSocketHandle:

    def test_eof_after_peer_closes(self):
        left, right = socket.socketpair()
        handle = SocketHandle(left)
        try:
            right.sendall(b"hi")
            right.close()
            assert handle.read(10) == b"hi"
            assert not handle.eof()
            assert handle.read(10) == b""
            assert handle.eof()
            assert not handle.seekable()
        finally:
            handle.close()


class TestStatRecord:

    def test_from_stat_and_info(self, tmp_path):
        target = tmp_path / "f"
        target.write_bytes(b"123")
        record = StatRecord.from_stat(os.stat(target))
        info = record.to_info("wrapper://f")
        assert info["size"] == 3
        assert info["type"] == "file"
        assert record

    def test_empty_is_falsy(self):
        assert not StatRecord.empty()
        assert StatRecord.empty().is_empty()
