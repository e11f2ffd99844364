import io
import os
import tempfile
from typing import Any, Optional

from ..core.handle import Handle, LockMode
from ..core.stat import synthesize_stat
from .file import FileObjectHandle


class MemoryHandle(Handle):
    """
    Growable in-memory buffer. Has no file descriptor and no real path,
    so locks are unsupported and stat is synthesized from the buffer size.
    """

    def __init__(self, buffer: Optional[io.BytesIO] = None):
        self.buffer = buffer if buffer is not None else io.BytesIO()

    def read(self, size: int = -1) -> bytes:
        return self.buffer.read(size)

    def write(self, data: bytes) -> int:
        return self.buffer.write(data)

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        return self.buffer.seek(offset, whence)

    def tell(self) -> int:
        return self.buffer.tell()

    def truncate(self, size: Optional[int] = None) -> int:
        return self.buffer.truncate(size)

    def flush(self) -> None:
        self.buffer.flush()

    def lock(self, mode: LockMode) -> bool:
        return False

    def stat(self) -> os.stat_result:
        return synthesize_stat(self.size())

    def eof(self) -> bool:
        return self.tell() >= self.size()

    def close(self) -> None:
        self.buffer.close()

    @property
    def closed(self) -> bool:
        return self.buffer.closed

    @property
    def raw(self) -> Any:
        return self.buffer

    def size(self) -> int:
        pos = self.buffer.tell()
        end = self.buffer.seek(0, os.SEEK_END)
        self.buffer.seek(pos)
        return end

    def getvalue(self) -> bytes:
        return self.buffer.getvalue()


class TempHandle(FileObjectHandle):
    """
    Anonymous temporary stream: a memfd where the platform has one,
    otherwise an unlinked temporary file. Never has a real path.
    """

    def __init__(self, name: str = "streamwrap"):
        if hasattr(os, 'memfd_create'):
            fd = os.memfd_create(name, os.MFD_CLOEXEC)
            file = open(fd, "wb+", buffering=0)
        else:
            # Fallback for non-Linux (e.g. macOS)
            file = tempfile.TemporaryFile(prefix=f"streamwrap_{name}_")
        super().__init__(file)
        self.name = name

    def getvalue(self) -> bytes:
        return os.pread(self.fileno(), self.stat().st_size, 0)
