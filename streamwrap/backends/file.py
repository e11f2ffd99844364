import fcntl
import io
import os
from typing import Any, BinaryIO, Optional

from ..core.handle import Handle, LockMode


class FileObjectHandle(Handle):
    """
    Handle over any binary file object that has a file descriptor.
    path is the backing location when there is one.
    """

    def __init__(self, file: BinaryIO, path: Optional[str] = None):
        self.file = file
        self.path = os.path.abspath(path) if path else None

    def read(self, size: int = -1) -> bytes:
        return self.file.read(size)

    def write(self, data: bytes) -> int:
        return self.file.write(data)

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        return self.file.seek(offset, whence)

    def tell(self) -> int:
        return self.file.tell()

    def truncate(self, size: Optional[int] = None) -> int:
        return self.file.truncate(size)

    def flush(self) -> None:
        self.file.flush()

    def lock(self, mode: LockMode) -> bool:
        try:
            fcntl.flock(self.fileno(), int(mode))
        except BlockingIOError:
            return False
        return True

    def stat(self) -> os.stat_result:
        return os.fstat(self.fileno())

    def eof(self) -> bool:
        return self.tell() >= self.stat().st_size

    def close(self) -> None:
        self.file.close()

    @property
    def closed(self) -> bool:
        return self.file.closed

    @property
    def real_path(self) -> Optional[str]:
        return self.path

    @property
    def raw(self) -> Any:
        return self.file

    def fileno(self) -> int:
        return self.file.fileno()

    def readable(self) -> bool:
        return self.file.readable()

    def writable(self) -> bool:
        return self.file.writable()

    def seekable(self) -> bool:
        return self.file.seekable()

    def set_blocking(self, flag: bool) -> bool:
        os.set_blocking(self.fileno(), flag)
        return True

    def set_write_buffer(self, size: int) -> bool:
        # Buffer size is fixed at open; only "no buffering" on a raw file holds.
        return size == 0 and isinstance(self.file, io.RawIOBase)
