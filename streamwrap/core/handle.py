import fcntl
import os
from abc import ABC, abstractmethod
from enum import Enum, IntFlag
from typing import Any, Optional


class LockMode(IntFlag):
    SHARED = fcntl.LOCK_SH
    EXCLUSIVE = fcntl.LOCK_EX
    UNLOCK = fcntl.LOCK_UN
    NONBLOCK = fcntl.LOCK_NB


class StreamOption(Enum):
    BLOCKING = "BLOCKING"
    READ_TIMEOUT = "READ_TIMEOUT"
    WRITE_BUFFER = "WRITE_BUFFER"


class BufferMode(Enum):
    NONE = "NONE"
    LINE = "LINE"
    FULL = "FULL"


class Handle(ABC):
    """
    Abstract representation of an open, caller-owned I/O resource.

    A Handle is what gets registered and what every proxy operation is
    forwarded to. Results and errors are the handle's own; nothing above
    this layer re-interprets them.
    """

    @abstractmethod
    def read(self, size: int = -1) -> bytes:
        """Read up to size bytes. Returns fewer at end of data."""
        pass

    @abstractmethod
    def write(self, data: bytes) -> int:
        """Write data and return the number of bytes written."""
        pass

    @abstractmethod
    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        """Move the position and return the new absolute offset."""
        pass

    @abstractmethod
    def tell(self) -> int:
        pass

    @abstractmethod
    def truncate(self, size: Optional[int] = None) -> int:
        """Resize the resource and return the new size."""
        pass

    @abstractmethod
    def flush(self) -> None:
        pass

    @abstractmethod
    def lock(self, mode: LockMode) -> bool:
        """
        Apply an advisory lock.
        Returns False when the lock is not supported or would block in
        NONBLOCK mode.
        """
        pass

    @abstractmethod
    def stat(self) -> os.stat_result:
        pass

    @abstractmethod
    def eof(self) -> bool:
        pass

    @abstractmethod
    def close(self) -> None:
        pass

    @property
    @abstractmethod
    def closed(self) -> bool:
        pass

    @property
    def real_path(self) -> Optional[str]:
        """
        Location of the resource on the filesystem.
        None for memory buffers and anonymous temporary streams.
        """
        return None

    @property
    def raw(self) -> Any:
        """The object this handle wraps, or the handle itself."""
        return self

    def fileno(self) -> int:
        raise OSError("handle has no file descriptor")

    def readable(self) -> bool:
        return True

    def writable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def set_blocking(self, flag: bool) -> bool:
        return False

    def set_timeout(self, seconds: int, microseconds: Optional[int] = None) -> bool:
        return False

    def set_write_buffer(self, size: int) -> bool:
        """
        Buffer size is fixed at open time. Only size 0 on an already
        unbuffered stream returns True, so BufferMode.FULL with a real size
        always returns False.
        """
        return False

    def __repr__(self) -> str:
        return f"<{type(self).__name__} raw={type(self.raw).__name__} path={self.real_path!r}>"
