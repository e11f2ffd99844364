import io
import os
import socket
from typing import Any, Optional

from ..core.handle import Handle, LockMode

RECV_CHUNK = 65536


class SocketHandle(Handle):
    """Connected stream socket. Not seekable; supports blocking and timeouts."""

    def __init__(self, sock: socket.socket):
        self.sock = sock
        self._eof = False

    def read(self, size: int = -1) -> bytes:
        data = self.sock.recv(size if size >= 0 else RECV_CHUNK)
        if not data and size != 0:
            self._eof = True
        return data

    def write(self, data: bytes) -> int:
        return self.sock.send(data)

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        raise io.UnsupportedOperation("socket is not seekable")

    def tell(self) -> int:
        raise io.UnsupportedOperation("socket is not seekable")

    def truncate(self, size: Optional[int] = None) -> int:
        raise io.UnsupportedOperation("socket cannot be truncated")

    def flush(self) -> None:
        pass

    def lock(self, mode: LockMode) -> bool:
        return False

    def stat(self) -> os.stat_result:
        return os.fstat(self.fileno())

    def eof(self) -> bool:
        return self._eof

    def close(self) -> None:
        self.sock.close()

    @property
    def closed(self) -> bool:
        return self.sock.fileno() == -1

    @property
    def raw(self) -> Any:
        return self.sock

    def fileno(self) -> int:
        return self.sock.fileno()

    def seekable(self) -> bool:
        return False

    def set_blocking(self, flag: bool) -> bool:
        self.sock.setblocking(flag)
        return True

    def set_timeout(self, seconds: int, microseconds: Optional[int] = None) -> bool:
        self.sock.settimeout(seconds + (microseconds or 0) / 1_000_000)
        return True
