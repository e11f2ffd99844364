from __future__ import annotations

import logging
import os
import shutil
from enum import Enum, IntFlag
from typing import TYPE_CHECKING, Any, Iterator, Optional

from ..core.handle import BufferMode, Handle, LockMode, StreamOption
from ..core.stat import StatRecord
from ..errors import InvalidInput, NoRealPath

if TYPE_CHECKING:
    from ..core.registry import Registry

logger = logging.getLogger(__name__)


class ProxyState(Enum):
    UNOPENED = "UNOPENED"
    OPEN = "OPEN"
    CLOSED = "CLOSED"


class MetaOption(Enum):
    TOUCH = "TOUCH"
    OWNER_NAME = "OWNER_NAME"
    OWNER = "OWNER"
    GROUP_NAME = "GROUP_NAME"
    GROUP = "GROUP"
    ACCESS = "ACCESS"


class StatFlags(IntFlag):
    LINK = 1
    QUIET = 2


class StreamProxy:
    """
    Per-open proxy that binds one registered handle and forwards every
    operation to it.

    Results and exceptions come straight from the handle. The proxy adds no
    validation beyond resolving the identifier in the path.

    Path-level operations (set_metadata, unlink, url_stat) resolve their path
    argument fresh and work whether or not the proxy is open.
    """

    def __init__(self, registry: Registry):
        self.registry = registry
        self.state = ProxyState.UNOPENED
        self.inner: Optional[Handle] = None
        self.mode: Optional[str] = None
        self.opened_path: Optional[str] = None

    def open(self, path: str, mode: str = "rb", options: int = 0) -> bool:
        self.inner = self._resolve(path)
        self.mode = mode
        self.opened_path = path
        self.state = ProxyState.OPEN
        logger.debug("Opened %s (mode=%s, options=%s)", path, mode, options)
        return True

    def close(self) -> Any:
        if self.state is not ProxyState.OPEN:
            return None
        self.state = ProxyState.CLOSED
        self.registry.remove(self.inner)
        logger.debug("Closed %s", self.opened_path)
        return self.inner.close()

    def eof(self) -> bool:
        return self._bound().eof()

    def flush(self) -> Any:
        return self._bound().flush()

    def lock(self, mode: LockMode) -> bool:
        return self._bound().lock(mode)

    def read(self, count: int = -1) -> bytes:
        return self._bound().read(count)

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        return self._bound().seek(offset, whence)

    def stat(self) -> os.stat_result:
        return self._bound().stat()

    def tell(self) -> int:
        return self._bound().tell()

    def truncate(self, size: Optional[int] = None) -> int:
        return self._bound().truncate(size)

    def write(self, data: bytes) -> int:
        return self._bound().write(data)

    def set_option(self, option: StreamOption, arg1: Any, arg2: Any = None) -> bool:
        inner = self._bound()
        if option is StreamOption.BLOCKING:
            return inner.set_blocking(bool(arg1))
        if option is StreamOption.READ_TIMEOUT:
            if arg2 is None:
                return inner.set_timeout(arg1)
            return inner.set_timeout(arg1, arg2)
        if option is StreamOption.WRITE_BUFFER:
            if arg1 is BufferMode.NONE:
                return inner.set_write_buffer(0)
            if arg1 is BufferMode.FULL:
                return inner.set_write_buffer(arg2)
            return False
        return False

    def set_metadata(self, path: str, option: MetaOption, value: Any = None) -> bool:
        """
        Change timestamps, ownership or permissions of the real location
        behind path. Failures from the host call are raised, not hidden.
        """
        location = self._real_path(self._resolve(path))

        if option is MetaOption.TOUCH:
            os.utime(location, value)
        elif option in (MetaOption.OWNER, MetaOption.OWNER_NAME):
            shutil.chown(location, user=value)
        elif option in (MetaOption.GROUP, MetaOption.GROUP_NAME):
            shutil.chown(location, group=value)
        elif option is MetaOption.ACCESS:
            os.chmod(location, value)
        else:
            raise InvalidInput(f"Unknown metadata option: {option!r}")
        return True

    def unlink(self, path: str) -> bool:
        os.unlink(self._real_path(self._resolve(path)))
        return True

    def url_stat(self, path: str, flags: int = 0) -> StatRecord:
        inner = self._resolve(path)
        quiet = bool(flags & StatFlags.QUIET)
        try:
            if inner.real_path is None:
                return StatRecord.from_stat(inner.stat())
            if flags & StatFlags.LINK and os.path.islink(inner.real_path):
                return StatRecord.from_stat(os.lstat(inner.real_path))
            return StatRecord.from_stat(os.stat(inner.real_path))
        except (OSError, ValueError):
            if quiet:
                return StatRecord.empty()
            raise

    # File object surface, so a proxy can be handed straight to consumers.

    @property
    def closed(self) -> bool:
        return self.state is not ProxyState.OPEN

    def readable(self) -> bool:
        return self._bound().readable()

    def writable(self) -> bool:
        return self._bound().writable()

    def seekable(self) -> bool:
        return self._bound().seekable()

    def fileno(self) -> int:
        return self._bound().fileno()

    def readline(self, size: int = -1) -> bytes:
        inner = self._bound()
        line = bytearray()
        while size < 0 or len(line) < size:
            char = inner.read(1)
            if not char:
                break
            line += char
            if char == b"\n":
                break
        return bytes(line)

    def __iter__(self) -> Iterator[bytes]:
        return self

    def __next__(self) -> bytes:
        line = self.readline()
        if not line:
            raise StopIteration
        return line

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        return f"<StreamProxy {self.state.value} {self.opened_path!r}>"

    def _resolve(self, path: str) -> Handle:
        return self.registry.resolve(self.registry.identifier_of(path))

    def _bound(self) -> Handle:
        if self.state is not ProxyState.OPEN:
            raise ValueError(f"I/O operation on {self.state.value.lower()} stream")
        return self.inner

    @staticmethod
    def _real_path(handle: Handle) -> str:
        location = handle.real_path
        if location is None:
            raise NoRealPath(f"{handle!r} has no location on the filesystem")
        return location
