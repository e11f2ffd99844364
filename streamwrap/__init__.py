"""streamwrap: address open handles through a wrapper:// path scheme."""

from .backends.adapt import as_handle
from .backends.fs import FileHandle
from .backends.memory import MemoryHandle, TempHandle
from .backends.socket import SocketHandle
from .config import Settings, configure_logging
from .core.handle import BufferMode, Handle, LockMode, StreamOption
from .core.registry import Registry
from .core.stat import StatRecord
from .errors import InvalidInput, NoRealPath, NotFound
from .interface.filesystem import WrapperFileSystem
from .interface.proxy import MetaOption, StatFlags, StreamProxy

__all__ = [
    "Registry", "StreamProxy", "WrapperFileSystem", "Handle", "as_handle",
    "MemoryHandle", "TempHandle", "FileHandle", "SocketHandle",
    "LockMode", "StreamOption", "BufferMode", "MetaOption", "StatFlags", "StatRecord",
    "Settings", "configure_logging", "InvalidInput", "NotFound", "NoRealPath",
]
