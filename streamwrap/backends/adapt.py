import io
import os
import socket
from typing import Any, Optional

from ..core.handle import Handle
from ..errors import InvalidInput
from .file import FileObjectHandle
from .memory import MemoryHandle
from .socket import SocketHandle


def _is_binary_file(obj: Any) -> bool:
    if isinstance(obj, io.TextIOBase):
        return False
    return all(hasattr(obj, attr) for attr in ("read", "write", "seek", "fileno"))


def _backing_path(obj: Any) -> Optional[str]:
    name = getattr(obj, "name", None)
    if isinstance(name, str) and os.path.exists(name):
        return name
    return None


def as_handle(obj: Any) -> Handle:
    """
    Coerce obj into a Handle.
    Accepts Handles, io.BytesIO, connected sockets and binary file objects.
    """
    if isinstance(obj, Handle):
        handle = obj
    elif isinstance(obj, io.BytesIO):
        handle = MemoryHandle(obj)
    elif isinstance(obj, socket.socket):
        handle = SocketHandle(obj)
    elif _is_binary_file(obj):
        handle = FileObjectHandle(obj, path=_backing_path(obj))
    else:
        raise InvalidInput(f'Expected a resource got "{type(obj).__name__}".')

    if handle.closed:
        raise InvalidInput(f'Expected an open resource got a closed "{type(obj).__name__}".')
    return handle
