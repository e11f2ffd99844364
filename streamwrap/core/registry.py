import logging
import threading
import uuid
from typing import Any, Dict, List, Optional

from ..backends.adapt import as_handle
from ..config import Settings
from ..errors import InvalidInput, NotFound
from .handle import Handle
from .path import make_path, parse_identifier

logger = logging.getLogger(__name__)


class Registry:
    """
    Maps identifiers to live handles so they can be addressed as
    <scheme>://<identifier> through any fsspec-aware API.

    The registry only holds references. Whoever opens and closes a proxy
    for an entry closes the handle, which also removes the entry.
    """

    def __init__(self, scheme: str = "wrapper"):
        self._scheme = Settings(scheme=scheme).scheme
        self._handles: Dict[str, Handle] = {}
        self._lock = threading.RLock()
        self._installed = False

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "Registry":
        settings = settings or Settings.from_env()
        return cls(scheme=settings.scheme)

    @property
    def scheme(self) -> str:
        return self._scheme

    def register(self, handle: Any, id: Optional[Any] = None) -> str:
        handle = as_handle(handle)

        with self._lock:
            if id is None:
                identifier = self._new_identifier()
            else:
                identifier = str(id)
                if not identifier:
                    raise InvalidInput("Identifier must not be empty")
                existing = self._handles.get(identifier)
                if existing is not None:
                    if existing.raw is handle.raw:
                        return identifier
                    raise InvalidInput(f"Identifier '{identifier}' is already registered")

            if not self._installed:
                self.install()
            self._handles[identifier] = handle

        logger.debug("Registered %r as %s", handle, self.path_for(identifier))
        return identifier

    def resolve(self, identifier: str) -> Handle:
        with self._lock:
            handle = self._handles.get(identifier)
        if handle is None:
            raise NotFound(identifier)
        return handle

    def remove(self, target: Any) -> Optional[str]:
        """
        Remove the entry for a handle (matched by identity, including the
        raw object a handle wraps) or for an identifier.
        Returns the removed identifier, or None if nothing matched.
        """
        with self._lock:
            for identifier, handle in self._handles.items():
                if handle is target or handle.raw is target:
                    break
            else:
                identifier = target if isinstance(target, str) and target in self._handles else None

            if identifier is None:
                return None
            del self._handles[identifier]

        logger.debug("Removed %s", self.path_for(identifier))
        return identifier

    def install(self) -> None:
        """
        Bind this registry's scheme to the fsspec registry. Idempotent.
        register() only calls this for the first entry, so a later registry
        that took over the scheme keeps it until install() is called again.
        """
        from ..interface.filesystem import install_scheme

        with self._lock:
            install_scheme(self)
            self._installed = True

    def path_for(self, identifier: str) -> str:
        return make_path(identifier, self._scheme)

    def identifier_of(self, path: str) -> str:
        return parse_identifier(path, self._scheme)

    def identifiers(self) -> List[str]:
        with self._lock:
            return list(self._handles)

    def _new_identifier(self) -> str:
        identifier = uuid.uuid4().hex
        while identifier in self._handles:
            identifier = uuid.uuid4().hex
        return identifier

    def __contains__(self, identifier: object) -> bool:
        with self._lock:
            return identifier in self._handles

    def __len__(self) -> int:
        with self._lock:
            return len(self._handles)

    def __repr__(self) -> str:
        return f"<Registry scheme={self._scheme!r} entries={len(self)} at {id(self):#x}>"
