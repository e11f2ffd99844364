from __future__ import annotations

import datetime
import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Type

import fsspec
from fsspec import AbstractFileSystem
from fsspec.registry import known_implementations
from fsspec.utils import stringify_path

from ..errors import InvalidInput
from .proxy import MetaOption, StatFlags, StreamProxy

if TYPE_CHECKING:
    from ..core.registry import Registry

logger = logging.getLogger(__name__)


class WrapperFileSystem(AbstractFileSystem):
    """
    fsspec face of a Registry.

    install_scheme() derives one subclass per registry with `protocol` and
    `bound_registry` set, so `fsspec.open("<scheme>://<id>")` lands here
    without extra arguments. Passing registry= overrides the bound one.
    """

    protocol = "wrapper"
    root_marker = ""
    cachable = False
    bound_registry: Optional[Registry] = None

    def __init__(self, registry: Optional[Registry] = None, **storage_options):
        super().__init__(**storage_options)
        self.registry = registry if registry is not None else self.bound_registry
        if self.registry is None:
            raise InvalidInput(f"No registry bound to {self.protocol}://")

    @classmethod
    def _strip_protocol(cls, path):
        if isinstance(path, list):
            return [cls._strip_protocol(p) for p in path]
        path = stringify_path(path)
        prefix = f"{cls._scheme()}://"
        if path.startswith(prefix):
            return path[len(prefix):]
        return path

    @staticmethod
    def _get_kwargs_from_urls(path):
        return {}

    @classmethod
    def _scheme(cls) -> str:
        return cls.protocol if isinstance(cls.protocol, str) else cls.protocol[0]

    def _full_path(self, path: str) -> str:
        return self.registry.path_for(self._strip_protocol(path))

    def _open(self, path, mode="rb", block_size=None, autocommit=True, cache_options=None, **kwargs):
        # AbstractFileSystem.open has already stripped the protocol.
        proxy = StreamProxy(self.registry)
        proxy.open(self.registry.path_for(path), mode, kwargs.get("options", 0))
        return proxy

    def info(self, path, flags: int = 0, **kwargs) -> Dict[str, Any]:
        full = self._full_path(path)
        return StreamProxy(self.registry).url_stat(full, flags).to_info(full)

    def lstat(self, path, **kwargs) -> Dict[str, Any]:
        return self.info(path, flags=StatFlags.LINK, **kwargs)

    def ls(self, path, detail=True, **kwargs) -> List[Any]:
        if self._strip_protocol(path):
            entries = [self.info(path, **kwargs)]
        else:
            entries = [
                self.info(self.registry.path_for(identifier), flags=StatFlags.QUIET)
                for identifier in self.registry.identifiers()
            ]
        if detail:
            return entries
        return [entry["name"] for entry in entries]

    def modified(self, path) -> datetime.datetime:
        return datetime.datetime.fromtimestamp(self.info(path)["mtime"], tz=datetime.timezone.utc)

    def rm_file(self, path):
        StreamProxy(self.registry).unlink(self._full_path(path))

    def rm(self, path, recursive=False, maxdepth=None):
        for p in path if isinstance(path, list) else [path]:
            self.rm_file(p)

    def touch(self, path, truncate=False, **kwargs):
        StreamProxy(self.registry).set_metadata(self._full_path(path), MetaOption.TOUCH, kwargs.get("times"))

    def chmod(self, path, mode: int):
        return StreamProxy(self.registry).set_metadata(self._full_path(path), MetaOption.ACCESS, mode)

    def chown(self, path, user=None, group=None):
        proxy = StreamProxy(self.registry)
        full = self._full_path(path)
        if user is not None:
            option = MetaOption.OWNER_NAME if isinstance(user, str) else MetaOption.OWNER
            proxy.set_metadata(full, option, user)
        if group is not None:
            self.chgrp(path, group)
        return True

    def chgrp(self, path, group):
        option = MetaOption.GROUP_NAME if isinstance(group, str) else MetaOption.GROUP
        return StreamProxy(self.registry).set_metadata(self._full_path(path), option, group)


def install_scheme(registry: Registry) -> Type[WrapperFileSystem]:
    """
    Register a WrapperFileSystem bound to registry under registry.scheme.
    Calling it again for the same registry changes nothing.
    """
    scheme = registry.scheme
    installed = fsspec.registry.get(scheme)

    if installed is not None and getattr(installed, "bound_registry", None) is registry:
        return installed

    foreign = (
        installed is not None and not issubclass(installed, WrapperFileSystem)
    ) or (installed is None and scheme in known_implementations)
    if foreign:
        raise InvalidInput(f"Scheme '{scheme}' belongs to another filesystem implementation")

    if installed is not None:
        logger.warning("Re-binding %s:// from %r to %r", scheme, installed.bound_registry, registry)

    cls = type(
        f"WrapperFileSystem_{scheme}",
        (WrapperFileSystem,),
        {"protocol": scheme, "bound_registry": registry},
    )
    fsspec.register_implementation(scheme, cls, clobber=True)
    logger.debug("Installed %s:// handler for %r", scheme, registry)
    return cls
