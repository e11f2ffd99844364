import os
import stat as stat_mod
from typing import Any, Dict, Optional

from pydantic import BaseModel


class StatRecord(BaseModel):
    """Metadata returned by path-level stat queries."""

    mode: Optional[int] = None
    ino: Optional[int] = None
    dev: Optional[int] = None
    nlink: Optional[int] = None
    uid: Optional[int] = None
    gid: Optional[int] = None
    size: Optional[int] = None
    atime: Optional[float] = None
    mtime: Optional[float] = None
    ctime: Optional[float] = None

    @classmethod
    def from_stat(cls, st: os.stat_result) -> "StatRecord":
        return cls(
            mode=st.st_mode,
            ino=st.st_ino,
            dev=st.st_dev,
            nlink=st.st_nlink,
            uid=st.st_uid,
            gid=st.st_gid,
            size=st.st_size,
            atime=st.st_atime,
            mtime=st.st_mtime,
            ctime=st.st_ctime,
        )

    @classmethod
    def empty(cls) -> "StatRecord":
        return cls()

    def is_empty(self) -> bool:
        return all(value is None for value in self.model_dump().values())

    def __bool__(self) -> bool:
        return not self.is_empty()

    def to_info(self, name: str) -> Dict[str, Any]:
        """Shape the record the way fsspec reports file info."""
        if self.mode is not None and stat_mod.S_ISDIR(self.mode):
            kind = "directory"
        elif self.mode is not None and stat_mod.S_ISLNK(self.mode):
            kind = "link"
        else:
            kind = "file"
        return {
            "name": name,
            "size": self.size,
            "type": kind,
            "mode": self.mode,
            "uid": self.uid,
            "gid": self.gid,
            "nlink": self.nlink,
            "ino": self.ino,
            "created": self.ctime,
            "mtime": self.mtime,
        }


def synthesize_stat(size: int, mode: int = stat_mod.S_IFREG | 0o666) -> os.stat_result:
    """Build a stat result for a resource that has no descriptor of its own."""
    return os.stat_result((mode, 0, 0, 1, os.getuid(), os.getgid(), size, 0, 0, 0))
