import os

from .file import FileObjectHandle


class FileHandle(FileObjectHandle):
    """Handle over a file this handle opens itself. Always has a real path."""

    def __init__(self, path: str, mode: str = "wb+"):
        if "b" not in mode:
            mode += "b"
        parent = os.path.dirname(os.path.abspath(path))
        os.makedirs(parent, exist_ok=True)
        super().__init__(open(path, mode), path)
