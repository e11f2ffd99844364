import io
import os
import sys
import tempfile

sys.path.append(os.getcwd())

import fsspec

import streamwrap
from streamwrap import LockMode, StatFlags


def main():
    print("=== Example: Forwarding through wrapper:// ===")

    registry = streamwrap.Registry()

    # 1. Memory buffer under a chosen id
    registry.register(io.BytesIO(b"hello"), "greeting")
    fs = fsspec.filesystem("wrapper")
    print(f"[*] exists: {fs.exists('wrapper://greeting')}")
    print(f"[*] size: {fs.size('wrapper://greeting')}")

    with fs.open("wrapper://greeting", "rb") as f:
        print(f"[*] read: {f.read()!r}")
        print(f"[*] lock on memory buffer: {f.lock(LockMode.EXCLUSIVE)}")
    print(f"[*] still registered: {'greeting' in registry}")

    # 2. A real file: metadata changes go to its location
    with tempfile.TemporaryDirectory() as tmp:
        handle = streamwrap.FileHandle(os.path.join(tmp, "data.bin"))
        path = registry.path_for(registry.register(handle))
        fs.chmod(path, 0o600)
        print(f"[*] mode: {oct(fs.info(path)['mode'] & 0o777)}")

        proxy = streamwrap.StreamProxy(registry)
        record = proxy.url_stat(path, StatFlags.QUIET)
        print(f"[*] url_stat size: {record.size}")

        fs.rm(path)
        print(f"[*] quiet stat after unlink is empty: {not proxy.url_stat(path, StatFlags.QUIET)}")
        handle.close()


if __name__ == "__main__":
    main()
