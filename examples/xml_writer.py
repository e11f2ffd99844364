import io
import os
import sys
import xml.etree.ElementTree as ET

sys.path.append(os.getcwd())

import fsspec

import streamwrap


def write_report(path: str) -> None:
    """Stands in for a serializer that only knows how to write to a path."""
    root = ET.Element("report")
    ET.SubElement(root, "a").text = "1"
    with fsspec.open(path, "wb") as f:
        ET.ElementTree(root).write(f)


def main():
    print("=== Example: XML into a caller-owned buffer ===")

    registry = streamwrap.Registry()
    buffer = io.BytesIO()

    # 1. Register the buffer and build its path
    identifier = registry.register(buffer)
    path = registry.path_for(identifier)
    print(f"[*] Registered buffer as {path}")

    # 2. Hand only the path to the serializer.
    # Closing the file through fsspec closes the buffer, so grab the bytes
    # through a proxy that stays open instead.
    fs = fsspec.filesystem(registry.scheme)
    f = fs.open(path, "wb")
    ET.ElementTree(ET.fromstring("<a>1</a>")).write(f)
    f.flush()

    buffer.seek(0)
    print(f"[*] Buffer now holds: {buffer.read()!r}")

    f.close()
    print(f"[*] Entry removed on close: {identifier not in registry}")

    # 3. Same thing with a temporary stream the caller reads afterwards
    temp = streamwrap.TempHandle("report")
    dup = os.dup(temp.fileno())
    write_report(registry.path_for(registry.register(temp)))
    print(f"[*] Temp stream holds: {os.pread(dup, 4096, 0)!r}")
    os.close(dup)


if __name__ == "__main__":
    main()
