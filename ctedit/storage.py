"""File storage for buffers.

Writes are in place: the target is opened (created if absent), truncated
to the exact length of the new content and overwritten. There is no
temp-file rename and no retry; any OSError propagates to the caller.
"""

import os


def read_file(path: str) -> bytes:
    """Return the raw bytes of path.

    Raises:
        OSError: if the file is missing or unreadable.
    """
    with open(path, 'rb') as f:
        return f.read()


def write_file(path: str, data: bytes) -> None:
    """Write data to path, creating it if needed.

    Raises:
        OSError: on any open, truncate or write failure.
    """
    fd = os.open(path, os.O_WRONLY | os.O_CREAT, 0o666)
    with os.fdopen(fd, 'wb') as f:
        f.truncate(len(data))
        f.write(data)
