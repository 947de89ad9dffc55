import os
import sys


def get_terminal_width(stream=None, default: int = 80) -> int:
    """Return the column count of the terminal behind ``stream``, or ``default`` if it isn't one."""
    stream = stream if stream is not None else sys.stdout
    if not stream.isatty():
        return default
    try:
        return os.get_terminal_size(stream.fileno()).columns
    except OSError:
        return default
