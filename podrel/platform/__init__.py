"""Platform abstraction layer."""

from .files import atomic_write_text, read_text, remove_file
from .process import ProcessError, ProcessRunner, SubprocessRunner, run

__all__ = [
    # files
    "atomic_write_text",
    "read_text",
    "remove_file",
    # process
    "ProcessError",
    "ProcessRunner",
    "SubprocessRunner",
    "run",
]
