"""Process exit codes for cursor-setup."""

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    ERROR = 1
    NO_ACTION = 2  # already up to date, nothing changed
    CANCELLED = 3  # operator declined, input timed out, or stdin closed
