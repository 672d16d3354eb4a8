"""Exception hierarchy shared by the ferry commands.

Each error carries the process exit code the CLI terminates with.
"""

from __future__ import annotations


class FerryError(RuntimeError):
    exit_code: int = 1


class ConfigError(FerryError):
    exit_code = 2


class PayloadError(FerryError, ValueError):
    exit_code = 1


class RpcError(FerryError):
    exit_code = 1


class ToolNotFoundError(FerryError):
    exit_code = 127


class ToolFailedError(FerryError):
    """An external binary exited with a nonzero status."""

    def __init__(self, message: str, returncode: int) -> None:
        super().__init__(message)
        self.returncode = returncode
        self.exit_code = returncode if returncode > 0 else 1
