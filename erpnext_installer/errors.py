from __future__ import annotations

from typing import Optional, Sequence


class InstallerError(RuntimeError):
    """Base class for installer failures."""


class UnsupportedPlatform(InstallerError):
    def __init__(self, name: str, version: str, reason: str = "") -> None:
        self.name = name
        self.version = version
        self.reason = reason
        msg = (
            "This installer is not compatible with your operating system "
            f"or its version ({name or 'unknown'} {version or 'unknown'})"
        )
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class InputMismatch(InstallerError):
    """The two entries of a confirmed prompt differed."""


class CommandFailed(InstallerError):
    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"Command failed ({returncode}): {' '.join(self.argv)}\n{stderr}".rstrip())


class AuthExhausted(InstallerError):
    def __init__(self, attempted: Sequence[str], returncode: Optional[int] = None) -> None:
        self.attempted = list(attempted)
        self.returncode = returncode
        super().__init__(
            "Could not gain root access to MariaDB "
            f"(tried: {', '.join(self.attempted) or 'nothing'}). "
            "Check that MariaDB is running and that the password is correct."
        )


class StageFailure(InstallerError):
    def __init__(self, stage_id: str, exit_code: int, message: str = "") -> None:
        self.stage_id = stage_id
        self.exit_code = exit_code
        self.message = message
        text = f"Stage {stage_id} failed with exit status {exit_code}"
        super().__init__(f"{text}: {message}" if message else text)
