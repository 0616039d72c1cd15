"""Exception hierarchy shared by catalog, resolver, and CLI code."""

from __future__ import annotations


class AstatineError(Exception):
    """Base class for launcher errors."""


class InvalidCandidateError(AstatineError, ValueError):
    """Candidate is missing a display name or launch command."""


class DuplicateLaunchCommandError(AstatineError):
    """Two catalog entries share the same launch command."""

    def __init__(self, launch_command: str) -> None:
        super().__init__(f"duplicate launch command in catalog: {launch_command!r}")
        self.launch_command = launch_command


class LaunchError(AstatineError):
    """Confirm could not turn the current focus into a spawned process."""


class NoSelectionError(LaunchError):
    """The query field has focus, so there is nothing to launch."""

    def __init__(self) -> None:
        super().__init__("no candidate selected")


class OutOfRangeError(LaunchError):
    """Focus points past the end of the ranked view."""

    def __init__(self, cursor: int, view_length: int) -> None:
        super().__init__(f"cursor {cursor} is outside the ranked view (1..{view_length})")
        self.cursor = cursor
        self.view_length = view_length


class EmptyCommandError(LaunchError):
    """Launch command contained no program token."""

    def __init__(self) -> None:
        super().__init__("no command provided")


class LaunchDispatchError(LaunchError):
    """The OS refused to start the program."""

    def __init__(self, program: str, reason: str) -> None:
        super().__init__(f"failed to launch {program!r}: {reason}")
        self.program = program
        self.reason = reason
