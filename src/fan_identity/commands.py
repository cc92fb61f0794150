"""Command dispatch for host applications.

Hosts call :func:`invoke` with a command name and a dict of arguments. The
result is either the command's JSON-serializable data or a human-readable
error string naming the failed stage.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .constants import LOGGER_NAME
from .errors import (
    DecryptionError,
    EncryptionError,
    FanIdentityError,
    InvalidIdentityDataError,
    KeyGenerationError,
    UnknownCommandError,
)
from .identity import IdentityService
from .types import Identity

logger = logging.getLogger(LOGGER_NAME)

CommandHandler = Callable[[IdentityService, dict[str, Any]], Any]

# Error message prefix per failure kind
_ERROR_PREFIXES: dict[type[FanIdentityError], str] = {
    KeyGenerationError: "Key generation error",
    EncryptionError: "Encryption error",
    DecryptionError: "Decryption error",
    InvalidIdentityDataError: "Invalid identity data",
}


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a dispatched command.

    Attributes:
        data: The command's result when it succeeded.
        error: Human-readable error message when it failed.
    """

    data: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the command succeeded."""
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        """Serialize as ``{"ok": true, "data": ...}`` or ``{"ok": false, "error": ...}``."""
        if self.ok:
            return {"ok": True, "data": self.data}
        return {"ok": False, "error": self.error}


def _require_str(args: dict[str, Any], key: str) -> str:
    value = args.get(key)
    if not isinstance(value, str):
        raise TypeError(f"Argument '{key}' must be a string")
    return value


def _create_identity(service: IdentityService, args: dict[str, Any]) -> dict[str, Any]:
    identity = service.create_identity(_require_str(args, "name"), _require_str(args, "password"))
    return dict(identity.to_dict())


def _authenticate_identity(service: IdentityService, args: dict[str, Any]) -> dict[str, Any]:
    identity_data = args.get("identity")
    if not isinstance(identity_data, dict):
        raise TypeError("Argument 'identity' must be an object")
    identity = Identity.from_dict(identity_data)
    return {"authenticated": service.authenticate(identity, _require_str(args, "password"))}


_COMMANDS: dict[str, CommandHandler] = {
    "create_identity": _create_identity,
    "authenticate_identity": _authenticate_identity,
}


def available_commands() -> list[str]:
    """List the registered command names."""
    return sorted(_COMMANDS)


def format_error(error: Exception) -> str:
    """Render an error as a message naming the failed stage."""
    for error_type, prefix in _ERROR_PREFIXES.items():
        if isinstance(error, error_type):
            return f"{prefix}: {error}"
    return str(error)


def dispatch(
    command: str,
    args: dict[str, Any],
    service: IdentityService | None = None,
) -> Any:
    """Run a command and return its data, raising on failure.

    Raises:
        UnknownCommandError: If the command is not registered.
        FanIdentityError: If the command fails.
        TypeError: If the arguments are not a dict or an argument has the
            wrong type.
    """
    handler = _COMMANDS.get(command)
    if handler is None:
        raise UnknownCommandError(command)
    if not isinstance(args, dict):
        raise TypeError("Command arguments must be an object")
    return handler(service or IdentityService(), args)


def invoke(
    command: str,
    args: dict[str, Any],
    service: IdentityService | None = None,
) -> CommandResult:
    """Run a command and capture failure as an error string.

    Args:
        command: Registered command name, e.g. ``"create_identity"``.
        args: Command arguments.
        service: Service to run the command with. Defaults to a new
            ``IdentityService`` with the default configuration.

    Returns:
        The command result.
    """
    try:
        return CommandResult(data=dispatch(command, args, service))
    except (FanIdentityError, TypeError) as e:
        logger.debug("Command %s failed: %s", command, e, exc_info=True)
        return CommandResult(error=format_error(e))
