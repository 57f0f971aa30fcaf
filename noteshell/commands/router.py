"""
Command router for the note shell.

The host invokes commands by name with an argument dictionary. Each
command is routed to exactly one component and answered with a
CommandResult:

- login, get_user, create_user -> SessionContext
- save_device_file, read_device_file, list_device_files -> DeviceFileStore
- open_file, save_file -> HostFileBridge (outcome arrives as a notification)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ..bridge import HostFileBridge, NotificationChannel
from ..bridge.dialogs import DialogProvider, FileFilter
from ..config import ShellConfig
from ..exceptions import NoteShellError
from ..logging_utils import ShellLoggerAdapter
from ..session import SessionContext, User
from ..storage import (
    AppDataLocator,
    AppDataProvider,
    DeviceFileStore,
    FixedAppDataProvider,
    PlatformAppDataProvider,
)

logger = logging.getLogger(__name__)

AVAILABLE_COMMANDS = [
    "login",
    "get_user",
    "create_user",
    "save_device_file",
    "read_device_file",
    "list_device_files",
    "open_file",
    "save_file",
]


@dataclass
class CommandResult:
    """Result of a command, serialized back to the host."""

    success: bool
    output: dict[str, Any] = field(default_factory=dict)
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization.

        Output is kept on failure when present, e.g. the available commands
        after an unknown command.
        """
        result: dict[str, Any] = {"success": self.success}
        if self.success or self.output:
            result["output"] = self.output
        if self.error:
            result["error"] = self.error
        return result


class MissingArgumentError(NoteShellError):
    """Raised when a command is invoked without a required argument."""

    def __init__(self, argument: str):
        super().__init__(f"{argument} is required", {"argument": argument})
        self.argument = argument


class CommandRouter:
    """
    Routes host commands to the session, the device store and the dialog bridge.

    Components are injected, so the host decides their lifetime and tests
    can build isolated routers.
    """

    def __init__(
        self,
        session: SessionContext,
        store: DeviceFileStore,
        bridge: HostFileBridge,
    ):
        self.session = session
        self.store = store
        self.bridge = bridge

    @property
    def channel(self) -> NotificationChannel:
        """Channel on which dialog outcomes are broadcast."""
        return self.bridge.channel

    @property
    def schema(self) -> dict[str, Any]:
        """JSON Schema for the command input."""
        return {
            "type": "object",
            "properties": {
                "command": {
                    "type": "string",
                    "description": "Command to run",
                    "enum": list(AVAILABLE_COMMANDS),
                },
                # login parameters
                "user": {
                    "type": "object",
                    "description": "User record that replaces the session user",
                    "properties": {
                        "id": {"type": "integer", "minimum": 0},
                        "username": {"type": "string"},
                        "password": {"type": "string"},
                    },
                },
                # create_user parameters
                "username": {"type": "string"},
                "password": {"type": "string"},
                # device file parameters
                "filename": {
                    "type": "string",
                    "description": "Document name; .txt is appended if missing",
                },
                "content": {
                    "type": "string",
                    "description": "Text to store (save_device_file, save_file)",
                },
            },
            "required": ["command"],
        }

    async def execute(self, input: dict[str, Any]) -> CommandResult:
        """Run a single command.

        Args:
            input: Command name under "command" plus its arguments.

        Returns:
            CommandResult with success status and output/error.
        """
        command = input.get("command")
        log = ShellLoggerAdapter(logger, {"command": command})

        handlers = {
            "login": self._login,
            "get_user": self._get_user,
            "create_user": self._create_user,
            "save_device_file": self._save_device_file,
            "read_device_file": self._read_device_file,
            "list_device_files": self._list_device_files,
            "open_file": self._open_file,
            "save_file": self._save_file,
        }
        handler = handlers.get(command) if isinstance(command, str) else None
        if handler is None:
            log.warning(f"Unknown command: {command}")
            return CommandResult(
                success=False,
                error=f"Unknown command: {command}",
                output={"available_commands": list(AVAILABLE_COMMANDS)},
            )

        try:
            output = await handler(input)
        except NoteShellError as e:
            log.warning(f"Command {command} failed: {e.message}")
            return CommandResult(success=False, error=e.message, output={"command": command})

        output["command"] = command
        return CommandResult(success=True, output=output)

    # Session commands

    async def _login(self, params: dict[str, Any]) -> dict[str, Any]:
        user = _require(params, "user")
        if not isinstance(user, User):
            user = User.from_dict(user)
        stored = self.session.set_current(user)
        return {"user": stored.to_dict()}

    async def _get_user(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"user": self.session.get_current().to_dict()}

    async def _create_user(self, params: dict[str, Any]) -> dict[str, Any]:
        # Accounts are persisted by the host's database layer; this only acknowledges
        username = _require_str(params, "username")
        _require_str(params, "password")
        return {"message": f"User {username} would be created"}

    # Device store commands

    async def _save_device_file(self, params: dict[str, Any]) -> dict[str, Any]:
        filename = _require_str(params, "filename")
        content = _require_str(params, "content")
        path = await self.store.save(filename, content)
        return {"path": str(path)}

    async def _read_device_file(self, params: dict[str, Any]) -> dict[str, Any]:
        filename = _require_str(params, "filename")
        return {"content": await self.store.read(filename)}

    async def _list_device_files(self, params: dict[str, Any]) -> dict[str, Any]:
        files = await self.store.list()
        return {"files": files, "count": len(files)}

    # Dialog commands

    async def _open_file(self, params: dict[str, Any]) -> dict[str, Any]:
        self.bridge.open_file()
        return {"dispatched": True}

    async def _save_file(self, params: dict[str, Any]) -> dict[str, Any]:
        content = _require_str(params, "content")
        self.bridge.save_file(content)
        return {"dispatched": True}


def _require(params: dict[str, Any], name: str) -> Any:
    if params.get(name) is None:
        raise MissingArgumentError(name)
    return params[name]


def _require_str(params: dict[str, Any], name: str) -> str:
    value = _require(params, name)
    if not isinstance(value, str):
        raise NoteShellError(f"{name} must be a string", {"argument": name})
    return value


def create_router(
    config: ShellConfig,
    dialogs: DialogProvider,
    *,
    data_provider: AppDataProvider | None = None,
    channel: NotificationChannel | None = None,
    session: SessionContext | None = None,
) -> CommandRouter:
    """Build a router and all its components from configuration.

    Args:
        config: Shell configuration
        dialogs: Host dialog capability
        data_provider: Overrides the app data location derived from config
        channel: Notification channel to share with the host
        session: Existing session to reuse

    Returns:
        Configured CommandRouter instance.
    """
    if data_provider is None:
        if config.data_dir is not None:
            data_provider = FixedAppDataProvider(config.data_dir)
        else:
            data_provider = PlatformAppDataProvider(config.identifier)

    save_filter = FileFilter(config.dialog_filter_name, tuple(config.dialog_extensions))

    return CommandRouter(
        session=session or SessionContext(),
        store=DeviceFileStore(AppDataLocator(data_provider)),
        bridge=HostFileBridge(dialogs, channel or NotificationChannel(), [save_filter]),
    )
