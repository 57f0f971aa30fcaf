"""
Command surface of the note shell.

Usage from a host:

```python
router = create_router(load_config(), dialogs=MyDialogs())
result = await router.execute({"command": "save_device_file", "filename": "notes", "content": "hi"})
```
"""

from .router import AVAILABLE_COMMANDS, CommandResult, CommandRouter, MissingArgumentError, create_router

__all__ = [
    "CommandRouter",
    "CommandResult",
    "MissingArgumentError",
    "AVAILABLE_COMMANDS",
    "create_router",
]
