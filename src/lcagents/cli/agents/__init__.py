"""Agent commands: list, resolve."""
