"""Resource commands: list, check, delete, restore, backups."""
