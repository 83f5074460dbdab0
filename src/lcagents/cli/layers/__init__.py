"""Layer structure commands: init, migrate, virtual."""
