"""User configuration (INI) and the typed options derived from it."""
