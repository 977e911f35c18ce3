"""Built-in plugins shipped with fixturectl."""
