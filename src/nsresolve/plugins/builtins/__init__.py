"""Built-in plugins shipped with nsresolve."""
