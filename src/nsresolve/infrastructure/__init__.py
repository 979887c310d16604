"""Infrastructure layer — classpath, archives, filesystem scanning, module registry.

This layer touches the filesystem, zip archives, and the interpreter's
module table. It depends on the domain layer for value types only and must
never import from services, commands, or output.
"""
