"""Pure domain utilities: links, selections, workspace mappings, paths.

These modules are intentionally free of FastAPI/HTTP concerns so they can be
unit-tested and reused by both the server and the command-line shell.
"""
__all__ = ["links", "selection", "workspace", "paths"]
