"""Discovery of analyzable source files.

Files are enumerated through git when the root is a work tree,
otherwise by walking the directory tree.
"""

from funcaudit.application.discovery.files import (
    DiscoveryMethod,
    DiscoveryResult,
    discover_files,
)

__all__ = [
    "DiscoveryMethod",
    "DiscoveryResult",
    "discover_files",
]
