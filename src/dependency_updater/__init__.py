"""dependency-updater core package.

This package provides the update pipeline that is callable from both the CI
action wrapper and the standalone CLI: discover manifests, run the package
manager per dependency and report which declared versions changed.
"""

__all__ = [
    "core",
]
