"""Static metadata describing the holowiki package itself."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LibraryInfo:
    name: str
    version: str
    repository: str
    maintainer: str


LIBRARY = LibraryInfo(
    name="holowiki",
    version="0.1.0",
    repository="https://github.com/holowiki/holowiki-python",
    maintainer="maintainers@holowiki.dev",
)

LIBRARY_NAME = LIBRARY.name
LIBRARY_VERSION = LIBRARY.version

__all__ = ["LibraryInfo", "LIBRARY", "LIBRARY_NAME", "LIBRARY_VERSION"]
