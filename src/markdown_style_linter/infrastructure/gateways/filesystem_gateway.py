"""Filesystem Gateway - Infrastructure implementation of FileSystemProtocol."""

from pathlib import Path
from typing import Iterable, List

from markdown_style_linter.domain.protocols import FileSystemProtocol


class FileSystemGateway(FileSystemProtocol):
    """Infrastructure implementation of FileSystemProtocol using pathlib."""

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    def glob_markdown_files(
        self,
        path: str,
        extensions: Iterable[str],
        exclude: Iterable[str] = (),
    ) -> List[str]:
        """
        Get all markdown files in path (recursive if directory), sorted.

        A file given explicitly is returned whatever its suffix. Files whose
        path contains one of the ``exclude`` fragments are left out of
        directory walks.
        """
        path_obj = Path(path)
        if not path_obj.is_dir():
            return [str(path_obj)]
        suffixes = {ext.lower() for ext in extensions}
        fragments = [frag for frag in exclude if frag]
        found: List[str] = []
        for candidate in sorted(path_obj.rglob("*")):
            if not candidate.is_file() or candidate.suffix.lower() not in suffixes:
                continue
            as_posix = candidate.as_posix()
            if any(frag in as_posix for frag in fragments):
                continue
            found.append(str(candidate))
        return found

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read a whole file. Newline translation is left to the Document Model."""
        with open(path, encoding=encoding, newline="") as f:
            return f.read()
