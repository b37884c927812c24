import os
from enum import Enum


class PathKind(Enum):
    FILE = "file"
    DIRECTORY = "directory"
    NOT_FOUND = "not_found"


class FileSystem:
    """
    The filesystem queries the usage calculator depends on.

    Symlinks are followed, so a link to a directory is scanned like the
    directory itself. Subclass and override to simulate unreadable entries.
    """

    def path_kind(self, path: str) -> PathKind:
        """
        Anything that exists and is not a directory counts as a file,
        including dangling symlinks, FIFOs, sockets and device nodes.
        """
        if os.path.isdir(path):
            return PathKind.DIRECTORY

        try:
            os.lstat(path)
        except OSError:
            return PathKind.NOT_FOUND

        return PathKind.FILE

    def file_size(self, path: str) -> int:
        return os.stat(path).st_size

    def list_entries(self, path: str) -> list[str]:
        """
        Return the full paths of the immediate files and subdirectories of `path`.

        Raises OSError when the directory cannot be opened.
        """
        entries: list[str] = []

        with os.scandir(path) as it:
            for entry in it:
                entries.append(entry.path)

        return entries
