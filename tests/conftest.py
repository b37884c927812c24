from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

from duscan.fs import FileSystem, PathKind


class DenyingFileSystem(FileSystem):
    """
    Real filesystem that refuses to read some paths.

    Permission bits are useless for this when the suite runs as root, so the
    failures are injected at the query boundary instead.
    """

    def __init__(
        self,
        denied_files: Iterable[Path] = (),
        denied_dirs: Iterable[Path] = (),
        vanished: Iterable[Path] = (),
    ) -> None:
        self.denied_files: set[str] = {str(p) for p in denied_files}
        self.denied_dirs: set[str] = {str(p) for p in denied_dirs}
        self.vanished: set[str] = {str(p) for p in vanished}

    def path_kind(self, path: str) -> PathKind:
        if path in self.vanished:
            return PathKind.NOT_FOUND
        return super().path_kind(path)

    def file_size(self, path: str) -> int:
        if path in self.denied_files:
            raise PermissionError(13, "Permission denied", path)
        return super().file_size(path)

    def list_entries(self, path: str) -> list[str]:
        if path in self.denied_dirs:
            raise PermissionError(13, "Permission denied", path)
        return super().list_entries(path)


@pytest.fixture
def denying_fs() -> Callable[..., DenyingFileSystem]:
    return DenyingFileSystem


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """
    root/
        a.txt               10 bytes
        photo.png           20 bytes  (image)
        upper.JPG            3 bytes  (not an image, match is case-sensitive)
        notanimage.jpg.txt   4 bytes
        docs/
            notes.md         5 bytes
            scan.jpeg        7 bytes  (image)
            deep/
                b.bin      100 bytes
        empty/

    4 folders, 7 files, 149 bytes, 2 images, 27 image bytes.
    """
    root = tmp_path / "root"
    root.mkdir()

    (root / "a.txt").write_bytes(b"x" * 10)
    (root / "photo.png").write_bytes(b"p" * 20)
    (root / "upper.JPG").write_bytes(b"u" * 3)
    (root / "notanimage.jpg.txt").write_bytes(b"n" * 4)

    docs = root / "docs"
    docs.mkdir()
    (docs / "notes.md").write_bytes(b"m" * 5)
    (docs / "scan.jpeg").write_bytes(b"j" * 7)

    deep = docs / "deep"
    deep.mkdir()
    (deep / "b.bin").write_bytes(b"b" * 100)

    (root / "empty").mkdir()

    return root
