from dataclasses import dataclass, replace
from enum import Enum


class Mode(Enum):
    SINGLE_THREADED = "Sequential"
    MULTI_THREADED = "Parallel"
    BOTH = "Both"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class FileCountResult:
    folders: int
    files: int
    bytes: int


@dataclass(frozen=True, slots=True)
class ImageCountResult:
    images: int
    bytes: int


@dataclass(frozen=True, slots=True)
class DuResult:
    seconds: float
    file_counts: FileCountResult
    image_counts: ImageCountResult

    def with_seconds(self, seconds: float) -> "DuResult":
        return replace(self, seconds=seconds)

    def with_extra_folder(self) -> "DuResult":
        """Count one more folder, used when a directory accounts for itself."""
        counts: FileCountResult = self.file_counts
        return replace(self, file_counts=replace(counts, folders=counts.folders + 1))


@dataclass(frozen=True, slots=True)
class TaggedDuResult:
    result: DuResult
    mode: Mode


def combine_file_counts(a: FileCountResult, b: FileCountResult) -> FileCountResult:
    return FileCountResult(
        folders=a.folders + b.folders,
        files=a.files + b.files,
        bytes=a.bytes + b.bytes,
    )


def combine_image_counts(a: ImageCountResult, b: ImageCountResult) -> ImageCountResult:
    return ImageCountResult(images=a.images + b.images, bytes=a.bytes + b.bytes)


def combine_results(a: DuResult, b: DuResult) -> DuResult:
    """
    Field-wise sum of two results.

    Associative and commutative, so partial results coming back from
    concurrent tasks can be folded together in whatever order they finish.
    """
    return DuResult(
        seconds=a.seconds + b.seconds,
        file_counts=combine_file_counts(a.file_counts, b.file_counts),
        image_counts=combine_image_counts(a.image_counts, b.image_counts),
    )


def empty_result() -> DuResult:
    return DuResult(
        seconds=0.0,
        file_counts=FileCountResult(folders=0, files=0, bytes=0),
        image_counts=ImageCountResult(images=0, bytes=0),
    )


def file_result(size: int, is_image: bool) -> DuResult:
    return DuResult(
        seconds=0.0,
        file_counts=FileCountResult(folders=0, files=1, bytes=size),
        image_counts=ImageCountResult(images=1 if is_image else 0, bytes=size if is_image else 0),
    )


def folder_result() -> DuResult:
    return empty_result().with_extra_folder()
