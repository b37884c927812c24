import logging
import os
import queue
import time
from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor

from .errors import InvalidModeError, NotAValidPathError, PathNotFoundError
from .fs import FileSystem, PathKind
from .models import (
    DuResult,
    FileCountResult,
    ImageCountResult,
    Mode,
    TaggedDuResult,
    combine_results,
    empty_result,
    file_result,
    folder_result,
)

logger: logging.Logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS: tuple[str, ...] = (".jpg", ".jpeg", ".png", ".gif", ".bmp", ".tiff", ".webp")
DEFAULT_MAX_INFLIGHT: int = 256

# Result of visiting one path: its own contribution plus the children still to visit.
Visit = tuple[DuResult, list[str]]


def default_max_workers() -> int:
    return os.cpu_count() or 1


def is_image_file(path: str) -> bool:
    """Case-sensitive suffix match of the final path component."""
    return os.path.basename(path).endswith(IMAGE_EXTENSIONS)


def check_path_exists(fs: FileSystem, path: str) -> None:
    if fs.path_kind(path) is PathKind.NOT_FOUND:
        raise PathNotFoundError(path)


def scan_tree_sequential(fs: FileSystem, root: str) -> DuResult:
    """
    Breadth-first walk of `root` driven by an explicit work queue.

    Files whose size cannot be read and directories that cannot be listed
    are dropped from the totals without raising.
    """
    folders: int = 0
    files: int = 0
    total_bytes: int = 0
    images: int = 0
    image_bytes: int = 0

    work_queue: deque[str] = deque([root])

    while work_queue:
        path: str = work_queue.popleft()
        kind: PathKind = fs.path_kind(path)

        if kind is PathKind.FILE:
            try:
                size: int = fs.file_size(path)
            except OSError as e:
                logger.debug("Skipping file %s: %s", path, e)
                continue

            files += 1
            total_bytes += size
            if is_image_file(path):
                images += 1
                image_bytes += size
        elif kind is PathKind.DIRECTORY:
            try:
                entries: list[str] = fs.list_entries(path)
            except OSError as e:
                logger.debug("Skipping directory %s: %s", path, e)
                continue

            work_queue.extend(entries)
            folders += 1

    return DuResult(
        seconds=0.0,
        file_counts=FileCountResult(folders=folders, files=files, bytes=total_bytes),
        image_counts=ImageCountResult(images=images, bytes=image_bytes),
    )


def visit_path(fs: FileSystem, path: str) -> Visit:
    """
    Measure a single path without descending into it.

    A directory that can be listed counts as one folder and hands back its
    entries; unreadable files and directories contribute the empty result.
    A path that vanished after its parent was listed raises NotAValidPathError.
    """
    kind: PathKind = fs.path_kind(path)

    if kind is PathKind.FILE:
        try:
            size: int = fs.file_size(path)
        except OSError as e:
            logger.debug("Skipping file %s: %s", path, e)
            return empty_result(), []

        return file_result(size, is_image_file(path)), []

    if kind is PathKind.DIRECTORY:
        try:
            entries: list[str] = fs.list_entries(path)
        except OSError as e:
            logger.debug("Skipping directory %s: %s", path, e)
            return empty_result(), []

        return folder_result(), entries

    raise NotAValidPathError(path)


def scan_tree_parallel(fs: FileSystem, root: str, max_workers: int, max_in_flight: int) -> DuResult:
    """
    Fan out one task per directory entry on a bounded thread pool.

    Tasks never wait on each other: each returns its own contribution by
    value and the calling thread folds completed results together and
    submits the children. Entries beyond `max_in_flight` wait in a local
    queue until a slot frees up. Finished futures are pushed onto
    `completed` by their done-callback, so each completion costs O(1).
    """
    if max_in_flight <= 0:
        raise ValueError("max_in_flight must be > 0")
    if max_workers <= 0:
        raise ValueError("max_workers must be > 0")

    total: DuResult = empty_result()
    pending: deque[str] = deque([root])
    completed: queue.SimpleQueue[Future[Visit]] = queue.SimpleQueue()
    in_flight: int = 0

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        while pending or in_flight:
            while pending and in_flight < max_in_flight:
                future: Future[Visit] = executor.submit(visit_path, fs, pending.popleft())
                future.add_done_callback(completed.put)
                in_flight += 1

            done: Future[Visit] = completed.get()
            in_flight -= 1
            result, children = done.result()
            total = combine_results(total, result)
            pending.extend(children)

    return total


class UsageCalculator:
    def __init__(
        self,
        mode: Mode,
        path: str,
        *,
        fs: FileSystem | None = None,
        max_workers: int | None = None,
        max_inflight: int = DEFAULT_MAX_INFLIGHT,
    ) -> None:
        self.mode: Mode = mode
        self.path: str = path
        self.fs: FileSystem = fs if fs is not None else FileSystem()
        self.max_workers: int = max_workers if max_workers is not None else default_max_workers()
        self.max_inflight: int = max_inflight

    def calculate(self) -> list[TaggedDuResult]:
        if self.mode is Mode.SINGLE_THREADED:
            return [self.calculate_usage_sequential()]
        if self.mode is Mode.MULTI_THREADED:
            return [self.calculate_usage_parallel()]
        if self.mode is Mode.BOTH:
            return self.calculate_both()

        raise InvalidModeError(self.mode)

    def calculate_both(self) -> list[TaggedDuResult]:
        return [self.calculate_usage_parallel(), self.calculate_usage_sequential()]

    def calculate_usage_sequential(self) -> TaggedDuResult:
        check_path_exists(self.fs, self.path)
        logger.info("Sequential scan of %s", self.path)

        started: float = time.perf_counter()
        result: DuResult = scan_tree_sequential(self.fs, self.path)
        elapsed: float = time.perf_counter() - started

        logger.info("Sequential scan finished in %.3fs", elapsed)
        return TaggedDuResult(result=result.with_seconds(elapsed), mode=Mode.SINGLE_THREADED)

    def calculate_usage_parallel(self) -> TaggedDuResult:
        check_path_exists(self.fs, self.path)
        logger.info("Parallel scan of %s with %d workers", self.path, self.max_workers)

        started: float = time.perf_counter()
        result: DuResult = scan_tree_parallel(self.fs, self.path, self.max_workers, self.max_inflight)
        elapsed: float = time.perf_counter() - started

        logger.info("Parallel scan finished in %.3fs", elapsed)
        return TaggedDuResult(result=result.with_seconds(elapsed), mode=Mode.MULTI_THREADED)


def calculate(
    mode: Mode,
    path: str,
    *,
    fs: FileSystem | None = None,
    max_workers: int | None = None,
    max_inflight: int = DEFAULT_MAX_INFLIGHT,
) -> list[TaggedDuResult]:
    calculator: UsageCalculator = UsageCalculator(
        mode, path, fs=fs, max_workers=max_workers, max_inflight=max_inflight
    )
    return calculator.calculate()
