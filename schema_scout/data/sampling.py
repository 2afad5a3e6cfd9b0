"""
sampling.py  ── raw line access for files whose layout is still unknown

The file is split into byte-range partitions which can be scanned in
parallel. A line belongs to the partition holding its first byte, so every
line is seen exactly once and whole, whatever the block size.

    sampler = LineSampler("orders.csv")
    sampler.endpoints()     # LineSample(first='id;name;price', last='3;pen;1.5')
    sampler.head(10)        # first 10 lines, file order
"""
from __future__ import annotations

import errno
import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from itertools import islice
from typing import Callable, Iterator, Optional, TypeVar

import chardet

from .exceptions import EmptyInputError, ReadError
from .filesystems import FileSystemHandler

logger = logging.getLogger(__name__)

T = TypeVar("T")

SAMPLE_LINES = 10
DEFAULT_BLOCK_SIZE = 32 * 1024 * 1024
ENCODING_SAMPLE_BYTES = 32_768


@dataclass(frozen=True)
class LineSample:
    """The literal first and last line of a file."""

    first: str
    last: str


def guess_encoding(path: str, sample_bytes: int = ENCODING_SAMPLE_BYTES) -> str:
    """
    Best-effort encoding sniff of the first *sample_bytes* of *path*.

    Pure ASCII is reported as UTF-8 since bytes past the sample may not be ASCII.
    """
    with FileSystemHandler.open_file(path, "rb") as fh:
        raw = fh.read(sample_bytes)
    if not raw:
        return "utf-8"
    encoding = chardet.detect(raw)["encoding"]
    if encoding is None:
        logger.warning("Could not detect the encoding of %s, assuming utf-8", path)
        return "utf-8"
    encoding = encoding.lower()
    return "utf-8" if encoding == "ascii" else encoding


def _first_and_last(lines: Iterator[str]) -> tuple[Optional[str], Optional[str]]:
    first = last = next(lines, None)
    for last in lines:
        pass
    return first, last


def _last_of(lines: Iterator[str]) -> Optional[str]:
    last = None
    for last in lines:
        pass
    return last


class LineSampler:
    """Unstructured, partitioned line reader over one text file."""

    def __init__(
        self,
        path: str,
        *,
        encoding: Optional[str] = None,
        block_size: int = DEFAULT_BLOCK_SIZE,
        use_threads: bool = True,
    ):
        if block_size <= 0:
            raise ValueError("block_size must be positive")
        self.path = str(path)
        self.block_size = block_size
        self.use_threads = use_threads
        try:
            if FileSystemHandler.isdir(self.path):
                raise IsADirectoryError(errno.EISDIR, "Is a directory", self.path)
            self.size = FileSystemHandler.size(self.path)
            self.encoding = encoding or guess_encoding(self.path)
        except OSError as exc:
            raise ReadError(f"Cannot read {self.path!r}: {exc}") from exc

        self.partitions = [
            (start, min(start + block_size, self.size))
            for start in range(0, self.size, block_size)
        ]
        logger.debug(
            "%s: %d bytes in %d partition(s), encoding %s",
            self.path, self.size, len(self.partitions), self.encoding,
        )

    @property
    def num_partitions(self) -> int:
        return len(self.partitions)

    # ------------------------------------------------------------------ #
    # partition access
    # ------------------------------------------------------------------ #

    def iter_partition(self, index: int) -> Iterator[str]:
        """Yield the lines starting inside partition *index*, terminators stripped."""
        start, end = self.partitions[index]
        with FileSystemHandler.open_file(self.path, "rb") as fh:
            if start > 0:
                # a line already started before this range belongs to the previous partition
                fh.seek(start - 1)
                if fh.read(1) != b"\n":
                    fh.readline()
            while fh.tell() < end:
                raw = fh.readline()
                if not raw:
                    break
                yield self._decode(raw)

    def _decode(self, raw: bytes) -> str:
        if raw.endswith(b"\n"):
            raw = raw[:-1]
            if raw.endswith(b"\r"):
                raw = raw[:-1]
        try:
            return raw.decode(self.encoding)
        except UnicodeDecodeError as exc:
            raise ReadError(
                f"{os.path.basename(self.path)!r} is not valid {self.encoding}: {exc}"
            ) from exc

    def _run_partition(self, fn: Callable[[int, Iterator[str]], T], index: int) -> T:
        lines = self.iter_partition(index)
        try:
            return fn(index, lines)
        except OSError as exc:
            raise ReadError(f"Cannot read {self.path!r}: {exc}") from exc
        finally:
            lines.close()

    def map_partitions_with_index(
        self, fn: Callable[[int, Iterator[str]], T]
    ) -> dict[int, T]:
        """
        Apply ``fn(index, lines)`` to every partition.

        Partitions run on a thread pool when ``use_threads`` is set. The result
        is keyed by partition index, so it does not depend on the order in
        which partitions finish.
        """
        if not self.use_threads or self.num_partitions <= 1:
            return {i: self._run_partition(fn, i) for i in range(self.num_partitions)}

        results: dict[int, T] = {}
        workers = min(self.num_partitions, os.cpu_count() or 1)
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = {
                pool.submit(self._run_partition, fn, i): i
                for i in range(self.num_partitions)
            }
            for future in as_completed(futures):
                results[futures[future]] = future.result()
        return results

    # ------------------------------------------------------------------ #
    # samples
    # ------------------------------------------------------------------ #

    def endpoints(self) -> LineSample:
        """
        Return the first and last line of the file in true file order.

        With a single partition both lines come from it. Otherwise the first
        line comes from partition 0 and the last from the final partition;
        partitions in between contribute nothing. When the final byte range
        holds no line start (a long line spans several partitions) the last
        line comes from the nearest earlier partition holding one.

        Raises:
            EmptyInputError: If the file holds no line.
        """
        if self.num_partitions == 0:
            raise EmptyInputError(f"{self.path!r} is empty")

        last_index = self.num_partitions - 1
        if last_index == 0:
            first, last = self._run_partition(lambda _, lines: _first_and_last(lines), 0)
        else:
            def edge_line(index: int, lines: Iterator[str]) -> Optional[str]:
                if index == 0:
                    return next(lines, None)
                if index == last_index:
                    return _last_of(lines)
                return None

            found = self.map_partitions_with_index(edge_line)
            first, last = found[0], found[last_index]
            if last is None:
                last = self._last_line_before(last_index)

        if first is None:
            raise EmptyInputError(f"{self.path!r} holds no line")
        return LineSample(first=first, last=last)

    def _last_line_before(self, index: int) -> Optional[str]:
        for i in range(index - 1, -1, -1):
            last = self._run_partition(lambda _, lines: _last_of(lines), i)
            if last is not None:
                logger.debug("last line of %s found in partition %d", self.path, i)
                return last
        return None

    def head(self, k: int = SAMPLE_LINES) -> list[str]:
        """Return up to *k* lines from the start of the file, in file order."""
        if k <= 0:
            raise ValueError("k must be positive")
        sample: list[str] = []
        for index in range(self.num_partitions):
            sample.extend(
                self._run_partition(lambda _, lines: list(islice(lines, k - len(sample))), index)
            )
            if len(sample) >= k:
                break
        return sample
