from __future__ import annotations

import concurrent.futures
import logging
import multiprocessing
import os
import sys
from typing import Iterator, Optional

from vigenerecracker.classical.common import require_key_length
from vigenerecracker.classical.polyalphabetic.vigenere import VigenereEngine
from vigenerecracker.core.results import KeyRange, ScanResult

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 50_000


def partition_keyspace(engine: VigenereEngine, key_length: int, parts: int) -> list[KeyRange]:
    """
    Split the keyspace into `parts` disjoint contiguous ranges, in enumeration
    order. Sizes differ by at most one; empty ranges are omitted when the
    keyspace is smaller than `parts`.
    """
    require_key_length(key_length)
    if parts < 1:
        raise ValueError(f"parts must be at least 1 (got {parts}).")
    total = engine.keyspace_size(key_length)
    base, extra = divmod(total, parts)

    out: list[KeyRange] = []
    index = 0
    for p in range(parts):
        count = base + (1 if p < extra else 0)
        if count == 0:
            break
        out.append(KeyRange(start_index=index, count=count, start_key=engine.index_to_key(index, key_length)))
        index += count
    return out


def iter_key_ranges(engine: VigenereEngine, key_length: int, chunk_size: int) -> Iterator[KeyRange]:
    """Lazily cut the keyspace into ranges of `chunk_size` keys (last one may be short)."""
    require_key_length(key_length)
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be at least 1 (got {chunk_size}).")
    total = engine.keyspace_size(key_length)
    for index in range(0, total, chunk_size):
        yield KeyRange(
            start_index=index,
            count=min(chunk_size, total - index),
            start_key=engine.index_to_key(index, key_length),
        )


def _scan_chunk(start: int, end: int, key_range: KeyRange, target: str, ciphertext: str, cutoff, chunk_no: int):
    # Runs in a worker process; the engine is rebuilt from its bounds.
    engine = VigenereEngine(start, end)
    return engine.scan_range(key_range, target, ciphertext, should_stop=lambda: cutoff.value < chunk_no)


def parallel_search(
    engine: VigenereEngine,
    key_length: int,
    target: str,
    ciphertext: str,
    workers: Optional[int] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> ScanResult:
    """
    Exhaustive scan spread over a process pool.

    Chunks are handed out in enumeration order. When a chunk finds a match it
    lowers the shared cutoff, so chunks that come later stop early while
    earlier ones run to completion. The key returned is the same one the
    sequential scan would return; `keys_tried` counts every key any worker tried.
    """
    require_key_length(key_length)
    engine.alphabet.check(ciphertext, "ciphertext")

    worker_count = workers if workers is not None else (os.cpu_count() or 1)
    if worker_count <= 1:
        return engine.search(key_length, target, ciphertext)

    alpha = engine.alphabet
    total = engine.keyspace_size(key_length)
    logger.debug(
        "parallel scan: %d keys, %d workers, chunk size %d", total, worker_count, chunk_size
    )

    chunk_iter = enumerate(iter_key_ranges(engine, key_length, chunk_size))
    best: Optional[tuple[int, str]] = None
    tried = 0

    with multiprocessing.Manager() as manager:
        cutoff = manager.Value("q", sys.maxsize)

        with concurrent.futures.ProcessPoolExecutor(max_workers=worker_count) as executor:
            pending: dict[concurrent.futures.Future, int] = {}

            def submit_next_chunk() -> bool:
                try:
                    chunk_no, key_range = next(chunk_iter)
                except StopIteration:
                    return False
                future = executor.submit(
                    _scan_chunk, alpha.start, alpha.end, key_range, target, ciphertext, cutoff, chunk_no
                )
                pending[future] = chunk_no
                return True

            # Keep a small backlog queued so no worker idles between chunks
            for _ in range(worker_count * 2):
                if not submit_next_chunk():
                    break

            while pending:
                done, _ = concurrent.futures.wait(pending, return_when=concurrent.futures.FIRST_COMPLETED)

                for future in done:
                    chunk_no = pending.pop(future)
                    result = future.result()
                    tried += result.keys_tried
                    if result.found and (best is None or chunk_no < best[0]):
                        best = (chunk_no, result.key)
                        cutoff.value = chunk_no
                        logger.debug("chunk %d matched with key %s", chunk_no, result.key)
                        for other, other_no in list(pending.items()):
                            if other_no > chunk_no and other.cancel():
                                del pending[other]

                # Every unsubmitted chunk comes after any match already found
                if best is None:
                    while len(pending) < worker_count * 2 and submit_next_chunk():
                        pass

    if best is None:
        logger.info("no key of length %d reveals %r (%d keys tried)", key_length, target, tried)
        return ScanResult(key=None, keys_tried=tried)
    logger.info("found key %s (%d keys tried across workers)", best[1], tried)
    return ScanResult(key=best[1], keys_tried=tried)


def parallel_brute_force_scan(
    engine: VigenereEngine,
    key_length: int,
    target: str,
    ciphertext: str,
    workers: Optional[int] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Optional[str]:
    return parallel_search(engine, key_length, target, ciphertext, workers=workers, chunk_size=chunk_size).key
