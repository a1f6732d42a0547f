"""Bounded-concurrency execution of one operation across many repositories."""

from __future__ import annotations

import concurrent.futures
import logging
import os
import queue
import threading
from collections.abc import Callable, Iterable
from typing import TypeVar

from pygit_global.errors import ParallelExecutionError
from pygit_global.models import Repository

T = TypeVar('T')

logger = logging.getLogger(__name__)


def default_parallelism() -> int:
    """Number of worker threads to use by default: one per CPU."""
    return os.cpu_count() or 1


def run_parallel(
    repos: Iterable[Repository],
    max_workers: int | None,
    operation: Callable[[Repository], T],
) -> list[tuple[str, T]]:
    """Run operation on every repository with at most max_workers running at once.

    Returns one (path, result) pair per repository, in completion order.
    The dispatch loop blocks while all permits are taken; each worker hands
    its result to a shared queue and then returns its permit. Operations are
    expected to report their own failures inside the result. If one raises
    anyway, the remaining repositories are still processed and a
    ParallelExecutionError carrying everything collected is raised at the end.
    """
    repos = list(repos)
    if not repos:
        return []
    if max_workers is None:
        max_workers = default_parallelism()
    if max_workers < 1:
        raise ValueError(f"max_workers must be at least 1, got {max_workers}")

    permits = threading.BoundedSemaphore(max_workers)
    completed: queue.Queue = queue.Queue()

    def _work(repo: Repository) -> None:
        try:
            completed.put((repo.path, operation(repo), None))
        except BaseException as e:
            logger.debug("Operation failed for %s", repo, exc_info=True)
            completed.put((repo.path, None, e))
        finally:
            permits.release()

    results: list[tuple[str, T]] = []
    failures: list[tuple[str, BaseException]] = []
    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers,
                                               thread_name_prefix='git-global') as executor:
        for repo in repos:
            permits.acquire()
            executor.submit(_work, repo)

        for _ in range(len(repos)):
            path, result, error = completed.get()
            if error is None:
                results.append((path, result))
            else:
                failures.append((path, error))

    if failures:
        raise ParallelExecutionError(results, failures)
    return results
