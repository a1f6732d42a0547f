"""Tests for bounded-concurrency execution."""

import random
import threading
import time

import pytest

from pygit_global import ParallelExecutionError, Repository, default_parallelism, run_parallel


def _repos(n: int) -> list[Repository]:
    return [Repository(f"/repos/r{i:03d}") for i in range(n)]


class ConcurrencyProbe:
    """Operation that records how many calls are running at once."""

    def __init__(self, delay: float = 0.01):
        self.delay = delay
        self.active = 0
        self.peak = 0
        self.lock = threading.Lock()

    def __call__(self, repo: Repository) -> str:
        with self.lock:
            self.active += 1
            self.peak = max(self.peak, self.active)
        time.sleep(self.delay)
        with self.lock:
            self.active -= 1
        return repo.path.upper()


class TestRunParallel:
    def test_empty_input(self):
        assert run_parallel([], 4, lambda repo: 1) == []

    @pytest.mark.parametrize("workers", [1, 2, 3])
    def test_never_exceeds_max_workers(self, workers):
        probe = ConcurrencyProbe()
        run_parallel(_repos(12), workers, probe)
        assert 1 <= probe.peak <= workers

    def test_actually_runs_concurrently(self):
        barrier = threading.Barrier(2, timeout=5)

        def wait_for_partner(repo):
            barrier.wait()
            return True

        # two operations can only both pass the barrier if they overlap
        results = run_parallel(_repos(2), 2, wait_for_partner)
        assert [r for _, r in results] == [True, True]

    def test_complete_aggregation_with_uneven_latency(self):
        repos = _repos(40)
        delays = {r.path: random.uniform(0, 0.02) for r in repos}

        def slow(repo):
            time.sleep(delays[repo.path])
            return len(repo.path)

        results = run_parallel(repos, 5, slow)
        assert len(results) == len(repos)
        assert {path for path, _ in results} == {r.path for r in repos}
        assert all(value == len(path) for path, value in results)

    def test_results_pair_path_with_result(self):
        results = run_parallel(_repos(5), 2, ConcurrencyProbe(delay=0))
        assert sorted(results) == [(f"/repos/r{i:03d}", f"/REPOS/R{i:03d}") for i in range(5)]

    def test_completion_order(self):
        first, second = _repos(2)

        def op(repo):
            if repo == first:
                time.sleep(0.2)
            return repo.name

        results = run_parallel([first, second], 2, op)
        assert [path for path, _ in results] == [second.path, first.path]

    def test_default_workers(self):
        results = run_parallel(_repos(3), None, lambda repo: repo.name)
        assert len(results) == 3

    def test_invalid_worker_count(self):
        with pytest.raises(ValueError):
            run_parallel(_repos(1), 0, lambda repo: None)

    def test_raising_operation_does_not_block_others(self):
        repos = _repos(6)

        def flaky(repo):
            if repo.path.endswith("r002"):
                raise RuntimeError("boom")
            return "ok"

        with pytest.raises(ParallelExecutionError) as excinfo:
            run_parallel(repos, 2, flaky)

        err = excinfo.value
        assert len(err.results) == 5
        assert [path for path, _ in err.failures] == ["/repos/r002"]
        assert isinstance(err.failures[0][1], RuntimeError)

    def test_system_exit_in_operation_is_still_collected(self):
        def exits(repo):
            if repo.path == "/b":
                raise SystemExit(3)
            return repo.path

        with pytest.raises(ParallelExecutionError) as excinfo:
            run_parallel([Repository("/a"), Repository("/b")], 2, exits)

        err = excinfo.value
        assert err.results == [("/a", "/a")]
        assert [path for path, _ in err.failures] == ["/b"]
        assert isinstance(err.failures[0][1], SystemExit)


def test_default_parallelism_positive():
    assert default_parallelism() >= 1
