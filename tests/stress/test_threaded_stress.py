"""
High thread-count checks of the tree-wide lock.

Every test mixes mutators and readers on a shared NamespaceTree and then
verifies the structural invariants; run them alone with::

    pytest tests/stress/ -v
"""

import random
import threading

import pytest

from inmemfs import IMFSError, NamespaceTree, tokenize
from tests.helpers.asserts import assert_tree_consistent


@pytest.fixture
def tree():
    return NamespaceTree()


def _run(threads, timeout=60.0):
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=timeout)


@pytest.mark.stress
def test_random_mutations_keep_invariants(tree):
    """16 threads × 500 random ops over a small path space."""
    n_threads = 16
    iterations = 500
    names = ["a", "b", "c"]
    errors: list[Exception] = []
    barrier = threading.Barrier(n_threads)

    def worker(seed: int) -> None:
        rng = random.Random(seed)
        try:
            barrier.wait(timeout=10.0)
            for _ in range(iterations):
                path = tuple(rng.choice(names) for _ in range(rng.randint(1, 3)))
                op = rng.randrange(6)
                try:
                    if op == 0:
                        tree.create(path)
                    elif op == 1:
                        tree.create_file(path, bytes([seed]), overwrite=rng.random() < 0.5)
                    elif op == 2:
                        tree.remove(path, recursive=rng.random() < 0.5)
                    elif op == 3:
                        other = tuple(rng.choice(names) for _ in range(rng.randint(1, 3)))
                        tree.rename(path, other)
                    elif op == 4:
                        tree.list(path)
                    else:
                        tree.read(path)
                except IMFSError:
                    pass
        except Exception as exc:
            errors.append(exc)

    _run([threading.Thread(target=worker, args=(i,), daemon=True) for i in range(n_threads)])
    assert not errors, f"Unexpected errors: {errors[:3]}"
    assert_tree_consistent(tree)


@pytest.mark.stress
def test_concurrent_create_delete_cycle(tree):
    """30 threads cycle create/remove on 5 shared paths without corruption."""
    n_threads = 30
    iterations = 500
    errors: list[Exception] = []
    barrier = threading.Barrier(n_threads)

    def worker(thread_id: int) -> None:
        path = tokenize(f"/shared_{thread_id % 5}/f.bin")
        try:
            barrier.wait(timeout=10.0)
            for _ in range(iterations):
                try:
                    tree.create_file(path, b"data")
                except FileExistsError:
                    pass
                try:
                    tree.remove(path[:1], recursive=True)
                except FileNotFoundError:
                    pass
        except Exception as exc:
            errors.append(exc)

    _run([threading.Thread(target=worker, args=(i,), daemon=True) for i in range(n_threads)])
    assert not errors, f"Errors during create/delete cycle: {errors[:3]}"
    assert_tree_consistent(tree)


@pytest.mark.stress
def test_rename_ring_preserves_file_count(tree):
    """Files hop between directories; none are lost or duplicated."""
    n_files = 20
    n_threads = 10
    iterations = 300
    for i in range(n_files):
        tree.create_file(tokenize(f"/bucket_0/f{i}"), b"x")
    errors: list[Exception] = []

    def mover(seed: int) -> None:
        rng = random.Random(seed)
        try:
            for _ in range(iterations):
                i = rng.randrange(n_files)
                src = rng.randrange(3)
                dst = rng.randrange(3)
                try:
                    tree.rename(tokenize(f"/bucket_{src}/f{i}"), tokenize(f"/bucket_{dst}/f{i}"))
                except IMFSError:
                    pass
        except Exception as exc:
            errors.append(exc)

    def counter() -> None:
        try:
            for _ in range(iterations):
                stats = tree.stats()
                assert stats["file_count"] == n_files, stats
        except Exception as exc:
            errors.append(exc)

    threads = [threading.Thread(target=mover, args=(i,), daemon=True) for i in range(n_threads)]
    threads.append(threading.Thread(target=counter, daemon=True))
    _run(threads)
    assert not errors, errors[:3]
    assert tree.stats()["file_count"] == n_files
    assert_tree_consistent(tree)
