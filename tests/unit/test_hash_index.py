"""Tests for HashIndex — lookup/record, atomic claim, and rollback."""

from __future__ import annotations

import threading
from pathlib import Path

from diskforge.core.hash_index import HashIndex


class TestHashIndex:
    def test_lookup_absent(self):
        assert HashIndex().lookup("/build/app.js") is None

    def test_record_and_lookup(self):
        index = HashIndex()
        index.record("/build/app.js", "abc")
        assert index.lookup("/build/app.js") == "abc"

    def test_record_overwrites(self):
        index = HashIndex()
        index.record("/build/app.js", "abc")
        index.record("/build/app.js", "def")
        assert index.lookup("/build/app.js") == "def"
        assert len(index) == 1

    def test_path_and_str_keys_are_equivalent(self):
        index = HashIndex()
        index.record(Path("/build/app.js"), "abc")
        assert index.lookup("/build/app.js") == "abc"
        assert Path("/build/app.js") in index

    def test_instances_are_independent(self):
        a, b = HashIndex(), HashIndex()
        a.record("/build/app.js", "abc")
        assert b.lookup("/build/app.js") is None

    def test_snapshot_is_a_copy(self):
        index = HashIndex()
        index.record("k", "v")
        snap = index.snapshot()
        snap["k"] = "changed"
        assert index.lookup("k") == "v"


class TestClaim:
    def test_first_claim_succeeds(self):
        index = HashIndex()
        assert index.claim("p", "h1") == (True, None)
        assert index.lookup("p") == "h1"

    def test_same_digest_not_claimed(self):
        index = HashIndex()
        index.claim("p", "h1")
        assert index.claim("p", "h1") == (False, "h1")

    def test_new_digest_replaces(self):
        index = HashIndex()
        index.claim("p", "h1")
        assert index.claim("p", "h2") == (True, "h1")
        assert index.lookup("p") == "h2"

    def test_release_restores_previous(self):
        index = HashIndex()
        index.record("p", "h1")
        index.claim("p", "h2")
        index.release("p", "h2", "h1")
        assert index.lookup("p") == "h1"

    def test_release_of_first_claim_keeps_entry(self):
        index = HashIndex()
        index.claim("p", "h1")
        index.release("p", "h1", None)
        assert "p" in index
        assert index.claim("p", "h1") == (True, "")

    def test_release_ignored_after_newer_record(self):
        index = HashIndex()
        index.claim("p", "h1")
        index.record("p", "h2")
        index.release("p", "h1", None)
        assert index.lookup("p") == "h2"

    def test_concurrent_claims_single_winner(self):
        index = HashIndex()
        results: list[bool] = []
        barrier = threading.Barrier(8)

        def worker() -> None:
            barrier.wait()
            claimed, _ = index.claim("shared", "digest")
            results.append(claimed)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count(True) == 1
