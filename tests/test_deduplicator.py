"""
Unit tests for DeduplicatorImpl.
Verifies per-bucket processing, parallel aggregation of statistics and progress reporting.
"""
from unittest import mock
from linksame.core.deduplicator import DeduplicatorImpl
from linksame.core.linker import LinkerImpl
from linksame.core.grouper import FileGrouperImpl
from linksame.core.models import FileCandidate, SizeBucket, HashGroup, LinkStats, GroupResult


def bucket_for(*paths):
    files = [FileCandidate(path=str(p), size=p.stat().st_size) for p in paths]
    return SizeBucket(size=files[0].size, files=files)


class TestDeduplicatorImpl:

    def test_empty_input_returns_zero_stats(self):
        assert DeduplicatorImpl().process_buckets([]) == LinkStats()

    def test_stats_are_summed_across_buckets(self, test_files):
        buckets = [
            bucket_for(test_files["dup1_a"], test_files["dup1_b"], test_files["sub_dup"], test_files["near"]),
            bucket_for(test_files["dup2_a"], test_files["dup2_b"]),
        ]

        stats = DeduplicatorImpl(workers=4).process_buckets(buckets)

        assert stats.links == 3
        assert stats.bytes_saved == 2 * 1024 + 2048
        assert stats.failed == 0

    def test_parallel_result_matches_sequential(self, temp_dir):
        """The total never depends on the number of workers or completion order."""
        buckets = []
        for size in range(1, 21):
            paths = []
            for copy in range(3):
                path = temp_dir / f"size{size}_copy{copy}.bin"
                path.write_bytes(b"P" * size)
                paths.append(path)
            buckets.append(bucket_for(*paths))

        parallel = DeduplicatorImpl(workers=8).process_buckets(buckets)
        sequential = DeduplicatorImpl(workers=1).process_buckets(buckets)

        assert parallel == sequential
        assert parallel.links == 40
        assert parallel.bytes_saved == 2 * sum(range(1, 21))

    def test_progress_callback_counts_buckets(self, test_files):
        buckets = [
            bucket_for(test_files["dup1_a"], test_files["dup1_b"]),
            bucket_for(test_files["dup2_a"], test_files["dup2_b"]),
        ]
        callback = mock.Mock()

        DeduplicatorImpl().process_buckets(buckets, progress_callback=callback)

        assert callback.call_count == 2
        callback.assert_called_with("Linking", 2, 2)

    def test_each_identical_group_is_linked(self):
        grouper = mock.Mock(spec=FileGrouperImpl)
        linker = mock.Mock(spec=LinkerImpl)
        groups = [
            HashGroup(size=10, digest=b"a" * 20, files=[FileCandidate("/a1", 10), FileCandidate("/a2", 10)]),
            HashGroup(size=10, digest=b"b" * 20, files=[FileCandidate("/b1", 10), FileCandidate("/b2", 10)]),
        ]
        grouper.group_by_content.return_value = groups
        linker.link_group.return_value = GroupResult(stats=LinkStats(links=1, bytes_saved=10))

        stats = DeduplicatorImpl(linker=linker, grouper=grouper).process_bucket(
            SizeBucket(size=10, files=[f for g in groups for f in g.files])
        )

        assert linker.link_group.call_count == 2
        assert stats == LinkStats(links=2, bytes_saved=20)

    def test_single_file_group_is_not_linked(self):
        linker = mock.Mock(spec=LinkerImpl)
        group = HashGroup(size=10, digest=b"c" * 20, files=[FileCandidate("/only", 10)])

        assert DeduplicatorImpl(linker=linker).process_group(group) == LinkStats()
        linker.link_group.assert_not_called()
