"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

deduplicator.py
Runs content grouping and linking for every size bucket.

Each bucket is an independent task on a thread pool: buckets are disjoint by
size, so no path is ever touched by two tasks. A task returns one immutable
LinkStats record; only the calling thread adds the records together.
"""
import time
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional, Callable

from linksame.core.models import SizeBucket, HashGroup, LinkStats
from linksame.core.grouper import FileGrouperImpl
from linksame.core.linker import LinkerImpl
from linksame.core.interfaces import Deduplicator, FileGrouper, Linker

logger = logging.getLogger(__name__)


# =============================
# Main Deduplicator Class
# =============================
class DeduplicatorImpl(Deduplicator):
    """
    Groups each size bucket by content and links every identical group found.
    """
    def __init__(self, linker: Linker = None, grouper: FileGrouper = None, workers: Optional[int] = None):
        self.linker = linker or LinkerImpl()
        self.grouper = grouper or FileGrouperImpl()
        self.workers = workers

    def process_buckets(
        self,
        buckets: List[SizeBucket],
        progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> LinkStats:
        """
        Processes all buckets concurrently and sums their statistics.
        Args:
            buckets: Size buckets with 2+ files each
            progress_callback (Optional[Callable[[str, int, int], None]]): Reports buckets completed.
        Returns:
            LinkStats for the whole run
        """
        total = LinkStats()
        if not buckets:
            return total

        start_time = time.time()
        done = 0
        with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="linksame") as executor:
            futures = [executor.submit(self.process_bucket, bucket) for bucket in buckets]
            for future in as_completed(futures):
                total = total + future.result()
                done += 1
                if progress_callback:
                    progress_callback("Linking", done, len(buckets))

        logger.debug(f"Processed {len(buckets)} size buckets in {time.time() - start_time:.3f}s")
        return total

    def process_bucket(self, bucket: SizeBucket) -> LinkStats:
        """Hashes one bucket and links each identical group in it, sequentially."""
        stats = LinkStats()
        for group in self.grouper.group_by_content(bucket):
            stats = stats + self.process_group(group)
        return stats

    def process_group(self, group: HashGroup) -> LinkStats:
        if len(group.files) < 2:
            return LinkStats()
        return self.linker.link_group(group).stats
