import logging
import threading
from collections import Counter, defaultdict
from concurrent.futures import ThreadPoolExecutor

from tabulate import tabulate

from bigid.bigid_generator import BigIDGenerator, MAX_SHARD_ID, split_fields

logger = logging.getLogger(__name__)


class FleetSimulator:
    """Simulates a fleet of processes, each owning one generator and one shard ID."""

    def __init__(self, num_shards=4, base_time=None, clock=None):
        """Create one generator per simulated process.

        Args:
            num_shards (int): Number of processes to simulate (1-256)
            base_time (datetime, optional): Clock base shared by the fleet
            clock (callable, optional): Millisecond clock shared by the fleet
        """
        if num_shards < 1 or num_shards > MAX_SHARD_ID + 1:
            raise ValueError(f"Number of shards must be between 1 and {MAX_SHARD_ID + 1}")

        self.generators = {
            shard_id: BigIDGenerator(base_time=base_time, clock=clock)
            for shard_id in range(num_shards)
        }
        self.generated_ids = []
        self.id_lock = threading.Lock()

    def _worker(self, work_item):
        shard_id, count = work_item
        generator = self.generators[shard_id]
        results = [generator.generate(shard_id) for _ in range(count)]
        with self.id_lock:
            self.generated_ids.extend(results)
        return results

    def simulate_load(self, ids_per_shard=100, max_workers=None):
        """Generate IDs from every shard concurrently.

        Args:
            ids_per_shard (int): Number of IDs each shard generates
            max_workers (int, optional): Maximum number of worker threads

        Returns:
            list: The IDs generated by this run
        """
        work_items = [(shard_id, ids_per_shard) for shard_id in self.generators]
        logger.info(f"Simulating {len(work_items)} shards x {ids_per_shard} IDs")

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            batches = list(executor.map(self._worker, work_items))

        return [big_id for batch in batches for big_id in batch]

    def summary(self):
        """Summarize everything generated so far.

        Returns:
            dict: total, unique, duplicates, per-shard counts and the busiest
                  milliseconds per shard
        """
        with self.id_lock:
            ids = list(self.generated_ids)

        counts = Counter(ids)
        duplicates = sorted(big_id for big_id, count in counts.items() if count > 1)

        per_shard = Counter()
        per_millisecond = defaultdict(int)
        for big_id in ids:
            fields = split_fields(big_id)
            per_shard[fields["shard_id"]] += 1
            per_millisecond[(fields["shard_id"], fields["timestamp"])] += 1

        if duplicates:
            logger.warning(f"{len(duplicates)} duplicate IDs found; a shard exceeded 1024 IDs in one millisecond")

        return {
            "total": len(ids),
            "unique": len(counts),
            "duplicates": duplicates,
            "per_shard": dict(sorted(per_shard.items())),
            "busiest_milliseconds": sorted(per_millisecond.items(), key=lambda x: x[1], reverse=True)[:5],
        }

    def display_results(self, limit=10):
        """Print a sample of generated IDs and the collision statistics."""
        stats = self.summary()

        with self.id_lock:
            sample = sorted(self.generated_ids)[:limit]

        table_data = []
        for big_id in sample:
            fields = split_fields(big_id)
            table_data.append([big_id, fields["timestamp"], fields["shard_id"], fields["sequence"]])

        print("\n=== Sample Generated IDs ===")
        print(tabulate(table_data, headers=["ID", "Timestamp", "Shard ID", "Sequence"], tablefmt="grid"))

        print("\n=== Statistics ===")
        print(f"Total IDs generated: {stats['total']}")
        print(f"Unique IDs: {stats['unique']}")
        print(f"Duplicate IDs: {len(stats['duplicates'])}")

        print("\n=== Distribution by Shard ===")
        print(tabulate(list(stats["per_shard"].items()), headers=["Shard ID", "Count"], tablefmt="grid"))

        print("\n=== Busiest Milliseconds ===")
        busiest = [[shard_id, ts, count] for (shard_id, ts), count in stats["busiest_milliseconds"]]
        print(tabulate(busiest, headers=["Shard ID", "Timestamp", "IDs"], tablefmt="grid"))
