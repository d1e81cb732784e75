# costs.py
from dataclasses import dataclass, asdict

HIT_CYCLES = 1
MEMORY_CYCLES = 100  # per 4-byte word moved to or from memory


@dataclass
class Stats:
    total_loads: int = 0
    total_stores: int = 0
    load_hits: int = 0
    load_misses: int = 0
    store_hits: int = 0
    store_misses: int = 0
    total_cycles: int = 0

    @property
    def accesses(self):
        return self.total_loads + self.total_stores

    def summary(self):
        """Counters plus derived rates, as plain data for JSON output."""
        data = asdict(self)
        accesses = self.accesses
        hits = self.load_hits + self.store_hits
        data["hit_rate"] = hits / accesses if accesses else 0
        data["miss_rate"] = (accesses - hits) / accesses if accesses else 0
        data["avg_cycles_per_access"] = self.total_cycles / accesses if accesses else 0
        return data


def format_stats(stats):
    lines = [
        "Total loads: {}".format(stats.total_loads),
        "Total stores: {}".format(stats.total_stores),
        "Load hits: {}".format(stats.load_hits),
        "Load misses: {}".format(stats.load_misses),
        "Store hits: {}".format(stats.store_hits),
        "Store misses: {}".format(stats.store_misses),
        "Total cycles: {}".format(stats.total_cycles),
    ]
    return "\n".join(lines)


class CostAccountant:
    """
    Turns hit/miss/eviction outcomes into cycle counts.
    A cache access costs `hit_cycles`; every word moved between cache and
    memory costs `memory_cycles`.
    """

    def __init__(self, block_size, hit_cycles=HIT_CYCLES, memory_cycles=MEMORY_CYCLES, stats=None):
        self.words_per_block = block_size // 4
        self.hit_cycles = hit_cycles
        self.memory_cycles = memory_cycles
        self.stats = stats if stats is not None else Stats()

    def _add(self, cycles):
        self.stats.total_cycles += cycles
        return cycles

    def load(self, hit):
        self.stats.total_loads += 1
        if hit:
            self.stats.load_hits += 1
            return self._add(self.hit_cycles)
        self.stats.load_misses += 1
        return self.fill()

    def store(self, hit):
        self.stats.total_stores += 1
        if hit:
            self.stats.store_hits += 1
            return self._add(self.hit_cycles)
        self.stats.store_misses += 1
        return 0

    def fill(self):
        """Cache access plus loading a whole block from memory."""
        return self._add(self.hit_cycles + self.memory_cycles * self.words_per_block)

    def flush(self):
        """Writing a dirty victim block back before it is reused."""
        return self._add(self.memory_cycles * self.words_per_block)

    def write_through(self):
        """A single word written straight to memory."""
        return self._add(self.memory_cycles)

    def direct_write(self):
        """Store miss without allocation: bypasses the cache entirely."""
        return self._add(self.hit_cycles + self.memory_cycles)
