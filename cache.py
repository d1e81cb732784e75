# cache.py
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

ADDRESS_MASK = 0xFFFFFFFF


@dataclass
class Block:
    """One cache line slot. Tag and timestamps mean nothing while invalid."""
    valid: bool = False
    dirty: bool = False
    tag: int = 0
    arrival_time: int = 0
    last_access_time: int = 0


class CacheSet:
    """Fixed-size group of blocks sharing one index."""

    def __init__(self, num_blocks):
        self.blocks = [Block() for _ in range(num_blocks)]

    def __len__(self):
        return len(self.blocks)

    def __getitem__(self, i):
        return self.blocks[i]

    def resident_tags(self):
        return [b.tag for b in self.blocks if b.valid]


def decode_address(address, config):
    """
    Split a 32-bit address into (tag, index).
    Offset bits are shifted out first; with a single set the index is always 0.
    """
    block_addr = (address & ADDRESS_MASK) >> config.offset_bits
    index = block_addr & ((1 << config.index_bits) - 1)
    tag = block_addr >> config.index_bits
    return tag, index


def find_match(cache_set, tag):
    """Return the index of the valid block holding `tag`, or None."""
    for i, block in enumerate(cache_set.blocks):
        if block.valid and block.tag == tag:
            return i
    return None


def select_victim(cache_set, use_lru):
    """
    Pick the block to overwrite on a miss.
    The first invalid block wins outright; otherwise the block with the oldest
    last access (LRU) or oldest arrival (FIFO), lowest index on ties.
    """
    for i, block in enumerate(cache_set.blocks):
        if not block.valid:
            return i

    def key(block):
        return block.last_access_time if use_lru else block.arrival_time

    victim = 0
    best = key(cache_set.blocks[0])
    for i in range(1, len(cache_set.blocks)):
        k = key(cache_set.blocks[i])
        if k < best:
            best = k
            victim = i
    return victim


class CacheModel:
    """
    Set-associative cache state plus the logical clock that orders
    LRU/FIFO decisions. The clock only moves on an LRU hit or an install.
    """

    def __init__(self, config):
        self.config = config
        self.sets = [CacheSet(config.num_blocks) for _ in range(config.num_sets)]
        self.clock = 0

    def locate(self, address):
        """Return (tag, set, matching block index or None) for an address."""
        tag, index = decode_address(address, self.config)
        cache_set = self.sets[index]
        return tag, cache_set, find_match(cache_set, tag)

    def touch(self, block):
        if self.config.use_lru:
            block.last_access_time = self.clock
            self.clock += 1

    def victim(self, cache_set):
        return cache_set.blocks[select_victim(cache_set, self.config.use_lru)]

    def install(self, block, tag):
        if block.valid:
            logger.debug("evicting tag %#x (dirty=%s)", block.tag, block.dirty)
        block.valid = True
        block.tag = tag
        block.dirty = False
        block.arrival_time = self.clock
        block.last_access_time = self.clock
        self.clock += 1

    def stats(self):
        used_lines = sum(len(s.resident_tags()) for s in self.sets)
        dirty_lines = sum(1 for s in self.sets for b in s.blocks if b.valid and b.dirty)
        return {
            "num_sets": self.config.num_sets,
            "associativity": self.config.num_blocks,
            "line_size": self.config.block_size,
            "cache_size_bytes": self.config.num_sets * self.config.num_blocks * self.config.block_size,
            "used_lines": used_lines,
            "dirty_lines": dirty_lines,
        }
