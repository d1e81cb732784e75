# simulator.py
import logging

from cache import CacheModel
from costs import CostAccountant
from tracefile import Operation

logger = logging.getLogger(__name__)


class Simulator:
    """
    Replays (operation, address) records against one cache.
    Owns the cache model, its clock and the running statistics for a run.
    """

    def __init__(self, config):
        self.config = config
        self.cache = CacheModel(config)
        self.costs = CostAccountant(config.block_size)

    @property
    def stats(self):
        return self.costs.stats

    def _replace(self, cache_set, tag):
        """Flush the victim if it holds deferred writes, then install `tag` over it."""
        block = self.cache.victim(cache_set)
        if block.valid and block.dirty and not self.config.write_through:
            self.costs.flush()
        self.cache.install(block, tag)
        return block

    def load(self, address):
        tag, cache_set, i = self.cache.locate(address)
        if i is not None:
            logger.debug("load %#x hit", address)
            self.costs.load(hit=True)
            self.cache.touch(cache_set[i])
            return True

        logger.debug("load %#x miss", address)
        self.costs.load(hit=False)
        self._replace(cache_set, tag)
        return False

    def store(self, address):
        tag, cache_set, i = self.cache.locate(address)
        if i is not None:
            logger.debug("store %#x hit", address)
            self.costs.store(hit=True)
            block = cache_set[i]
            self.cache.touch(block)
            if self.config.write_through:
                self.costs.write_through()
            else:
                block.dirty = True
            return True

        logger.debug("store %#x miss", address)
        self.costs.store(hit=False)
        if not self.config.write_allocate:
            self.costs.direct_write()
            return False

        self.costs.fill()
        block = self._replace(cache_set, tag)
        if self.config.write_through:
            block.dirty = False
            self.costs.write_through()
        else:
            block.dirty = True
        return False

    def access(self, operation, address):
        if operation is Operation.LOAD:
            return self.load(address)
        return self.store(address)

    def run(self, records):
        """Process every record in order and return the final Stats."""
        for operation, address in records:
            self.access(operation, address)
        return self.stats


def simulate(config, records):
    return Simulator(config).run(records)
