# benchmark.py
import os
import json
import time
import logging
import numpy as np

from config import ConfigError, cache_config_from_dict
from simulator import Simulator
from tracefile import Operation, format_trace_line

logger = logging.getLogger(__name__)

ACCESS_PATTERNS = ("sequential", "random", "mixed")


def generate_trace(num_requests=10000, working_set_kb=64, block_size=16,
                   read_ratio=0.8, access_pattern="mixed", seed=None):
    """
    Build a synthetic list of (Operation, address) records.
    Addresses are block aligned and stay inside the working set.
    sequential walks block by block with wrap, random is uniform,
    mixed is mostly sequential with 20% random jumps.
    """
    if access_pattern not in ACCESS_PATTERNS:
        raise ValueError("access_pattern must be one of {}".format(", ".join(ACCESS_PATTERNS)))
    rng = np.random.default_rng(seed)
    num_blocks = max(1, (working_set_kb * 1024) // block_size)

    sequential = np.arange(num_requests) % num_blocks
    if access_pattern == "sequential":
        blocks = sequential
    else:
        jumps = rng.integers(0, num_blocks, size=num_requests)
        if access_pattern == "random":
            blocks = jumps
        else:
            blocks = np.where(rng.random(num_requests) < 0.8, sequential, jumps)

    is_load = rng.random(num_requests) < read_ratio
    addresses = (blocks.astype(np.uint64) * block_size) & 0xFFFFFFFF
    return [(Operation.LOAD if load else Operation.STORE, int(addr))
            for load, addr in zip(is_load, addresses)]


def save_trace(records, path):
    with open(path, "w") as f:
        for operation, address in records:
            f.write(format_trace_line(operation, address) + "\n")
    return path


class BenchmarkRunner:
    """Replays one synthetic trace against every configured cache."""

    def __init__(self, cfg):
        if not isinstance(cfg, dict):
            raise ConfigError("Benchmark config must be a JSON object")
        self.cfg = cfg
        entries = cfg.get("caches")
        if not entries or not isinstance(entries, list):
            raise ConfigError("No caches configured")
        self.caches = []
        for i, entry in enumerate(entries):
            if not isinstance(entry, dict):
                raise ConfigError("Cache entry {} must be an object".format(i))
            self.caches.append((entry.get("name", "cache{}".format(i)), cache_config_from_dict(entry)))

        bench = cfg.get("benchmark", {})
        self.num_requests = bench.get("num_requests", 10000)
        self.working_set_kb = bench.get("working_set_kb", 64)
        self.read_ratio = bench.get("read_ratio", 0.8)
        self.access_pattern = bench.get("access_pattern", "mixed")
        if self.access_pattern not in ACCESS_PATTERNS:
            raise ConfigError("access_pattern must be one of {}".format(", ".join(ACCESS_PATTERNS)))
        self.seed = bench.get("random_seed", None)
        # trace granularity follows the smallest block so no config sees a coarser stream
        self.block_size = min(config.block_size for _, config in self.caches)

    def trace(self):
        return generate_trace(
            num_requests=self.num_requests,
            working_set_kb=self.working_set_kb,
            block_size=self.block_size,
            read_ratio=self.read_ratio,
            access_pattern=self.access_pattern,
            seed=self.seed,
        )

    def run(self, records=None):
        if records is None:
            records = self.trace()
        summaries = []
        for name, config in self.caches:
            logger.info("running %s (%s) on %d records", name, config.describe(), len(records))
            sim = Simulator(config)
            start = time.time()
            stats = sim.run(records)
            end = time.time()

            summary = {"name": name, "config": config.describe()}
            summary.update(stats.summary())
            summary.update(sim.cache.stats())
            summary["duration_s"] = end - start
            summaries.append(summary)
        return summaries


def save_results(summaries, out_cfg):
    results_dir = out_cfg.get("results_dir", "results")
    os.makedirs(results_dir, exist_ok=True)
    path = os.path.join(results_dir, "results.json")
    with open(path, "w") as f:
        json.dump(summaries, f, indent=2)
    return path
