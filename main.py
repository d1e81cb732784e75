# main.py
import sys
import argparse
import json
import logging

from config import USAGE, ConfigError, parse_cache_args, load_config
from costs import format_stats
from simulator import Simulator
from tracefile import read_trace

logger = logging.getLogger(__name__)


def run_benchmark(path="config.json"):
    # plotting pulls in matplotlib, so keep it off the plain simulation path
    from benchmark import BenchmarkRunner, save_results
    from visualize import plot_hit_rates, plot_cycles

    cfg = load_config(path)
    runner = BenchmarkRunner(cfg)
    print("Starting benchmark with config:", cfg.get("benchmark", {}))
    summaries = runner.run()
    out_cfg = cfg.get("output", {})
    results_path = save_results(summaries, out_cfg)
    for s in summaries:
        print("{name}: hit rate {hit_rate:.3f}, {total_cycles} cycles".format(**s))
    print("Results saved to:", results_path)

    plot_hit_rates(summaries, out_cfg.get("hitrate_plot", "results/hit_rate.png"))
    plot_cycles(summaries, out_cfg.get("cycles_plot", "results/cycles.png"))
    print("Plots saved in results/")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Trace-driven cache simulator; reads the trace from stdin",
        usage=USAGE.replace("Usage: ", "") + "\n       csim --benchmark [config.json]",
    )
    parser.add_argument(
        "params",
        nargs="*",
        help="<sets> <blocks> <bytes> <write-allocate|no-write-allocate> "
             "<write-through|write-back> <lru|fifo>",
    )
    parser.add_argument(
        "--benchmark",
        nargs="?",
        const="config.json",
        metavar="CONFIG",
        help="Compare the caches listed in a JSON config (default: %(const)s)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every access to stderr",
    )
    return parser.parse_intermixed_args(argv)


def main(argv=None, stdin=None):
    args = parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    try:
        if args.benchmark is not None:
            if args.params:
                raise ConfigError("--benchmark does not take cache parameters")
            run_benchmark(args.benchmark)
            return 0
        config = parse_cache_args(args.params)
    except (ConfigError, OSError, json.JSONDecodeError) as exc:
        print("Error: {}".format(exc), file=sys.stderr)
        return 1

    logger.debug("simulating %s", config.describe())
    stats = Simulator(config).run(read_trace(sys.stdin if stdin is None else stdin))
    print(format_stats(stats))
    return 0


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
