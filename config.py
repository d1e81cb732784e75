# config.py
import json
from dataclasses import dataclass, field

USAGE = ("Usage: csim <sets> <blocks> <bytes> <write-allocate|no-write-allocate> "
         "<write-through|write-back> <lru|fifo>")

WRITE_ALLOCATE = {"write-allocate": True, "no-write-allocate": False}
WRITE_POLICY = {"write-through": True, "write-back": False}
EVICTION = {"lru": True, "fifo": False}


class ConfigError(ValueError):
    """Raised when cache parameters cannot describe a simulatable cache."""


def is_power_of_two(n):
    return n > 0 and (n & (n - 1)) == 0


def check_dimensions(num_sets, num_blocks, block_size):
    if not is_power_of_two(num_sets):
        raise ConfigError("Number of sets must be a positive power of 2")
    if not is_power_of_two(num_blocks):
        raise ConfigError("Number of blocks must be a positive power of 2")
    if not is_power_of_two(block_size) or block_size < 4:
        raise ConfigError("Block size must be a power of 2 and at least 4")


@dataclass(frozen=True)
class CacheConfig:
    """
    Validated simulation parameters.
    Bit widths are derived once so address decoding stays pure shifting.
    """
    num_sets: int
    num_blocks: int
    block_size: int
    write_allocate: bool = True
    write_through: bool = True
    use_lru: bool = True

    offset_bits: int = field(init=False)
    index_bits: int = field(init=False)
    tag_bits: int = field(init=False)

    def __post_init__(self):
        check_dimensions(self.num_sets, self.num_blocks, self.block_size)
        if not self.write_allocate and not self.write_through:
            raise ConfigError("no-write-allocate cannot be combined with write-back")

        offset_bits = self.block_size.bit_length() - 1
        index_bits = self.num_sets.bit_length() - 1
        # frozen dataclass: derived fields have to go through object.__setattr__
        object.__setattr__(self, "offset_bits", offset_bits)
        object.__setattr__(self, "index_bits", index_bits)
        object.__setattr__(self, "tag_bits", 32 - offset_bits - index_bits)

    def describe(self):
        return "{} sets x {} blocks x {}B, {}, {}, {}".format(
            self.num_sets, self.num_blocks, self.block_size,
            "write-allocate" if self.write_allocate else "no-write-allocate",
            "write-through" if self.write_through else "write-back",
            "lru" if self.use_lru else "fifo",
        )


def _policy(token, table, message):
    try:
        return table[token]
    except KeyError:
        raise ConfigError(message) from None


def _build(num_sets, num_blocks, block_size, allocate, write, eviction):
    # dimensions are reported before policy tokens
    check_dimensions(num_sets, num_blocks, block_size)
    return CacheConfig(
        num_sets=num_sets,
        num_blocks=num_blocks,
        block_size=block_size,
        write_allocate=_policy(allocate, WRITE_ALLOCATE,
                               "Write allocate must be 'write-allocate' or 'no-write-allocate'"),
        write_through=_policy(write, WRITE_POLICY,
                              "Write policy must be 'write-through' or 'write-back'"),
        use_lru=_policy(eviction, EVICTION, "Eviction policy must be 'lru' or 'fifo'"),
    )


def parse_cache_args(args):
    """
    Turn the six positional command line tokens into a CacheConfig.
    Raises ConfigError with a human readable message on any problem.
    """
    if len(args) != 6:
        raise ConfigError("Expected 6 arguments\n" + USAGE)
    try:
        num_sets, num_blocks, block_size = (int(a) for a in args[:3])
    except ValueError:
        raise ConfigError("Non-integer numeric parameter in parameters 1-3") from None
    return _build(num_sets, num_blocks, block_size, args[3], args[4], args[5])


def _integer(value):
    # JSON numbers only count when they are already whole ints; 16.7 must not become 16
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(value)
    return int(value)


def cache_config_from_dict(entry):
    """Build a CacheConfig from one entry of the "caches" list of a config file."""
    try:
        num_sets = _integer(entry["num_sets"])
        num_blocks = _integer(entry["num_blocks"])
        block_size = _integer(entry["block_size"])
    except KeyError as exc:
        raise ConfigError("Missing cache parameter {}".format(exc)) from None
    except ValueError:
        raise ConfigError("Non-integer numeric parameter in cache entry") from None
    return _build(
        num_sets, num_blocks, block_size,
        entry.get("write_allocate", "write-allocate"),
        entry.get("write_policy", "write-through"),
        entry.get("eviction", "lru"),
    )


def load_config(path="config.json"):
    with open(path, "r") as f:
        return json.load(f)
