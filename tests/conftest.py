import pytest

from config import CacheConfig


@pytest.fixture
def make_config():
    def make(num_sets=1, num_blocks=1, block_size=4, write_allocate=True,
             write_through=True, use_lru=True):
        return CacheConfig(num_sets, num_blocks, block_size, write_allocate,
                           write_through, use_lru)
    return make
