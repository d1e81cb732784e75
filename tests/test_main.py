import io
import json

import pytest

from main import main

ARGS = ["1", "1", "4", "write-allocate", "write-through", "lru"]


def test_simulation_output(capsys):
    status = main(ARGS, stdin=io.StringIO("l 0 0\nl 0 0\nbad line\nl 4 0\n"))
    assert status == 0
    assert capsys.readouterr().out.splitlines() == [
        "Total loads: 3",
        "Total stores: 0",
        "Load hits: 1",
        "Load misses: 2",
        "Store hits: 0",
        "Store misses: 0",
        "Total cycles: 203",
    ]


def test_verbose_flag_accepted(capsys):
    assert main(["-v"] + ARGS, stdin=io.StringIO("s 0 0\n")) == 0
    assert "Store misses: 1" in capsys.readouterr().out


def test_config_error_exit_status(capsys):
    status = main(["1", "1", "4", "no-write-allocate", "write-back", "lru"], stdin=io.StringIO(""))
    assert status == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Error: no-write-allocate cannot be combined with write-back" in captured.err


def test_wrong_argument_count(capsys):
    assert main([], stdin=io.StringIO("")) == 1
    assert "Expected 6 arguments" in capsys.readouterr().err


def test_benchmark_mode(tmp_path, capsys):
    cfg = {
        "caches": [{"name": "small", "num_sets": 2, "num_blocks": 2, "block_size": 8}],
        "benchmark": {"num_requests": 100, "working_set_kb": 1, "random_seed": 1},
        "output": {
            "results_dir": str(tmp_path / "results"),
            "hitrate_plot": str(tmp_path / "results" / "hit_rate.png"),
            "cycles_plot": str(tmp_path / "results" / "cycles.png"),
        },
    }
    path = tmp_path / "config.json"
    path.write_text(json.dumps(cfg))
    assert main(["--benchmark", str(path)]) == 0
    assert (tmp_path / "results" / "results.json").exists()
    assert (tmp_path / "results" / "cycles.png").exists()
    assert "small: hit rate" in capsys.readouterr().out


def test_benchmark_missing_file(tmp_path, capsys):
    assert main(["--benchmark", str(tmp_path / "nope.json")]) == 1
    assert "Error:" in capsys.readouterr().err


def _write_config(tmp_path, cfg):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(cfg))
    return str(path)


@pytest.mark.parametrize("cfg,message", [
    ({"benchmark": {}}, "No caches configured"),
    ({"caches": []}, "No caches configured"),
    ({"caches": ["direct"]}, "must be an object"),
    ({"caches": [{"num_sets": 1, "num_blocks": 1, "block_size": 4}],
      "benchmark": {"access_pattern": "zigzag"}}, "access_pattern"),
    ({"caches": [{"num_sets": 1, "num_blocks": 1, "block_size": 16.7}]}, "Non-integer"),
])
def test_benchmark_bad_config(tmp_path, capsys, cfg, message):
    assert main(["--benchmark", _write_config(tmp_path, cfg)]) == 1
    captured = capsys.readouterr()
    assert "Error: " in captured.err
    assert message in captured.err


def test_verbose_flag_after_parameters(capsys):
    assert main(ARGS + ["-v"], stdin=io.StringIO("l 0 0\n")) == 0
    assert "Load misses: 1" in capsys.readouterr().out


def test_benchmark_rejects_extra_parameters(tmp_path, capsys):
    path = _write_config(tmp_path, {"caches": [{"num_sets": 1, "num_blocks": 1, "block_size": 4}]})
    assert main(["--benchmark", path, "extra"]) == 1
    assert "does not take cache parameters" in capsys.readouterr().err


def test_unknown_flag_exits():
    with pytest.raises(SystemExit) as excinfo:
        main(ARGS + ["--fast"], stdin=io.StringIO(""))
    assert excinfo.value.code == 2
