import json
import os
import sys

import pytest
from loguru import logger

from pwomatic.cli import main

@pytest.fixture(autouse=True)
def restore_logging():
    yield
    logger.remove()
    logger.add(sys.__stderr__)

def _args(tmp_path, *rest):
    return ["--config", os.path.join(str(tmp_path), "none.json"), "--log-level", "WARNING", *rest]

def test_sample_prints_lengths(tmp_path, dictionary_file, capsys):
    rc = main(_args(tmp_path, "sample", "--dictionary", dictionary_file, "--count", "5"))
    assert rc == 0
    lines = [l for l in capsys.readouterr().out.splitlines() if l.strip()]
    assert len(lines) == 5
    for line in lines:
        length, pw = line.split(" ", 1)
        assert int(length) == len(pw)
        assert 20 <= int(length) <= 27

def test_generate_prints_table(tmp_path, dictionary_file, capsys):
    rc = main(_args(tmp_path, "generate", "--dictionary", dictionary_file, "--copies", "3", "--mode", "random"))
    assert rc == 0
    out = capsys.readouterr().out
    assert "Password (random)" in out

def test_missing_dictionary_fails(tmp_path, capsys):
    rc = main(_args(tmp_path, "generate", "--dictionary", os.path.join(str(tmp_path), "nope.txt")))
    assert rc == 1
    assert "Failed to load dictionary" in capsys.readouterr().out

def _write_config(tmp_path, values):
    path = os.path.join(str(tmp_path), "config.json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(values, f)
    return path

@pytest.mark.parametrize("values", [
    {"min_length": 20, "max_length": 10},
    {"max_length": "long"},
    {"min_length": None},
])
@pytest.mark.parametrize("cmd", ["sample", "generate"])
def test_bad_policy_in_config_fails_cleanly(tmp_path, dictionary_file, capsys, values, cmd):
    path = _write_config(tmp_path, values)
    rc = main(["--config", path, "--log-level", "WARNING", cmd, "--dictionary", dictionary_file])
    assert rc == 1
    assert "Invalid password settings in config" in capsys.readouterr().out

def test_serve_with_bad_policy_exits_before_serving(tmp_path, capsys):
    path = _write_config(tmp_path, {"min_length": 2})
    rc = main(["--config", path, "--log-level", "WARNING", "serve",
               "--dictionary", os.path.join(str(tmp_path), "nope.txt")])
    assert rc == 1
    assert "Invalid password settings in config" in capsys.readouterr().out

def test_config_set_writes_file(tmp_path, capsys):
    path = os.path.join(str(tmp_path), "config.json")
    rc = main(["--config", path, "--log-level", "WARNING", "config", "set", "batch_size", "6"])
    assert rc == 0
    with open(path, encoding="utf-8") as f:
        saved = json.load(f)
    assert saved["batch_size"] == 6
    assert saved["dictionary"] == "dictionary.txt"

    rc = main(["--config", path, "--log-level", "WARNING", "config", "set", "dictionary", "words.txt"])
    assert rc == 0
    with open(path, encoding="utf-8") as f:
        assert json.load(f)["dictionary"] == "words.txt"

def test_config_set_rejects_bad_values(tmp_path, capsys):
    path = os.path.join(str(tmp_path), "config.json")
    assert main(["--config", path, "config", "set", "colour", "red"]) == 1
    assert main(["--config", path, "config", "set", "max_length", "10"]) == 1
    out = capsys.readouterr().out
    assert "Unknown setting: colour" in out
    assert "Invalid password settings" in out
    assert not os.path.exists(path)

def test_config_show_lists_settings(tmp_path, capsys):
    path = _write_config(tmp_path, {"port": 9443})
    assert main(["--config", path, "--log-level", "WARNING", "config", "show"]) == 0
    out = capsys.readouterr().out
    assert "port" in out
    assert "9443" in out
