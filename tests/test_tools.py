import json

import pytest

from simulator.errors import MachineSyntaxError
from simulator.model import load_model
from tools.model_convert import convert_model
from tools.model_inspect import inspect_model, transition_rows
from tools.simulate_inputs import load_input_pool, simulate_inputs


def test_transition_rows(models_dir):
    rows = transition_rows(load_model(models_dir / "replace_zeros.toml"))
    assert rows == [
        ("q0", "start", "*", "1", "R", "q0"),
        ("q0", "start", "_", "_", "L", "q1"),
        ("q1", "final", "", "", "", "HALT"),
    ]


def test_inspect_model_warns_about_dangling_targets(tmp_path, capsys):
    path = tmp_path / "m.json"
    path.write_text(json.dumps({"state": [
        {"name": "a", "start": True, "trans": [{"cons": "0", "prod": "1", "move": "R", "next": "ghost"}]},
    ]}), encoding="utf-8")
    machine, dangling = inspect_model(path)
    assert dangling == [("a", "ghost")]
    assert machine.start_state == "a"
    out = capsys.readouterr().out
    assert "WARNING" in out
    assert "Model OK" in out


def test_convert_model(tmp_path, models_dir):
    src = tmp_path / "flip.json"
    src.write_text((models_dir / "binary_flip.json").read_text(encoding="utf-8"), encoding="utf-8")

    toml_path = convert_model(src, to_fmt="toml")
    assert toml_path.endswith("flip.toml")
    assert load_model(toml_path) == load_model(src)

    yaml_path = convert_model(src, tmp_path / "out" / "flip.yml")
    assert load_model(yaml_path) == load_model(src)


def test_convert_rejects_invalid_model(tmp_path):
    src = tmp_path / "bad.json"
    src.write_text(json.dumps({"state": [{"name": "a"}]}), encoding="utf-8")
    with pytest.raises(MachineSyntaxError):
        convert_model(src, to_fmt="yaml")
    assert convert_model(src, to_fmt="yaml", validate=False).endswith("bad.yaml")


def test_convert_refuses_to_overwrite_source(tmp_path, models_dir):
    src = tmp_path / "flip.json"
    src.write_text((models_dir / "binary_flip.json").read_text(encoding="utf-8"), encoding="utf-8")
    with pytest.raises(ValueError):
        convert_model(src, to_fmt="json")


def test_simulate_inputs_with_checkpoint(tmp_path, models_dir):
    pool = tmp_path / "inputs.txt"
    pool.write_text("1101\n\nx\n0\n", encoding="utf-8")
    assert load_input_pool(pool) == ["1101", "x", "0"]

    summary = simulate_inputs(
        models_dir / "binary_flip.json", pool, batch_size=2, max_steps=10,
        results_root=tmp_path / "results",
    )
    assert summary == {"accepted": 2, "rejected": 1, "unfinished": 0, "errors": 0}

    results_file = tmp_path / "results" / "inputs" / "results.jsonl"
    entries = [json.loads(line) for line in results_file.read_text(encoding="utf-8").splitlines()]
    assert [e["index"] for e in entries] == [0, 1, 2]
    assert entries[0]["tape"] == ["0101"]
    assert entries[1]["halted"] and not entries[1]["accepted"]

    # everything is checkpointed, a second pass does no work
    again = simulate_inputs(
        models_dir / "binary_flip.json", pool, max_steps=10, results_root=tmp_path / "results",
    )
    assert again == {"accepted": 0, "rejected": 0, "unfinished": 0, "errors": 0}


def test_simulate_inputs_records_runtime_errors(tmp_path):
    model = tmp_path / "m.json"
    model.write_text(json.dumps({"state": [
        {"name": "a", "start": True, "trans": [{"cons": "0", "prod": "1", "move": "R", "next": "ghost"}]},
    ]}), encoding="utf-8")
    pool = tmp_path / "pool.txt"
    pool.write_text("0\n1\n", encoding="utf-8")
    summary = simulate_inputs(model, pool, results_root=tmp_path / "results")
    assert summary["errors"] == 1
    assert summary["rejected"] == 1
