import json

from logger.logger import JSONLogger
from simulator.runner import run_bounded


def test_log_writes_json_lines(tmp_path):
    logger = JSONLogger(output_directory=str(tmp_path), log_file_prefix="test_")
    logger.log({"event": "hello"})
    logger.log_batch([{"n": 1}, {"n": 2}])

    lines = (tmp_path / f"test_{logger.today}.jsonl").read_text(encoding="utf-8").splitlines()
    entries = [json.loads(line) for line in lines]
    assert [e.get("event") for e in entries] == ["hello", None, None]
    assert [e.get("n") for e in entries[1:]] == [1, 2]
    assert all("timestamp" in e for e in entries)


def test_step_and_summary_entries(tmp_path, flip_machine):
    logger = JSONLogger(output_directory=str(tmp_path / "logs"))
    flip_machine.input("10")
    result = run_bounded(flip_machine, on_step=lambda step, ident: logger.log_step("r1", step, ident))
    logger.log_summary("r1", "flip", "10", result)

    entries = logger.read_entries()
    assert [e["event"] for e in entries] == ["step", "summary"]
    assert entries[0]["current_state"] == "q1"
    assert entries[0]["tape"][0]["tape"] == "00"
    assert entries[1]["accepted"] is True
    assert entries[1]["input"] == "10"
    assert entries[1]["identifier"]["tape"][0]["range"] == [0, 2]


def test_rotate_keeps_prefix(tmp_path):
    logger = JSONLogger(output_directory=str(tmp_path), log_file_prefix="p_")
    logger.rotate()
    assert logger.current_log.endswith(f"p_{logger.today}.jsonl")
    assert logger.read_entries() == []
