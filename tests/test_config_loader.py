import json

import pytest

from config.config_loader import DEFAULT_CONFIG, default_config, load_config, validate_config


def _write(tmp_path, data):
    path = tmp_path / "runtime_config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_load_merges_over_defaults(tmp_path, capsys):
    path = _write(tmp_path, {"max_steps": 50, "output_directory": str(tmp_path / "logs")})
    config = load_config(path)
    assert config["max_steps"] == 50
    assert config["default_format"] == DEFAULT_CONFIG["default_format"]
    assert "Loaded config" in capsys.readouterr().out


def test_overrides_skip_none(tmp_path):
    path = _write(tmp_path, {"max_steps": 50})
    config = load_config(path, overrides={"max_steps": None, "verbose": True}, verbose=False)
    assert config["max_steps"] == 50
    assert config["verbose"] is True


def test_history_creates_output_directory(tmp_path):
    out = tmp_path / "history"
    load_config(_write(tmp_path, {"log_history": True, "output_directory": str(out)}), verbose=False)
    assert out.is_dir()


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.json")


@pytest.mark.parametrize("override, error", [
    ({"max_steps": "10"}, TypeError),
    ({"max_steps": True}, TypeError),
    ({"verbose": 1}, TypeError),
    ({"max_steps": -1}, ValueError),
    ({"default_format": "xml"}, ValueError),
])
def test_validation_errors(override, error):
    config = DEFAULT_CONFIG.copy()
    config.update(override)
    with pytest.raises(error):
        validate_config(config)


def test_missing_key():
    config = DEFAULT_CONFIG.copy()
    del config["max_steps"]
    with pytest.raises(ValueError):
        validate_config(config)


def test_default_config():
    assert default_config() == DEFAULT_CONFIG
    assert default_config({"max_steps": 3})["max_steps"] == 3
