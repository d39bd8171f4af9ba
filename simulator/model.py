"""
Canonical machine model and its textual encodings.

    [[state]]
    name = "q0"
    start = true

    [[state.trans]]
    cons = "0"
    prod = "1"
    move = "R"
    next = "q1"

The same shape is accepted as JSON or YAML. Aliases: ``states`` for
``state``, ``transitions`` for ``trans``, ``consume``/``produce`` for
``cons``/``prod``, ``is_start``/``is_final`` for ``start``/``final``.
An optional ``config`` table overrides the pattern characters
(``empty``, ``some``, ``any``).
"""

import json
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

import tomli_w
import yaml

from simulator.errors import MachineSyntaxError, SyntaxErrorType
from simulator.pattern import PatternConfig

FORMATS = ("json", "toml", "yaml")
FORMAT_ALIASES = {"yml": "yaml"}


def _invalid(message, detail=None):
    return MachineSyntaxError(SyntaxErrorType.SYNTAX_NOT_VALID, message, detail)


def _pick(data, *keys, default=None):
    for key in keys:
        if key in data:
            return data[key]
    return default


def _text(value, what):
    if not isinstance(value, str):
        raise _invalid(
            f"{what} must be a string, got {type(value).__name__}",
            "quote symbol strings in YAML, e.g. cons: \"011\"",
        )
    return value


def _flag(value, what):
    if not isinstance(value, bool):
        raise _invalid(f"{what} must be a boolean, got {type(value).__name__}")
    return value


def _mapping(value, what):
    if not isinstance(value, dict):
        raise _invalid(f"{what} must be a table/object, got {type(value).__name__}")
    return value


def _sequence(value, what):
    if not isinstance(value, list):
        raise _invalid(f"{what} must be a list, got {type(value).__name__}")
    return value


def normalize_format(fmt):
    fmt = (fmt or "").lower().lstrip(".")
    fmt = FORMAT_ALIASES.get(fmt, fmt)
    if fmt not in FORMATS:
        raise MachineSyntaxError(
            SyntaxErrorType.FORMAT_NOT_PROVIDED,
            f"not provided format: {fmt or '<none>'}",
        )
    return fmt


@dataclass
class TransitionModel:
    cons: str
    prod: str
    move: str
    next: str

    @classmethod
    def from_dict(cls, data, where="transition"):
        data = _mapping(data, where)
        values = {}
        for name, keys in (
            ("cons", ("cons", "consume")),
            ("prod", ("prod", "produce")),
            ("move", ("move",)),
            ("next", ("next",)),
        ):
            value = _pick(data, *keys)
            if value is None:
                raise _invalid(f"{where} is missing '{name}'")
            values[name] = _text(value, f"{where}.{name}")
        return cls(**values)

    def to_dict(self):
        return {"cons": self.cons, "prod": self.prod, "move": self.move, "next": self.next}


@dataclass
class StateModel:
    name: str
    start: bool = False
    final: bool = False
    trans: list = field(default_factory=list)

    @classmethod
    def from_dict(cls, data, where="state"):
        data = _mapping(data, where)
        if "name" not in data:
            raise _invalid(f"{where} is missing 'name'")
        name = _text(data["name"], f"{where}.name")
        where = f"state {name!r}"
        trans = _sequence(_pick(data, "trans", "transitions") or [], f"{where}.trans")
        return cls(
            name=name,
            start=_flag(_pick(data, "start", "is_start", default=False), f"{where}.start"),
            final=_flag(_pick(data, "final", "is_final", default=False), f"{where}.final"),
            trans=[
                TransitionModel.from_dict(t, f"{where} transition #{i}")
                for i, t in enumerate(trans)
            ],
        )

    def to_dict(self):
        return {
            "name": self.name,
            "start": self.start,
            "final": self.final,
            "trans": [t.to_dict() for t in self.trans],
        }


@dataclass
class MachineModel:
    state: list = field(default_factory=list)
    config: PatternConfig = field(default_factory=PatternConfig)

    @classmethod
    def from_dict(cls, data):
        data = _mapping(data, "model")
        states = _sequence(_pick(data, "state", "states") or [], "state")
        raw_config = _mapping(data.get("config") or {}, "config")
        defaults = PatternConfig()
        config = PatternConfig(
            empty=raw_config.get("empty", defaults.empty),
            some=raw_config.get("some", defaults.some),
            any=raw_config.get("any", defaults.any),
        )
        return cls(
            state=[StateModel.from_dict(s, f"state #{i}") for i, s in enumerate(states)],
            config=config,
        )

    @classmethod
    def from_str(cls, text, fmt):
        fmt = normalize_format(fmt)
        try:
            if fmt == "json":
                data = json.loads(text)
            elif fmt == "toml":
                data = tomllib.loads(text)
            else:
                data = yaml.safe_load(text)
        except (ValueError, yaml.YAMLError) as e:
            raise _invalid(f"{fmt} deserializer failed.", str(e)) from e
        return cls.from_dict(data)

    def to_dict(self):
        return {
            "state": [s.to_dict() for s in self.state],
            "config": self.config.to_dict(),
        }

    def to_str(self, fmt):
        fmt = normalize_format(fmt)
        data = self.to_dict()
        if fmt == "json":
            return json.dumps(data, indent=2) + "\n"
        if fmt == "toml":
            return tomli_w.dumps(data)
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)

    def dangling_targets(self):
        """(state, target) pairs whose target names no declared state."""
        names = {s.name for s in self.state}
        return [
            (s.name, t.next)
            for s in self.state
            for t in s.trans
            if t.next not in names
        ]


def load_model(path, ext=None):
    """Read a model file; the format comes from ``ext`` or the file suffix."""
    path = Path(path)
    fmt = normalize_format(ext or path.suffix)
    with open(path, "r", encoding="utf-8") as f:
        return MachineModel.from_str(f.read(), fmt)


def save_model(model, path, fmt=None):
    path = Path(path)
    fmt = normalize_format(fmt or path.suffix)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(model.to_str(fmt))
    return str(path)
