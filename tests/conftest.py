from pathlib import Path

import pytest

from simulator.machine import Machine

MODELS_DIR = Path(__file__).resolve().parents[1] / "models"

FLIP_JSON = """
{
  "states": [
    {"name": "q0", "start": true, "transitions": [
      {"cons": "0", "prod": "1", "move": "R", "next": "q1"},
      {"cons": "1", "prod": "0", "move": "R", "next": "q1"}
    ]},
    {"name": "q1", "final": true, "transitions": [
      {"cons": "0", "prod": "1", "move": "R", "next": "q1"},
      {"cons": "1", "prod": "0", "move": "R", "next": "q1"}
    ]}
  ]
}
"""

REPLACE_TOML = """
[[state]]
name = "q0"
start = true

[[state.trans]]
cons = "*"
prod = "1"
move = "R"
next = "q0"

[[state.trans]]
cons = "_"
prod = "_"
move = "L"
next = "q1"

[[state]]
name = "q1"
final = true
"""


@pytest.fixture()
def models_dir():
    return MODELS_DIR


@pytest.fixture()
def flip_machine():
    return Machine.from_str(FLIP_JSON, "json")


@pytest.fixture()
def replace_machine():
    return Machine.from_str(REPLACE_TOML, "toml")


def single_state_model(*transitions, final=False):
    """Model dict with one start state ``s`` holding the given transitions."""
    return {
        "state": [
            {
                "name": "s",
                "start": True,
                "final": final,
                "trans": [
                    {"cons": c, "prod": p, "move": m, "next": n}
                    for c, p, m, n in transitions
                ],
            },
            {"name": "t"},
            {"name": "u"},
        ]
    }
