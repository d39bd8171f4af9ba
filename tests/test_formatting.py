from simulator.formatting import format_identifier, visualize
from simulator.machine import MachineIdentifier
from simulator.tape import FrozenTape


def test_format_identifier_block():
    identifier = MachineIdentifier("q1", (
        FrozenTape("0101", 4, (0, 4)),
        FrozenTape("", -1, (-1, -1)),
    ))
    assert format_identifier(identifier) == (
        "State: q1\n"
        "Tape 0: 0101\n"
        "Head 0: 4\n"
        "Range (0..4)\n"
        "Tape 1: \n"
        "Head 1: -1\n"
        "Range (-1..-1)\n"
    )


def test_visualize_marks_head():
    rendered = visualize(FrozenTape("ab", 1, (0, 2)), blank="_", window=1)
    tape_line, head_line = rendered.split("\n")
    assert tape_line == "_ a b _"
    assert head_line == "    ^"


def test_visualize_head_outside_window():
    rendered = visualize(FrozenTape("a", 3, (0, 1)), blank="_", window=0)
    tape_line, head_line = rendered.split("\n")
    assert tape_line == "a _ _ _"
    assert head_line.endswith("^")
