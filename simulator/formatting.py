def format_identifier(identifier):
    """Plain-text block: state, then tape / head / range for every tape."""
    lines = [f"State: {identifier.current_state}"]
    for i, tape in enumerate(identifier.tape):
        start, end = tape.range
        lines.append(f"Tape {i}: {tape.tape}")
        lines.append(f"Head {i}: {tape.head}")
        lines.append(f"Range ({start}..{end})")
    return "\n".join(lines) + "\n"


def visualize(frozen, blank="_", window=2):
    """Display the tape window with a caret under the head."""
    start, end = frozen.range
    lo = min(start, frozen.head) - window
    hi = max(end, frozen.head + 1) + window

    tape_str = ""
    head_str = ""
    for pos in range(lo, hi):
        if start <= pos < end:
            symbol = frozen.tape[pos - start]
        else:
            symbol = blank
        tape_str += f"{symbol} "
        head_str += "^ " if pos == frozen.head else "  "
    return tape_str.rstrip() + "\n" + head_str.rstrip()
