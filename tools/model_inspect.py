# tools/model_inspect.py

import argparse

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from simulator.errors import MachineSyntaxError
from simulator.machine import Machine
from simulator.model import load_model

console = Console()


def transition_rows(model):
    """Flatten a model into (state, flags, cons, prod, move, next) rows."""
    rows = []
    for state in model.state:
        flags = ", ".join(flag for flag, on in (("start", state.start), ("final", state.final)) if on)
        if not state.trans:
            rows.append((state.name, flags, "", "", "", "HALT"))
        for t in state.trans:
            rows.append((state.name, flags, t.cons, t.prod, t.move.upper(), t.next))
    return rows


def pretty_print_model(model, title="Transition Table"):
    table = Table(title=title, show_header=True, header_style="bold magenta")
    for column in ("State", "Flags", "Consume", "Produce", "Move", "Next"):
        table.add_column(column, justify="center")
    for row in transition_rows(model):
        table.add_row(*(escape(cell) for cell in row))
    console.print(table)

    config = model.config
    console.print(
        f"Pattern characters: blank={config.empty!r} "
        f"non-blank={config.some!r} any={config.any!r}",
        markup=False,
    )


def inspect_model(path, ext=None):
    """Print the table, validate the model and warn about dangling targets."""
    model = load_model(path, ext)
    pretty_print_model(model, title=f"Transition Table: {path}")

    dangling = model.dangling_targets()
    for state_name, target in dangling:
        console.print(
            f"[yellow][WARNING] state {escape(state_name)!r} has a transition to unknown state "
            f"{escape(target)!r}; it fails only if taken.[/yellow]"
        )

    machine = Machine(model)
    console.print(
        f"[green]Model OK:[/green] {len(machine.states)} states, "
        f"{machine.tape_count} tape(s), start={escape(machine.start_state)}, "
        f"final={escape(', '.join(sorted(machine.final_states)) or '-')}"
    )
    return machine, dangling


def main():
    parser = argparse.ArgumentParser(description="Turing Machine Model Inspector")
    parser.add_argument("--file", required=True, help="Model file (json, toml or yaml)")
    parser.add_argument("--ext", help="Model format; inferred from the suffix when omitted")
    args = parser.parse_args()

    try:
        inspect_model(args.file, args.ext)
    except MachineSyntaxError as e:
        console.print(f"[red]Invalid model:[/red] {escape(str(e))}")
        raise SystemExit(2)


if __name__ == "__main__":
    main()
