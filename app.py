# app.py

import argparse
import sys
import uuid
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt, IntPrompt
from rich.table import Table
from rich.text import Text

from config.config_loader import default_config, load_config
from logger.logger import JSONLogger
from simulator.errors import MachineRunningError, MachineSyntaxError
from simulator.formatting import format_identifier, visualize
from simulator.machine import Machine
from simulator.model import save_model
from simulator.runner import run_bounded

console = Console()

EXIT_ACCEPTED = 0
EXIT_REJECTED = 1
EXIT_ERROR = 2


# === Utilities ===
def resolve_config(args):
    overrides = {
        "max_steps": args.max_steps,
        "verbose": True if args.verbose else None,
        "log_history": True if args.history else None,
    }
    if args.config:
        return load_config(args.config, overrides=overrides, verbose=False)
    return default_config(overrides)


def print_identifier(identifier):
    console.print(format_identifier(identifier), markup=False, highlight=False, end="")


def print_result(result):
    if result.accepted:
        console.print(f"[green]Accepted[/green] after {result.steps:,} steps.")
    elif result.halted:
        console.print(f"[yellow]Halted in non-final state[/yellow] after {result.steps:,} steps.")
    else:
        console.print(f"[red]Step limit reached[/red] after {result.steps:,} steps.")


def read_input(args):
    if args.input is not None:
        return args.input
    return sys.stdin.readline().rstrip("\r\n")


# === CLI Mode for Automation ===
def cli_main(args):
    try:
        config = resolve_config(args)
        machine = Machine.from_file(args.file, args.ext)
    except (MachineSyntaxError, FileNotFoundError, ValueError, TypeError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        return EXIT_ERROR

    input_text = read_input(args)
    machine.reset()
    machine.input(input_text)

    logger = None
    run_id = uuid.uuid4().hex[:12]
    if config["log_history"]:
        logger = JSONLogger(config["output_directory"], config["log_file_prefix"])

    def on_step(step, identifier):
        if config["verbose"]:
            print_identifier(identifier)
        if logger is not None:
            logger.log_step(run_id, step, identifier)

    try:
        result = run_bounded(machine, config["max_steps"], on_step=on_step)
    except MachineRunningError as e:
        console.print(f"[red]Runtime error:[/red] {escape(str(e))}")
        return EXIT_ERROR

    if not config["verbose"]:
        print_identifier(result.identifier)
    print_result(result)

    if logger is not None:
        logger.log_summary(run_id, Path(args.file).stem, input_text, result)
        console.print(f"[cyan]History written to {logger.current_log}[/cyan]")

    return EXIT_ACCEPTED if result.accepted else EXIT_REJECTED


# === Interactive Mode ===
def show_main_menu():
    console.print("\n[bold cyan]Turing Machine Simulator[/bold cyan]")
    console.print("[1] Load Model")
    console.print("[2] Set Input")
    console.print("[3] Step")
    console.print("[4] Run")
    console.print("[5] Show Configuration")
    console.print("[6] Export Model")
    console.print("[7] Exit")


def show_configuration(machine):
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Tape", justify="center")
    table.add_column("Window")
    table.add_column("Head", justify="center")
    table.add_column("Range", justify="center")

    identifier = machine.identifier()
    for i, frozen in enumerate(identifier.tape):
        start, end = frozen.range
        table.add_row(
            str(i),
            Text(visualize(frozen, machine.pattern_config.empty)),
            str(frozen.head),
            f"{start}..{end}",
        )

    state_color = "green" if machine.is_final() else "cyan"
    console.print(f"State: [{state_color}]{escape(identifier.current_state)}[/{state_color}]")
    console.print(table)


def handle_load(session):
    path = Prompt.ask("Model file")
    ext = Prompt.ask("Format (blank = from suffix)", default="")
    try:
        session["machine"] = Machine.from_file(path, ext or None)
    except (MachineSyntaxError, FileNotFoundError) as e:
        console.print(f"[red]Could not load model:[/red] {escape(str(e))}")
        return
    session["path"] = path
    console.print(f"[green]Loaded {session['machine']!r}[/green]")


def handle_input(session):
    machine = session["machine"]
    session["input"] = Prompt.ask("Input for tape 0", default=session.get("input", ""))
    machine.reset()
    machine.input(session["input"])
    show_configuration(machine)


def handle_step(session):
    machine = session["machine"]
    try:
        halted = machine.run_once()
    except MachineRunningError as e:
        console.print(f"[red]Runtime error:[/red] {escape(str(e))}")
        return
    if halted:
        console.print("[yellow]No transition matches: machine halted.[/yellow]")
    show_configuration(machine)


def handle_run(session, config):
    machine = session["machine"]
    max_steps = IntPrompt.ask("Max Steps (0 = no limit)", default=config["max_steps"])
    try:
        result = run_bounded(machine, max_steps)
    except MachineRunningError as e:
        console.print(f"[red]Runtime error:[/red] {escape(str(e))}")
        return
    print_result(result)
    show_configuration(machine)


def handle_export(session, config):
    machine = session["machine"]
    fmt = Prompt.ask("Format", choices=["json", "toml", "yaml"], default=config["default_format"])
    default_path = Path(session["path"]).with_suffix(f".{fmt}").name
    path = Prompt.ask("Output path", default=str(Path("exports") / default_path))
    saved = save_model(machine.model(), path, fmt)
    console.print(f"[green]Model written to {saved}[/green]")


def interactive_main(config):
    session = {"machine": None, "path": None, "input": ""}

    while True:
        show_main_menu()
        choice = Prompt.ask("\nChoose an option", choices=["1", "2", "3", "4", "5", "6", "7"], default="7")

        if choice == "7":
            console.print("[bold green]Goodbye![/bold green]")
            break
        if choice == "1":
            handle_load(session)
            continue
        if session["machine"] is None:
            console.print("[red]Load a model first.[/red]")
            continue

        if choice == "2":
            handle_input(session)
        elif choice == "3":
            handle_step(session)
        elif choice == "4":
            handle_run(session, config)
        elif choice == "5":
            show_configuration(session["machine"])
        elif choice == "6":
            handle_export(session, config)


def build_parser():
    parser = argparse.ArgumentParser(description="Multi-tape Turing Machine Simulator")
    parser.add_argument("-f", "--file", help="Path to the machine model (json, toml or yaml)")
    parser.add_argument("-e", "--ext", help="Model format; inferred from the file suffix when omitted")
    parser.add_argument("-i", "--input", help="Input for the first tape; read from stdin when omitted")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print every intermediate configuration")
    parser.add_argument("--max_steps", type=int, help="Step budget (0 = no limit)")
    parser.add_argument("--config", help="Path to a runtime config JSON file")
    parser.add_argument("--history", action="store_true", help="Write the run history as JSON lines")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.file:
        return cli_main(args)

    try:
        config = resolve_config(args)
    except (FileNotFoundError, ValueError, TypeError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        return EXIT_ERROR
    interactive_main(config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
