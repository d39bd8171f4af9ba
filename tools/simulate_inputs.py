# tools/simulate_inputs.py

import argparse
import json
import os
from pathlib import Path

from rich.progress import Progress, SpinnerColumn, BarColumn, TextColumn, TimeElapsedColumn

from simulator.errors import MachineRunningError
from simulator.machine import Machine
from simulator.runner import run_bounded


# === Utility Loaders ===
def load_input_pool(input_pool_file):
    """One input string per line; blank lines are ignored."""
    with open(input_pool_file, "r", encoding="utf-8") as f:
        inputs = [line.rstrip("\r\n") for line in f if line.strip()]
    return inputs


def load_checkpoint(checkpoint_path):
    if checkpoint_path.exists():
        with open(checkpoint_path, "r", encoding="utf-8") as f:
            checkpoint = json.load(f)
        return checkpoint.get("completed", [])
    return []


def save_checkpoint(completed, checkpoint_path):
    with open(checkpoint_path, "w", encoding="utf-8") as f:
        json.dump({"completed": completed}, f, indent=4)


def console_message(msg):
    print(f"[{Path(os.getcwd()).name}] {msg}")


def simulate_one(machine, input_text, max_steps):
    machine.reset()
    machine.input(input_text)
    result = run_bounded(machine, max_steps)
    return {
        "input": input_text,
        "halted": result.halted,
        "accepted": result.accepted,
        "steps": result.steps,
        "current_state": result.identifier.current_state,
        "tape": [t.tape for t in result.identifier.tape],
    }


# === Main Simulation Runner ===
def simulate_inputs(model_file, input_pool_file, output_name="results", batch_size=256,
                    max_steps=100000, results_root="results", ext=None):
    machine = Machine.from_file(model_file, ext)

    pool_name = Path(input_pool_file).stem
    results_folder = Path(results_root) / pool_name
    results_folder.mkdir(parents=True, exist_ok=True)
    results_file = results_folder / f"{output_name}.jsonl"
    checkpoint_file = results_folder / f"{output_name}_checkpoint.json"

    all_inputs = load_input_pool(input_pool_file)
    completed = load_checkpoint(checkpoint_file)
    done = set(completed)

    pending = [(idx, text) for idx, text in enumerate(all_inputs) if idx not in done]
    console_message(f"Loaded {len(all_inputs):,} total inputs. {len(pending):,} pending.")

    summary = {"accepted": 0, "rejected": 0, "unfinished": 0, "errors": 0}

    with open(results_file, "a", encoding="utf-8") as results_fh:
        for batch_start in range(0, len(pending), batch_size):
            batch = pending[batch_start:batch_start + batch_size]
            console_message(f"Processing batch {batch_start // batch_size + 1} with {len(batch):,} inputs...")

            with Progress(
                    SpinnerColumn(),
                    BarColumn(),
                    "[progress.percentage]{task.percentage:>3.0f}%",
                    TextColumn("{task.completed}/{task.total} Inputs"),
                    TimeElapsedColumn()
            ) as progress:

                task = progress.add_task("[cyan]Simulating...", total=len(batch))
                batch_results = []

                for idx, input_text in batch:
                    try:
                        entry = simulate_one(machine, input_text, max_steps)
                    except MachineRunningError as e:
                        console_message(f"[WARNING] Input #{idx} failed: {e}")
                        entry = {"input": input_text, "error": str(e)}
                        summary["errors"] += 1
                    else:
                        if entry["accepted"]:
                            summary["accepted"] += 1
                        elif entry["halted"]:
                            summary["rejected"] += 1
                        else:
                            summary["unfinished"] += 1

                    batch_results.append({"index": idx, **entry})
                    completed.append(idx)
                    progress.update(task, advance=1)

                # === BULK WRITE once per batch ===
                for entry in batch_results:
                    results_fh.write(json.dumps(entry) + "\n")
                results_fh.flush()

                save_checkpoint(completed, checkpoint_file)
                console_message("[INFO] Batch completed. Checkpoint saved.")

    console_message(f"[SUCCESS] All inputs simulated. Results saved to {results_file}")
    return summary


# === CLI ===
def main():
    parser = argparse.ArgumentParser(description="Run a Turing machine model against a pool of inputs with checkpointing.")
    parser.add_argument("--model", required=True, help="Model file (json, toml or yaml)")
    parser.add_argument("--pool", required=True, help="Path to input pool file (one input per line)")
    parser.add_argument("--ext", help="Model format; inferred from the suffix when omitted")
    parser.add_argument("--output", default="results", help="Output result file name (default: results)")
    parser.add_argument("--batch_size", type=int, default=256, help="Batch size per save/checkpoint")
    parser.add_argument("--max_steps", type=int, default=100000, help="Maximum steps per input (0 = no limit)")
    args = parser.parse_args()

    summary = simulate_inputs(
        args.model,
        args.pool,
        args.output,
        batch_size=args.batch_size,
        max_steps=args.max_steps,
        ext=args.ext,
    )
    console_message(
        f"Accepted {summary['accepted']:,}, rejected {summary['rejected']:,}, "
        f"unfinished {summary['unfinished']:,}, errors {summary['errors']:,}."
    )


if __name__ == "__main__":
    main()
