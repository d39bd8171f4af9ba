import json
import os
from datetime import datetime, timezone


class JSONLogger:
    """Run history as JSON lines: one file per day under ``output_directory``."""

    def __init__(self, output_directory="logs/", log_file_prefix="trm_"):
        self.output_directory = output_directory
        self.log_file_prefix = log_file_prefix
        os.makedirs(self.output_directory, exist_ok=True)
        self.today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        self.current_log = self._get_log_filename()

    def _get_log_filename(self):
        filename = f"{self.log_file_prefix}{self.today}.jsonl"  # JSON lines format
        return os.path.join(self.output_directory, filename)

    def _stamp(self, entry):
        return {"timestamp": datetime.now(timezone.utc).isoformat(), **entry}

    def log(self, entry: dict):
        """Log a single entry to the main history log."""
        with open(self.current_log, "a", encoding="utf-8") as f:
            f.write(json.dumps(self._stamp(entry)) + "\n")

    def log_batch(self, entries: list):
        """Log a batch of entries to the main history log."""
        with open(self.current_log, "a", encoding="utf-8") as f:
            for entry in entries:
                f.write(json.dumps(self._stamp(entry)) + "\n")

    def rotate(self):
        """Force start a new main log file (picks up a new date)."""
        self.today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        self.current_log = self._get_log_filename()

    def log_step(self, run_id, step, identifier):
        """One intermediate machine configuration."""
        self.log({"run_id": run_id, "event": "step", "step": step, **identifier.to_dict()})

    def log_summary(self, run_id, model_name, input_text, result):
        """Outcome of a run (halted / accepted / steps / final configuration)."""
        self.log({
            "run_id": run_id,
            "event": "summary",
            "model": model_name,
            "input": input_text,
            **result.to_dict(),
        })

    def read_entries(self):
        if not os.path.exists(self.current_log):
            return []
        with open(self.current_log, "r", encoding="utf-8") as f:
            return [json.loads(line) for line in f if line.strip()]
