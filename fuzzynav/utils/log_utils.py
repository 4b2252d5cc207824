"""
Logging utilities.
"""
import os
import json
import logging
from dataclasses import asdict, is_dataclass
from enum import Enum

BENCH_LOG_PATH = os.path.join("results", "benchmark_log.jsonl")


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure the root logger for the command-line scripts."""
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format='%(message)s')


def _default(o):
    if isinstance(o, Enum):
        return o.value
    if is_dataclass(o):
        return asdict(o)
    if hasattr(o, "__dict__"):
        return o.__dict__
    if hasattr(o, "item"):
        # numpy scalars
        return o.item()
    return str(o)


def append_jsonl(path: str, obj: dict) -> None:
    """Append a JSON object as a line in a .jsonl file, create folder if needed."""
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        f.write(json.dumps(obj, ensure_ascii=False, default=_default) + "\n")


def log_benchmark_summary(entry: dict, path: str = BENCH_LOG_PATH) -> None:
    """Keep a history of benchmark invocations (one summary per line)."""
    append_jsonl(path, entry)
