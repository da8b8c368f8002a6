"""Single-process word count writing results split evenly across output files."""

from __future__ import annotations

import argparse
import math
from collections import Counter
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


def _words(line: str) -> list[str]:
    parts = line.split(" ")
    if parts[-1] == "":
        parts.pop()
    return parts


def word_count(input_filename: PathLike) -> dict[str, int]:
    """Count words split on single spaces; return counts ordered by word.

    Runs of spaces yield empty words, as a trailing space does not.
    """
    text = Path(input_filename).read_text()
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    counts = Counter(word for line in lines for word in _words(line))
    return dict(sorted(counts.items()))


def write_outputs(counts: Mapping[str, int], num_reducers: int, output_dir: str, job_name: str) -> list[str]:
    """Write the sorted counts into files of equal share; return the paths written."""
    if num_reducers <= 0:
        raise ValueError(f"num_reducers must be positive, got {num_reducers}")
    items = sorted(counts.items())
    if not items:
        return []
    per_file = math.ceil(len(items) / num_reducers)
    paths = []
    for task_id, start in enumerate(range(0, len(items), per_file), start=1):
        path = f"{output_dir}{job_name}-{task_id}.out"
        with open(path, "w") as fh:
            fh.writelines(f"{word} {count}\n" for word, count in items[start:start + per_file])
        paths.append(path)
    return paths


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="wordcount", description="Count words of a file.")
    parser.add_argument("job_name")
    parser.add_argument("num_reducers", type=int)
    parser.add_argument("delay", type=int)
    parser.add_argument("input_filename")
    parser.add_argument("chunk_size", type=int)
    parser.add_argument("locality_config_filename")
    parser.add_argument("output_dir")
    args = parser.parse_args(argv)
    try:
        write_outputs(word_count(args.input_filename), args.num_reducers, args.output_dir, args.job_name)
    except ValueError as exc:
        parser.error(str(exc))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())