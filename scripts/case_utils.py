"""Shared utilities for running roadmap cases."""

import json
from glob import glob
from pathlib import Path
from typing import Any, Dict, List, Tuple


def load_case(path: Path) -> Dict[str, Any]:
    """Load a single case from a JSON file. A case needs at least a "message" string."""
    with path.open("r", encoding="utf-8") as f:
        case = json.load(f)
    if not isinstance(case.get("message"), str):
        raise ValueError(f"Case {path} has no 'message' string")
    return case


def resolve_cases(case_pattern: str) -> List[Tuple[Path, Dict[str, Any]]]:
    """
    Resolve a file path or glob pattern to (path, case_data) tuples, sorted by path.

    Unreadable files matched by a glob are skipped with a warning; a direct path must load.
    """
    if not any(c in case_pattern for c in ["*", "?", "["]):
        path = Path(case_pattern)
        if not path.is_file():
            raise FileNotFoundError(f"Case file not found: {case_pattern}")
        return [(path, load_case(path))]

    results = []
    for match_str in sorted(glob(case_pattern, recursive=True)):
        path = Path(match_str)
        if not (path.is_file() and path.suffix == ".json"):
            continue
        try:
            results.append((path, load_case(path)))
        except (json.JSONDecodeError, OSError, ValueError) as e:
            print(f"Warning: Skipping {path}: {e}")

    if not results:
        raise FileNotFoundError(f"No valid JSON case files found matching: {case_pattern}")

    return results


def get_case_id(case_path: Path, case_data: Dict[str, Any]) -> str:
    return case_data.get("case_id", case_path.stem)
