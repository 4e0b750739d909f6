# scripts/run_roadmap_case.py

import argparse
import logging
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv

from roadmap_pipeline.errors import PipelineFailure
from roadmap_pipeline.graph import PipelineOrchestrator
from roadmap_pipeline.model import get_default_model
from scripts.case_utils import get_case_id, resolve_cases
from tests.roadmap_eval.json_utils import write_artifact

ARTIFACTS_DIR = Path("artifacts/roadmap_eval")


def run_single_case(
    case_path: Path,
    case: Dict[str, Any],
    *,
    run_id: str,
    pipeline: PipelineOrchestrator,
) -> None:
    """Run the roadmap pipeline for a single case and persist input and output."""
    case_id = get_case_id(case_path, case)

    print(f"\nRunning roadmap pipeline for case: {case_id}")
    write_artifact(ARTIFACTS_DIR, run_id, case_id, "input", case)

    try:
        response = pipeline.generate_roadmap(case["message"])
    except PipelineFailure as e:
        print(f"  ⚠ Failed ({e.kind}): {e}")
        write_artifact(ARTIFACTS_DIR, run_id, case_id, "error", {"kind": e.kind, "message": str(e)})
        raise

    stages = len(response.roadmap)
    nodes = sum(len(s.nodes) for s in response.roadmap)
    print(f"  ✓ {stages} stage(s), {nodes} node(s), calendar={response.should_trigger_calendar}")
    if response.recovered:
        print("  ⚠ Roadmap was recovered from a malformed response")

    write_artifact(ARTIFACTS_DIR, run_id, case_id, "response", response.model_dump(by_alias=True))
    print(f"Artifacts written to: {ARTIFACTS_DIR / run_id / case_id}")


def main():
    parser = argparse.ArgumentParser(
        description="Run the roadmap pipeline on case(s) and persist outputs.\n\n"
        "Supports both single cases and glob patterns:\n"
        "  --case tests/roadmap_eval/cases/calendar_weekly_reminders.json\n"
        "  --case 'tests/roadmap_eval/cases/*.json'",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--case", required=True, help="Path to case JSON or glob pattern")
    parser.add_argument("--run-id", default="manual", help="Run id for artifacts (default: manual)")
    parser.add_argument(
        "--max-retries",
        type=int,
        default=1,
        help="Attempts per stage on upstream failure (default: 1, no retries)",
    )
    args = parser.parse_args()

    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    cases = resolve_cases(args.case)
    print(f"Found {len(cases)} case(s) to process")

    pipeline = PipelineOrchestrator(get_default_model(), max_retries=args.max_retries)

    failed = 0
    for i, (case_path, case_data) in enumerate(cases, 1):
        if len(cases) > 1:
            print(f"\n{'='*60}")
            print(f"Processing case {i}/{len(cases)}: {case_path.name}")
            print(f"{'='*60}")

        try:
            run_single_case(case_path, case_data, run_id=args.run_id, pipeline=pipeline)
        except PipelineFailure:
            failed += 1
            if len(cases) == 1:
                raise

    print(f"\n{'='*60}")
    print(f"✓ Completed {len(cases) - failed}/{len(cases)} case(s)")
    print(f"{'='*60}")


if __name__ == "__main__":
    main()
