"""Append-only persistence of scoring results."""

import fcntl
import json
import os
import tempfile
from datetime import datetime
from pathlib import Path

from reading_assessment.models.assessment import ScoringResult

RESULTS_FILENAME = "results.json"


def append_result(
    results_dir: Path,
    assessment_id: str,
    result: ScoringResult,
    submitted_at: datetime | None = None,
) -> dict:
    """Append a scoring result to results.json.

    Re-submissions add a new entry; earlier entries are never rewritten.

    Returns:
        The stored entry.
    """
    results_path = results_dir / RESULTS_FILENAME
    submitted_at = submitted_at or datetime.now()

    lock_path = results_dir / (RESULTS_FILENAME + ".lock")
    with open(lock_path, "w") as lock_file:
        fcntl.flock(lock_file, fcntl.LOCK_EX)

        if results_path.exists():
            data = json.loads(results_path.read_text())
        else:
            data = {"results": []}

        entry: dict = {
            "assessment_id": assessment_id,
            "timestamp": submitted_at.isoformat(),
            "score_version": result.score_version.value,
            "result": result.model_dump(mode="json"),
        }

        data["results"].append(entry)
        with tempfile.NamedTemporaryFile(
            "w", dir=results_dir, delete=False, suffix=".json"
        ) as tmp:
            json.dump(data, tmp, indent=2)
        os.replace(tmp.name, results_path)

    return entry


def read_results(results_dir: Path, assessment_id: str | None = None) -> dict:
    """Read stored results, optionally for one assessment.

    Returns an empty list if nothing has been stored yet.
    """
    results_path = results_dir / RESULTS_FILENAME
    if not results_path.exists():
        return {"results": []}
    data = json.loads(results_path.read_text())
    if assessment_id is not None:
        data["results"] = [
            r for r in data["results"] if r["assessment_id"] == assessment_id
        ]
    return data
