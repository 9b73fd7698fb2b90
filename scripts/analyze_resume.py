from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.parsing.parse import ResumeExtractionError, extract_resume_text  # noqa: E402
from app.services.analysis_service import AnalysisValidationError, analyze  # noqa: E402
from app.storage.analysis_store import save_analysis  # noqa: E402


def _read_keywords(raw: str | None) -> list[str] | None:
    if raw is None:
        return None
    return [item.strip() for item in raw.split(",") if item.strip()]


def main() -> int:
    parser = argparse.ArgumentParser(description="Score a resume file against a job description.")
    parser.add_argument("resume", help="Path to the resume (.pdf, .docx or .txt)")
    parser.add_argument("--jd", required=True, help="Path to a text file holding the job description")
    parser.add_argument("--keywords", default=None, help="Comma-separated keywords, e.g. 'Python,AWS,Docker'")
    parser.add_argument("--save", action="store_true", help="Persist the result to the analysis store.")
    args = parser.parse_args()

    job_description = Path(args.jd).read_text(encoding="utf-8", errors="replace")
    keywords = _read_keywords(args.keywords)

    try:
        parsed = extract_resume_text(args.resume)
        result = analyze(job_description, keywords, parsed.text)
    except (ResumeExtractionError, AnalysisValidationError, FileNotFoundError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    for warning in parsed.parsing_warnings:
        print(f"warning: {warning}", file=sys.stderr)

    if args.save:
        save_analysis(
            result=result,
            job_description=job_description,
            keywords=keywords,
            resume_file_name=parsed.file_name,
        )

    print(json.dumps(result.to_document(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
