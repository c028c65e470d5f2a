#!/usr/bin/env python3
"""Entry point: parse a resume, search and rank jobs, or run the daily digest."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from jobagent import config
from jobagent.log import configure_logging, get_logger
from jobagent.models import SearchCriteria

log = get_logger(__name__)


def _cmd_parse(args: argparse.Namespace) -> int:
    from jobagent.resume_parser import InvalidInputError, extract_text, parse_resume

    path = Path(args.resume)
    try:
        text = extract_text(path)
        profile = parse_resume(text)
    except (InvalidInputError, ValueError, OSError) as exc:
        log.error("Cannot analyze %s: %s", path.name, exc)
        return 1
    config.save_resume_text(text)
    config.save_profile(profile)
    print(json.dumps(profile.to_dict(), indent=2))
    return 0


def _cmd_search(args: argparse.Namespace) -> int:
    from jobagent.matcher import rank_jobs
    from jobagent.search import search_jobs

    criteria = SearchCriteria(
        query=args.query,
        location=args.location,
        employment_type=args.employment_type,
        remote_only=args.remote_only,
        category=args.category,
    )
    jobs = search_jobs(criteria)
    profile = config.load_profile()
    if profile is not None:
        jobs = rank_jobs(jobs, profile)
    for job in jobs[: args.limit]:
        score = f"{job.match_result.total:>3}%" if job.match_result else "  - "
        print(f"{score}  {job.title} @ {job.company} [{job.location}]  {job.apply_link}")
    return 0


def _cmd_run(args: argparse.Namespace) -> int:
    from jobagent.agent import run

    result = run(min_score=args.min_score, max_jobs=args.max_jobs, send_email=not args.dry_run)
    log.info("  Jobs found: %d", result["jobs_found"])
    log.info("  Matched: %d", result["matched"])
    if result["report_path"]:
        log.info("  Report: %s", result["report_path"])
    return 0 if result["report_path"] else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Personal job-search assistant")
    parser.add_argument("-v", "--verbose", action="store_true", help="log at DEBUG level")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("parse", help="parse a resume file and save it as the profile")
    p.add_argument("resume", help="PDF, DOCX or TXT resume")
    p.set_defaults(func=_cmd_parse)

    s = sub.add_parser("search", help="search job sources and rank against the profile")
    s.add_argument("query", nargs="?", default="")
    s.add_argument("--location", default="")
    s.add_argument("--employment-type", default="")
    s.add_argument("--remote-only", action="store_true")
    s.add_argument("--category", default="")
    s.add_argument("--limit", type=int, default=20)
    s.set_defaults(func=_cmd_search)

    r = sub.add_parser("run", help="search, rank and email the digest")
    r.add_argument("--min-score", type=int, default=40)
    r.add_argument("--max-jobs", type=int, default=50)
    r.add_argument("--dry-run", action="store_true", help="write the digest without emailing it")
    r.set_defaults(func=_cmd_run)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        configure_logging("DEBUG")
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
