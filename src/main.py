"""Command-line entry point for Skill Radar.

Usage:
    python src/main.py search-jobs "Python, SQL"
    python src/main.py search-resumes "machine learning" --max-results 20
    python src/main.py search-titles "data scientist"
    python src/main.py match-job "Data Engineer needed with experience in Python, Docker."
    python src/main.py best-matches --limit 50
    python src/main.py clean
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

# Add project root to path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from config.settings import Settings, settings as default_settings
from src.exceptions import DataSourceError
from src.ingest.cleaning import clean_jobs, clean_resumes
from src.ingest.loader import load_into_store
from src.logging_config import setup_logging
from src.matching.cross_matcher import CrossMatcher
from src.matching.engine import RetrievalStrategy, SearchEngine
from src.matching.topk import RankingStrategy
from src.records.models import Job, Resume
from src.records.skills import load_skill_vocabulary
from src.reports import (
    format_best_matches,
    format_candidates,
    format_search_results,
)

logger = logging.getLogger(__name__)


def load_vocabulary(config: Settings) -> Optional[frozenset[str]]:
    """Skill vocabulary override from settings, if configured."""
    if config.skills_file is None:
        return None
    return load_skill_vocabulary(config.skills_file)


def load_engine(path: Path, factory, args: argparse.Namespace) -> Optional[SearchEngine]:
    """Load one CSV into a fresh engine; None when the file can't be read."""
    engine = SearchEngine(
        retrieval=args.strategy,
        ranking=args.ranking,
    )
    result = load_into_store(path, engine.store, factory)
    if not result.ok:
        return None
    engine.ensure_indexed()
    return engine


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a count >= 0, got {value}")
    return number


def _max_results(args: argparse.Namespace, config: Settings) -> Optional[int]:
    if args.all:
        return None
    if args.max_results is not None:
        return args.max_results
    return config.default_max_results


def cmd_search(args: argparse.Namespace, config: Settings) -> int:
    if args.command == "search-resumes":
        engine = load_engine(config.resumes_path, Resume.from_csv_row, args)
    else:
        engine = load_engine(config.jobs_path, Job.from_csv_row, args)
    if engine is None:
        return 1

    limit = _max_results(args, config)
    if args.command == "search-titles":
        matches = engine.search_by_title(args.query, limit)
    else:
        matches = engine.search(args.query, limit)
    print(format_search_results(args.query, matches, engine.store))
    return 0


def cmd_match_job(args: argparse.Namespace, config: Settings) -> int:
    engine = load_engine(config.resumes_path, Resume.from_csv_row, args)
    if engine is None:
        return 1

    job = Job.from_description(args.description, load_vocabulary(config))
    logger.info("Parsed job: title=%r skills=%r", job.title, job.skills)
    matcher = CrossMatcher(engine)
    candidates = matcher.candidates_for_job(job, _max_results(args, config))
    print(format_candidates(job, candidates))
    return 0


def cmd_best_matches(args: argparse.Namespace, config: Settings) -> int:
    job_engine = load_engine(config.jobs_path, Job.from_csv_row, args)
    resume_engine = load_engine(config.resumes_path, Resume.from_csv_row, args)
    if job_engine is None or resume_engine is None:
        return 1

    matcher = CrossMatcher(resume_engine)
    reports = matcher.best_matches_for_jobs(job_engine.store, args.limit)
    print(format_best_matches(reports))
    return 0


def cmd_clean(args: argparse.Namespace, config: Settings) -> int:
    vocabulary = load_vocabulary(config)
    try:
        jobs = clean_jobs(config.raw_jobs_path, config.jobs_path, vocabulary)
        resumes = clean_resumes(config.raw_resumes_path, config.resumes_path, vocabulary)
    except DataSourceError as e:
        logger.error("Data cleaning failed: %s", e)
        return 1

    print(f"Jobs cleaned: {jobs.processed}")
    print(f"Resumes cleaned: {resumes.processed}")
    print(f"Total records: {jobs.processed + resumes.processed}")
    return 0


def build_parser(config: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skill-radar",
        description="Match job postings and résumés by skill overlap.",
    )
    parser.add_argument(
        "--strategy",
        choices=[s.value for s in RetrievalStrategy],
        default=config.retrieval_strategy.value,
        help="Candidate retrieval (default: %(default)s)",
    )
    parser.add_argument(
        "--ranking",
        choices=[s.value for s in RankingStrategy],
        default=config.ranking_strategy.value,
        help="Ranking strategy (default: %(default)s)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Hide progress log messages",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    def add_limit_flags(p: argparse.ArgumentParser) -> None:
        p.add_argument("--max-results", type=_non_negative_int, default=None)
        p.add_argument("--all", action="store_true", help="Show every match")

    for name, help_text in (
        ("search-jobs", "Search jobs by skills (use commas for several skills)"),
        ("search-resumes", "Search résumés by skills"),
        ("search-titles", "Search jobs by title words"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("query")
        add_limit_flags(p)
        p.set_defaults(handler=cmd_search)

    p = sub.add_parser("match-job", help="Rank résumés for a free-text job description")
    p.add_argument("description")
    add_limit_flags(p)
    p.set_defaults(handler=cmd_match_job)

    p = sub.add_parser("best-matches", help="Best résumé for each job")
    p.add_argument("--limit", type=int, default=10, help="Jobs to process")
    p.set_defaults(handler=cmd_best_matches)

    p = sub.add_parser("clean", help="Regenerate clean CSVs from the raw data")
    p.set_defaults(handler=cmd_clean)

    return parser


def main(argv: Optional[list[str]] = None, config: Optional[Settings] = None) -> int:
    config = config or default_settings
    args = build_parser(config).parse_args(argv)
    setup_logging(config.log_level, config.log_file, quiet=args.quiet or config.log_quiet)
    return args.handler(args, config)


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logger.info("Interrupted.")
        sys.exit(1)
