"""Command-line entry point for extraction, resume parsing and customization."""

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path

from resume_agent.config import AppConfig, load_config, validate_config
from resume_agent.extraction.article_source import Article, article_from_html, article_from_text, fetch_article
from resume_agent.extraction.job_extractor import merge_job_info
from resume_agent.jobs.models import JobInfo
from resume_agent.matching.customizer import build_customizer
from resume_agent.matching.models import CustomizedResume
from resume_agent.profile.resume_parser import parse_resume
from resume_agent.storage.database import RecordStore
from resume_agent.utils.logging_config import setup_logging

logger = logging.getLogger("resume_agent")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Resume Agent - extract job postings and tailor resumes to them",
    )
    parser.add_argument(
        "--config", default="config.yaml",
        help="Path to config file (default: config.yaml)",
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Enable debug logging",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    extract = commands.add_parser("extract", help="Extract job info from an article")
    _add_article_source(extract, required=True)

    parse = commands.add_parser("parse", help="Parse a resume file and store it")
    parse.add_argument("resume", help="Path to a .pdf, .doc, .docx, .txt or .md resume")

    customize = commands.add_parser("customize", help="Tailor a stored resume to a job")
    customize.add_argument("--resume-id", required=True, help="ID printed by the parse command")
    customize.add_argument("--job", help="JSON file holding job info (overrides extraction)")
    _add_article_source(customize, required=False)

    status = commands.add_parser("status", help="Move a customized resume through review/send")
    status.add_argument("customized_id")
    status.add_argument("new_status", choices=["pending_review", "approved", "sent", "failed"])

    commands.add_parser("list", help="List stored resumes")
    commands.add_parser("stats", help="Print store statistics")

    return parser.parse_args(argv)


def _add_article_source(parser: argparse.ArgumentParser, required: bool):
    source = parser.add_mutually_exclusive_group(required=required)
    source.add_argument("--file", help="Plain-text article")
    source.add_argument("--html", help="Saved article HTML page")
    source.add_argument("--url", help="Article URL to download")
    parser.add_argument("--title", default="", help="Article title for plain-text input")


def load_article(args: argparse.Namespace, config: AppConfig) -> Article:
    """Build an Article from whichever source option was given."""
    if args.file:
        text = Path(args.file).read_text(encoding="utf-8", errors="replace")
        return article_from_text(text, url=args.file, title=args.title)
    if args.html:
        html = Path(args.html).read_text(encoding="utf-8", errors="replace")
        return article_from_html(html, url=args.html)
    return fetch_article(args.url, timeout=config.fetch.timeout, max_retries=config.fetch.max_retries)


def load_job(args: argparse.Namespace, config: AppConfig) -> JobInfo:
    """Job from --job JSON, extraction of the article filling its gaps."""
    job = None
    if args.job:
        with open(args.job, "r", encoding="utf-8") as f:
            job = JobInfo.from_dict(json.load(f))

    if args.file or args.html or args.url:
        extracted = load_article(args, config).extract()
        job = merge_job_info(job, extracted) if job else extracted

    if job is None:
        raise ValueError("No job given: pass --job and/or one of --file/--html/--url")
    return job


def write_customized_file(customized: CustomizedResume, output_dir: str) -> Path:
    """Write the tailored resume text as <id>_<file name> under output_dir."""
    out_path = Path(output_dir)
    out_path.mkdir(parents=True, exist_ok=True)
    file_path = out_path / f"{customized.id}_{customized.customized_file_name}"
    file_path.write_text(customized.customized_text, encoding="utf-8")
    return file_path


def print_json(data):
    print(json.dumps(data, ensure_ascii=False, indent=2))


def print_stats(store: RecordStore):
    """Print store statistics."""
    stats = store.get_stats()
    print("\n=== Resume Agent Statistics ===")
    print(f"Resumes stored: {stats['resume_count']}")
    print(f"Customized resumes: {stats['customized_count']}")
    print(f"Sent (total): {stats['total_sent']}")
    print(f"Sent (today): {stats['sent_today']}")

    if stats.get("by_status"):
        print("\nBy status:")
        for status, count in stats["by_status"].items():
            print(f"  {status}: {count}")
    print()


def run_command(args: argparse.Namespace, config: AppConfig):
    """Dispatch one CLI command."""
    if args.command == "extract":
        job = load_article(args, config).extract()
        print_json(job.to_dict())
        return

    db_path = str(Path(config.data_dir) / "resume_agent.db")
    with RecordStore(db_path) as store:
        if args.command == "parse":
            resume = parse_resume(args.resume)
            store.save_resume(resume)
            print_json({"id": resume.id, "file_name": resume.file_name, "parsed_sections": resume.parsed_sections.to_dict()})

        elif args.command == "customize":
            resume = store.get_resume(args.resume_id)
            if resume is None:
                raise KeyError(f"Resume not found: {args.resume_id}")
            job = load_job(args, config)
            customized = build_customizer(config).customize(resume, job)
            store.save_customized_resume(customized)
            file_path = write_customized_file(customized, config.output_dir)
            print_json({
                "id": customized.id,
                "file": str(file_path),
                "email_subject": customized.email_subject,
                "recipient": customized.job_info.contact_email,
                "status": customized.status,
            })

        elif args.command == "status":
            customized = store.update_status(args.customized_id, args.new_status)
            print_json({"id": customized.id, "status": customized.status, "sent_at": customized.sent_at})

        elif args.command == "list":
            for resume in store.list_resumes():
                print(f"{resume.id}  {resume.file_name}  {resume.parsed_sections.name or '-'}  {resume.uploaded_at}")

        elif args.command == "stats":
            print_stats(store)


def main(argv=None):
    args = parse_args(argv)

    # Load config
    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    # Setup logging
    setup_logging(config.log_dir, level=logging.DEBUG if args.verbose else logging.INFO)

    # Validate config and print warnings
    warnings = validate_config(config)
    for w in warnings:
        logger.warning("Config: %s", w)

    try:
        run_command(args, config)
    except Exception as e:
        error_msg = f"{type(e).__name__}: {e}"
        logger.error("Command '%s' failed: %s\n%s", args.command, error_msg, traceback.format_exc())
        sys.exit(1)


if __name__ == "__main__":
    main()
