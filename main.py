"""Content Grammar Audit - Entry Point

Runs the agreement audit over content files, writes markdown and JSON
reports, and exits according to the gate mode.

Usage:
    python main.py --corpus content/units.yaml             # audit and report
    python main.py --corpus content/units.yaml --ci        # fail on errors
    python main.py --grammar-lessons data/grammar-lessons.json --strict  # fail on any finding
"""

import argparse
import logging
import os
import shutil
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from config import Config
from content_auditor import (
    ContentAuditor, ContentAuditReport, CorpusLoadError, GateMode, exit_code_for,
    load_corpus, load_grammar_lessons, render_json, render_markdown
)
from lexicon import LexiconDataError, LexiconService
from rules import get_registry, load_rule_exceptions

LOG_LEVEL = os.getenv('LOG_LEVEL', Config.LOG_LEVEL).upper()

logger = logging.getLogger(__name__)

EXIT_USAGE_ERROR = 2


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)]
    )


def build_parser(config=Config) -> argparse.ArgumentParser:
    audit_config = config.get_audit_config()
    report_config = config.get_report_config()
    parser = argparse.ArgumentParser(description="Audit Macedonian learning content for noun-adjective agreement.")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument('--ci', action='store_true', help="exit non-zero if any errors are found")
    mode.add_argument('--strict', action='store_true', help="exit non-zero if any errors or warnings are found")
    parser.add_argument('--corpus', action='append', default=[], metavar='PATH',
                        help="unit file (YAML/JSON); may be repeated")
    parser.add_argument('--grammar-lessons', action='append', default=[], metavar='PATH',
                        help="grammar lessons file to scan for fill-blank agreement exercises; may be repeated")
    parser.add_argument('--reports-dir', default=report_config['reports_dir'], help="where to write reports")
    parser.add_argument('--lexicon-dir', default=audit_config['lexicon_dir'], help="directory holding nouns.yaml and adjectives.yaml")
    parser.add_argument('--workers', type=int, default=audit_config['max_workers'], help="worker threads for per-unit checks")
    parser.add_argument('--quiet', action='store_true', help="do not print the findings summary")
    return parser


def gate_mode_from_args(args: argparse.Namespace) -> GateMode:
    if args.strict:
        return GateMode.STRICT
    if args.ci:
        return GateMode.CI
    return GateMode.INFORMATIONAL


def save_reports(report: ContentAuditReport, reports_dir: str, now: Optional[datetime] = None) -> List[Path]:
    """Write dated markdown/JSON reports and refresh the 'latest' copies."""
    now = now or datetime.now(timezone.utc)
    out_dir = Path(reports_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    generated_at = now.isoformat(timespec='seconds')
    stamp = now.strftime('%Y-%m-%d')

    written = []
    for suffix, content in (('md', render_markdown(report, generated_at)),
                            ('json', render_json(report, generated_at))):
        dated = out_dir / f'content-audit-{stamp}.{suffix}'
        dated.write_text(content, encoding='utf-8')
        latest = out_dir / f'content-audit-latest.{suffix}'
        shutil.copyfile(dated, latest)
        written.extend([dated, latest])
    return written


def print_summary(report: ContentAuditReport) -> None:
    summary = report.summary
    logger.info("=" * 50)
    logger.info(f"Units checked: {summary.total_checked}")
    logger.info(f"Errors: {summary.total_errors}  Warnings: {summary.total_warnings}")
    for entry in report.entries_with_findings:
        for finding in entry.findings:
            logger.info(
                f"[{finding.severity.value}] {entry.content_id} {finding.rule_id.value}: "
                f"{finding.message} (x{finding.occurrences})"
            )
    logger.info("=" * 50)


def run(argv: Optional[List[str]] = None, config=Config) -> int:
    audit_config = config.get_audit_config()
    args = build_parser(config).parse_args(argv)
    mode = gate_mode_from_args(args)

    if not args.corpus and not args.grammar_lessons:
        logger.error("Nothing to audit: pass --corpus and/or --grammar-lessons")
        return EXIT_USAGE_ERROR

    try:
        lexicon = LexiconService(args.lexicon_dir).load_lexicon()
        units = []
        for path in args.corpus:
            units.extend(load_corpus(path))
        for path in args.grammar_lessons:
            units.extend(load_grammar_lessons(path))
    except (LexiconDataError, CorpusLoadError) as e:
        logger.error(f"Failed to load audit inputs: {e}")
        return EXIT_USAGE_ERROR

    registry = get_registry(
        lexicon,
        default_definiteness=audit_config['default_definiteness'],
        exceptions=load_rule_exceptions(audit_config['exceptions_file']),
    )
    report = ContentAuditor(registry, max_workers=args.workers).audit_all(units)

    if not args.quiet:
        print_summary(report)

    for path in save_reports(report, args.reports_dir):
        logger.info(f"Report written: {path}")

    exit_code = exit_code_for(report.summary, mode)
    if exit_code:
        logger.error(f"{mode.value.upper()} MODE: validation failed")
    else:
        logger.info("Validation complete")
    return exit_code


def main():
    configure_logging()
    sys.exit(run())


if __name__ == '__main__':
    main()
