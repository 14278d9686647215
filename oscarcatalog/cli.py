"""
CLI (Command Line Interface).

    oscarcatalog terms
    oscarcatalog fetch <term>
    oscarcatalog parse <term | file.html>
    oscarcatalog search <text>
    oscarcatalog show <code>

fetch/parse cache their files under oscarcatalog/data/ (raw HTML and
processed JSON). search/show read the processed JSON of --term, or the
file given with --catalog (one of the two is required).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, List

from rich import box
from rich.console import Console
from rich.table import Table

from oscarcatalog.errors import CatalogError, ParseError
from oscarcatalog.model import Course
from oscarcatalog.parse import parse_file
from oscarcatalog.scrape import COURSE_URI, fetch_term, list_terms, raw_path
from oscarcatalog.storage import catalog_path, load_catalog

MAX_RESULTS = 20


def _catalog_file(args: argparse.Namespace) -> Path:
    if args.catalog:
        return Path(args.catalog)
    return catalog_path(args.term)


def _load(args: argparse.Namespace) -> Dict[str, Course]:
    path = _catalog_file(args)
    catalog = load_catalog(path)
    if not catalog:
        print(f"No catalog data at {path}. Run 'oscarcatalog parse' first.", file=sys.stderr)
    return catalog


def _cmd_terms(args: argparse.Namespace) -> int:
    terms = list_terms()
    if not terms:
        print("No terms found.")
        return 0
    for code, description in terms:
        print(f"{code} | {description}")
    return 0


def _cmd_fetch(args: argparse.Namespace) -> int:
    term = (args.term or "").strip()
    if not term:
        print("Please provide a term code.")
        return 1
    fetch_term(term, refresh=args.refresh, url=args.url)
    return 0


def _cmd_parse(args: argparse.Namespace) -> int:
    """
    Parse a cached term (or an explicit .html file) and write its JSON catalog.
    """
    source = (args.source or "").strip()
    if not source:
        print("Please provide a term code or an HTML file.")
        return 1

    html_path = Path(source) if source.endswith(".html") else raw_path(source)
    if not html_path.exists():
        print(f"Not found: {html_path} (run 'oscarcatalog fetch' first)", file=sys.stderr)
        return 1

    out = Path(args.out) if args.out else catalog_path(html_path.stem)

    errors: List[ParseError] | None = [] if args.best_effort else None
    catalog = parse_file(html_path, out, errors=errors)

    for err in errors or []:
        print(f"Skipped {err}", file=sys.stderr)

    n_sections = sum(len(c.sections) for c in catalog.values())
    print(f"Parsed {len(catalog)} courses / {n_sections} sections -> {out}")

    if errors and not catalog:
        return 1
    return 0


def _instructor_names(course: Course) -> List[str]:
    names: List[str] = []
    for section in course.sections.values():
        for meeting in section.meetings:
            names.extend(n for n in meeting.instructor.name.split(",") if n)
    return names


def _cmd_search(args: argparse.Namespace) -> int:
    """
    Search courses by substring match in code, name, or instructor names.
    """
    query = (args.text or "").strip().lower()
    if not query:
        print("Please provide a search text.")
        return 1

    catalog = _load(args)

    matches: List[Course] = []
    for course in catalog.values():
        hay = " ".join([course.code, course.name] + _instructor_names(course)).lower()
        if query in hay:
            matches.append(course)

    if not matches:
        print("No results.")
        return 0

    for course in matches[:MAX_RESULTS]:
        print(f"{course.code} | {course.name} | {len(course.sections)} sections")
    if len(matches) > MAX_RESULTS:
        print(f"... and {len(matches) - MAX_RESULTS} more results")

    return 0


def _section_table(course: Course) -> Table:
    table = Table(title=f"{course.code} - {course.name}", box=box.SIMPLE)
    table.add_column("Sec")
    table.add_column("CRN", justify="right")
    table.add_column("Cr", justify="right")
    table.add_column("Type")
    table.add_column("Time")
    table.add_column("Days")
    table.add_column("Where")
    table.add_column("Instructor")

    for label, section in course.sections.items():
        if not section.meetings:
            table.add_row(label, section.registration_number, str(section.credits), section.format, "", "", "", "")
            continue
        for i, meeting in enumerate(section.meetings):
            # section columns only on the first meeting row
            head = [label, section.registration_number, str(section.credits), section.format] if i == 0 else [""] * 4
            table.add_row(*head, meeting.time, meeting.schedule, meeting.location, meeting.instructor.name)

    return table


def _cmd_show(args: argparse.Namespace, console: Console) -> int:
    code = (args.code or "").strip().upper()
    if not code:
        print("Please provide a course code.")
        return 1

    catalog = _load(args)
    course = catalog.get(code)
    if course is None:
        print(f"Unknown course: {code}")
        return 1

    console.print(_section_table(course))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="oscarcatalog", description="OSCAR class schedule scraper")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("terms", help="List available terms")

    p_fetch = sub.add_parser("fetch", help="Download and cache a term's class schedule")
    p_fetch.add_argument("term", type=str, help="Term code (e.g. 202008)")
    p_fetch.add_argument("--refresh", action="store_true", help="Overwrite a cached file")
    p_fetch.add_argument("--url", type=str, default=COURSE_URI, help="Class schedule endpoint")

    p_parse = sub.add_parser("parse", help="Parse a cached term into JSON")
    p_parse.add_argument("source", type=str, help="Term code or path to an .html file")
    p_parse.add_argument("--out", type=str, default=None, help="Output JSON path")
    p_parse.add_argument("--best-effort", action="store_true", help="Skip malformed sections instead of failing")

    for name, arg, help_text in (
        ("search", "text", "Search courses by code, name or instructor"),
        ("show", "code", "Show the sections of one course (e.g. 'CS 1301')"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument(arg, type=str)
        source = p.add_mutually_exclusive_group(required=True)
        source.add_argument("--term", type=str, help="Term code of the parsed catalog")
        source.add_argument("--catalog", type=str, help="Path to a catalog JSON file")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == "terms":
            raise SystemExit(_cmd_terms(args))
        if args.command == "fetch":
            raise SystemExit(_cmd_fetch(args))
        if args.command == "parse":
            raise SystemExit(_cmd_parse(args))
        if args.command == "search":
            raise SystemExit(_cmd_search(args))
        if args.command == "show":
            raise SystemExit(_cmd_show(args, Console()))
    except CatalogError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    raise SystemExit(2)
