"""
Parsing (class schedule HTML -> structured catalog).

The "Sections Found" page renders every section of a term as rows of one
big table. Nothing in it is machine friendly, so the parser works on the
raw text with a few fixed literals as split points:

- the region between START_MARKER and the last END_MARKER holds the sections
- each BLOCK_MARKER opens one section block
- inside a block, ROW_MARKER separates header row, body row, the meeting
  table header and the meeting rows

Important rules (DO NOT CHANGE):
- The header "<name> - <crn> - <code> - <section>" is resolved right to left,
  because course names may contain " - " themselves.
- 1 meeting row = 1 Meeting, in table order.
"""

from __future__ import annotations

import argparse
import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from oscarcatalog.errors import (
    BoundaryNotFound,
    CreditsNotFound,
    HeaderNotFound,
    MalformedHeader,
    MalformedMeetingRow,
    ParseError,
)
from oscarcatalog.model import Course, Instructor, Meeting, Section
from oscarcatalog.storage import save_catalog


PACKAGE_DIR = Path(__file__).resolve().parent
PROCESSED_DIR = PACKAGE_DIR / "data" / "processed"


# ---------------------------------------------------------------------------
# Document markers
# ---------------------------------------------------------------------------

START_MARKER = '<caption class="captiontext">Sections Found</caption>'
END_MARKER = (
    '<table  CLASS="datadisplaytable" summary="This is for formatting of the bottom links." WIDTH="50%">'
)
BLOCK_MARKER = '<tr>\n<th CLASS="ddtitle" scope="colgroup" >'
ROW_MARKER = "<tr>\n"

SEPARATOR = " - "

# Row groups inside a block: 0 = header, 1 = body, 2 = meeting table header
HEADER_ROW = 0
BODY_ROW = 1
FIRST_MEETING_ROW = 3

# Lines of a meeting row that carry data (0 = meeting type, 5 = schedule type)
MEETING_ROW_LINES = 7


# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

HEADER_RE = re.compile(r'crn_in=\d+">(.*)</a>')
FIELD_LABEL_RE = re.compile(r'^<SPAN class="fieldlabeltext">(.*): </SPAN>(.+)$', re.MULTILINE)
CREDITS_RE = re.compile(r"(\d+)\.\d+(?=\s+Credits)")
CAMPUS_RE = re.compile(r"^(.*) Campus$", re.MULTILINE)
SCHEDULE_TYPE_RE = re.compile(r"^(.*) Schedule Type$", re.MULTILINE)
TAG_RE = re.compile(r"</?[^>]+(>|$)")
QUALIFIER_RE = re.compile(r"\(\w\)")
MULTI_SPACE_RE = re.compile(r"\s\s+")
EMAIL_RE = re.compile(r"[a-zA-Z0-9._-]+@[a-zA-Z0-9._-]+\.[a-zA-Z0-9_-]+")

NBSP = "&nbsp;"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _clean_token(text: str) -> str:
    """
    Drop "(P)"-style qualifiers and collapse runs of whitespace.
    """
    return MULTI_SPACE_RE.sub(" ", QUALIFIER_RE.sub("", text)).strip()


def _clean_list(value: str) -> List[str]:
    return [token for token in (_clean_token(t) for t in value.split(",")) if token]


def _first_group(pattern: re.Pattern, text: str) -> str:
    match = pattern.search(text)
    return match.group(1) if match else ""


# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------


def split_header(header: str, separator: str = SEPARATOR) -> Tuple[str, str, str, str]:
    """
    Split "<name> - <crn> - <code> - <section>" into its four fields.

    Only the last three separators are structural. They are found right to
    left, so any separator inside the name stays part of the name:

        "Intro to Foo - Bar - 92549 - WOLO 1801 - A"
                           ^       ^           ^
    """
    section_index = header.rfind(separator)
    code_index = header.rfind(separator, 0, section_index) if section_index > 0 else -1
    crn_index = header.rfind(separator, 0, code_index) if code_index > 0 else -1

    if crn_index < 0:
        raise MalformedHeader(f"expected three {separator!r} separators in header {header!r}")

    width = len(separator)
    name = header[:crn_index]
    registration_number = header[crn_index + width:code_index]
    code = header[code_index + width:section_index]
    section = header[section_index + width:]

    return name, registration_number, code, section


def parse_header(row: str) -> Tuple[str, str, str, str]:
    """
    Find the course detail link (crn_in=...) in the header row and split its text.
    """
    match = HEADER_RE.search(row)
    if not match:
        raise HeaderNotFound("no course detail link in header row")
    return split_header(match.group(1))


# ---------------------------------------------------------------------------
# Body
# ---------------------------------------------------------------------------


def _extract_labels(body: str) -> Dict[str, str]:
    """
    Collect '<SPAN class="fieldlabeltext">Label: </SPAN>value' lines.

    A repeated label keeps its last value.
    """
    return {m.group(1): m.group(2) for m in FIELD_LABEL_RE.finditer(body)}


def parse_body(body: str) -> Tuple[List[str], str, int, str, str]:
    """
    Parse the metadata row of a block.

    Returns (attributes, grade_basis, credits, campus, format).
    Only the credits are mandatory.
    """
    labels = _extract_labels(body)

    attributes = _clean_list(labels.get("Attributes", ""))
    grade_basis = labels.get("Grade Basis", "")

    credits_match = CREDITS_RE.search(body)
    if not credits_match:
        raise CreditsNotFound("no '<n>.<m> Credits' value in body row")
    credits = int(credits_match.group(1))

    campus = _first_group(CAMPUS_RE, body)
    schedule_format = _first_group(SCHEDULE_TYPE_RE, body)

    return attributes, grade_basis, credits, campus, schedule_format


# ---------------------------------------------------------------------------
# Meeting table
# ---------------------------------------------------------------------------


def parse_meeting_row(row: str) -> Meeting:
    """
    Parse one row of the "Scheduled Meeting Times" table.

    Cells are one per line:
        0 type | 1 time | 2 days | 3 where | 4 date range | 5 schedule type | 6 instructors
    Emails are taken from the raw row (they only live in mailto links).
    """
    lines = row.split("\n")[:MEETING_ROW_LINES]
    if len(lines) < MEETING_ROW_LINES:
        raise MalformedMeetingRow(f"meeting row has {len(lines)} lines, expected {MEETING_ROW_LINES}")

    cells = [TAG_RE.sub("", line) for line in lines]
    _, time, schedule, location, date_range, _, instructor_raw = cells

    instructor = Instructor(
        name=",".join(_clean_token(n) for n in instructor_raw.split(",")),
        email=",".join(EMAIL_RE.findall(row)),
    )

    return Meeting(
        time=time,
        schedule=schedule.replace(NBSP, ""),
        location=location,
        date_range=date_range,
        instructor=instructor,
    )


def parse_meetings(rows: List[str]) -> List[Meeting]:
    return [parse_meeting_row(row) for row in rows]


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------


def split_blocks(document: str) -> List[str]:
    """
    Cut the "Sections Found" region out of the page and split it per section.
    """
    start = document.find(START_MARKER)
    if start < 0:
        raise BoundaryNotFound("'Sections Found' caption not found")
    end = document.rfind(END_MARKER)
    if end < 0:
        raise BoundaryNotFound("bottom links table not found")

    return document[start:end].split(BLOCK_MARKER)[1:]


def parse_block(block: str) -> Tuple[str, str, str, Section]:
    """
    Parse one section block.

    Returns (code, course name, section label, section).
    """
    rows = block.split(ROW_MARKER)
    body = rows[BODY_ROW] if len(rows) > BODY_ROW else ""

    name, registration_number, code, label = parse_header(rows[HEADER_ROW])
    attributes, grade_basis, credits, campus, schedule_format = parse_body(body)
    meetings = parse_meetings(rows[FIRST_MEETING_ROW:])

    section = Section(
        registration_number=registration_number,
        attributes=attributes,
        credits=credits,
        grade_basis=grade_basis,
        campus=campus,
        format=schedule_format,
        meetings=meetings,
    )
    return code, name, label, section


def parse_catalog(document: str, errors: Optional[List[ParseError]] = None) -> Dict[str, Course]:
    """
    Parse a whole "Sections Found" page into {code: Course}.

    By default the first malformed block aborts the parse. When an `errors`
    list is given, malformed blocks are skipped and their errors appended to
    it instead. A missing region boundary is always fatal.
    """
    catalog: Dict[str, Course] = {}

    for index, block in enumerate(split_blocks(document)):
        try:
            code, name, label, section = parse_block(block)
        except ParseError as exc:
            exc.block_index = index
            if errors is None:
                raise
            errors.append(exc)
            continue

        # The first block seen for a code names the course
        course = catalog.setdefault(code, Course(code=code, name=name))
        course.sections[label] = section

    return catalog


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


def parse_file(
    html_path: Path,
    out_path: Optional[Path] = None,
    errors: Optional[List[ParseError]] = None,
) -> Dict[str, Course]:
    """
    Parse a cached HTML page and optionally write the catalog JSON.
    """
    document = Path(html_path).read_text(encoding="utf-8")
    catalog = parse_catalog(document, errors=errors)

    if out_path is not None:
        save_catalog(catalog, out_path)

    return catalog


# ---------------------------------------------------------------------------
# CLI connection
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="oscarcatalog.parse", description="Parse a cached class schedule page into JSON")
    p.add_argument("html", type=Path, help="Cached HTML file (e.g. data/raw/202008.html)")
    p.add_argument("--out", type=Path, default=None, help="Output JSON path")
    return p


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    out = args.out or PROCESSED_DIR / f"{args.html.stem}.json"

    catalog = parse_file(args.html, out)
    print(f"Parsed {len(catalog)} courses. JSON written to {out.resolve()}")


if __name__ == "__main__":
    main()
