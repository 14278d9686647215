from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Dict, List, Tuple
from urllib.parse import urlencode

import requests
from bs4 import BeautifulSoup

from oscarcatalog.errors import FetchError


# ---------------------------------------------------------------------------
# Paths & URLs
# ---------------------------------------------------------------------------

PACKAGE_DIR = Path(__file__).resolve().parent
RAW_DIR = PACKAGE_DIR / "data" / "raw"

BASE_URL = "https://oscar.gatech.edu"
COURSE_URI = os.getenv("OSCAR_COURSE_URI", f"{BASE_URL}/pls/bprod/bwckschd.p_get_crse_unsec")
TERMS_URI = os.getenv("OSCAR_TERMS_URI", f"{BASE_URL}/pls/bprod/bwckschd.p_disp_dyn_sched")

TIMEOUT_SECONDS = 30

REQUEST_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Content-Type": "application/x-www-form-urlencoded",
    "Origin": BASE_URL,
    "Referer": f"{BASE_URL}/pls/bprod/bwckgens.p_proc_term_date",
    "User-Agent": "Mozilla/5.0 (X11; Linux x86_64) oscarcatalog",
}


# ---------------------------------------------------------------------------
# Search form
# ---------------------------------------------------------------------------

# Banner expects every multi-select to be sent once with "dummy" first
BASE_FORM: List[Tuple[str, str]] = [
    ("sel_subj", "dummy"),
    ("sel_day", "dummy"),
    ("sel_schd", "dummy"),
    ("sel_insm", "dummy"),
    ("sel_camp", "dummy"),
    ("sel_levl", "dummy"),
    ("sel_sess", "dummy"),
    ("sel_instr", "dummy"),
    ("sel_ptrm", "dummy"),
    ("sel_attr", "dummy"),
]

# No filters: every subject, schedule type, campus, part of term, instructor, attribute
FILTER_FORM: List[Tuple[str, str]] = [
    ("sel_subj", ""),
    ("sel_crse", ""),
    ("sel_title", ""),
    ("sel_schd", "%"),
    ("sel_from_cred", ""),
    ("sel_to_cred", ""),
    ("sel_camp", "%"),
    ("sel_ptrm", "%"),
    ("sel_instr", "%"),
    ("sel_attr", "%"),
    ("begin_hh", "0"),
    ("begin_mi", "0"),
    ("begin_ap", "a"),
    ("end_hh", "0"),
    ("end_mi", "0"),
    ("end_ap", "a"),
]


def build_form_data(term: str) -> str:
    """
    Encode the search form for one term.

    Keys repeat (dummy + real value), so the body is built from pairs rather
    than a dict.
    """
    return urlencode(BASE_FORM + [("term_in", term)] + FILTER_FORM)


# ---------------------------------------------------------------------------
# Core logic
# ---------------------------------------------------------------------------


def retrieve(term: str, url: str = COURSE_URI) -> str:
    """
    Download the "Sections Found" page for one term and return its HTML.

    Raises FetchError on any transport or HTTP error.
    """
    try:
        resp = requests.post(url, data=build_form_data(term), headers=REQUEST_HEADERS, timeout=TIMEOUT_SECONDS)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise FetchError(f"could not retrieve term {term}: {exc}") from exc
    return resp.text


def list_terms(url: str = TERMS_URI) -> List[Tuple[str, str]]:
    """
    Load the term selection page and extract (term_code, description).

    Returns:
        List of tuples: [("202008", "Fall 2020"), ("202005", "Summer 2020"), ...]
    """
    try:
        resp = requests.get(url, timeout=TIMEOUT_SECONDS)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise FetchError(f"could not load term list: {exc}") from exc

    return parse_terms_html(resp.text)


def parse_terms_html(html: str) -> List[Tuple[str, str]]:
    soup = BeautifulSoup(html, "html.parser")

    terms: List[Tuple[str, str]] = []
    for option in soup.select("select[name='p_term'] option"):
        code = (option.get("value") or "").strip()
        # the first option is the "None" placeholder with an empty value
        if not code:
            continue
        terms.append((code, option.get_text(strip=True)))

    return terms


def raw_path(term: str, raw_dir: Path | None = None) -> Path:
    return (raw_dir if raw_dir is not None else RAW_DIR) / f"{term}.html"


def fetch_term(
    term: str,
    refresh: bool = False,
    raw_dir: Path | None = None,
    url: str = COURSE_URI,
) -> Path:
    """
    Retrieve one term and cache it as HTML. Returns the cached file path.
    """
    out_file = raw_path(term, raw_dir)
    out_file.parent.mkdir(parents=True, exist_ok=True)

    if out_file.exists() and not refresh:
        print(f"SKIP  {term} (cached: {out_file})")
        return out_file

    print(f"FETCH {term}")
    html = retrieve(term, url=url)
    out_file.write_text(html, encoding="utf-8")
    print(f"Saved {len(html)} characters to {out_file}")

    return out_file


# ---------------------------------------------------------------------------
# CLI entry
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="oscarcatalog.scrape", description="Download a term's class schedule (cache HTML)")
    p.add_argument("term", type=str, help="Term code (e.g., 202008)")
    p.add_argument("--refresh", action="store_true", help="Re-fetch and overwrite an existing HTML file")
    p.add_argument("--url", type=str, default=COURSE_URI, help="Class schedule endpoint")
    return p


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    fetch_term(args.term.strip(), refresh=args.refresh, url=args.url)


if __name__ == "__main__":
    main()
