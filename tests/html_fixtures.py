"""
Small builders for "Sections Found" HTML, shaped like the real OSCAR page
(one cell per line, '<tr>' on its own line).
"""

from __future__ import annotations

EMAIL_IMG = (
    '<img src="/wtlgifs/web_email.gif" align="middle" alt="E-mail" class="headerImg" '
    'title="E-mail"  NAME="web_email" HSPACE=0 VSPACE=0 BORDER=0 HEIGHT=28 WIDTH=28 />'
)

PRIMARY = '(<ABBR title= "Primary">P</ABBR>)'


def instructor_cell(name: str, email: str) -> str:
    return f'{name} {PRIMARY}<a href="mailto:{email}" target="{name}">{EMAIL_IMG}</a>'


def meeting_row(
    time: str = "8:00 am - 9:15 am",
    days: str = "MW",
    where: str = "Skiles 254",
    dates: str = "Aug 17, 2020 - Dec 10, 2020",
    instructor: str = instructor_cell("Jane   Doe", "jane.doe@gatech.edu"),
) -> str:
    return (
        '<td CLASS="dddefault">Class</td>\n'
        f'<td CLASS="dddefault">{time}</td>\n'
        f'<td CLASS="dddefault">{days}</td>\n'
        f'<td CLASS="dddefault">{where}</td>\n'
        f'<td CLASS="dddefault">{dates}</td>\n'
        '<td CLASS="dddefault">Lecture*</td>\n'
        f'<td CLASS="dddefault">{instructor}</td>\n'
        "</tr>\n"
    )


def body(
    attributes: str | None = "Honors (H), Distance  Learning",
    grade_basis: str | None = "ALP",
    campus: str | None = "Georgia Tech-Atlanta *",
    schedule_type: str | None = "Lecture*",
    credits: str | None = "3.000",
) -> str:
    lines = [
        '<td CLASS="dddefault">',
        '<SPAN class="fieldlabeltext">Associated Term: </SPAN>Fall 2020 ',
        "<br>",
        '<SPAN class="fieldlabeltext">Levels: </SPAN>Graduate Semester, Undergraduate Semester',
        "<br>",
    ]
    if attributes is not None:
        lines += [f'<SPAN class="fieldlabeltext">Attributes: </SPAN>{attributes}', "<br>"]
    if grade_basis is not None:
        lines += [f'<SPAN class="fieldlabeltext">Grade Basis: </SPAN>{grade_basis}', "<br>"]
    lines.append("<br>")
    if campus is not None:
        lines += [f"{campus} Campus", "<br>"]
    if schedule_type is not None:
        lines += [f"{schedule_type} Schedule Type", "<br>"]
    if credits is not None:
        lines += [f"       {credits} Credits", "<br>"]
    lines += [
        '<a href="/pls/bprod/bwckctlg.p_display_courses?term_in=202008">View Catalog Entry</a>',
        "<br>",
        "<br>",
        '<table  CLASS="datadisplaytable" summary="This table lists the scheduled meeting times and assigned '
        'instructors for this class.." ><caption class="captiontext">Scheduled Meeting Times</caption>',
    ]
    return "\n".join(lines) + "\n"


TABLE_HEADER = (
    '<th CLASS="ddheader" scope="col" >Type</th>\n'
    '<th CLASS="ddheader" scope="col" >Time</th>\n'
    '<th CLASS="ddheader" scope="col" >Days</th>\n'
    '<th CLASS="ddheader" scope="col" >Where</th>\n'
    '<th CLASS="ddheader" scope="col" >Date Range</th>\n'
    '<th CLASS="ddheader" scope="col" >Schedule Type</th>\n'
    '<th CLASS="ddheader" scope="col" >Instructors</th>\n'
    "</tr>\n"
)


def header(title: str, crn: str = "92549") -> str:
    return (
        f'<a href="/pls/bprod/bwckschd.p_disp_detail_sched?term_in=202008&amp;crn_in={crn}">{title}</a></th>\n'
        "</tr>\n"
    )


def block(
    name: str = "Intro to Foo - Bar",
    crn: str = "92549",
    code: str = "WOLO 1801",
    section: str = "A",
    body_html: str | None = None,
    meetings: list[str] | None = None,
) -> str:
    """One section block, starting right after the block marker."""
    if body_html is None:
        body_html = body()
    if meetings is None:
        meetings = [meeting_row()]
    title = f"{name} - {crn} - {code} - {section}"
    parts = [header(title, crn), body_html, TABLE_HEADER] + meetings
    return "<tr>\n".join(parts) + "</table>\n<br>\n<br>\n</td>\n</tr>\n"


def document(blocks: list[str]) -> str:
    from oscarcatalog.parse import BLOCK_MARKER, END_MARKER, START_MARKER

    head = (
        "<html>\n<body>\n"
        '<table  CLASS="datadisplaytable" summary="This layout table is used to present the sections found" '
        f'WIDTH="100%">{START_MARKER}\n'
    )
    tail = (
        "</table>\n<br>\n"
        f"{END_MARKER}\n"
        "<tr>\n<td CLASS=\"ntdefault\"><a href=\"/pls/bprod/bwckgens.p_proc_term_date\">Return to Previous</a></td>\n"
        "</tr>\n</table>\n</body>\n</html>\n"
    )
    return head + "".join(BLOCK_MARKER + b for b in blocks) + tail


TERMS_HTML = """
<form action="/pls/bprod/bwckgens.p_proc_term_date" method="post">
<select name="p_term" size="1" id="term_input_id">
<option value="">None</option>
<option value="202008">Fall 2020</option>
<option value="202005">Summer 2020 (View only)</option>
</select>
</form>
"""
