"""
Central data model definitions used across the project.

This module defines the canonical structure of the catalog records so that:
- the parser, the JSON storage and the CLI share the same field names
- JSON written by one run can be loaded again without guessing keys

Nesting:
    Course (keyed by code) -> Section (keyed by section label) -> Meeting -> Instructor
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List


@dataclass
class Instructor:
    """
    Instructor of one meeting row.

    `name` and `email` may hold several comma-joined values (co-instructors).
    """

    name: str
    email: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Instructor":
        return cls(name=str(data.get("name", "")), email=str(data.get("email", "")))


@dataclass
class Meeting:
    """
    One scheduled meeting pattern (one row of the "Scheduled Meeting Times" table).
    """

    time: str
    schedule: str
    location: str
    date_range: str
    instructor: Instructor

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Meeting":
        return cls(
            time=str(data.get("time", "")),
            schedule=str(data.get("schedule", "")),
            location=str(data.get("location", "")),
            date_range=str(data.get("date_range", "")),
            instructor=Instructor.from_dict(data.get("instructor") or {}),
        )


@dataclass
class Section:
    """
    One registered offering of a course.
    """

    registration_number: str
    attributes: List[str]
    credits: int
    grade_basis: str
    campus: str
    format: str
    meetings: List[Meeting] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Section":
        return cls(
            registration_number=str(data.get("registration_number", "")),
            attributes=[str(a) for a in data.get("attributes", [])],
            credits=int(data.get("credits", 0)),
            grade_basis=str(data.get("grade_basis", "")),
            campus=str(data.get("campus", "")),
            format=str(data.get("format", "")),
            meetings=[Meeting.from_dict(m) for m in data.get("meetings", [])],
        )


@dataclass
class Course:
    """
    All sections sharing one course code.
    """

    code: str
    name: str
    sections: Dict[str, Section] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "name": self.name,
            "sections": {label: s.to_dict() for label, s in self.sections.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Course":
        sections = data.get("sections") or {}
        return cls(
            code=str(data.get("code", "")),
            name=str(data.get("name", "")),
            sections={str(label): Section.from_dict(s) for label, s in sections.items()},
        )


def catalog_to_dict(catalog: Dict[str, Course]) -> Dict[str, Any]:
    """
    Convert a parsed catalog into plain JSON-compatible data.
    """
    return {code: course.to_dict() for code, course in catalog.items()}


def catalog_from_dict(data: Dict[str, Any]) -> Dict[str, Course]:
    return {str(code): Course.from_dict(course) for code, course in data.items()}
