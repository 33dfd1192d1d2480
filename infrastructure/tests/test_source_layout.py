"""
Source Layout Tests
===================

Top-level definitions are separated by exactly two blank lines.
"""

from pathlib import Path

import pytest


ROOT = Path(__file__).resolve().parents[2]
PACKAGES = (
    "authentication",
    "campusmart",
    "campusmart_client",
    "infrastructure",
    "marketplace",
    "messaging",
    "notifications",
    "utils",
)


def runs_of_three_blank_lines(path):
    blank = 0
    for number, line in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
        blank = blank + 1 if not line.strip() else 0
        if blank == 3:
            yield number


@pytest.mark.unit
def test_no_module_has_three_consecutive_blank_lines():
    offenders = [
        f"{path.relative_to(ROOT)}:{number}"
        for package in PACKAGES
        for path in sorted((ROOT / package).rglob("*.py"))
        for number in runs_of_three_blank_lines(path)
    ]

    assert offenders == []
