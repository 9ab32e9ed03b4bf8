"""
Section header grammars for hardening scan logs.

Two delimiter conventions are recognized:

Bracketed (diagnostic output):
    ==================================================
    [ SECTION ] Firewall
    ==================================================

Labelled (static check output):
    ==================================================
    說明: Password Policy
    指令: passwd -S
    --------------------------------------------------

Each grammar is a HeaderPattern with named groups; the tokenizer only ever
talks to the pattern through try_match_at().
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional


RULE_MIN_LENGTH = 50


class Grammar(str, Enum):
    BRACKETED = "bracketed"
    LABELLED = "labelled"


@dataclass(frozen=True)
class HeaderMatch:
    """A header occurrence located in the source text."""
    start: int
    end: int
    title: str
    command: Optional[str] = None


class HeaderPattern:
    """Base strategy: one compiled regex with a `title` group and an optional `command` group."""

    grammar: Grammar
    regex: re.Pattern

    def try_match_at(self, text: str, offset: int) -> Optional[HeaderMatch]:
        """
        Find the next header at or after `offset`.

        Returns None when no further header exists. The caller owns the
        scan position; nothing is remembered between calls.
        """
        match = self.regex.search(text, offset)
        if match is None:
            return None

        groups = match.groupdict()
        command = (groups.get("command") or "").strip() or None

        return HeaderMatch(
            start=match.start(),
            end=match.end(),
            title=groups["title"].strip(),
            command=command
        )

    def matches(self, text: str) -> bool:
        return self.regex.search(text) is not None


class BracketedHeaderPattern(HeaderPattern):
    grammar = Grammar.BRACKETED
    # Opening rules are not anchored to column 0; indented rules still count
    regex = re.compile(
        rf"={{{RULE_MIN_LENGTH},}}[ \t]*\r?\n"
        r"\s*\[ SECTION \] (?P<title>[^\r\n]*)\r?\n"
        rf"={{{RULE_MIN_LENGTH},}}[ \t]*(?:\r?\n|\Z)"
    )


class LabelledHeaderPattern(HeaderPattern):
    grammar = Grammar.LABELLED
    regex = re.compile(
        rf"={{{RULE_MIN_LENGTH},}}[ \t]*\r?\n"
        r"說明:[ \t]*(?P<title>[^\r\n]*)\r?\n"
        r"指令:[ \t]*(?P<command>[^\r\n]*)\r?\n"
        rf"-{{{RULE_MIN_LENGTH},}}[ \t]*(?:\r?\n|\Z)"
    )


_PATTERNS = {
    Grammar.BRACKETED: BracketedHeaderPattern(),
    Grammar.LABELLED: LabelledHeaderPattern(),
}


def get_header_pattern(grammar: Grammar) -> HeaderPattern:
    """Return the header strategy for a grammar."""
    return _PATTERNS[Grammar(grammar)]


def detect_format(text: str) -> Grammar:
    """
    Decide which header grammar a log uses.

    The labelled form is the more specific of the two, so any labelled
    header wins. Everything else is treated as bracketed; whether that
    grammar actually matches is for the tokenizer to find out.
    """
    if _PATTERNS[Grammar.LABELLED].matches(text):
        return Grammar.LABELLED
    return Grammar.BRACKETED
