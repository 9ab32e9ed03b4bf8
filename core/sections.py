"""
Section tokenizer for hardening scan logs.

Splits a log into an ordered list of titled sections using one of the
header grammars from core.formats. Any text ahead of the first header is
kept as a "File Header / Meta" pseudo-section.
"""
from dataclasses import dataclass, field
from typing import Optional

from core.formats import Grammar, HeaderMatch, detect_format, get_header_pattern


PREAMBLE_TITLE = "File Header / Meta"
PREAMBLE_ID = "header"


@dataclass(frozen=True)
class Section:
    """One titled block of a scan log."""
    title: str
    body: str
    ordinal: int
    side_metadata: Optional[str] = None  # Command string (labelled grammar only)
    section_id: str = ""
    span: Optional[tuple[int, int]] = None  # Header offsets in the source; None for the preamble

    def __post_init__(self):
        if not self.section_id:
            object.__setattr__(self, "section_id", f"sec-{self.ordinal}")

    @property
    def is_preamble(self) -> bool:
        return self.section_id == PREAMBLE_ID

    def to_dict(self) -> dict:
        return {
            "id": self.section_id,
            "title": self.title,
            "body": self.body,
            "side_metadata": self.side_metadata,
            "ordinal": self.ordinal
        }


@dataclass(frozen=True)
class ParsedLog:
    """Result of detecting and tokenizing one scan log."""
    name: str
    grammar: Grammar
    sections: tuple[Section, ...] = field(default_factory=tuple)

    @property
    def section_count(self) -> int:
        return len(self.sections)

    @property
    def is_recognized(self) -> bool:
        return len(self.sections) > 0

    @property
    def titles(self) -> list[str]:
        return [s.title for s in self.sections]

    @property
    def title_index(self) -> dict[str, Section]:
        """Title -> section lookup. A repeated title keeps its last section."""
        return {s.title: s for s in self.sections}

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "grammar": self.grammar.value,
            "section_count": self.section_count,
            "sections": [s.to_dict() for s in self.sections]
        }


def compose_body(raw_body: str, side_metadata: Optional[str]) -> str:
    """
    Fold the captured command into the comparable body.

    A section with a command becomes "Command: <cmd>" followed by a blank
    line and the raw body, so a changed command shows up as a changed line.
    """
    raw_body = raw_body.strip()
    if side_metadata is None:
        return raw_body
    if not raw_body:
        return f"Command: {side_metadata}"
    return f"Command: {side_metadata}\n\n{raw_body}"


def _build_section(header: HeaderMatch, raw_body: str, ordinal: int) -> Section:
    return Section(
        title=header.title,
        body=compose_body(raw_body, header.command),
        ordinal=ordinal,
        side_metadata=header.command,
        span=(header.start, header.end)
    )


def tokenize(text: str, grammar: Grammar) -> list[Section]:
    """
    Split `text` into sections under the given grammar.

    Headers are located left to right without overlap. The text between
    two headers is the body of the earlier one; the text after the last
    header is the body of the last section.

    Returns an empty list when the grammar matches nowhere, which callers
    treat as "unrecognized structure".
    """
    pattern = get_header_pattern(grammar)

    sections: list[Section] = []
    pending: Optional[HeaderMatch] = None
    position = 0

    while True:
        header = pattern.try_match_at(text, position)
        if header is None:
            break

        between = text[position:header.start]

        if pending is None:
            preamble = between.strip()
            if preamble:
                sections.append(Section(
                    title=PREAMBLE_TITLE,
                    body=preamble,
                    ordinal=0,
                    section_id=PREAMBLE_ID
                ))
        else:
            sections.append(_build_section(pending, between, len(sections)))

        pending = header
        position = header.end

    if pending is None:
        return []

    sections.append(_build_section(pending, text[position:], len(sections)))
    return sections


def parse_log(text: str, name: str = "log") -> ParsedLog:
    """Detect the grammar of `text` and tokenize it."""
    grammar = detect_format(text)
    return ParsedLog(
        name=name,
        grammar=grammar,
        sections=tuple(tokenize(text, grammar))
    )
