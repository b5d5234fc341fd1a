# src/pr_reviewer/review/parser.py
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable
from pr_reviewer.models.review import ParsedReview


logger = logging.getLogger(__name__)

FALLBACK_SUMMARY_CHARS = 500


class Section(str, Enum):
    NONE = "none"
    SUMMARY = "summary"
    POTENTIAL_BUGS = "potential_bugs"
    SUGGESTIONS = "suggestions"
    TEST_CASES = "test_cases"


# Checked in order; the first marker contained in the line wins.
SECTION_MARKERS: tuple[tuple[str, Section], ...] = (
    ("SUMMARY:", Section.SUMMARY),
    ("POTENTIAL BUGS:", Section.POTENTIAL_BUGS),
    ("SUGGESTIONS:", Section.SUGGESTIONS),
    ("TEST CASES:", Section.TEST_CASES),
)


def match_marker(line: str) -> Section | None:
    """Return the section a marker line switches to, or None."""
    upper = line.upper()
    for marker, section in SECTION_MARKERS:
        if marker in upper:
            return section
    return None


@dataclass
class ReviewParser:
    """Line-oriented state machine that fills a review section by section.

    Feed lines one at a time with :meth:`feed`; ``state`` holds the section
    the next content line belongs to.
    """
    state: Section = Section.NONE
    summary: str = ""
    potential_bugs: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    test_cases: list[str] = field(default_factory=list)

    def feed(self, raw_line: str) -> None:
        line = raw_line.strip()

        section = match_marker(line)
        if section is not None:
            self.state = section
            if section is Section.SUMMARY:
                seed = line[line.index(":") + 1:].strip()
                if seed:
                    self.summary = seed
            return

        if not line:
            return

        handler = _CONTENT_HANDLERS.get(self.state)
        if handler is not None:
            handler(self, line)

    def _add_summary_line(self, line: str) -> None:
        self.summary = f"{self.summary} {line}" if self.summary else line

    def _add_bug(self, line: str) -> None:
        _append_item(self.potential_bugs, line)

    def _add_suggestion(self, line: str) -> None:
        _append_item(self.suggestions, line)

    def _add_test_case(self, line: str) -> None:
        _append_item(self.test_cases, line)

    def result(self) -> ParsedReview:
        return ParsedReview(
            summary=self.summary,
            potential_bugs=list(self.potential_bugs),
            suggestions=list(self.suggestions),
            test_cases=list(self.test_cases),
        )


def _append_item(items: list[str], line: str) -> None:
    # Only dash-prefixed lines are list items; anything else is dropped
    if line.startswith("-"):
        items.append(line[1:].strip())


_CONTENT_HANDLERS: dict[Section, Callable[[ReviewParser, str], None]] = {
    Section.SUMMARY: ReviewParser._add_summary_line,
    Section.POTENTIAL_BUGS: ReviewParser._add_bug,
    Section.SUGGESTIONS: ReviewParser._add_suggestion,
    Section.TEST_CASES: ReviewParser._add_test_case,
}


def parse_review_response(output: str) -> ParsedReview:
    """Turn the model's plain-text answer into a ParsedReview.

    Never raises. If nothing could be extracted, or parsing fails, the
    summary is the first 500 characters of the raw output.
    """
    fallback = ParsedReview(summary=output[:FALLBACK_SUMMARY_CHARS])
    try:
        parser = ReviewParser()
        for line in output.split("\n"):
            parser.feed(line)
        review = parser.result()
    except Exception:
        logger.exception("Failed to parse model response, using raw output as summary")
        return fallback

    if review.is_empty():
        if output:
            logger.warning("No review sections found in model response, using raw output as summary")
        return fallback
    return review
