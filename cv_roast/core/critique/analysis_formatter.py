"""
Critique text normalization.

Collapses blank-line runs into paragraph separators and rewrites section
labels to canonical headers regardless of how the model decorated them
(plain, colon-suffixed, markdown heading or emphasis-wrapped).

A label at the start of a line is matched case-insensitively. Inside a line
only an upper-case label that carries a colon or emphasis markers counts as
a header; it is split onto its own line and the text after it follows below.

Dependencies: re
System role: Post-processing of generated critique text
"""

import re

CANONICAL_SECTIONS = (
    "PROFESSIONAL EXPERIENCE",
    "SKILLS ASSESSMENT",
    "EDUCATION DEEP DIVE",
    "EPIC FAILURES",
    "SAVAGE ADVICE",
)

HEADER_PREFIX = "### "

_DECORATION = r"[*_]*"
_LABEL_MARKERS = set("*_:#")


def _label_pattern(label: str) -> re.Pattern[str]:
    words = r"[ \t]+".join(re.escape(word) for word in label.split())
    return re.compile(
        rf"^[ \t]*(?:#{{1,6}}[ \t]*)?{_DECORATION}[ \t]*{words}[ \t]*{_DECORATION}"
        rf"[ \t]*:*[ \t]*{_DECORATION}[ \t]*(?P<rest>.*)$",
        re.IGNORECASE | re.MULTILINE,
    )


def _inline_label_pattern(label: str) -> re.Pattern[str]:
    words = r"[ \t]+".join(re.escape(word) for word in label.split())
    return re.compile(
        rf"[ \t]*(?:(?P<em>\*\*?|__)[ \t]*{words}[ \t]*:*[ \t]*(?P=em)[ \t]*:*"
        rf"|\b{words}[ \t]*:+)[ \t]*\n?"
    )


_SECTION_PATTERNS = [(label, _label_pattern(label)) for label in CANONICAL_SECTIONS]
_INLINE_PATTERNS = [(label, _inline_label_pattern(label)) for label in CANONICAL_SECTIONS]
_BLANK_LINES = re.compile(r"\n[ \t]*(?:\n[ \t]*)+")
_EMPHASIS = re.compile(r"\*\*|__")


def _rewrite_sections(text: str) -> str:
    for label, pattern in _SECTION_PATTERNS:

        def replace(match: re.Match[str], label: str = label) -> str:
            rest = match.group("rest").strip()
            marker = match.group(0)[: match.start("rest") - match.start()]
            # A bare label followed by prose is a sentence, not a heading.
            if rest and not _LABEL_MARKERS.intersection(marker):
                return match.group(0)
            header = f"{HEADER_PREFIX}{label}"
            return f"{header}\n{rest}" if rest else header

        text = pattern.sub(replace, text)

    for label, pattern in _INLINE_PATTERNS:
        text = pattern.sub(f"\n\n{HEADER_PREFIX}{label}\n", text)
    return text


def format_analysis_text(text: str) -> str:
    """
    Normalize generated critique text.

    Args:
        text: Raw analysis text from the model

    Returns:
        str: Text with canonical section headers and single blank lines
            between paragraphs
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _rewrite_sections(text)
    text = _EMPHASIS.sub("", text)
    text = _BLANK_LINES.sub("\n\n", text)
    return "\n".join(line.rstrip() for line in text.split("\n")).strip()
