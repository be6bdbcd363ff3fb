"""
Free-text parsing of LLM message drafts.

The model is asked for plain text, not JSON, so the subject is recovered
heuristically from "Subject:" / "Content:" markers or from a short first
line. Parsing never raises: anything unrecognised becomes body content.
"""

import re
from dataclasses import dataclass
from typing import Optional

SUBJECT_MARKER = "Subject:"
CONTENT_MARKER = "Content:"

# Bounds (exclusive) for treating an unlabelled first line as the subject
MIN_IMPLICIT_SUBJECT_LENGTH = 10
MAX_IMPLICIT_SUBJECT_LENGTH = 100

_SUBJECT_LABEL = re.compile(re.escape(SUBJECT_MARKER), re.IGNORECASE)


@dataclass(frozen=True)
class ParsedMessage:
    """Subject and body recovered from a raw draft."""

    content: str
    subject: Optional[str] = None


def _strip_subject_label(text: str) -> str:
    return _SUBJECT_LABEL.sub("", text, count=1).strip()


def parse_message_response(raw_content: str) -> ParsedMessage:
    """
    Split a raw LLM draft into subject and content.

    Order of attempts:
    1. Both markers present: subject is everything before "Content:",
       content is everything after it.
    2. Only "Subject:" present: the first line holding it is the subject,
       the rest of the text is the content.
    3. No markers: a first line of 11-99 characters is taken as the subject;
       otherwise the whole text is content.
    """
    subject: Optional[str] = None
    content = raw_content

    if SUBJECT_MARKER in raw_content and CONTENT_MARKER in raw_content:
        content_index = raw_content.index(CONTENT_MARKER)
        subject = _strip_subject_label(raw_content[:content_index])
        content = raw_content[content_index + len(CONTENT_MARKER):].strip()

    elif SUBJECT_MARKER in raw_content:
        lines = raw_content.split("\n")
        subject_line = next(line for line in lines if SUBJECT_MARKER in line)
        subject = _strip_subject_label(subject_line)
        body_start = raw_content.index(subject_line) + len(subject_line)
        content = raw_content[body_start:].strip()

    else:
        lines = raw_content.split("\n")
        first_line = lines[0]
        if MIN_IMPLICIT_SUBJECT_LENGTH < len(first_line) < MAX_IMPLICIT_SUBJECT_LENGTH:
            subject = first_line.strip()
            content = "\n".join(lines[1:]).strip()
        else:
            content = raw_content.strip()

    return ParsedMessage(
        subject=subject or None,
        content=content or raw_content,
    )
