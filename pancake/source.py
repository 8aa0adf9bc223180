"""
Reading and tokenizing pancake source text.

One instruction or label declaration per line. Blank lines and ``//``
comments are ignored; ``name:`` on its own declares a label.
"""

import re
from dataclasses import dataclass
from typing import List, Optional

import structlog

from .core.errors import SourceReadError

logger = structlog.get_logger(__name__)

COMMENT_MARKER = "//"
LABEL_PATTERN = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*):$")


@dataclass(frozen=True)
class SourceLine:
    """A tokenized source line: either a label declaration or a mnemonic with an optional argument."""

    line_number: int
    mnemonic: Optional[str] = None
    argument: Optional[str] = None
    label: Optional[str] = None

    @property
    def is_label(self) -> bool:
        return self.label is not None


def strip_comment(raw: str) -> str:
    index = raw.find(COMMENT_MARKER)
    if index != -1:
        raw = raw[:index]
    return raw.strip()


def tokenize_line(raw: str, line_number: int = 0) -> Optional[SourceLine]:
    """
    Split one raw source line into its parts.

    Returns:
        A SourceLine, or None for blank and comment-only lines.
    """
    text = strip_comment(raw)
    if not text:
        return None

    match = LABEL_PATTERN.match(text)
    if match:
        return SourceLine(line_number=line_number, label=match.group(1))

    tokens = text.split()
    if len(tokens) > 2:
        logger.debug("Ignoring extra tokens", line=line_number, extra=tokens[2:])
    return SourceLine(
        line_number=line_number,
        mnemonic=tokens[0],
        argument=tokens[1] if len(tokens) > 1 else None,
    )


def tokenize(text: str) -> List[SourceLine]:
    lines = []
    # Only "\n" ends a line; a trailing "\r" is removed by strip()
    for number, raw in enumerate(text.split("\n"), start=1):
        line = tokenize_line(raw, number)
        if line is not None:
            lines.append(line)
    return lines


def read_source(path: str) -> str:
    """
    Read a source file as UTF-8 text.

    Raises:
        SourceReadError: If the file cannot be opened or decoded
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
        raise SourceReadError(str(path), reason) from e
