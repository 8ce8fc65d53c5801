"""Line classifier for the SCL language.

This module splits SCL source text into trimmed, non-empty lines and
classifies each one by its case-insensitive leading keyword, producing a
stream of line tokens for the parser.
"""

import re
from enum import Enum, auto

from .constants import (
    KEYWORD_STEP, KEYWORD_TRANSITION, KEYWORD_ACTION, KEYWORD_CONDITION,
    KEYWORD_JUMP, KEYWORD_CONNECT, KEYWORD_FROM
)

BYTE_ORDER_MARK = "\ufeff"


def _declaration_pattern(keyword: str):
    return re.compile(rf"^{keyword}\s+(\S+)(?:\s+{KEYWORD_FROM}\s+(\S+))?", re.IGNORECASE)


class LineType(Enum):
    """Line types for the SCL language."""
    # Declarations
    STEP = auto()
    TRANSITION = auto()

    # Content
    ACTION = auto()
    CONDITION = auto()
    JUMP = auto()  # JUMP and CONNECT are synonyms

    # Anything else
    CONTINUATION = auto()
    MALFORMED = auto()  # Declaration keyword without a usable name


class LineToken:
    """Represents a single classified line of SCL source.

    Attributes:
        type: LineType enum value
        text: Trimmed line text as written
        line_number: 1-indexed physical line number in the source
        name: Declared node name (STEP/TRANSITION) or jump target (JUMP)
        source: Optional FROM source name (STEP/TRANSITION)
        content: Payload text (ACTION/CONDITION/CONTINUATION)
    """

    def __init__(self, type_: LineType, text: str, line_number: int,
                 name: str = None, source: str = None, content: str = None):
        self.type = type_
        self.text = text
        self.line_number = line_number
        self.name = name
        self.source = source
        self.content = content

    def __repr__(self):
        return f"LineToken({self.type.name}, {self.text!r}, line={self.line_number})"


class SCLTokenizer:
    """Classifier for SCL source lines.

    Blank lines and surrounding whitespace are insignificant; every other
    physical line yields exactly one LineToken.
    """

    STEP_PATTERN = _declaration_pattern(KEYWORD_STEP)
    TRANSITION_PATTERN = _declaration_pattern(KEYWORD_TRANSITION)

    def __init__(self, content: str):
        """Initialize tokenizer with source text.

        Args:
            content: Full SCL source text
        """
        content = content or ""
        # A UTF-8 byte order mark survives str.strip()
        if content.startswith(BYTE_ORDER_MARK):
            content = content[len(BYTE_ORDER_MARK):]
        self.content = content
        self.tokens = []

    def tokenize(self):
        """Classify every non-empty line and return the list of tokens.

        Returns:
            List of LineToken objects, in source order
        """
        self.tokens = []
        for line_number, raw in enumerate(self.content.split('\n'), 1):
            line = raw.strip()
            if not line:
                continue
            self.tokens.append(classify_line(line, line_number))
        return self.tokens


def _has_keyword(upper: str, keyword: str) -> bool:
    return upper.startswith(keyword + " ")


def classify_line(line: str, line_number: int = None) -> LineToken:
    """Classify a single trimmed, non-empty line.

    Args:
        line: Trimmed line text
        line_number: Optional 1-indexed physical line number

    Returns:
        LineToken describing the line
    """
    upper = line.upper()

    if _has_keyword(upper, KEYWORD_STEP):
        return _classify_declaration(LineType.STEP, SCLTokenizer.STEP_PATTERN, line, line_number)

    if _has_keyword(upper, KEYWORD_TRANSITION):
        return _classify_declaration(
            LineType.TRANSITION, SCLTokenizer.TRANSITION_PATTERN, line, line_number
        )

    if _has_keyword(upper, KEYWORD_ACTION):
        return LineToken(LineType.ACTION, line, line_number,
                         content=line[len(KEYWORD_ACTION) + 1:].strip())

    if _has_keyword(upper, KEYWORD_CONDITION):
        return LineToken(LineType.CONDITION, line, line_number,
                         content=line[len(KEYWORD_CONDITION) + 1:].strip())

    if _has_keyword(upper, KEYWORD_JUMP) or _has_keyword(upper, KEYWORD_CONNECT):
        parts = line.split()
        target = parts[1] if len(parts) > 1 else None
        return LineToken(LineType.JUMP, line, line_number, name=target)

    return LineToken(LineType.CONTINUATION, line, line_number, content=line)


def _classify_declaration(line_type, pattern, line, line_number):
    match = pattern.match(line)
    if not match:
        return LineToken(LineType.MALFORMED, line, line_number)
    return LineToken(line_type, line, line_number,
                     name=match.group(1), source=match.group(2))
