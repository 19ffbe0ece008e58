"""Feature Extraction — Static facts the pattern matcher scores against.

All extraction is purely deterministic regex matching over the object text
(no parser, no LLM). It mirrors what a dedicated ABAP analyzer would report:

    - Line counts (total, blank, comment, code)
    - Database tables referenced by Open SQL statements
    - Operation labels (create/read/update/delete, pricing, authorization,
      number ranges, batch processing)
    - Declared name (FUNCTION / REPORT / CLASS / FORM)
"""

import re

from corelens.corpus.base import CodeObject, ObjectAnalysis


# Open SQL statements that name a table right after the keyword
_TABLE_PATTERNS = [
    r"\bFROM\s+([A-Z][A-Z0-9_/]*)",
    r"\bJOIN\s+([A-Z][A-Z0-9_/]*)",
    r"\bINSERT\s+(?:INTO\s+)?([A-Z][A-Z0-9_/]*)",
    r"\bUPDATE\s+([A-Z][A-Z0-9_/]*)",
    r"\bMODIFY\s+([A-Z][A-Z0-9_/]*)",
    r"\bDELETE\s+FROM\s+([A-Z][A-Z0-9_/]*)",
    r"^\s*TABLES\s*:?\s*([A-Z][A-Z0-9_/]*)",
]

# Words that follow FROM/INTO/etc. but are not tables
_NOT_TABLES = {
    "TABLE", "DATABASE", "MEMORY", "SCREEN", "LINE", "INDEX", "TO",
    "SORTED", "STANDARD", "HASHED", "CORRESPONDING", "FIELDS", "VALUE",
    "DATA", "SELECTION", "LT", "LS", "GT", "GS", "WA",
}

# (regex over the upper-cased text, operation label)
_OPERATION_PATTERNS = [
    (r"\bSELECT\b", "read data"),
    (r"\bINSERT\b", "create record"),
    (r"\b(?:UPDATE|MODIFY)\b", "update record"),
    (r"\bDELETE\b", "delete record"),
    (r"\bAUTHORITY-CHECK\b", "authorization check"),
    (r"\bNUMBER_GET_NEXT\b", "number range generation"),
    (r"\bLOOP\s+AT\b", "batch processing"),
    (r"\b(?:KONV|KONH|NETPR|KBETR|KSCHL)\b|\bPRIC(?:E|ING)\b", "pricing calculation"),
    (r"\bDISCOUNT\b|\bRABATT\b", "discount calculation"),
    (r"\bCALL\s+FUNCTION\s+'BAPI_", "bapi call"),
]

_NAME_PATTERNS = [
    r"^\s*FUNCTION\s+([A-Z0-9_/]+)",
    r"^\s*REPORT\s+([A-Z0-9_/]+)",
    r"^\s*CLASS\s+([A-Z0-9_/]+)\s+(?:DEFINITION|IMPLEMENTATION)",
    r"^\s*FORM\s+([A-Z0-9_/]+)",
    r"^\s*METHOD\s+([A-Z0-9_/]+)",
]


def count_lines(code: str) -> dict:
    """
    Break down a code snippet into line categories.

    ABAP full-line comments start with '*' in column one; '"' starts an
    inline comment, so a line beginning with it counts as a comment.

    Args:
        code: Source code string

    Returns:
        Dict with keys: total, blank, comment, code

    Example:
        >>> count_lines("WRITE 'x'.\\n\\n* comment\\nWRITE 'y'.")
        {'total': 4, 'blank': 1, 'comment': 1, 'code': 2}
    """
    if not code:
        return {"total": 0, "blank": 0, "comment": 0, "code": 0}

    lines = code.split("\n")
    total = len(lines)
    blank = 0
    comment = 0

    for line in lines:
        stripped = line.strip()
        if not stripped:
            blank += 1
        elif line.startswith("*") or stripped.startswith(('"', "//", "#")):
            comment += 1

    return {
        "total": total,
        "blank": blank,
        "comment": comment,
        "code": total - blank - comment,
    }


def extract_tables(code: str) -> list[str]:
    """
    Find database tables referenced by Open SQL statements.

    Returns:
        Upper-cased table names in order of first appearance, without duplicates
    """
    upper = code.upper()
    found: dict[str, int] = {}

    for pattern in _TABLE_PATTERNS:
        for match in re.finditer(pattern, upper, flags=re.MULTILINE):
            name = match.group(1).rstrip(".,")
            if not name or name in _NOT_TABLES:
                continue
            # Internal tables and work areas follow lt_/ls_/gt_ naming
            if re.match(r"^(?:L|G)[TSW]_", name):
                continue
            found.setdefault(name, match.start())

    return sorted(found, key=found.get)


def extract_operations(code: str) -> list[str]:
    """Return the operation labels whose trigger appears in the code."""
    upper = code.upper()
    return [label for pattern, label in _OPERATION_PATTERNS if re.search(pattern, upper)]


def extract_declared_name(code: str) -> str | None:
    """Return the first FUNCTION/REPORT/CLASS/FORM/METHOD name, if any."""
    upper = code.upper()
    for pattern in _NAME_PATTERNS:
        match = re.search(pattern, upper, flags=re.MULTILINE)
        if match:
            return match.group(1).rstrip(".")
    return None


def analyze(code_object: CodeObject) -> ObjectAnalysis:
    """
    Extract matcher features from a code object.

    Args:
        code_object: The object to analyze

    Returns:
        ObjectAnalysis with tables, operation labels and declared name
    """
    content = code_object.content or ""
    operations = extract_operations(content)
    return ObjectAnalysis(
        code_object=code_object,
        tables=tuple(extract_tables(content)),
        operations=tuple(operations),
        business_logic=tuple(op.capitalize() for op in operations),
        function_name=extract_declared_name(content),
    )
