"""Load a corpus of code objects from a JSON file.

Accepted shapes:

    [{"id": "...", "name": "...", "content": "...", "type": "...",
      "module": "SD", "line_count": 42}, ...]

or ``{"objects": [...]}``. ``line_count`` is optional and is counted from
``content`` (code lines only) when missing. ``tables`` and ``operations``
may be supplied to override the extracted features.
"""

import json
import logging
from pathlib import Path

from corelens.corpus.base import CodeObject, ObjectAnalysis
from corelens.corpus.features import analyze, count_lines
from corelens.errors import ValidationError

logger = logging.getLogger(__name__)

_REQUIRED = ("id", "content")


def _record_to_object(record: dict, index: int) -> CodeObject:
    if not isinstance(record, dict):
        raise ValidationError(
            f"Corpus record {index} must be an object, got {type(record).__name__}"
        )

    missing = [key for key in _REQUIRED if record.get(key) in (None, "")]
    if missing:
        raise ValidationError(f"Corpus record {index} is missing: {', '.join(missing)}")

    content = record["content"]
    if not isinstance(content, str):
        raise ValidationError(f"Corpus record {index} ({record['id']}): content must be a string")
    line_count = record.get("line_count")
    if line_count is None:
        line_count = count_lines(content)["code"]

    try:
        return CodeObject(
            id=str(record["id"]),
            name=record.get("name") or str(record["id"]),
            content=content,
            type=record.get("type", "UNKNOWN"),
            module=record.get("module", "CROSS"),
            line_count=int(line_count),
        )
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Corpus record {index} ({record['id']}): {e}") from e


def load_records(path: Path) -> list[dict]:
    """Read the raw record list from a corpus file."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ValidationError(f"Cannot read corpus {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("objects", [])
    if not isinstance(data, list):
        raise ValidationError(f"Corpus {path} must be a list of objects")
    return data


def load_corpus(path: Path) -> list[CodeObject]:
    """
    Load code objects from a JSON corpus file.

    Raises:
        ValidationError: If the file is unreadable or a record is malformed
    """
    records = load_records(path)
    objects = [_record_to_object(record, i) for i, record in enumerate(records)]

    ids = [obj.id for obj in objects]
    if len(set(ids)) != len(ids):
        raise ValidationError(f"Corpus {path} contains duplicate object ids")

    logger.info("Loaded %d code objects from %s", len(objects), path)
    return objects


def load_analyses(path: Path) -> list[ObjectAnalysis]:
    """Load a corpus and extract features, honouring explicit overrides."""
    records = load_records(path)
    objects = load_corpus(path)
    analyses = []

    for record, obj in zip(records, objects):
        analysis = analyze(obj)
        if any(key in record for key in ("tables", "operations", "function_name")):
            analysis = ObjectAnalysis(
                code_object=obj,
                tables=tuple(record.get("tables", analysis.tables)),
                operations=tuple(record.get("operations", analysis.operations)),
                business_logic=analysis.business_logic,
                function_name=record.get("function_name", analysis.function_name),
            )
        analyses.append(analysis)

    return analyses
