"""Tests for loading corpora from JSON files."""

import json
import tempfile
from pathlib import Path

import pytest

from corelens.corpus import Module, load_analyses, load_corpus
from corelens.errors import ValidationError


def _write(tmpdir, data) -> Path:
    path = Path(tmpdir) / "corpus.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestLoadCorpus:
    """Tests for load_corpus."""

    def test_list_of_records(self):
        """Test a plain record list with defaults filled in."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(tmpdir, [
                {"id": "1", "name": "Z_ONE", "content": "WRITE 1.", "type": "REPORT",
                 "module": "sd", "line_count": 40},
                {"id": "2", "content": "* note\n\nWRITE 2.\nWRITE 3."},
            ])
            objects = load_corpus(path)

        assert [o.id for o in objects] == ["1", "2"]
        assert objects[0].module is Module.SD
        assert objects[0].line_count == 40
        # Defaults: name from id, module CROSS, LOC counted from content
        assert objects[1].name == "2"
        assert objects[1].module is Module.CROSS
        assert objects[1].line_count == 2

    def test_objects_wrapper(self):
        """The {"objects": [...]} shape is accepted."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(tmpdir, {"objects": [{"id": "a", "content": "x", "module": "MM"}]})
            assert load_corpus(path)[0].module is Module.MM

    @pytest.mark.parametrize("data", [
        [{"id": "1"}],
        [{"content": "x"}],
        [{"id": "1", "content": "x", "module": "ZZ"}],
        [{"id": "1", "content": "x", "line_count": -5}],
        [{"id": "1", "content": "x"}, {"id": "1", "content": "y"}],
        {"objects": "nope"},
        [1, 2],
        ["not a record"],
        [{"id": "1", "content": 42}],
        [{"id": "", "content": "x"}],
        [{"id": "1", "content": "x", "line_count": [3]}],
    ])
    def test_invalid(self, data):
        """Malformed corpora raise ValidationError."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(tmpdir, data)
            with pytest.raises(ValidationError):
                load_corpus(path)

    def test_falsy_id_accepted(self):
        """An id of 0 is present, not missing."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(tmpdir, [{"id": 0, "content": "WRITE 1."}])
            [obj] = load_corpus(path)

        assert obj.id == "0"

    def test_missing_file(self):
        with pytest.raises(ValidationError):
            load_corpus(Path("/nonexistent/corpus.json"))

    def test_bad_json(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "corpus.json"
            path.write_text("{not json", encoding="utf-8")
            with pytest.raises(ValidationError):
                load_corpus(path)


class TestLoadAnalyses:
    """Tests for load_analyses."""

    def test_extracted_features(self):
        """Features are extracted when no override is given."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(tmpdir, [{"id": "1", "content": "SELECT * FROM vbak.", "module": "SD"}])
            [analysis] = load_analyses(path)

        assert analysis.tables == ("VBAK",)
        assert analysis.operations == ("read data",)

    def test_overrides(self):
        """Explicit tables and names override extraction."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(tmpdir, [{
                "id": "1", "content": "SELECT * FROM vbak.", "module": "SD",
                "tables": ["VBAK", "VBAP"], "function_name": "Z_ORDER_CREATE",
            }])
            [analysis] = load_analyses(path)

        assert analysis.tables == ("VBAK", "VBAP")
        assert analysis.operations == ("read data",)
        assert analysis.name == "Z_ORDER_CREATE"
