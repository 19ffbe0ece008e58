"""Corpus Module — Code objects and the static features extracted from them.

Usage:
    from corelens.corpus import CodeObject, analyze

    obj = CodeObject(id="1", name="Z_PRICING", content=src, type="FUNCTION",
                     module="SD", line_count=120)
    analysis = analyze(obj)
    analysis.tables  # ('KONV', 'VBAP')
"""

from corelens.corpus.base import CodeObject, Module, ObjectAnalysis
from corelens.corpus.features import analyze, count_lines
from corelens.corpus.loader import load_analyses, load_corpus

__all__ = [
    "CodeObject",
    "Module",
    "ObjectAnalysis",
    "analyze",
    "count_lines",
    "load_analyses",
    "load_corpus",
]
