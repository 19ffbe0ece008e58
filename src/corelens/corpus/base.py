"""Corpus data models — code objects and their extracted analysis."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Module(str, Enum):
    """Application module a code object or catalog entry belongs to."""

    SD = "SD"
    MM = "MM"
    FI = "FI"
    CO = "CO"
    HR = "HR"
    PP = "PP"
    CROSS = "CROSS"  # catalog entries only: applies to every module

    @classmethod
    def parse(cls, value: "str | Module") -> "Module":
        """Accept 'sd', 'SD' or a Module member."""
        if isinstance(value, Module):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown module {value!r} (expected one of: {valid})")


@dataclass(frozen=True)
class CodeObject:
    """A unit of legacy code (function, report, class, table definition).

    Owned by the calling subsystem; the engine only reads it.
    """

    id: str
    name: str
    content: str
    type: str
    module: Module
    line_count: int = 0

    def __post_init__(self):
        object.__setattr__(self, "module", Module.parse(self.module))
        if self.line_count < 0:
            raise ValueError(f"line_count must be >= 0 for {self.id}")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "module": self.module.value,
            "line_count": self.line_count,
        }


@dataclass(frozen=True)
class ObjectAnalysis:
    """Features extracted from one code object, consumed by the pattern matcher."""

    code_object: CodeObject
    tables: tuple[str, ...] = ()
    operations: tuple[str, ...] = ()
    business_logic: tuple[str, ...] = ()
    function_name: Optional[str] = None

    @property
    def code(self) -> str:
        return self.code_object.content

    @property
    def module(self) -> Module:
        return self.code_object.module

    @property
    def name(self) -> Optional[str]:
        """Declared name if one was extracted, else the object's display name."""
        return self.function_name or self.code_object.name or None
