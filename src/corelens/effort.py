"""Effort levels shared by recommendations and redundancy savings."""

from enum import Enum


class Effort(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
