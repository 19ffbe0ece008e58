"""CoreLens — Fit-to-standard and redundancy analysis for legacy ABAP code."""

__version__ = "0.1.0"
