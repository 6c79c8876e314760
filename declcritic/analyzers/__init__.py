"""Analyzers that classify, judge and compare module exports."""

from __future__ import annotations

from .classifier import classify_exports
from .comparator import ModuleShapeComparator, compare_modules
from .default_export import DefaultExportDetector, DefaultExportHeuristics
from .descriptors import format_debug, inspect_declaration, inspect_source
from .export_equals import judge_export_equals

__all__ = [
    "DefaultExportDetector",
    "DefaultExportHeuristics",
    "ModuleShapeComparator",
    "classify_exports",
    "compare_modules",
    "format_debug",
    "inspect_declaration",
    "inspect_source",
    "judge_export_equals",
]
