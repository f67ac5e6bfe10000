"""Lint reporting exports."""

from .lint_messages import LintReporter

__all__ = ["LintReporter"]
