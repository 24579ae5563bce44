"""Test runner adapters."""

from .runner import PytestRunner, RunOptions, RunResult, parse_failed_tests

__all__ = ["PytestRunner", "RunOptions", "RunResult", "parse_failed_tests"]
