"""Test helper utilities for NEPA Watch tests."""

from .fixture_strategy import FixtureStrategy, load_fixture_rows

__all__ = ["FixtureStrategy", "load_fixture_rows"]
