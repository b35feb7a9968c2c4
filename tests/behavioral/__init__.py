"""
Behavioral Tests
================

Tests that verify user-facing behavior:
- Summaries name the strongest associations
- Subject changes are announced
- Degenerate input degrades to the fallback answer

Run with: python -m pytest tests/behavioral/ -v
"""
