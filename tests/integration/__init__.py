"""
Integration Tests
=================

Tests that exercise several components together: the full processing
pipeline, configuration loading, and the async wrapper.

Run with: python -m pytest tests/integration/ -v
"""
