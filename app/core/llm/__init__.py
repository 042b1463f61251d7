"""LLM integration layer.

This package is intentionally small and conservative:
- No prompt/output logging (submitted text belongs to the caller).
- Configurable via environment variables.
- Failures come back as classified results, never as raw transport errors.
"""
