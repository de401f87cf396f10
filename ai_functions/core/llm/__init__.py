"""LLM integration layer.

This package is intentionally small:
- No prompt/output logging (prompts are user content).
- The API key is never logged nor included in error messages.
- Stateless: one request per call, no retries.
"""
