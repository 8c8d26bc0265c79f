"""Domain models and entities.

Why:
- Pure, strict data structures (Pydantic v2) plus binding/naming rules.
- The domain knows nothing about HTTP, the CLI or the session.
"""
