"""Core interfaces/abstractions.

Why:
- Defines contracts (Protocol) implemented by concrete commands and writers.
- Inverts dependencies: the core depends on abstractions, the CLI plugs in.
"""
