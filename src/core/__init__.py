"""Core: configuration, domain, contracts and command services."""
