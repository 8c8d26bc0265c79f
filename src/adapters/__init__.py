"""Adapters: I/O against the remote API (HTTP, paging, retries) and exporters."""
