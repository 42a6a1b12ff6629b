"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports (HTTP and filesystem)
    used by use cases.

Dependencies:
    Individual submodules depend on ``requests``, filesystem APIs, and domain
    protocol definitions.

Call context:
    Imported by ``citydelivery/web_ui/runtime.py`` for wiring and by tests for
    transport-level behavior verification.
"""
