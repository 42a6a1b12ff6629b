"""ViewModel package for UI state and command surfaces.

Call context:
    ``citydelivery/web_ui/runtime.py`` composes these viewmodels and binds
    them to the NiceGUI page callbacks.

Dependencies:
    Modules in this package depend on domain types, the fetch use case, and
    lightweight formatting helpers only. Transport stays in adapters.

Responsibilities:
    - Expose mutable UI state (selected range, fetch status, held cities).
    - Project that state into view-facing DTOs (``ResultView``).
"""
