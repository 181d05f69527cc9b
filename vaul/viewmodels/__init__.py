"""ViewModel package for UI state and command surfaces.

Call context:
    ``vaul/app/main.py`` and the presenter modules import concrete viewmodels
    from this package to bind view callbacks to state transitions.

Dependencies:
    Modules in this package depend on domain types only. Store access happens
    through use-case callables injected at construction time.

Responsibilities:
    - Expose mutable UI state and command intent callbacks.
    - Derive display rows (pills, sections, category manager rows).
    - Keep MVVM boundaries explicit by avoiding transport or persistence logic.
"""
