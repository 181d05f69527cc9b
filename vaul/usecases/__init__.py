"""Use-case layer for command and category workflows.

Each module wraps one store (or clipboard) operation: it validates input,
calls the port, and translates adapter failures into ``UseCaseError``
subclasses. No view state lives here.
"""
