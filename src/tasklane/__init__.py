"""Tasklane - role-based access control for task boards.

Resolves users' roles, permissions and hierarchy levels from the
persisted authorization graph.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
