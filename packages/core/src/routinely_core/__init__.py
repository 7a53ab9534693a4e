"""Core domain & services for Routinely.

Contains persistence models, authentication, configuration, punctuality
evaluation and weekly performance aggregation.
"""

from .config import Settings  # noqa: F401
