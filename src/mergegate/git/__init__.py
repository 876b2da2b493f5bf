"""Git access for mergegate."""

from mergegate.git.repository import (
    GitRepository,
    RefNotFoundError,
    RepositoryError,
    RepositoryPort,
)

__all__ = ["GitRepository", "RefNotFoundError", "RepositoryError", "RepositoryPort"]
