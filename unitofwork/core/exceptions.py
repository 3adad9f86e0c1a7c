class UnitOfWorkError(Exception):
    """Base error for the paging and unit-of-work layer."""


class InvalidPageError(UnitOfWorkError, ValueError):
    """Paging arguments rejected before the source is evaluated."""


class RepositoryRegistrationError(UnitOfWorkError, TypeError):
    """A custom repository could not be registered for a model."""
