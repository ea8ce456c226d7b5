"""Base service class for domain services."""


class Service:
    """Base class for domain services.

    Domain services hold the rules that span an entity and its repository,
    such as vote deduplication or edit history bookkeeping.
    """
