"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class InvalidTargetError(ValidationError):
    """Raised when a target type or target id is malformed."""

    pass


class InvalidParentError(ValidationError):
    """Raised when a reply references an unusable parent.

    The parent may be missing, deleted, on another target or nested too deep.
    """

    def __init__(self, parent_id: int, reason: str):
        self.parent_id = parent_id
        super().__init__(f"Invalid parent comment {parent_id}: {reason}")


class EmptyContentError(ValidationError):
    """Raised when comment content is blank after trimming."""

    def __init__(self, resource: str = "comment"):
        super().__init__(f"{resource.capitalize()} content cannot be empty")


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class AlreadyVotedError(BusinessRuleViolationError):
    """Raised when stance changes are disabled and the user already voted."""

    def __init__(self, user_id: str, target: str):
        super().__init__(
            f"User {user_id} has already voted on {target}; each user can only vote once"
        )


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to modify content they don't own."""

    def __init__(self, action: str, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not authorized to {action} {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class DatabaseError(DomainError):
    """Raised when a transactional write fails in a way the service cannot recover."""

    pass
