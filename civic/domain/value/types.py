"""Domain value objects for CivicOS.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules for votes and comment targets.
"""

import re
from enum import Enum
from typing import Optional

from pydantic import Field, computed_field

from civic.domain.error import InvalidTargetError
from civic.domain.value.common import ValueObject
from civic.domain.value.identifiers import MAX_ID

_DIGITS = re.compile(r"[0-9]+")


class TargetType(str, Enum):
    """Kind of entity that can be voted on or commented on.

    The referenced entities live in other parts of the platform; this core
    only stores the (type, id) pair and trusts the caller for existence.
    """

    POLITICIAN = "politician"
    BILL = "bill"
    POST = "post"
    COMMENT = "comment"
    PETITION = "petition"
    NEWS = "news"
    FINANCE = "finance"


class VoteType(str, Enum):
    """A user's stance on a target."""

    UPVOTE = "upvote"
    DOWNVOTE = "downvote"


class Capability(str, Enum):
    """Capabilities granted by the permission provider.

    Only the ones this service consults are listed.
    """

    MODERATE_COMMENTS = "moderate_comments"


class TargetRef(ValueObject):
    """Weak reference to an external entity: a type tag plus an opaque id."""

    target_type: TargetType
    target_id: int = Field(gt=0, le=MAX_ID)

    @classmethod
    def parse(cls, target_type: str, target_id: int | str) -> "TargetRef":
        """Build a reference from raw request values.

        Args:
            target_type: Target type name (e.g. "bill")
            target_id: Target id, as an int or a string of ASCII digits

        Returns:
            Validated target reference

        Raises:
            InvalidTargetError: If the type is unknown or the id is not a
                positive 32-bit integer
        """
        try:
            kind = TargetType(target_type)
        except ValueError:
            raise InvalidTargetError(f"Unknown target type: {target_type}")

        if isinstance(target_id, str):
            if not _DIGITS.fullmatch(target_id):
                raise InvalidTargetError(f"Invalid target id: {target_id}")
            if len(target_id.lstrip("0")) > len(str(MAX_ID)):
                raise InvalidTargetError(f"Target id out of range: {target_id}")
            numeric_id = int(target_id)
        elif isinstance(target_id, int) and not isinstance(target_id, bool):
            numeric_id = target_id
        else:
            raise InvalidTargetError(f"Invalid target id: {target_id}")
        if numeric_id <= 0:
            raise InvalidTargetError(f"Target id must be positive: {target_id}")
        if numeric_id > MAX_ID:
            raise InvalidTargetError(f"Target id out of range: {target_id}")

        return cls(target_type=kind, target_id=numeric_id)

    def __str__(self) -> str:
        return f"{self.target_type.value}:{self.target_id}"


class VoteTally(ValueObject):
    """Raw up/down counts for one target."""

    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)


class VoteAggregate(ValueObject):
    """Derived vote state of a target, optionally from one user's point of view."""

    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)
    user_vote: Optional[VoteType] = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_score(self) -> int:
        """Net score: upvotes minus downvotes."""
        return self.upvotes - self.downvotes

    @classmethod
    def from_tally(
        cls, tally: VoteTally, user_vote: Optional[VoteType] = None
    ) -> "VoteAggregate":
        """Combine a tally with the requesting user's own vote."""
        return cls(
            upvotes=tally.upvotes,
            downvotes=tally.downvotes,
            user_vote=user_vote,
        )
