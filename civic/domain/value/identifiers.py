"""Strongly typed identifiers for CivicOS domain entities.

Votes, comments and history rows use database-assigned integer keys so a
comment id can double as a vote target id. User ids come from the external
identity provider and are opaque strings.
"""

from typing import NewType

UserId = NewType("UserId", str)
VoteId = NewType("VoteId", int)
CommentId = NewType("CommentId", int)
CommentEditId = NewType("CommentEditId", int)

# Largest key the 32-bit integer id columns can hold
MAX_ID = 2_147_483_647
