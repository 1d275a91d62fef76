"""Provider wire records and session state."""

from oauth_gate.models.identity import (
    EmailList,
    EmailRecord,
    GroupMember,
    SessionState,
    TeamList,
    TeamRecord,
    UserIdentity,
    WireRecord,
)

__all__ = [
    "EmailList",
    "EmailRecord",
    "GroupMember",
    "SessionState",
    "TeamList",
    "TeamRecord",
    "UserIdentity",
    "WireRecord",
]
