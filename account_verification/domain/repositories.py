from __future__ import annotations
from typing import Any, Dict, Iterable, Optional
from sqlalchemy.orm import Session

from .. import models
from .verification import decode_verification

MEMBER_FIELDS = ("user_id", "username", "email", "verification")


class AccountDirectory:
    """Read-only lookup of member columns by user id."""

    def __init__(self, db: Session):
        self.db = db

    def get_member_data(self, user_id: int, fields: Iterable[str]) -> Optional[Dict[str, Any]]:
        """Return the requested fields for a member, or None if there is no such member.

        The ``verification`` column is decoded here, so callers receive a
        ``VerificationState``, ``VERIFICATION_COMPLETE`` or ``None``. A malformed
        blob raises ``VerificationStateDecodeError``.
        """
        fields = tuple(fields)
        unknown = [f for f in fields if f not in MEMBER_FIELDS]
        if unknown:
            raise ValueError(f"Unknown member field(s): {', '.join(unknown)}")

        columns = [getattr(models.Member, f) for f in fields]
        row = self.db.query(*columns).filter(models.Member.user_id == user_id).first()
        if row is None:
            return None

        data = dict(zip(fields, row))
        if "verification" in data:
            data["verification"] = decode_verification(data["verification"])
        return data
