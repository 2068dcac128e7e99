from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Optional, Union

from .errors import VerificationStateDecodeError


@dataclass(frozen=True)
class VerificationState:
    verified: bool
    code: Optional[str] = None


class _VerificationComplete:
    """Stored as JSON ``null`` once the confirmation path has consumed the code."""

    _instance: Optional["_VerificationComplete"] = None

    def __new__(cls) -> "_VerificationComplete":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "VERIFICATION_COMPLETE"


VERIFICATION_COMPLETE = _VerificationComplete()

DecodedVerification = Union[VerificationState, _VerificationComplete, None]


def decode_verification(blob: Optional[str]) -> DecodedVerification:
    """Decode the stored verification column.

    - ``None`` (SQL NULL): no state was ever recorded, returns ``None``.
    - ``"null"``: verification already completed, returns ``VERIFICATION_COMPLETE``.
    - ``{"verified": ..., "code": ...}``: returns a ``VerificationState``.
    """
    if blob is None:
        return None
    try:
        data = json.loads(blob)
    except (TypeError, ValueError) as e:
        raise VerificationStateDecodeError(f"Verification blob is not valid JSON: {e}") from e

    if data is None:
        return VERIFICATION_COMPLETE
    if not isinstance(data, dict) or not isinstance(data.get("verified"), bool):
        raise VerificationStateDecodeError("Verification blob must be an object with a boolean 'verified'")
    code = data.get("code")
    if code is not None and not isinstance(code, str):
        raise VerificationStateDecodeError("Verification code must be a string or null")
    return VerificationState(verified=data["verified"], code=code)


def encode_verification(state: Union[VerificationState, _VerificationComplete]) -> str:
    if state is VERIFICATION_COMPLETE:
        return "null"
    return json.dumps({"verified": state.verified, "code": state.code})


def is_terminal(state: DecodedVerification) -> bool:
    """True once no further verification email may be sent."""
    return state is VERIFICATION_COMPLETE or (isinstance(state, VerificationState) and state.verified)
