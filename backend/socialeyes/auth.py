"""Requester identity dependencies.

The caller identifies itself with the ``X-User-Id`` header. Session issuance
lives in front of this API; here we only check that the id names a real user.
"""
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from socialeyes.database import get_db
from socialeyes.models.user import User


def get_optional_user_id(
    db: Session = Depends(get_db),
    x_user_id: Optional[int] = Header(default=None),
) -> Optional[int]:
    """Requester id, or None for anonymous callers and unknown ids."""
    if x_user_id is None:
        return None
    user = db.query(User).filter(User.id == x_user_id).first()
    return user.id if user else None


def get_current_user_id(user_id: Optional[int] = Depends(get_optional_user_id)) -> int:
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"message": "Authentication required", "statusCode": status.HTTP_401_UNAUTHORIZED},
        )
    return user_id
