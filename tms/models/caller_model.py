# /tms/models/caller_model.py

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    SYSTEM_ADMIN = "SYSTEM_ADMIN"
    HOVEDBRUKER = "HOVEDBRUKER"
    TRAFIKKLARER = "TRAFIKKLARER"
    ELEV = "ELEV"


ADMIN_ROLES = frozenset({UserRole.ADMIN, UserRole.SYSTEM_ADMIN})
BEDRIFT_ROLES = frozenset({UserRole.HOVEDBRUKER, UserRole.TRAFIKKLARER, UserRole.ADMIN})


class CallerContext(BaseModel):
    """
    The already-authenticated caller of a dashboard route. Token verification
    happens upstream; this is what it hands us.
    """
    role: UserRole
    user_id: Optional[int] = None
    bedrift_id: Optional[int] = None
    elev_id: Optional[int] = None

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES
