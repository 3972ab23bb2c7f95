from typing import Optional

from pydantic import BaseModel, ConfigDict

from domain.enums import UserRole


class CallerContext(BaseModel):
    """Identity and role of the requester, as resolved by the session provider"""

    user_id: str
    role: UserRole
    email: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
