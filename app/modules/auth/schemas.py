from pydantic import BaseModel
from typing import Optional


class AuthenticatedUser(BaseModel):
    id: str
    email: Optional[str] = None
