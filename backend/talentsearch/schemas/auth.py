from typing import Literal

from pydantic import BaseModel

Role = Literal["applicant", "employer", "admin"]


class CurrentUser(BaseModel):
    user_id: str
    role: Role
