from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr


class Credentials(BaseModel):
    # both optional so a missing field is reported as 400 by the service, not as a parse error
    email: Optional[EmailStr] = None
    password: Optional[str] = None


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str


class AuthOut(BaseModel):
    token: str
    user: UserOut
