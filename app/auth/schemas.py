from pydantic import BaseModel, model_validator
from typing import Optional
from uuid import UUID


class BaseSchema(BaseModel):
    class Config:
        from_attributes = True


class UserBase(BaseSchema):
    name: str
    email: str
    photo_url: Optional[str] = None


class UserCreate(UserBase):
    password: str
    confirm_password: str
    trusted_email: Optional[str] = None
    trusted_phone: Optional[str] = None

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords don't match")
        return self


class UserOut(UserBase):
    id: UUID


class LoginRequest(BaseSchema):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut
