from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, StringConstraints

from app.schemas.base_schema import ResponseSchema

# Passwords are taken exactly as typed, so no whitespace stripping here
Password = Annotated[str, StringConstraints(min_length=1, max_length=128)]


class CredentialsSchema(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: Password


class SignupSchema(CredentialsSchema):
    pass


class LoginSchema(CredentialsSchema):
    pass


class UserInfo(ResponseSchema):
    email: str


class SignupResponse(ResponseSchema):
    message: str


class LoginResponse(ResponseSchema):
    message: str
    user: UserInfo
