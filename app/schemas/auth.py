from pydantic import BaseModel, EmailStr, Field


class SignupRequest(BaseModel):
    username: str = Field(min_length=1, max_length=150)
    # bcrypt only looks at the first 72 bytes
    password: str = Field(min_length=1, max_length=72)
    email: EmailStr


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class LoginResponse(BaseModel):
    success: bool = True
    role: str
    username: str


class SessionInfo(BaseModel):
    loggedIn: bool
    role: str | None = None
    username: str | None = None
