from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1, max_length=128)


class AlertOut(BaseModel):
    timestamp: str
    message: str
    level: str
    client_id: str | None = None
    metadata: dict = Field(default_factory=dict)


class LoginResponse(BaseModel):
    success: bool
    token: str
    user_id: str
    client_id: str
    alert: AlertOut


class LogoutResponse(BaseModel):
    success: bool
    alert: AlertOut


class SessionResponse(BaseModel):
    client_id: str
    claims: dict
