from pydantic import BaseModel


class LogoutResponse(BaseModel):
    """Schema for logout response"""
    message: str = "Successfully logged out"


class RefreshResponse(BaseModel):
    message: str = "Refresh successful"
