from __future__ import annotations

from pydantic import BaseModel, Field


class TokenCreateRequest(BaseModel):
    username: str = Field(min_length=1, max_length=320)


class TokenCreateResponse(BaseModel):
    token: str
    issued_at_ms: int
    expires_at_ms: int


class TokenVerifyRequest(BaseModel):
    token: str = Field(max_length=64)
    username: str = Field(min_length=1, max_length=320)


class TokenVerifyResponse(BaseModel):
    valid: bool
