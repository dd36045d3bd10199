"""
Pydantic models for authentication payloads.
"""

from typing import Optional

from pydantic import BaseModel, Field


class TokenClaims(BaseModel):
    """Identity carried by an access token.

    Only the declared fields are accepted at issuance and embedded in
    the token; anything else the client sends is dropped.
    """

    email: str = Field(..., min_length=3, examples=["volunteer@example.com"])
    name: Optional[str] = Field(None, examples=["Jane Volunteer"])

    model_config = {"extra": "ignore"}
