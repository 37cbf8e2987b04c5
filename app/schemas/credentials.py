from pydantic import BaseModel, Field


class CredentialRequest(BaseModel):
    name: str = Field(..., description="Display name")
    username: str = Field(..., description="Username")
    password: str = Field(..., description="Password, stored only as a hash")


class CredentialResponse(BaseModel):
    username: str
    api_key: str = Field(..., description="Generated API key (32 hex characters)")
