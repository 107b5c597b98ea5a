"""Request/response schemas for the reading endpoint."""

from pydantic import BaseModel, ConfigDict


class UserSubmission(BaseModel):
    """Biodata plus public palm image URLs, built once per request."""

    model_config = ConfigDict(frozen=True)

    name: str
    dob: str
    tob: str
    pob: str
    gender: str
    palmLeft: str
    palmRight: str


class ReadingResponse(BaseModel):
    result: str


class ErrorResponse(BaseModel):
    error: str
