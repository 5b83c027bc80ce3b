from datetime import datetime

from pydantic import BaseModel, Field


class AskRequest(BaseModel):
    """Question about the caller's uploaded documents."""

    question: str = Field(default="", description="Question to answer from the documents")


class AskResponse(BaseModel):
    """Answer generated from the caller's documents."""

    answer: str = Field(..., description="Answer text")


class HealthCheck(BaseModel):
    """Health check response model."""

    status: str = Field(default="healthy", description="Service status")
    timestamp: datetime = Field(default_factory=datetime.now, description="Check timestamp")
    version: str = Field(..., description="API version")
