from __future__ import annotations

from pydantic import BaseModel, Field


class _ReportOutputSchema(BaseModel):
    """Internal Pydantic schema for structured LLM output (service report)."""

    email_body: str = Field(
        ..., description="Full service report email, plain text with Markdown bold headers"
    )
    sms_body: str = Field(
        ..., description="Customer SMS notification, under 160 characters"
    )
