"""Contact Schemas - JSON body of POST /contact and its success response.

Invariants:
    - All four fields must be present as JSON strings; empty strings are
      accepted here and rejected later by the form rules
    - Values are passed through untouched (no stripping at this layer)
    - Every value must be encodable as UTF-8; JSON lone-surrogate escapes
      (e.g. "\\ud800") are rejected here, before they reach the store
"""

from pydantic import BaseModel, ConfigDict, StrictStr, field_validator

from contactform.core.domain_types import ContactSubmission


class ContactFormRequest(BaseModel):
    """Raw contact form body."""
    model_config = ConfigDict(extra="ignore")

    name: StrictStr
    email: StrictStr
    subject: StrictStr
    message: StrictStr

    @field_validator("name", "email", "subject", "message")
    @classmethod
    def require_utf8(cls, v: str) -> str:
        try:
            v.encode("utf-8")
        except UnicodeEncodeError:
            raise ValueError("must be valid UTF-8 text (no lone surrogates)")
        return v

    def to_submission(self) -> ContactSubmission:
        return ContactSubmission(
            name=self.name,
            email=self.email,
            subject=self.subject,
            message=self.message,
        )


class ContactFormResponse(BaseModel):
    message: str = "Contact form submitted successfully"
