"""Contact Schemas — submission payload and response envelope.

Invariants:
    - message and turnstileToken: strict, non-empty strings
    - name and contact: optional strict strings (required by the service when
      contact_require_identity is enabled)
    - Unknown fields ignored

Design Decisions:
    - StrictStr: a numeric or boolean "message" is a missing field, not coerced text
    - Sanitization is NOT a validator here: empty-after-sanitize is its own error
      (EmptyMessage), distinct from a missing field
"""

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class ContactSubmission(BaseModel):
    """Raw contact-form submission as decoded from JSON."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    message: StrictStr = Field(min_length=1)
    turnstile_token: StrictStr = Field(min_length=1, alias="turnstileToken")
    name: StrictStr | None = None
    contact: StrictStr | None = None

    def missing_identity(self) -> list[str]:
        """Identity fields that are absent or empty."""
        return [f for f in ("name", "contact") if not getattr(self, f)]


class ContactResponse(BaseModel):
    """Response envelope — error present only when ok is False."""
    ok: bool
    error: str | None = None
