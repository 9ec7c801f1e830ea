"""Form Enforcement - ordered field checks for a contact submission.

Invariants:
    - validate_submission is PURE: returns an error descriptor, never mutates
      or normalizes the submission (it is stored exactly as received)
    - Rules run in a fixed order and the first failure wins
    - Lengths are counted in codepoints (len on str), not encoded bytes

Design Decisions:
    - Emptiness is checked on the stripped value, length on the raw value
    - subject may be blank; it is only length-capped
"""

import re

from contactform.core.domain_types import ContactSubmission


MAX_NAME_LENGTH: int = 50
MAX_EMAIL_LENGTH: int = 50
MAX_SUBJECT_LENGTH: int = 100
MAX_MESSAGE_LENGTH: int = 500

# local@labels.final-label.tld[.cc]
EMAIL_PATTERN = re.compile(
    r"([\w-]+(?:\.[\w-]+)*)@((?:[\w-]+\.)*\w[\w-]{0,66})\.([a-z]{2,6}(?:\.[a-z]{2})?)",
    re.IGNORECASE,
)


def _error(message: str) -> dict:
    return {
        "status": "error",
        "error_code": "VALIDATION_ERROR",
        "message": message,
    }


def is_valid_email(email: str) -> bool:
    """Match the whole value against EMAIL_PATTERN (case-insensitive)."""
    return EMAIL_PATTERN.fullmatch(email) is not None


def validate_submission(submission: ContactSubmission) -> dict | None:
    """Run every field rule in order. Returns the first failure or None."""
    if not submission.name.strip():
        return _error("Name cannot be empty")
    if not submission.email.strip():
        return _error("Email cannot be empty")
    if not submission.message.strip():
        return _error("Message cannot be empty")

    if len(submission.name) > MAX_NAME_LENGTH:
        return _error(f"Name must be {MAX_NAME_LENGTH} characters or less")
    if len(submission.email) > MAX_EMAIL_LENGTH:
        return _error(f"Email must be {MAX_EMAIL_LENGTH} characters or less")
    if len(submission.subject) > MAX_SUBJECT_LENGTH:
        return _error(f"Subject must be {MAX_SUBJECT_LENGTH} characters or less")
    if len(submission.message) > MAX_MESSAGE_LENGTH:
        return _error(f"Message must be {MAX_MESSAGE_LENGTH} characters or less")

    if not is_valid_email(submission.email):
        return _error("Invalid email format")

    return None
