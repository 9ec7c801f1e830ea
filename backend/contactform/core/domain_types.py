"""Domain Types - value objects shared by the guard, validator and store.

Invariants:
    - ContactSubmission is immutable and carries the fields exactly as received
    - RecordId is only ever produced by the store (system-assigned)
"""

from dataclasses import dataclass
from typing import NewType


RecordId = NewType("RecordId", int)


@dataclass(frozen=True)
class ContactSubmission:
    """A contact form as submitted. No identity until stored."""
    name: str
    email: str
    subject: str
    message: str
