"""Application Context - the shared, per-process state handed to every request.

Invariants:
    - Built exactly once per app by build_context(); never replaced afterwards
    - settings are read-only; store is the only shared mutable resource and
      guards itself with its writer lock

Design Decisions:
    - Stored on app.state and injected via Depends(get_context) instead of
      module-level globals, so tests can build isolated apps side by side
"""

from dataclasses import dataclass

from contactform.config import Settings
from contactform.infrastructure.contact_store import ContactStore


@dataclass(frozen=True)
class AppContext:
    settings: Settings
    store: ContactStore


def build_context(settings: Settings) -> AppContext:
    return AppContext(
        settings=settings,
        store=ContactStore(settings.database_url),
    )
