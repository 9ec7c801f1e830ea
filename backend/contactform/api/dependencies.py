"""Request Dependencies - context injection and the same-site guard.

Invariants:
    - get_context returns the AppContext built by create_app (never None)
    - enforce_same_site runs before the request body is parsed, so a
      cross-site request is rejected before any validation or storage work
"""

import logging

from fastapi import Depends, Request

from contactform.context import AppContext
from contactform.core.enforce_origin import check_same_site
from contactform.core.errors import from_descriptor

logger = logging.getLogger(__name__)


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def _raw_headers(request: Request) -> dict[str, bytes]:
    """First value per header name, undecoded."""
    headers: dict[str, bytes] = {}
    for name, value in request.headers.raw:
        headers.setdefault(name.decode("latin-1").lower(), value)
    return headers


async def enforce_same_site(
    request: Request, context: AppContext = Depends(get_context),
) -> None:
    """Reject requests whose Host/Origin/Referer do not name the allowed domain."""
    error = check_same_site(
        _raw_headers(request),
        context.settings.allowed_domain,
        require_origin=context.settings.require_origin_header,
    )
    if error:
        raise from_descriptor(error)
