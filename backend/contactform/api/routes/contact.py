"""Contact Route - POST /contact: guard, validate, store.

Invariants:
    - Stages run in order and stop at the first failure:
      same-site guard -> body schema -> form rules -> insert
    - A rejected submission never reaches the store
    - The response never carries storage detail
"""

import logging

from fastapi import APIRouter, Depends, status

from contactform.api.dependencies import enforce_same_site, get_context
from contactform.context import AppContext
from contactform.core.enforce_form import validate_submission
from contactform.core.errors import from_descriptor
from contactform.schemas.contact import ContactFormRequest, ContactFormResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["contact"])


@router.post(
    "/contact",
    response_model=ContactFormResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(enforce_same_site)],
)
async def submit_contact(
    body: ContactFormRequest, context: AppContext = Depends(get_context),
):
    """Accept one contact form submission."""
    submission = body.to_submission()
    error = validate_submission(submission)
    if error:
        raise from_descriptor(error)

    await context.store.insert(submission)
    return ContactFormResponse()
