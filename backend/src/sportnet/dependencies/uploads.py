"""
Upload Dependencies
Multipart parsing bounded by UPLOAD_TIMEOUT_SECONDS
"""

import asyncio
import logging
from typing import Optional

from fastapi import Request
from starlette.datastructures import FormData

from sportnet.config import settings
from sportnet.exceptions import UploadTimeoutError

logger = logging.getLogger(__name__)


async def read_form(request: Request, timeout: Optional[float] = None) -> FormData:
    """
    Parse the multipart body of a request

    Raises:
        UploadTimeoutError: the body did not arrive and parse within the timeout
    """

    async def _parse() -> FormData:
        return await request.form()

    try:
        return await asyncio.wait_for(_parse(), timeout=timeout or settings.UPLOAD_TIMEOUT_SECONDS)
    except asyncio.TimeoutError:
        logger.warning(f"Multipart parse timed out: {request.method} {request.url.path}")
        raise UploadTimeoutError()


async def upload_form(request: Request):
    """Parsed multipart form, closed once the request is handled"""
    form = await read_form(request)
    try:
        yield form
    finally:
        await form.close()
