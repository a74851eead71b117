import asyncio
import json
import logging
from typing import Dict

import aiohttp

from registro_cli.errors import BusinessError, ResponseFormatError, TransportError
from registro_cli.utils import Config, SubmitResult

logger = logging.getLogger(__name__)


def parse_result(body) -> SubmitResult:
    """Map the endpoint's ``{success, id, message}`` body to a result.

    Raises BusinessError when the endpoint reports failure.
    """
    if not isinstance(body, dict):
        raise ResponseFormatError(cause=TypeError(f"Expected a JSON object, got {type(body).__name__}"))
    if body.get("success"):
        return SubmitResult(ok=True, id=str(body.get("id", "")))
    raise BusinessError(str(body.get("message") or "El servidor rechazó el registro."))


class HttpClient:
    def __init__(self, cfg: Config):
        self.cfg = cfg

    async def post_form(self, payload: Dict[str, str]):
        """POST ``payload`` url-encoded and return the decoded JSON body.

        The status code is not checked; the body decides the outcome.
        """
        timeout_obj = aiohttp.ClientTimeout(total=self.cfg.timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout_obj) as session:
                async with session.post(self.cfg.url, data=payload, ssl=self.cfg.verify_tls) as resp:
                    logger.debug("POST %s -> %s", self.cfg.url, resp.status)
                    raw = await resp.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(cause=e) from e

        # UnicodeDecodeError is a ValueError too.
        try:
            return json.loads(raw.decode("utf-8"))
        except ValueError as e:
            raise ResponseFormatError(cause=e) from e

    async def submit(self, payload: Dict[str, str]) -> SubmitResult:
        return parse_result(await self.post_form(payload))
