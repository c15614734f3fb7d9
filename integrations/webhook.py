"""
Webhook Integration
====================

Pulls the deal list from a user-supplied webhook (any endpoint that
answers a GET with JSON) for the live dashboard.

Accepted response shapes:
- a bare list of deal objects
- an object with the list under "data" or "items"
- a single deal object

Setup:
Set WEBHOOK_URL in .env, or pass a URL per request.
"""

import asyncio
import time
from typing import Any, Dict, List, Optional

import aiohttp

from models.deal_models import Deal
from scripts.lib.config import Settings, load_settings
from scripts.lib.deal_ingest import deals_from_payload
from scripts.lib.errors import (
    APIError,
    APITimeoutError,
    ConfigError,
    DataFetchError,
    SchemaValidationError,
)
from scripts.lib.logger import setup_logger

logger = setup_logger(__name__)


class WebhookIntegration:
    """Async webhook connector with an explicit request timeout."""

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or load_settings()
        self.default_url = settings.webhook_url
        self.timeout = settings.webhook_timeout_seconds

    @property
    def is_configured(self) -> bool:
        return bool(self.default_url)

    def _resolve_url(self, url: Optional[str]) -> str:
        resolved = (url or "").strip() or self.default_url
        if not resolved:
            raise ConfigError("A webhook URL is required", setting="WEBHOOK_URL")
        return resolved

    async def _get_json(self, url: str) -> Any:
        """GET the webhook and decode its JSON body."""
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        start = time.time()
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(url, headers={"Accept": "application/json"}) as resp:
                    logger.info("GET %s — %d in %.2fs", url, resp.status, time.time() - start)
                    if resp.status < 200 or resp.status >= 300:
                        raise APIError(
                            f"Webhook returned HTTP {resp.status}",
                            status_code=resp.status, url=url,
                        )
                    try:
                        return await resp.json(content_type=None)
                    except ValueError:
                        raise SchemaValidationError("Webhook response is not valid JSON")
        except asyncio.TimeoutError:
            logger.error("Webhook timed out after %ss: %s", self.timeout, url)
            raise APITimeoutError(url, self.timeout)
        except aiohttp.ClientError as e:
            logger.error("Webhook request failed: %s %s", url, e)
            raise DataFetchError(f"Could not connect to webhook: {e}", source=url)

    async def fetch_deals(self, url: Optional[str] = None) -> List[Deal]:
        """Fetch, unwrap and validate the deal list.

        Raises ConfigError, APIError, DataFetchError or SchemaValidationError;
        an empty payload is a DataFetchError.
        """
        url = self._resolve_url(url)
        payload = await self._get_json(url)
        deals = deals_from_payload(payload, source=url)
        logger.info("Loaded %d deals from webhook", len(deals))
        return deals

    def get_status(self) -> Dict[str, Any]:
        return {
            "name": "Webhook",
            "configured": self.is_configured,
            "timeout_seconds": self.timeout,
        }
