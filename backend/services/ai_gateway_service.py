import logging
from enum import Enum
from typing import Any, Optional

import httpx

from config.settings import Settings
from core.errors import (
    ApiError,
    ConfigurationError,
    MissingImageInResponse,
    UpstreamPaymentRequired,
    UpstreamRateLimited,
    UpstreamUnclassified,
)

logger = logging.getLogger(__name__)


class GatewayFailure(Enum):
    RATE_LIMITED = "rate_limited"
    PAYMENT_REQUIRED = "payment_required"
    UNCLASSIFIED = "unclassified"


_FAILURE_BY_STATUS = {
    429: GatewayFailure.RATE_LIMITED,
    402: GatewayFailure.PAYMENT_REQUIRED,
}


def classify_gateway_status(status_code: int) -> GatewayFailure:
    """Map a non-success gateway status to its failure kind."""
    return _FAILURE_BY_STATUS.get(status_code, GatewayFailure.UNCLASSIFIED)


def failure_to_error(failure: GatewayFailure, status_code: int) -> ApiError:
    if failure is GatewayFailure.RATE_LIMITED:
        return UpstreamRateLimited()
    if failure is GatewayFailure.PAYMENT_REQUIRED:
        return UpstreamPaymentRequired()
    return UpstreamUnclassified(status_code)


def extract_image_url(data: Any) -> Optional[str]:
    """Pull choices[0].message.images[0].image_url.url out of a completion."""
    try:
        url = data["choices"][0]["message"]["images"][0]["image_url"]["url"]
    except (KeyError, IndexError, TypeError):
        return None
    return url if isinstance(url, str) and url else None


class AIGatewayService:
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = settings.LOVABLE_API_KEY
        self.url = settings.AI_GATEWAY_URL
        self.model = settings.AI_MODEL
        self.timeout = settings.AI_GATEWAY_TIMEOUT
        self._transport = transport

    def build_payload(self, image_data: str, instruction: str) -> dict:
        return {
            "model": self.model,
            "messages": [{
                "role": "user",
                "content": [
                    {
                        "type": "text",
                        "text": instruction
                    },
                    {
                        "type": "image_url",
                        "image_url": {
                            "url": image_data
                        }
                    }
                ]
            }],
            "modalities": ["image", "text"]
        }

    async def edit_image(self, image_data: str, instruction: str) -> str:
        """Send one edit request upstream and return the generated image URL.

        Raises:
            ConfigurationError: LOVABLE_API_KEY is not set
            UpstreamRateLimited, UpstreamPaymentRequired, UpstreamUnclassified:
                the gateway answered with a non-success status or could not be reached
            MissingImageInResponse: the completion carried no image
        """
        if not self.api_key:
            raise ConfigurationError("LOVABLE_API_KEY is not configured")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    self.url,
                    json=self.build_payload(image_data, instruction),
                    headers=headers
                )
        except httpx.TimeoutException as e:
            logger.error("AI gateway request timed out: %s", e)
            raise UpstreamUnclassified("request timed out") from e
        except httpx.HTTPError as e:
            logger.error("AI gateway request failed: %s", e)
            raise UpstreamUnclassified(str(e) or type(e).__name__) from e

        if not response.is_success:
            logger.error("AI gateway error: %s %s", response.status_code, response.text)
            failure = classify_gateway_status(response.status_code)
            raise failure_to_error(failure, response.status_code)

        try:
            data = response.json()
        except ValueError:
            logger.error("AI gateway returned a non-JSON body")
            raise MissingImageInResponse()

        image_url = extract_image_url(data)
        if not image_url:
            raise MissingImageInResponse()

        return image_url
