"""
Affirm API Client

HTTP client for the Affirm v2 REST API. Requests are authenticated with
HTTP basic auth using the merchant's public and private API keys.
"""

import logging
from typing import Optional, Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from ..core.config import Settings
from ..errors import GatewayError
from ..models.checkout import Charge, ChargeEvent, CheckoutRecord

logger = logging.getLogger(__name__)


class AffirmClient:
    """
    Client for the Affirm checkout and charges APIs.

    Usage:
        client = AffirmClient.from_settings(settings)

        details = await client.get_checkout(checkout_token)
        charge = await client.authorize(checkout)
        await client.capture(charge.id)
    """

    def __init__(
        self,
        base_url: str,
        public_api_key: str,
        private_api_key: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Affirm client.

        Args:
            base_url: Affirm API base URL, including the /api/v2 prefix
            public_api_key: Merchant public API key
            private_api_key: Merchant private API key
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used to stub Affirm in tests
        """
        self.base_url = base_url.rstrip("/")
        self._http_client = httpx.AsyncClient(
            auth=(public_api_key, private_api_key),
            timeout=timeout,
            transport=transport,
        )

        if not (public_api_key and private_api_key):
            logger.warning("Affirm API keys not configured - requests will be rejected")

    @classmethod
    def from_settings(cls, settings: Settings) -> "AffirmClient":
        """Create client from application settings"""
        return cls(
            base_url=settings.get_affirm_base_url(),
            public_api_key=settings.affirm_public_api_key,
            private_api_key=settings.affirm_private_api_key,
            timeout=settings.affirm_timeout,
        )

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
    ) -> dict[str, Any]:
        """Make an HTTP request to Affirm"""
        url = f"{self.base_url}{path}"

        try:
            response = await self._http_client.request(
                method=method,
                url=url,
                headers={"Accept": "application/json"},
                json=body,
            )
        except httpx.HTTPError as e:
            logger.error(f"Affirm request failed: {method} {url} - {e}")
            raise GatewayError(f"Affirm request failed: {e}") from e

        if response.status_code >= 400:
            logger.error(f"Request failed: {response.status_code} - {response.text}")
            raise GatewayError(
                self._error_message(response),
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise GatewayError(
                f"Affirm returned a non-JSON response for {method} {path}",
                status_code=response.status_code,
            ) from e

        if not isinstance(data, dict):
            raise GatewayError(f"Unexpected Affirm response for {method} {path}")

        return data

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Extract Affirm's error message from a failed response"""
        try:
            message = response.json().get("message")
        except (ValueError, AttributeError):
            message = None
        return message or f"Affirm responded with HTTP {response.status_code}"

    @staticmethod
    def _parse(model, data: dict[str, Any], what: str):
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            raise GatewayError(f"Unexpected {what} response from Affirm: {e}") from e

    # ==================== Checkout APIs ====================

    async def get_checkout(self, checkout_token: str) -> dict[str, Any]:
        """Get the checkout details a customer confirmed with Affirm"""
        return await self._request("GET", f"/checkout/{checkout_token}")

    # ==================== Charge APIs ====================

    async def authorize(self, checkout: CheckoutRecord) -> Charge:
        """
        Authorize a charge for a checkout.

        The authorized amount must match the checkout amount.
        """
        data = await self._request(
            "POST",
            "/charges/",
            body={"checkout_token": checkout.token},
        )
        charge = self._parse(Charge, data, "charge")

        if charge.amount != checkout.amount:
            logger.error(
                f"Charge {charge.id} authorized {charge.amount} cents, "
                f"checkout {checkout.token} expects {checkout.amount}"
            )
            raise GatewayError(
                f"Auth amount {charge.amount} does not match checkout amount {checkout.amount}"
            )

        logger.info(f"Authorized Affirm charge {charge.id} for {charge.amount} cents")
        return charge

    async def capture(self, charge_id: str) -> ChargeEvent:
        """Capture an authorized charge"""
        data = await self._request("POST", f"/charges/{charge_id}/capture")
        return self._parse(ChargeEvent, data, "capture")

    async def void(self, charge_id: str) -> ChargeEvent:
        """Void an authorized, uncaptured charge"""
        data = await self._request("POST", f"/charges/{charge_id}/void")
        return self._parse(ChargeEvent, data, "void")

    async def refund(self, charge_id: str, amount_cents: int) -> ChargeEvent:
        """Refund part or all of a captured charge"""
        data = await self._request(
            "POST",
            f"/charges/{charge_id}/refund",
            body={"amount": amount_cents},
        )
        return self._parse(ChargeEvent, data, "refund")
