"""Read-only client for the billing collaborator's flat payment status."""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from ..topology.model import flat_key
from .model import ActiveFlatMap

logger = logging.getLogger(__name__)


def parse_payment_status(payload: Any) -> dict[str, bool]:
    """Accept either ``{"1A3": true, ...}`` or ``[{"block", "flat", "floor", "active"}, ...]``."""
    if isinstance(payload, dict):
        return {str(key): value is True for key, value in payload.items()}

    flags: dict[str, bool] = {}
    for row in payload or []:
        key = flat_key(int(row["block"]), str(row["flat"]).strip().upper(), int(row["floor"]))
        flags[key] = row.get("active") is True
    return flags


class PaymentStatusClient:
    def __init__(self, base_url: Optional[str], *, timeout: float = 10.0, session: Optional[requests.Session] = None):
        self._base_url = (base_url or "").rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    def fetch_active_flats(self) -> ActiveFlatMap:
        """Never raises: any failure gives an unloaded, empty map."""
        if not self._base_url:
            logger.warning("No billing URL configured; treating flat status as unavailable")
            return ActiveFlatMap.unavailable()

        url = f"{self._base_url}/flats/payment-status"
        try:
            response = self._session.get(url, timeout=self._timeout)
            response.raise_for_status()
            flags = parse_payment_status(response.json())
        except requests.exceptions.RequestException as e:
            logger.warning("Billing request failed: GET %s - %s", url, e)
            return ActiveFlatMap.unavailable()
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("Billing response from %s not understood: %s", url, e)
            return ActiveFlatMap.unavailable()

        return ActiveFlatMap(flags=flags, loaded=True)
