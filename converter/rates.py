# converter/rates.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

import numpy as np
import requests

from converter.api.exchange_rates import ExchangeRateClient

logger = logging.getLogger(__name__)

PENDING = "pending"
READY = "ready"
FAILED = "failed"

# ──────────────────────────────────────────────────────────────────────────────
# Errors
# ──────────────────────────────────────────────────────────────────────────────

class RateFetchError(Exception):
    kind = "unknown"


class NetworkFailure(RateFetchError):
    """The request never produced a usable response (connectivity, non-2xx, timeout)."""
    kind = "network"


class MalformedPayload(RateFetchError):
    """The API answered but the body has no usable rates mapping."""
    kind = "payload"

# ──────────────────────────────────────────────────────────────────────────────
# Data
# ──────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class RateTable:
    """
    Code -> rate against one base currency. Read-only; replaced wholesale on refresh.
    """
    rates: Mapping[str, float]
    base: str = "USD"
    updated_at: str = ""

    def __contains__(self, code: object) -> bool:
        return code in self.rates

    def __getitem__(self, code: str) -> float:
        return self.rates[code]

    def __len__(self) -> int:
        return len(self.rates)

    def get(self, code: str, default: Optional[float] = None) -> Optional[float]:
        return self.rates.get(code, default)

    def keys(self):
        return self.rates.keys()

    def codes(self) -> list[str]:
        return list(self.rates.keys())

    @classmethod
    def from_mapping(cls, rates: Mapping[str, float], base: str = "USD", updated_at: str = "") -> "RateTable":
        return cls(rates=MappingProxyType(dict(rates)), base=base, updated_at=updated_at)


@dataclass(frozen=True)
class FetchState:
    status: str
    table: Optional[RateTable] = None
    reason: str = ""
    kind: str = ""

    @classmethod
    def pending(cls) -> "FetchState":
        return cls(PENDING)

    @classmethod
    def ready(cls, table: RateTable) -> "FetchState":
        return cls(READY, table=table)

    @classmethod
    def failed(cls, reason: str, kind: str = NetworkFailure.kind) -> "FetchState":
        return cls(FAILED, reason=reason, kind=kind)

    @property
    def is_pending(self) -> bool:
        return self.status == PENDING

    @property
    def is_ready(self) -> bool:
        return self.status == READY

    @property
    def is_failed(self) -> bool:
        return self.status == FAILED

# ──────────────────────────────────────────────────────────────────────────────
# Payload parsing
# ──────────────────────────────────────────────────────────────────────────────

def _as_rate(value: Any) -> Optional[float]:
    """Strictly positive finite float, or None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        rate = float(value)
    except OverflowError:
        # JSON integers have no size limit
        return None
    return rate if np.isfinite(rate) and rate > 0 else None


def parse_rates_payload(data: Any) -> RateTable:
    """
    Validate an open.er-api style body:
      {"result": "success", "base_code": "USD", "time_last_update_utc": "...", "rates": {"USD": 1, ...}}
    Entries that are not strictly positive finite numbers are dropped.
    Raises MalformedPayload when no usable mapping is left.
    """
    if not isinstance(data, dict):
        raise MalformedPayload(f"Expected a JSON object, got {type(data).__name__}.")
    if data.get("result") == "error":
        raise MalformedPayload(f"Rates API reported an error: {data.get('error-type', 'unknown')}.")

    raw = data.get("rates")
    if raw is None:
        raise MalformedPayload("Response has no 'rates' field.")
    if not isinstance(raw, dict) or not raw:
        raise MalformedPayload("Response 'rates' field is empty or not a mapping.")

    rates: Dict[str, float] = {}
    dropped = []
    for code, value in raw.items():
        rate = _as_rate(value)
        if not isinstance(code, str) or not code or rate is None:
            dropped.append(code)
            continue
        key = code.upper()
        if key in rates:
            # first entry wins
            logger.warning("Duplicate rate code %r (as %s), keeping the first value", code, key)
            continue
        rates[key] = rate
    if dropped:
        logger.warning("Dropped %d invalid rate entries: %s", len(dropped), dropped[:10])
    if not rates:
        raise MalformedPayload("Response 'rates' has no positive finite values.")

    base = str(data.get("base_code") or data.get("base") or "USD").upper()
    updated_at = str(data.get("time_last_update_utc") or data.get("date") or "")
    return RateTable.from_mapping(rates, base=base, updated_at=updated_at)

# ──────────────────────────────────────────────────────────────────────────────
# Store
# ──────────────────────────────────────────────────────────────────────────────

class RateStore:
    """
    Owns the fetch lifecycle: Pending -> Ready | Failed, once per fetch.
    `refresh()` is the manual way back to Pending.
    """

    def __init__(self, client: Optional[ExchangeRateClient] = None):
        self.client = client or ExchangeRateClient()
        self._state = FetchState.pending()

    @property
    def state(self) -> FetchState:
        return self._state

    @property
    def table(self) -> Optional[RateTable]:
        return self._state.table

    @property
    def is_ready(self) -> bool:
        return self._state.is_ready

    @property
    def base(self) -> str:
        return self.table.base if self.table else ""

    @property
    def updated_at(self) -> str:
        return self.table.updated_at if self.table else ""

    def _load(self) -> RateTable:
        try:
            data = self.client.latest()
        except requests.RequestException as exc:
            raise NetworkFailure(f"Could not reach the rates API: {exc}") from exc
        except ValueError as exc:
            # requests raises a ValueError subclass for undecodable JSON
            raise NetworkFailure(f"Rates API returned a non-JSON body: {exc}") from exc
        return parse_rates_payload(data)

    def fetch_rates(self) -> FetchState:
        if not self._state.is_pending:
            return self._state
        try:
            table = self._load()
        except MalformedPayload as exc:
            logger.error("Malformed rates payload (kind=%s): %s", exc.kind, exc)
            self._state = FetchState.failed(str(exc), kind=exc.kind)
        except NetworkFailure as exc:
            logger.error("Rates fetch failed (kind=%s): %s", exc.kind, exc)
            self._state = FetchState.failed(str(exc), kind=exc.kind)
        else:
            logger.info("Loaded %d rates (base=%s, updated=%s)", len(table), table.base, table.updated_at or "n/a")
            self._state = FetchState.ready(table)
        return self._state

    def refresh(self) -> FetchState:
        self._state = FetchState.pending()
        return self.fetch_rates()
