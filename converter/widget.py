# converter/widget.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from converter import engine

logger = logging.getLogger(__name__)


@dataclass
class ConverterState:
    """
    UI-owned inputs (amount text, source, target) plus the derived result.
    Every mutation recomputes `result`; nothing else caches it.
    """
    amount: str = ""
    source: str = "USD"
    target: str = "PKR"
    result: str = engine.ZERO_DISPLAY

    def recompute(self, table: Optional[Mapping[str, float]]) -> str:
        self.result = engine.convert(self.amount, self.source, self.target, table or {})
        return self.result

    def set_amount(self, raw: str, table: Optional[Mapping[str, float]]) -> bool:
        accepted = engine.sanitize_amount_input(raw)
        if accepted is None:
            logger.debug("Rejected amount input %r, keeping %r", raw, self.amount)
            return False
        self.amount = accepted
        self.recompute(table)
        return True

    def set_source(self, code: str, table: Optional[Mapping[str, float]]) -> str:
        self.source = code
        return self.recompute(table)

    def set_target(self, code: str, table: Optional[Mapping[str, float]]) -> str:
        self.target = code
        return self.recompute(table)

    def swap(self, table: Optional[Mapping[str, float]]) -> str:
        self.source, self.target = engine.swap(self.source, self.target)
        return self.recompute(table)

    def ensure_codes(self, codes: list[str]) -> None:
        """Fall back to the first available code when a default is missing from the table."""
        if not codes:
            return
        if self.source not in codes:
            logger.info("Source %s not offered by the rates API, using %s", self.source, codes[0])
            self.source = codes[0]
        if self.target not in codes:
            fallback = next((c for c in codes if c != self.source), codes[0])
            logger.info("Target %s not offered by the rates API, using %s", self.target, fallback)
            self.target = fallback
