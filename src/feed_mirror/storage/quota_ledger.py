"""JSON-file-backed storage quota ledger."""

import json
import logging
from pathlib import Path

from pydantic import TypeAdapter

from schemas.quota import QuotaLedger

from .interfaces import QuotaGate

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY_BYTES = 1024 * 1024 * 1024

_LEDGERS = TypeAdapter(dict[str, QuotaLedger])


class JsonQuotaLedger(QuotaGate):
    """Quota gate backed by a single JSON file of per-account ledgers.

    Accounts without a ledger entry get ``default_capacity`` bytes.
    """

    def __init__(self, path: Path, default_capacity: int = DEFAULT_CAPACITY_BYTES):
        self.path = path
        self.default_capacity = default_capacity
        self._ledgers: dict[str, QuotaLedger] | None = None

    def get_ledger(self, account_id: str) -> QuotaLedger:
        """Return the account's ledger, creating an in-memory default if needed."""
        ledgers = self._load()
        if account_id not in ledgers:
            ledgers[account_id] = QuotaLedger(
                account_id=account_id,
                capacity_bytes=self.default_capacity,
            )
        return ledgers[account_id]

    def would_fit(self, account_id: str, additional_bytes: int) -> bool:
        ledger = self.get_ledger(account_id)
        return ledger.used_bytes + additional_bytes <= ledger.capacity_bytes

    def record_usage(self, account_id: str, delta_bytes: int) -> None:
        ledger = self.get_ledger(account_id)
        ledger.used_bytes = max(ledger.used_bytes + delta_bytes, 0)
        self._flush()
        logger.debug(
            f"Account {account_id} now uses {ledger.used_bytes}/{ledger.capacity_bytes} bytes"
        )

    def set_capacity(self, account_id: str, capacity_bytes: int) -> QuotaLedger:
        """Set an account's capacity. Not used by the download engine."""
        if capacity_bytes < 0:
            raise ValueError("capacity_bytes must not be negative")
        ledger = self.get_ledger(account_id)
        ledger.capacity_bytes = capacity_bytes
        self._flush()
        return ledger

    def _load(self) -> dict[str, QuotaLedger]:
        if self._ledgers is None:
            if self.path.exists():
                self._ledgers = _LEDGERS.validate_python(json.loads(self.path.read_text()))
            else:
                self._ledgers = {}
        return self._ledgers

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(_LEDGERS.dump_json(self._load(), indent=2))
