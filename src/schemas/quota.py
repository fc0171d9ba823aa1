"""Storage quota ledger schema."""

from pydantic import BaseModel


class QuotaLedger(BaseModel):
    """Storage capacity and usage for one account.

    Attributes:
        account_id: Account identifier
        capacity_bytes: Maximum bytes the account may store
        used_bytes: Bytes currently recorded as used
    """

    account_id: str
    capacity_bytes: int
    used_bytes: int = 0

    @property
    def remaining_bytes(self) -> int:
        return max(self.capacity_bytes - self.used_bytes, 0)
