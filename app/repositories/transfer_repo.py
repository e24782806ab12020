from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional
from asyncpg import Connection


class TransferRepository:

    def __init__(self, conn: Connection):
        self.conn = conn

    async def get_by_reference_number(self, reference_number: str) -> Optional[dict]:
        sql = "SELECT * FROM transfers WHERE reference_number = $1;"
        record = await self.conn.fetchrow(sql, reference_number)
        return dict(record) if record else None

    async def create(
        self,
        reference_number: str,
        sender_card_id: Optional[int],
        receiver_card_id: Optional[int],
        amount: Decimal,
        currency: str,
        description: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> dict:
        sql = """
            INSERT INTO transfers
            (reference_number, sender_card_id, receiver_card_id, amount, currency, description, created_at)
            VALUES ($1, $2, $3, $4, $5, $6, $7)
            RETURNING *;
        """
        created_at = created_at or datetime.now(timezone.utc)
        record = await self.conn.fetchrow(
            sql, reference_number, sender_card_id, receiver_card_id, amount, currency, description, created_at
        )
        if not record:
            raise RuntimeError("Failed to insert transfer.")
        return dict(record)
