from asyncpg import Connection, UniqueViolationError
from typing import Optional

CARD_COLUMNS = {"balance", "card_type", "status", "recipient_time"}


class CardRepository:
    """Card persistence on top of an asyncpg connection."""

    def __init__(self, conn: Connection):
        self.conn = conn

    def transaction(self):
        return self.conn.transaction()

    # ------------------ Retrieval Methods ------------------ #

    async def get_by_id(self, card_id: int) -> dict | None:
        sql = "SELECT * FROM cards WHERE id = $1;"
        record = await self.conn.fetchrow(sql, card_id)
        return dict(record) if record else None

    async def get_by_number(self, card_number: str) -> dict | None:
        sql = "SELECT * FROM cards WHERE card_number = $1;"
        record = await self.conn.fetchrow(sql, card_number)
        return dict(record) if record else None

    async def list_by_user(self, user_id: int) -> list[dict]:
        sql = "SELECT * FROM cards WHERE user_id = $1 ORDER BY id;"
        records = await self.conn.fetch(sql, user_id)
        return [dict(record) for record in records]

    async def list_all(self) -> list[dict]:
        records = await self.conn.fetch("SELECT * FROM cards ORDER BY id;")
        return [dict(record) for record in records]

    async def list_page(self, limit: int, offset: int, descending: bool = False) -> list[dict]:
        direction = "DESC" if descending else "ASC"
        sql = f"SELECT * FROM cards ORDER BY card_number {direction} LIMIT $1 OFFSET $2;"
        records = await self.conn.fetch(sql, limit, offset)
        return [dict(record) for record in records]

    async def count(self) -> int:
        return await self.conn.fetchval("SELECT count(*) FROM cards;")

    # ------------------ Creation ------------------ #

    async def create_card(self, card_in: dict) -> dict:
        sql = """
            INSERT INTO cards (user_id, card_number, cvv, pin, balance, holder_name, iban, swift,
                               account_number, currency_type, card_type, status, card_expiration_date)
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12, $13)
            RETURNING *;
        """
        try:
            record = await self.conn.fetchrow(
                sql,
                card_in["user_id"],
                card_in["card_number"],
                card_in["cvv"],
                card_in["pin"],
                card_in["balance"],
                card_in["holder_name"],
                card_in["iban"],
                card_in["swift"],
                card_in["account_number"],
                card_in["currency_type"],
                card_in["card_type"],
                card_in["status"],
                card_in["card_expiration_date"],
            )
            return dict(record)
        except UniqueViolationError:
            raise ValueError("Card number already exists")

    # ------------------ Update / Delete ------------------ #

    async def update(self, card_id: int, fields: dict) -> Optional[dict]:
        unknown = set(fields) - CARD_COLUMNS
        if unknown:
            raise ValueError(f"Unknown card columns: {sorted(unknown)}")
        names = list(fields)
        assignments = ", ".join(f"{name} = ${i + 2}" for i, name in enumerate(names))
        sql = f"UPDATE cards SET {assignments} WHERE id = $1 RETURNING *;"
        record = await self.conn.fetchrow(sql, card_id, *(fields[name] for name in names))
        return dict(record) if record else None

    async def lock_by_id(self, card_id: int) -> dict | None:
        sql = "SELECT * FROM cards WHERE id = $1 FOR UPDATE;"
        record = await self.conn.fetchrow(sql, card_id)
        return dict(record) if record else None

    async def delete(self, card_id: int) -> bool:
        deleted = await self.conn.fetchval("DELETE FROM cards WHERE id = $1 RETURNING id;", card_id)
        return deleted is not None
