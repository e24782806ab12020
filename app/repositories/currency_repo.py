from decimal import Decimal
from typing import Optional
from asyncpg import Connection


class CurrencyDataRepository:

    def __init__(self, conn: Connection):
        self.conn = conn

    async def list_all(self) -> list[dict]:
        records = await self.conn.fetch("SELECT * FROM currency_data ORDER BY currency;")
        return [dict(record) for record in records]

    async def get_by_currency(self, currency: str) -> Optional[dict]:
        sql = "SELECT * FROM currency_data WHERE currency = $1;"
        record = await self.conn.fetchrow(sql, currency)
        return dict(record) if record else None

    async def replace_all(self, rates: dict[str, Decimal]) -> list[dict]:
        """Drop every stored rate and insert ``rates`` in one transaction."""
        sql = """
            INSERT INTO currency_data (currency, rate, updated_at)
            VALUES ($1, $2, now())
            RETURNING *;
        """
        async with self.conn.transaction():
            await self.conn.execute("DELETE FROM currency_data;")
            rows = []
            for currency, rate in rates.items():
                record = await self.conn.fetchrow(sql, currency, rate)
                rows.append(dict(record))
        return rows
