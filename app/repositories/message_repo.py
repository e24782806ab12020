from datetime import datetime
from typing import Optional
from asyncpg import Connection


class MessageRepository:

    def __init__(self, conn: Connection):
        self.conn = conn

    async def list_all(self) -> list[dict]:
        records = await self.conn.fetch("SELECT * FROM messages;")
        return [dict(record) for record in records]

    async def get_by_id(self, message_id: int) -> Optional[dict]:
        record = await self.conn.fetchrow("SELECT * FROM messages WHERE id = $1;", message_id)
        return dict(record) if record else None

    async def list_by_content(self, content: str) -> list[dict]:
        sql = "SELECT * FROM messages WHERE content = $1 ORDER BY timestamp, id;"
        records = await self.conn.fetch(sql, content)
        return [dict(record) for record in records]

    async def create(self, sender_id: int, receiver_id: int, content: str, timestamp: datetime) -> dict:
        sql = """
            INSERT INTO messages (sender_id, receiver_id, content, timestamp)
            VALUES ($1, $2, $3, $4)
            RETURNING *;
        """
        record = await self.conn.fetchrow(sql, sender_id, receiver_id, content, timestamp)
        return dict(record)
