from typing import Optional
from asyncpg import Connection, UniqueViolationError

USER_COLUMNS = {
    "user_role", "status", "visibility", "name", "surname", "date_of_birth",
    "country_of_origin", "email", "hashed_password", "avatar", "phone_number",
}


class UserRepository:

    def __init__(self, conn: Connection):
        self.conn = conn

    async def get_by_id(self, user_id: int) -> Optional[dict]:
        sql = "SELECT * FROM users WHERE id = $1;"
        record = await self.conn.fetchrow(sql, user_id)
        return dict(record) if record else None

    async def get_by_email(self, email: str) -> Optional[dict]:
        sql = "SELECT * FROM users WHERE lower(email) = lower($1);"
        record = await self.conn.fetchrow(sql, email)
        return dict(record) if record else None

    async def list_all(self) -> list[dict]:
        records = await self.conn.fetch("SELECT * FROM users ORDER BY id;")
        return [dict(record) for record in records]

    async def list_page(self, limit: int, offset: int, descending: bool = False) -> list[dict]:
        direction = "DESC" if descending else "ASC"
        sql = f"SELECT * FROM users ORDER BY name {direction}, id {direction} LIMIT $1 OFFSET $2;"
        records = await self.conn.fetch(sql, limit, offset)
        return [dict(record) for record in records]

    async def count(self) -> int:
        return await self.conn.fetchval("SELECT count(*) FROM users;")

    async def create(self, user_in: dict) -> dict:
        sql = """
            INSERT INTO users (user_role, status, visibility, name, surname, date_of_birth,
                               country_of_origin, email, hashed_password, avatar, phone_number)
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11)
            RETURNING *;
        """
        try:
            record = await self.conn.fetchrow(
                sql,
                user_in["user_role"],
                user_in["status"],
                user_in["visibility"],
                user_in["name"],
                user_in["surname"],
                user_in["date_of_birth"],
                user_in["country_of_origin"],
                user_in["email"],
                user_in["hashed_password"],
                user_in["avatar"],
                user_in["phone_number"],
            )
        except UniqueViolationError:
            raise ValueError("Email already exists")
        return dict(record)

    async def update(self, user_id: int, fields: dict) -> Optional[dict]:
        unknown = set(fields) - USER_COLUMNS
        if unknown:
            raise ValueError(f"Unknown user columns: {sorted(unknown)}")
        names = list(fields)
        assignments = ", ".join(f"{name} = ${i + 2}" for i, name in enumerate(names))
        sql = f"UPDATE users SET {assignments} WHERE id = $1 RETURNING *;"
        try:
            record = await self.conn.fetchrow(sql, user_id, *(fields[name] for name in names))
        except UniqueViolationError:
            raise ValueError("Email already exists")
        return dict(record) if record else None

    async def delete(self, user_id: int) -> bool:
        deleted = await self.conn.fetchval("DELETE FROM users WHERE id = $1 RETURNING id;", user_id)
        return deleted is not None
