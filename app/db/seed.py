# app/db/seed.py
import asyncio
import random
import uuid
from datetime import datetime, timezone, timedelta
from decimal import Decimal
from faker import Faker
from tqdm import tqdm

from app.core.config import settings
from app.core.security import hash_password
from app.db.models.card_model import Currency, CardType, CardStatus
from app.db.models.user_model import UserRole, UserStatus, UserVisibility
from app.db.session import connect_db_pool, get_pool, close_db_pool
from app.repositories.card_repo import CardRepository
from app.repositories.message_repo import MessageRepository
from app.repositories.transfer_repo import TransferRepository
from app.repositories.user_repo import UserRepository
from app.services.card_service import add_years
from app.services.generator import Generator

fake = Faker()

NUM_USERS = 50
MIN_CARDS_PER_USER = 1
MAX_CARDS_PER_USER = 3
NUM_MESSAGES = 2000
NUM_TRANSFERS = 300
SEED_PASSWORD = "Bank12345"


def random_datetime_within_last_n_months(months: int = 6) -> datetime:
    now = datetime.now(tz=timezone.utc)
    start = now - timedelta(days=30 * months)
    delta_seconds = int((now - start).total_seconds())
    rand_seconds = random.randint(0, max(0, delta_seconds))
    return start + timedelta(seconds=rand_seconds)


def fake_user(hashed_password: str, role: UserRole = UserRole.ROLE_USER) -> dict:
    return {
        "user_role": role.value,
        "status": UserStatus.STATUS_DEFAULT.value,
        "visibility": UserVisibility.STATUS_OFFLINE.value,
        "name": fake.first_name()[:10],
        "surname": fake.last_name()[:15],
        "date_of_birth": fake.date_of_birth(minimum_age=18, maximum_age=80),
        "country_of_origin": fake.country()[:60],
        "email": fake.unique.email(),
        "hashed_password": hashed_password,
        "avatar": settings.DEFAULT_AVATAR_URL,
        "phone_number": f"+420{random.randint(100000000, 999999999)}",
    }


async def seed():
    await connect_db_pool()
    pool = await get_pool()
    if pool is None:
        raise RuntimeError("Database pool could not be initialized")

    generator = Generator()
    hashed_password = hash_password(SEED_PASSWORD)

    async with pool.acquire() as conn:
        user_repo = UserRepository(conn)
        card_repo = CardRepository(conn)
        message_repo = MessageRepository(conn)
        transfer_repo = TransferRepository(conn)

        user_ids = []
        cards = []
        for i in tqdm(range(NUM_USERS), desc="Creating users"):
            role = UserRole.ROLE_ADMIN if i == 0 else UserRole.ROLE_USER
            user = await user_repo.create(fake_user(hashed_password, role))
            user_ids.append(user["id"])

            for _ in range(random.randint(MIN_CARDS_PER_USER, MAX_CARDS_PER_USER)):
                card = await card_repo.create_card({
                    "user_id": user["id"],
                    "card_number": generator.card_number(),
                    "cvv": generator.cvv(),
                    "pin": generator.pin(),
                    "balance": Decimal(random.randint(0, 50_000)),
                    "holder_name": f"{user['name']} {user['surname']}",
                    "iban": generator.iban(),
                    "swift": generator.swift(),
                    "account_number": generator.account_number(),
                    "currency_type": random.choice(list(Currency)).value,
                    "card_type": random.choice(list(CardType)).value,
                    "status": CardStatus.STATUS_CARD_DEFAULT.value,
                    "card_expiration_date": add_years(fake.date_between("-4y", "today"), 5),
                })
                cards.append(card)

        for _ in tqdm(range(NUM_MESSAGES), desc="Creating messages"):
            sender, receiver = random.sample(user_ids, 2)
            await message_repo.create(
                sender, receiver, fake.sentence(nb_words=8)[:100], random_datetime_within_last_n_months(6)
            )

        for _ in tqdm(range(NUM_TRANSFERS), desc="Creating transfers"):
            sender_card, receiver_card = random.sample(cards, 2)
            await transfer_repo.create(
                reference_number=uuid.uuid4().hex[:20].upper(),
                sender_card_id=sender_card["id"],
                receiver_card_id=receiver_card["id"],
                amount=Decimal(random.randint(100, 500_000)) / 100,
                currency=sender_card["currency_type"],
                description=fake.sentence(nb_words=5)[:255],
                created_at=random_datetime_within_last_n_months(6),
            )

    await close_db_pool()


if __name__ == "__main__":
    asyncio.run(seed())
