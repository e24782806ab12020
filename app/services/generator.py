# app/services/generator.py
"""Random identifiers issued with a new card."""

import random
import string

CARD_NUMBER_MIN = 1_000_000_000_000_000
CARD_NUMBER_MAX = 9_999_999_999_999_999
CVV_MIN, CVV_MAX = 100, 999
PIN_MIN, PIN_MAX = 1000, 9999

IBAN_COUNTRY = "CZ"
IBAN_BANK_CODE = "0800"
SWIFT_COUNTRY = "CZ"


class Generator:
    """Card number, CVV, PIN, IBAN, SWIFT and account number factory.

    Values are uniform draws and are not checked against existing cards.
    """

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def card_number(self) -> str:
        return str(self.rng.randint(CARD_NUMBER_MIN, CARD_NUMBER_MAX))

    def cvv(self) -> int:
        return self.rng.randint(CVV_MIN, CVV_MAX)

    def pin(self) -> int:
        return self.rng.randint(PIN_MIN, PIN_MAX)

    def account_number(self) -> str:
        return "".join(self.rng.choice(string.digits) for _ in range(10))

    def iban(self) -> str:
        account = "".join(self.rng.choice(string.digits) for _ in range(16))
        bban = IBAN_BANK_CODE + account
        return f"{IBAN_COUNTRY}{iban_check_digits(IBAN_COUNTRY, bban)}{bban}"

    def swift(self) -> str:
        bank = "".join(self.rng.choice(string.ascii_uppercase) for _ in range(4))
        location = "".join(self.rng.choice(string.ascii_uppercase + string.digits) for _ in range(2))
        return f"{bank}{SWIFT_COUNTRY}{location}XXX"


def _iban_digits(text: str) -> str:
    # A=10 ... Z=35
    return "".join(str(int(ch, 36)) for ch in text)


def iban_check_digits(country: str, bban: str) -> str:
    remainder = int(_iban_digits(bban + country + "00")) % 97
    return f"{98 - remainder:02d}"


def is_valid_iban(iban: str) -> bool:
    rearranged = iban[4:] + iban[:4]
    return int(_iban_digits(rearranged)) % 97 == 1
