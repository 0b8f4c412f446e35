"""Bank-specific credit card minimum payment rules"""

import math
from dataclasses import dataclass
from typing import List, Optional

# Regulatory floor rates, keyed by credit limit (TL)
LIMIT_TIER1_MAX = 15_000
LIMIT_TIER2_MAX = 20_000
RATE_TIER1 = 0.30
RATE_TIER2 = 0.35
RATE_TIER3 = 0.40
DEFAULT_MINIMUM_AMOUNT = 100  # TL


@dataclass(frozen=True)
class SpecialRate:
    """Lower rate a bank advertises for cards at or above a credit limit"""

    limit: float
    percentage: float


@dataclass(frozen=True)
class BankInfo:
    name: str
    default_rate: float
    special: Optional[SpecialRate]
    minimum_amount: float


TURKISH_BANKS: List[BankInfo] = [
    # Private banks
    BankInfo("Akbank", 0.25, SpecialRate(50_000, 0.20), 50),
    BankInfo("Garanti BBVA", 0.25, SpecialRate(50_000, 0.20), 50),
    BankInfo("İş Bankası", 0.25, SpecialRate(40_000, 0.20), 50),
    BankInfo("Yapı Kredi", 0.25, SpecialRate(50_000, 0.20), 50),
    BankInfo("QNB Finansbank", 0.25, SpecialRate(50_000, 0.20), 50),
    BankInfo("DenizBank", 0.25, SpecialRate(40_000, 0.20), 50),
    BankInfo("TEB", 0.25, SpecialRate(40_000, 0.20), 75),
    BankInfo("ING", 0.25, SpecialRate(40_000, 0.20), 50),
    BankInfo("HSBC", 0.25, SpecialRate(50_000, 0.20), 100),
    BankInfo("Odeabank", 0.25, SpecialRate(40_000, 0.20), 50),
    BankInfo("Alternatif Bank", 0.25, SpecialRate(40_000, 0.20), 50),
    BankInfo("Burgan Bank", 0.25, SpecialRate(40_000, 0.20), 50),
    BankInfo("Fibabanka", 0.25, SpecialRate(40_000, 0.20), 50),
    BankInfo("Şekerbank", 0.25, SpecialRate(30_000, 0.20), 40),
    BankInfo("Anadolubank", 0.25, SpecialRate(30_000, 0.20), 40),
    BankInfo("ICBC Turkey", 0.25, SpecialRate(40_000, 0.20), 50),
    BankInfo("Citibank", 0.25, SpecialRate(50_000, 0.20), 100),
    # Public banks
    BankInfo("Ziraat Bankası", 0.20, SpecialRate(50_000, 0.15), 30),
    BankInfo("Halkbank", 0.20, SpecialRate(50_000, 0.15), 30),
    BankInfo("VakıfBank", 0.20, SpecialRate(50_000, 0.15), 30),
    # Participation banks
    BankInfo("Kuveyt Türk", 0.20, SpecialRate(40_000, 0.15), 30),
    BankInfo("Albaraka Türk", 0.20, SpecialRate(30_000, 0.15), 25),
    BankInfo("Türkiye Finans", 0.20, SpecialRate(40_000, 0.15), 30),
    BankInfo("Emlak Katılım", 0.20, SpecialRate(30_000, 0.15), 25),
    BankInfo("Vakıf Katılım", 0.20, SpecialRate(40_000, 0.15), 30),
    BankInfo("Ziraat Katılım", 0.20, SpecialRate(40_000, 0.15), 30),
]

_BANKS_BY_NAME = {bank.name: bank for bank in TURKISH_BANKS}


def find_bank(bank_name: Optional[str]) -> Optional[BankInfo]:
    return _BANKS_BY_NAME.get(bank_name) if bank_name else None


def floor_rate_by_limit(credit_limit: Optional[float]) -> float:
    """
    Legal minimum payment rate for a credit limit.

    Unknown or non-positive limits use the lowest tier rate.
    """
    limit = credit_limit or 0
    if limit <= 0 or limit <= LIMIT_TIER1_MAX:
        return RATE_TIER1
    if limit <= LIMIT_TIER2_MAX:
        return RATE_TIER2
    return RATE_TIER3


def calculate_minimum_payment(
    bank_name: Optional[str],
    credit_limit: Optional[float],
    current_debt: Optional[float],
) -> int:
    """
    Minimum statement payment for a card.

    Rules:
    - No debt → 0
    - Start from the floor rate for the credit limit
    - A bank's default rate applies only when it is above the floor
    - A bank's special rate (limit ≥ threshold) never drops below the floor
    - Result is at least the bank's minimum amount (100 TL for unknown banks)

    Example:
        Akbank, 10.000 TL limit, 5.000 TL debt → 30% → 1500
    """
    if not current_debt or current_debt <= 0:
        return 0

    floor_rate = floor_rate_by_limit(credit_limit)
    bank = find_bank(bank_name)

    rate = floor_rate
    minimum_amount = bank.minimum_amount if bank else DEFAULT_MINIMUM_AMOUNT

    if bank and bank.default_rate > rate:
        rate = bank.default_rate

    if bank and bank.special and credit_limit and credit_limit >= bank.special.limit:
        rate = max(floor_rate, min(rate, bank.special.percentage))

    # Halves round up
    return int(max(minimum_amount, math.floor(current_debt * rate + 0.5)))
