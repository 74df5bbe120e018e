"""Seeded sample-data generator producing a valid transaction log.

Used to populate an empty store for demos and as a fixture in tests. The same seed and reference day always produce the same log.
"""

from collections.abc import Callable
from datetime import datetime, timedelta
from decimal import Decimal

from bankdash.core.models import Transaction, TransactionCategory, TransactionType

MODULUS = 2147483647
MULTIPLIER = 16807
DEFAULT_SEED = 123456
SALARY_AMOUNT = Decimal("5000")
ACTIVITY_THRESHOLD = 0.7

SAMPLE_CATEGORIES = [
    TransactionCategory.SALARY,
    TransactionCategory.SHOPPING,
    TransactionCategory.FOOD,
    TransactionCategory.TRANSPORT,
    TransactionCategory.ENTERTAINMENT,
    TransactionCategory.UTILITIES,
]

DESCRIPTIONS = {
    TransactionCategory.SALARY: ["Monthly Salary", "Bonus Payment"],
    TransactionCategory.SHOPPING: ["Amazon Purchase", "Walmart Shopping", "Target"],
    TransactionCategory.FOOD: ["Grocery Store", "Restaurant", "Coffee Shop"],
    TransactionCategory.TRANSPORT: ["Gas Station", "Public Transport", "Uber Ride"],
    TransactionCategory.ENTERTAINMENT: ["Cinema", "Concert Tickets", "Netflix Subscription"],
    TransactionCategory.UTILITIES: ["Electricity Bill", "Water Bill", "Internet Bill"],
}


def seeded_random(seed: int) -> Callable[[], float]:
    """Park-Miller minimal standard generator returning floats in [0, 1)."""
    state = seed

    def next_value() -> float:
        nonlocal state
        state = (state * MULTIPLIER) % MODULUS
        return (state - 1) / (MODULUS - 1)

    return next_value


def _pick(rand: Callable[[], float], options: list) -> object:
    return options[int(rand() * len(options))]


def generate_sample_transactions(now: datetime, days: int = 90, seed: int = DEFAULT_SEED) -> list[Transaction]:
    """Generate `days` days of activity ending on `now`'s day, oldest first.

    A salary deposit lands on the 1st of every month; other days see a random purchase (or an extra
    salary-category deposit) roughly 30% of the time.
    """
    rand = seeded_random(seed)
    start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    transactions: list[Transaction] = []

    for offset in range(days):
        day = start - timedelta(days=offset)
        millis = int(day.timestamp() * 1000)
        if day.day == 1:
            transactions.append(
                Transaction(
                    id=f"salary-{millis}",
                    amount=SALARY_AMOUNT,
                    type=TransactionType.DEPOSIT,
                    category=TransactionCategory.SALARY,
                    description=DESCRIPTIONS[TransactionCategory.SALARY][0],
                    timestamp=day,
                )
            )
        if rand() > ACTIVITY_THRESHOLD:
            category = _pick(rand, SAMPLE_CATEGORIES)
            is_deposit = category is TransactionCategory.SALARY
            amount = int(rand() * 1000) + 500 if is_deposit else int(rand() * 200) + 20
            transactions.append(
                Transaction(
                    id=f"tx-{millis}-{int(rand() * 1000)}",
                    amount=Decimal(amount),
                    type=TransactionType.DEPOSIT if is_deposit else TransactionType.WITHDRAWAL,
                    category=category,
                    description=_pick(rand, DESCRIPTIONS[category]),
                    timestamp=day,
                )
            )

    transactions.sort(key=lambda tx: tx.timestamp)
    return transactions
