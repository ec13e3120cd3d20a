"""
Exchange rates (local currency per USD)
"""
import datetime as dt
from typing import List, Optional

from quotedesk.models.exchange_rate import ExchangeRate
from quotedesk.repository import Repository
from quotedesk.storage import Collection, CollectionStore


def _repo(store: CollectionStore) -> Repository[ExchangeRate]:
    return Repository(store, Collection.EXCHANGE_RATES, ExchangeRate)


async def list_exchange_rates(store: CollectionStore) -> List[ExchangeRate]:
    """All rates, newest date first"""
    return sorted(await _repo(store).all(), key=lambda r: r.date, reverse=True)


def latest_rate(rates: List[ExchangeRate]) -> Optional[ExchangeRate]:
    """Rate with the greatest date; the first stored wins a tie"""
    latest = None
    for rate in rates:
        if latest is None or rate.date > latest.date:
            latest = rate
    return latest


async def get_latest_exchange_rate(store: CollectionStore) -> Optional[ExchangeRate]:
    return latest_rate(await _repo(store).all())


async def create_exchange_rate(
    store: CollectionStore, rate: float, date: dt.date
) -> Optional[ExchangeRate]:
    return await _repo(store).add(ExchangeRate(rate=rate, date=date))


async def delete_exchange_rate(store: CollectionStore, rate_id: str) -> bool:
    return await _repo(store).remove(rate_id)
