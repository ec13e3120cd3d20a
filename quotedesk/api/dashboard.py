"""
Dashboard API endpoint
"""
from fastapi import APIRouter, Depends

from quotedesk.config import Settings, get_settings
from quotedesk.models.quotation import CurrencyType
from quotedesk.services.exchange_rates import get_latest_exchange_rate
from quotedesk.services.finance import dashboard_stats
from quotedesk.services.lookups import list_vendors
from quotedesk.services.quotations import list_quotations_with_relations
from quotedesk.storage import CollectionStore, get_store

router = APIRouter()


@router.get("/")
async def get_dashboard(
    store: CollectionStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Headline figures: counts, invoiced profit in local currency, approval rate"""
    quotations = await list_quotations_with_relations(store)
    vendors = await list_vendors(store)
    latest = await get_latest_exchange_rate(store)
    return dashboard_stats(quotations, len(vendors), latest, CurrencyType(settings.LOCAL_CURRENCY))
