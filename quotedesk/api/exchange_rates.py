"""
Exchange rate API endpoints
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from quotedesk.models.exchange_rate import ExchangeRate, ExchangeRateCreate
from quotedesk.services import exchange_rates as rate_service
from quotedesk.storage import CollectionStore, get_store

router = APIRouter()


@router.get("/", response_model=List[ExchangeRate])
async def list_exchange_rates(store: CollectionStore = Depends(get_store)):
    """Rate history, newest first"""
    return await rate_service.list_exchange_rates(store)


@router.get("/latest", response_model=Optional[ExchangeRate])
async def get_latest_exchange_rate(store: CollectionStore = Depends(get_store)):
    """Rate with the most recent date, or null when none are recorded"""
    return await rate_service.get_latest_exchange_rate(store)


@router.post("/", response_model=ExchangeRate)
async def create_exchange_rate(
    data: ExchangeRateCreate,
    store: CollectionStore = Depends(get_store),
):
    rate = await rate_service.create_exchange_rate(store, data.rate, data.date)
    if not rate:
        raise HTTPException(status_code=500, detail="Failed to save exchange rate")
    return rate


@router.delete("/{rate_id}")
async def delete_exchange_rate(rate_id: str, store: CollectionStore = Depends(get_store)):
    if not await rate_service.delete_exchange_rate(store, rate_id):
        raise HTTPException(status_code=404, detail="Exchange rate not found")
    return {"message": "Exchange rate deleted"}
