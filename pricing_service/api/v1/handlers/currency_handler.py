"""
Currency handlers
"""
from typing import List

from fastapi import APIRouter, Depends

from pricing_service.api.dependencies import get_currency_converter
from pricing_service.models.pricing import CurrencyConversion
from pricing_service.models.requests import CurrencyConversionRequest
from pricing_service.services.currency_converter import CurrencyConverter

router = APIRouter(prefix="/currency", tags=["Currency"])


@router.post("/convert", response_model=CurrencyConversion)
def convert_currency(
    request: CurrencyConversionRequest,
    converter: CurrencyConverter = Depends(get_currency_converter)
) -> CurrencyConversion:
    return converter.convert(request.amount, request.from_currency, request.to_currency)


@router.get("/supported", response_model=List[str])
async def supported_currencies(
    converter: CurrencyConverter = Depends(get_currency_converter)
) -> List[str]:
    return converter.get_supported_currencies()
