from fastapi import APIRouter, Depends

from services.quote_service import QuoteService, get_quote_service

router = APIRouter(prefix="/motivation", tags=["Motivation"])


@router.get("")
async def motivation(quotes: QuoteService = Depends(get_quote_service)):
    return await quotes.random_quote()
