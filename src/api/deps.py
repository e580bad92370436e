import json
from decimal import Decimal, InvalidOperation

from fastapi import HTTPException, Path, Request

from clients.account_service_client import AccountServiceClient
from logging_config import get_logger
from .schemas import HeaderBag, TransactionRequest

logger = get_logger("transaction_service.api.deps")


def get_account_service(request: Request) -> AccountServiceClient:
    """
    The account service client created by the app lifespan.
    """
    return request.app.state.account_service


def _parse_amount(raw: bytes) -> Decimal:
    text = raw.decode("utf-8", errors="strict").strip()
    if not text:
        raise ValueError("empty body")
    value = json.loads(text, parse_float=Decimal, parse_int=Decimal)
    # A quoted amount ("142.12") is accepted as well as a bare number
    if isinstance(value, str):
        value = Decimal(value.strip())
    if not isinstance(value, Decimal) or not value.is_finite():
        raise ValueError(f"not a decimal amount: {text[:50]}")
    return value


async def read_amount(request: Request) -> Decimal:
    """
    Parse the request body as an arbitrary-precision decimal amount.
    """
    raw = await request.body()
    try:
        return _parse_amount(raw)
    except (ValueError, InvalidOperation, UnicodeDecodeError) as e:
        logger.warning("Rejected amount body %r: %s", raw[:50], e)
        raise HTTPException(status_code=400, detail="Request body must be a decimal amount")


async def get_transaction_request(
    request: Request,
    acct_number: int = Path(..., gt=0),
) -> TransactionRequest:
    amount = await read_amount(request)
    return TransactionRequest(account_number=acct_number, amount=amount)


def get_header_bag(request: Request) -> HeaderBag:
    """
    Inbound headers as name -> ordered values, keeping repeated headers.
    """
    bag: HeaderBag = {}
    for name, value in request.headers.items():
        bag.setdefault(name, []).append(value)
    return bag
