from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from clients.account_service_client import AccountServiceClient
from logging_config import get_logger
from .deps import get_account_service, get_header_bag, get_transaction_request
from .schemas import HeaderBag, TransactionRequest

logger = get_logger("transaction_service.api.transactions")

router = APIRouter(tags=["transactions"])


@router.post("/transactions/{acct_number}")
async def new_transaction(
    tx: TransactionRequest = Depends(get_transaction_request),
    account_service: AccountServiceClient = Depends(get_account_service),
):
    """
    Forward a transaction to the account service. Downstream failures are not
    caught and surface as a 500.
    """
    logger.info("New transaction account=%s amount=%s", tx.account_number, tx.amount)
    await account_service.transact(tx.account_number, tx.amount)
    return Response(status_code=200)


@router.post("/transactions/{acct_number}/headers", response_model=HeaderBag)
async def new_transaction_headers(
    tx: TransactionRequest = Depends(get_transaction_request),
    headers: HeaderBag = Depends(get_header_bag),
    account_service: AccountServiceClient = Depends(get_account_service),
):
    """
    Forward a transaction along with the caller's headers and relay the header
    map the account service returns.
    """
    logger.info("New transaction with headers account=%s amount=%s", tx.account_number, tx.amount)
    logger.info("Http headers: %s", headers)
    headers_from_body = await account_service.transaction_headers(tx.account_number, tx.amount, headers)
    return JSONResponse(status_code=200, content=headers_from_body)
