from decimal import Decimal

from pydantic import BaseModel, Field

from clients.account_service_client import HeaderBag  # noqa: F401


class TransactionRequest(BaseModel):
    account_number: int = Field(..., gt=0, examples=[121212])
    amount: Decimal = Field(..., examples=["142.12"])


class HealthOut(BaseModel):
    status: str
