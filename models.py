from pydantic import BaseModel, ConfigDict, Field, StrictInt
from typing import List, Optional, Dict


class Expense(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    payer: str = Field(..., description="Roster member who paid the expense")
    amount: StrictInt = Field(..., alias="amountMinorUnits", description="Amount paid, in minor currency units")
    participants: Optional[List[str]] = Field(
        None, description="Members sharing the expense; the whole roster when omitted"
    )
    description: Optional[str] = Field(None, description="What the expense was for")
    category: Optional[str] = Field(None, description="Spending category; inferred from the description when omitted")
    date: Optional[str] = Field(None, description="Date of the expense")


class Settlement(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_member: str = Field(..., alias="from")
    to_member: str = Field(..., alias="to")
    amount: int = Field(..., alias="amountMinorUnits")


class SettlementRequest(BaseModel):
    roster: List[str] = Field(..., description="Members of the group, in tie-break order")
    expenses: List[Expense] = Field(default_factory=list)


class SettlementResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    settlements: List[Settlement]
    total: int = Field(..., alias="totalMinorUnits")
    balances: Dict[str, int]


class BalancesResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int = Field(..., alias="totalMinorUnits")
    balances: Dict[str, int]


class MemberSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    member: str
    paid: int = Field(..., alias="paidMinorUnits")
    share: int = Field(..., alias="shareMinorUnits")
    balance: int = Field(..., alias="balanceMinorUnits")


class GroupSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int = Field(..., alias="totalMinorUnits")
    expense_count: int = Field(..., alias="expenseCount")
    average_expense: int = Field(..., alias="averageExpenseMinorUnits")
    members: List[MemberSummary]
    spending_by_category: Dict[str, int] = Field(..., alias="spendingByCategory")


class ErrorResponse(BaseModel):
    error: str
    message: str
    index: Optional[int] = None
    field: Optional[str] = None
