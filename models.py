from typing import Optional, List, Any
from pydantic import BaseModel


class FundEntry(BaseModel):
    scheme: Optional[str] = None
    category: Optional[str] = None
    allocation_pct: Optional[Any] = None
    why: Optional[str] = None
    nav: Optional[Any] = None
    cagr_1y: Optional[Any] = None
    cagr_3y: Optional[Any] = None
    cagr_5y: Optional[Any] = None
    aum_cr: Optional[Any] = None
    expense: Optional[Any] = None
    riskometer: Optional[Any] = None

    class Config:
        extra = "allow"

class PlanSummary(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    highlights: List[str] = []
    corpus_inr: Optional[Any] = None
    monthly_swp_inr: Optional[Any] = None
    equity_pct: Optional[Any] = None
    stability_pct: Optional[Any] = None
    liquid_pct: Optional[Any] = None
    notes: Optional[str] = None

    class Config:
        extra = "allow"

class Guardrails(BaseModel):
    trim_if_drawdown_gt: Optional[Any] = None
    stepup_pct: Optional[Any] = None

    class Config:
        extra = "allow"

class PlanDocument(BaseModel):
    """Shape of data/plan.json. Documentation only: routes pass the raw dict through."""
    summary: Optional[PlanSummary] = None
    funds: List[FundEntry] = []
    guardrails: Optional[Guardrails] = None
    disclaimer: Optional[str] = None

    class Config:
        extra = "allow"

class AiFinanceRequest(BaseModel):
    query: Optional[Any] = None

    def query_text(self) -> str:
        if self.query is None:
            return ""
        return str(self.query)

class AiFinanceResponse(BaseModel):
    answer: str
    source: str
    goal: Optional[Any] = None
    years: Optional[Any] = None
    assumedReturn: Optional[Any] = None
    sip: Optional[Any] = None
    lump: Optional[Any] = None
    categories: List[Any] = []

class AiFinanceError(BaseModel):
    answer: str
    source: str

class ErrorResponse(BaseModel):
    error: str
