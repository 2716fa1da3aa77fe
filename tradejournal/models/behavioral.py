"""BehavioralMetrics data model."""

from enum import Enum

from pydantic import BaseModel, Field


class Verdict(str, Enum):
    """Trading fitness recommendation."""

    APTO = "APTO"
    CAUTELA = "CAUTELA"
    NAO_RECOMENDADO = "NAO_RECOMENDADO"


class BehavioralMetrics(BaseModel):
    """Result of a behavioral scoring run over one calendar month."""

    score: float = Field(..., ge=0, le=100, description="Fitness score (0-100)")
    verdict: Verdict = Field(..., description="Categorical verdict")
    win_rate: float = Field(..., ge=0, le=100, description="Win rate percentage")
    profit_factor: float = Field(..., ge=0, description="Gross profit / gross loss")
    consecutive_losses: int = Field(
        ..., ge=0, description="Longest run of losing trades"
    )
    total_trades: int = Field(..., ge=0, description="Trades in the scoring window")
    feedback: list[str] = Field(
        default_factory=list, description="One message per triggered rule"
    )

    model_config = {"frozen": True}
