"""Trade data model."""

import uuid
from datetime import date as date_type
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TradeDirection(str, Enum):
    """Side of a trade."""

    LONG = "LONG"
    SHORT = "SHORT"


class MarketType(str, Enum):
    """Market the trade was executed in."""

    SPOT = "SPOT"
    FUTURES = "FUTURES"
    OPTIONS = "OPTIONS"


class TradeResult(str, Enum):
    """Outcome classification derived from P&L."""

    WIN = "WIN"
    LOSS = "LOSS"
    BREAKEVEN = "BREAKEVEN"


class Trade(BaseModel):
    """Represents a closed trade logged in the journal."""

    id: str = Field(
        default_factory=lambda: uuid.uuid4().hex, description="Trade identifier"
    )
    date: date_type = Field(..., description="Date the trade closed")
    asset: str = Field(..., min_length=1, description="Ticker symbol")
    direction: TradeDirection = Field(
        default=TradeDirection.LONG, description="Trade direction (LONG/SHORT)"
    )
    market_type: MarketType = Field(
        default=MarketType.SPOT, description="Market type (SPOT/FUTURES/OPTIONS)"
    )
    entry_price: float = Field(default=0.0, ge=0, description="Entry price")
    exit_price: float = Field(default=0.0, ge=0, description="Exit price")
    quantity: float = Field(default=0.0, ge=0, description="Traded quantity")
    invested_value: float = Field(default=0.0, ge=0, description="Capital invested")
    pnl: float = Field(..., description="Realized profit/loss")
    stop_loss: Optional[float] = Field(default=None, ge=0, description="Stop loss price")
    take_profit: Optional[float] = Field(
        default=None, ge=0, description="Take profit price"
    )
    entry_reason: str = Field(default="", description="Why the trade was entered")
    exit_reason: str = Field(default="", description="Why the trade was exited")
    notes: str = Field(default="", description="Free-form notes")
    image_url: Optional[str] = Field(default=None, description="Chart screenshot URL")
    strategy: Optional[str] = Field(default=None, description="Strategy label")

    model_config = {"frozen": True, "allow_inf_nan": False}

    @property
    def result(self) -> TradeResult:
        """Classify the trade by the sign of its P&L."""
        if self.pnl > 0:
            return TradeResult.WIN
        if self.pnl < 0:
            return TradeResult.LOSS
        return TradeResult.BREAKEVEN
