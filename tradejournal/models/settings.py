"""UserSettings data model."""

from pydantic import BaseModel, Field


class UserSettings(BaseModel):
    """Account-level settings used by the dashboard views."""

    initial_capital: float = Field(default=10000.0, description="Starting capital")
    monthly_goal: float = Field(default=1000.0, description="Monthly P&L goal")
    risk_per_trade: float = Field(
        default=1.0, ge=0, le=100, description="Risk per trade percentage"
    )

    model_config = {"frozen": True, "allow_inf_nan": False}
