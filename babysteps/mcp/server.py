"""BabySteps MCP Server - FastMCP implementation for scheduling and budget tools."""

import logging
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from babysteps.sdk import (
    calculate_uc_payment as sdk_calculate_uc_payment,
    estimate_net_monthly as sdk_estimate_net_monthly,
    from_monthly,
    get_default_hours_guess,
    get_uc_settings,
    next_payment_date as sdk_next_payment_date,
    to_monthly as sdk_to_monthly,
)
from babysteps.sdk.income import resolve_hours

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("babysteps")


# --- Tools ---

@mcp.tool()
async def next_payment_date(
    anchor_day: int | None = Field(default=None, description="Day of month (1-31), or weekday 1-7 (Monday=1) for weekly"),
    frequency: str = Field(default="monthly", description="weekly, fortnightly, four_weekly, monthly, quarterly or yearly"),
    reference_date: str | None = Field(default=None, description="Compute from this date (YYYY-MM-DD, default today)"),
    direction: str = Field(default="forward", description="Roll weekends/holidays 'forward' or 'backward'"),
    day_rule: str = Field(default="specific_day", description="specific_day, last_working_day, last_friday or last_thursday"),
) -> dict[str, Any]:
    """Next due date for a recurring payment, before and after weekend/bank holiday adjustment."""
    try:
        result = sdk_next_payment_date(
            anchor_day=anchor_day,
            frequency=frequency,
            reference_date=reference_date,
            direction=direction,
            day_rule=day_rule,
        )
        return {
            **result.to_dict(),
            "moved": result.moved,
            "weekday": result.adjusted.strftime("%A"),
        }

    except Exception as e:
        logger.error(f"Error resolving next payment date: {e}")
        return {"error": str(e)}


@mcp.tool()
async def to_monthly(
    amount: float = Field(description="Amount per period"),
    frequency: str = Field(description="weekly, fortnightly, four_weekly, monthly, quarterly or yearly"),
    reverse: bool = Field(default=False, description="Treat amount as monthly and convert to frequency"),
) -> dict[str, Any]:
    """Convert an amount between a pay/bill frequency and its monthly equivalent."""
    try:
        if reverse:
            return {"amount": from_monthly(amount, frequency), "frequency": frequency}
        return {"monthly": sdk_to_monthly(amount, frequency), "frequency": frequency}

    except Exception as e:
        logger.error(f"Error converting amount: {e}")
        return {"error": str(e)}


@mcp.tool()
async def estimate_net_monthly(
    income_type: str = Field(description="hourly, monthly_net, yearly_gross or uc"),
    amount: float = Field(description="Hourly rate, monthly net or yearly gross, by type"),
    hours_per_week: float | None = Field(default=None, description="Hours per week (hourly only; default from settings)"),
) -> dict[str, Any]:
    """Estimate monthly take-home pay after UK income tax and National Insurance."""
    try:
        hours = resolve_hours(income_type, hours_per_week, get_default_hours_guess())
        return {
            "net_monthly": round(sdk_estimate_net_monthly(income_type, amount, hours), 2),
            "income_type": income_type,
            "hours_per_week": hours,
        }

    except Exception as e:
        logger.error(f"Error estimating net pay: {e}")
        return {"error": str(e)}


@mcp.tool()
async def calculate_uc_payment(
    earnings: list[float] = Field(default_factory=list, description="Net monthly earnings from work, one per job"),
    base: float | None = Field(default=None, description="UC award before taper (default from settings)"),
    paid_by_uc_monthly: float = Field(default=0.0, description="Monthly costs UC pays directly"),
) -> dict[str, Any]:
    """Estimate the monthly Universal Credit payment after the earnings taper."""
    try:
        uc = get_uc_settings()
        award = base if base is not None else uc.base_monthly
        incomes = [{"type": "monthly_net", "net_monthly": amt, "category": "wage"} for amt in earnings]
        payment = sdk_calculate_uc_payment(
            incomes,
            base=award,
            taper_ignore=uc.taper_disregard,
            taper_rate=uc.taper_rate,
            paid_by_uc_monthly=paid_by_uc_monthly,
        )
        return {
            "uc_payment": round(payment, 2),
            "base": award,
            "taper_disregard": uc.taper_disregard,
            "taper_rate": uc.taper_rate,
        }

    except Exception as e:
        logger.error(f"Error calculating UC payment: {e}")
        return {"error": str(e)}


def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
