"""MCP server wrapping the economy engines for interactive AI playtesting."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from mcp.server.fastmcp import FastMCP

from idlecore.clock import ManualClock
from idlecore.definition import ContentCatalog
from idlecore.economy import EconomyEngine
from idlecore.prestige import PrestigeEngine, prestige_multiplier

# Maximum seconds per wait() call (24 hours)
_MAX_WAIT = 86400


@dataclass
class _GameHolder:
    """Holds the catalog and the live engines."""

    catalog: ContentCatalog
    clock: ManualClock
    economy: EconomyEngine
    prestige: PrestigeEngine
    time_elapsed: float = 0.0

    @classmethod
    def fresh(cls, catalog: ContentCatalog) -> _GameHolder:
        clock = ManualClock()
        economy = EconomyEngine(catalog)
        prestige = PrestigeEngine(economy, catalog, clock)
        return cls(catalog=catalog, clock=clock, economy=economy, prestige=prestige)


def _round_map(values: dict[str, float]) -> dict[str, float]:
    return {k: round(v, 2) for k, v in values.items()}


def _balances(holder: _GameHolder) -> dict[str, float]:
    state = holder.economy.state
    return {c.id: round(state.balance(c.id), 2) for c in holder.catalog.currencies}


# ── Tool logic functions (testable without MCP protocol) ────────────


def _tool_get_catalog_info(holder: _GameHolder) -> dict[str, Any]:
    catalog = holder.catalog
    upgrades = []
    for u in catalog.upgrades:
        effect = catalog.upgrade_effect(u.id)
        upgrades.append({
            "id": u.id,
            "name": u.name,
            "price": u.price,
            "effect": {
                "type": effect.type.value,
                "target": effect.target,
                "value": effect.value,
            },
        })
    return {
        "name": catalog.name,
        "currencies": [{"id": c.id, "name": c.name} for c in catalog.currencies],
        "generators": [
            {
                "id": g.id,
                "name": g.name,
                "currency_id": g.currency_id,
                "base_cost": g.base_cost,
                "cost_curve": g.cost_curve.type,
                "base_rate_per_sec": g.base_rate_per_sec,
                "max_level": g.max_level,
            }
            for g in catalog.generators
        ],
        "upgrades": upgrades,
        "offline_cap_hours": catalog.theme.offline_cap_hours,
    }


def _tool_get_economy_state(holder: _GameHolder) -> dict[str, Any]:
    economy = holder.economy
    generators = {}
    for status in economy.generator_statuses():
        generators[status.id] = {
            "name": status.name,
            "level": status.level,
            "production_per_sec": round(status.production_per_sec, 4),
            "next_cost": round(status.next_cost, 2),
            "unlocked": status.unlocked,
            "affordable": status.affordable,
        }
    upgrades = {}
    for udef in holder.catalog.upgrades:
        check = economy.can_purchase_upgrade(udef.id)
        upgrades[udef.id] = {
            "purchased": economy.state.has_upgrade(udef.id),
            "affordable": bool(check),
            "reason": check.message or None,
        }
    return {
        "time_elapsed": round(holder.time_elapsed, 2),
        "balances": _balances(holder),
        "total_production_per_sec": round(economy.total_production_per_sec(), 4),
        "total_lifetime_produced": round(economy.state.total_lifetime_produced, 2),
        "generators": generators,
        "upgrades": upgrades,
        "prestige_currency": holder.prestige.prestige_currency,
        "prestige_multiplier": round(holder.prestige.multiplier, 4),
    }


def _tool_buy_generator(holder: _GameHolder, generator_id: str) -> dict[str, Any]:
    result = holder.economy.try_buy_generator_level(generator_id)
    if not result:
        return {"success": False, "reason": result.message}
    return {
        "success": True,
        "generator_id": generator_id,
        "cost": round(result.cost, 2),
        "new_level": holder.economy.state.level(generator_id),
    }


def _tool_buy_upgrade(holder: _GameHolder, upgrade_id: str) -> dict[str, Any]:
    result = holder.economy.try_buy_upgrade(upgrade_id)
    if not result:
        return {"success": False, "reason": result.message}
    return {
        "success": True,
        "upgrade_id": upgrade_id,
        "cost": round(result.cost, 2),
    }


def _tool_wait(holder: _GameHolder, seconds: float) -> dict[str, Any]:
    if seconds <= 0:
        return {"error": "Seconds must be positive"}
    if seconds > _MAX_WAIT:
        return {"error": f"Cannot wait more than {_MAX_WAIT} seconds (24h) per call"}

    # Subdivide into 1-second ticks
    remaining = seconds
    while remaining > 0:
        dt = min(1.0, remaining)
        holder.economy.tick(dt)
        remaining -= dt
    holder.clock.advance(seconds=seconds)
    holder.time_elapsed += seconds

    return {
        "waited": seconds,
        "time_elapsed": round(holder.time_elapsed, 2),
        "balances": _balances(holder),
        "total_production_per_sec": round(holder.economy.total_production_per_sec(), 4),
    }


def _tool_preview_offline(holder: _GameHolder, hours: float) -> dict[str, Any]:
    if hours < 0:
        return {"error": "Hours must not be negative"}
    now = holder.clock()
    earnings = holder.economy.compute_offline_earnings(
        now - timedelta(hours=hours), now, holder.catalog.theme.offline_cap_hours
    )
    return {
        "hours_credited": round(earnings.hours, 4),
        "currency_earnings": _round_map(earnings.currency_earnings),
        "generator_breakdown": _round_map(earnings.generator_breakdown),
        "total_earned": round(earnings.total_earned, 2),
    }


def _tool_preview_prestige(holder: _GameHolder) -> dict[str, Any]:
    payout = holder.prestige.preview_prestige()
    return {
        "payout": payout,
        "current_prestige_currency": holder.prestige.prestige_currency,
        "multiplier_after": round(
            prestige_multiplier(holder.prestige.prestige_currency + payout), 4
        ),
    }


def _tool_prestige(holder: _GameHolder) -> dict[str, Any]:
    earned = holder.prestige.perform_prestige()
    if earned <= 0:
        return {"success": False, "reason": "Nothing to gain from prestige yet"}
    return {
        "success": True,
        "earned": earned,
        "prestige_currency": holder.prestige.prestige_currency,
        "multiplier": round(holder.prestige.multiplier, 4),
    }


def _tool_new_game(holder: _GameHolder) -> dict[str, Any]:
    fresh = _GameHolder.fresh(holder.catalog)
    holder.clock = fresh.clock
    holder.economy = fresh.economy
    holder.prestige = fresh.prestige
    holder.time_elapsed = 0.0
    return {"success": True, "message": "Game reset to initial state"}


# ── Server factory ──────────────────────────────────────────────────


def create_server(catalog: ContentCatalog) -> FastMCP:
    """Create an MCP server playing the given catalog in memory."""
    holder = _GameHolder.fresh(catalog)

    mcp = FastMCP(
        name=f"IdleCore: {catalog.name or 'catalog'}",
    )

    @mcp.tool()
    def get_catalog_info() -> dict[str, Any]:
        """Get static catalog overview: currencies, generators, upgrades, offline cap."""
        return _tool_get_catalog_info(holder)

    @mcp.tool()
    def get_economy_state() -> dict[str, Any]:
        """Get current balances, generator levels and rates, upgrade availability, prestige."""
        return _tool_get_economy_state(holder)

    @mcp.tool()
    def buy_generator(generator_id: str) -> dict[str, Any]:
        """Buy one level of a generator. Returns success or the refusal reason."""
        return _tool_buy_generator(holder, generator_id)

    @mcp.tool()
    def buy_upgrade(upgrade_id: str) -> dict[str, Any]:
        """Buy a one-time upgrade. Returns success or the refusal reason."""
        return _tool_buy_upgrade(holder, upgrade_id)

    @mcp.tool()
    def wait(seconds: float) -> dict[str, Any]:
        """Advance game time by the given seconds (max 86400). Time is subdivided into 1s ticks."""
        return _tool_wait(holder, seconds)

    @mcp.tool()
    def preview_offline(hours: float) -> dict[str, Any]:
        """Show what an absence of the given hours would earn, without applying it."""
        return _tool_preview_offline(holder, hours)

    @mcp.tool()
    def preview_prestige() -> dict[str, Any]:
        """Show the prestige payout available right now."""
        return _tool_preview_prestige(holder)

    @mcp.tool()
    def prestige() -> dict[str, Any]:
        """Reset the run for prestige currency (no-op when the payout is 0)."""
        return _tool_prestige(holder)

    @mcp.tool()
    def new_game() -> dict[str, Any]:
        """Reset the game to initial state, including prestige."""
        return _tool_new_game(holder)

    return mcp
