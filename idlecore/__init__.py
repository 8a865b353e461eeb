# idlecore: data-driven idle economy core (production, upgrades, prestige, saves)

from idlecore.errors import IdleCoreError, ConfigurationError, PersistenceError
from idlecore.clock import Clock, ManualClock, system_clock
from idlecore.events import Event
from idlecore.cost_scaling import CostScaling
from idlecore.effect import EffectType, Effect
from idlecore.currency import CurrencyDef
from idlecore.generator import (
    CostCurveDef,
    UnlockRequirementDef,
    GeneratorDef,
    GeneratorState,
    GeneratorStatus,
)
from idlecore.upgrade import (
    UpgradeConditionDef,
    UpgradeEffectDef,
    UpgradeDef,
    AchievementDef,
)
from idlecore.definition import ContentCatalog, ThemeDef, PrestigeFormulaDef
from idlecore.requirement import Requirement, Req
from idlecore.state import EconomyState
from idlecore.pipeline import ModifierIndex
from idlecore.purchase import PurchaseFailure, PurchaseResult
from idlecore.offline import OfflineEarnings
from idlecore.economy import EconomyEngine
from idlecore.prestige import PrestigeEngine
from idlecore.save_model import SaveModel, CURRENT_VERSION
from idlecore.cipher import SaveCipher, XorSaveCipher, PlainSaveCipher
from idlecore.persistence import SaveConfig, SavePersistence
from idlecore.content import catalog_from_dict, load_skin
from idlecore.ticker import FixedStepTicker
from idlecore.session import GameSession
from idlecore.strategy import Strategy, GreedyCheapest
from idlecore.formatting import format_number, format_offline_report

__all__ = [
    # Errors
    "IdleCoreError",
    "ConfigurationError",
    "PersistenceError",
    # Time / events
    "Clock",
    "ManualClock",
    "system_clock",
    "Event",
    # Cost
    "CostScaling",
    # Effects
    "EffectType",
    "Effect",
    # Data model
    "CurrencyDef",
    "CostCurveDef",
    "UnlockRequirementDef",
    "GeneratorDef",
    "GeneratorState",
    "GeneratorStatus",
    "UpgradeConditionDef",
    "UpgradeEffectDef",
    "UpgradeDef",
    "AchievementDef",
    # Catalog
    "ContentCatalog",
    "ThemeDef",
    "PrestigeFormulaDef",
    "catalog_from_dict",
    "load_skin",
    # Requirements
    "Requirement",
    "Req",
    # State
    "EconomyState",
    "ModifierIndex",
    # Engines
    "PurchaseFailure",
    "PurchaseResult",
    "OfflineEarnings",
    "EconomyEngine",
    "PrestigeEngine",
    # Persistence
    "SaveModel",
    "CURRENT_VERSION",
    "SaveCipher",
    "XorSaveCipher",
    "PlainSaveCipher",
    "SaveConfig",
    "SavePersistence",
    # Runtime
    "FixedStepTicker",
    "GameSession",
    "Strategy",
    "GreedyCheapest",
    # Formatting
    "format_number",
    "format_offline_report",
]
