from __future__ import annotations

import contextlib
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from platformdirs import user_data_dir

from idlecore.cipher import SaveCipher, XorSaveCipher
from idlecore.clock import Clock, system_clock
from idlecore.economy import EconomyEngine
from idlecore.errors import PersistenceError
from idlecore.prestige import PrestigeEngine
from idlecore.save_model import CURRENT_VERSION, SaveModel

logger = logging.getLogger(__name__)

APP_NAME = "IdleCore"

Migration = Callable[[SaveModel], SaveModel]


def default_save_dir() -> Path:
    """Platform-specific data directory for the save file."""
    return Path(user_data_dir(appname=APP_NAME, appauthor=False))


def decode_record(data: bytes, cipher: SaveCipher) -> Any:
    """Undo the cipher and parse the JSON record."""
    try:
        plain = cipher.decode(data)
    except Exception as exc:
        raise PersistenceError(f"Could not decode save data: {exc}") from exc
    try:
        return json.loads(plain.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise PersistenceError(f"Corrupt save data: {exc}") from exc


@dataclass
class SaveConfig:
    """Where and how often state is persisted."""

    directory: Path | None = None
    file_name: str = "idle_save.dat"
    autosave_interval: float = 30.0
    current_version: int = CURRENT_VERSION


class SavePersistence:
    """Owns the single save file: snapshot, encode, migrate and restore."""

    def __init__(
        self,
        economy: EconomyEngine,
        prestige: PrestigeEngine,
        clock: Clock = system_clock,
        cipher: SaveCipher | None = None,
        config: SaveConfig | None = None,
    ) -> None:
        self.economy = economy
        self.prestige = prestige
        self.clock = clock
        self.cipher = cipher or XorSaveCipher()
        self.config = config or SaveConfig()
        self.directory = Path(self.config.directory) if self.config.directory else default_save_dir()
        self._migrations: dict[int, Migration] = {}
        self._accumulator = 0.0

    @property
    def save_path(self) -> Path:
        return self.directory / self.config.file_name

    @property
    def current_version(self) -> int:
        return self.config.current_version

    def register_migration(self, version: int, migration: Migration) -> None:
        """Register the step that upgrades a *version* record to *version* + 1."""
        self._migrations[version] = migration

    # ── Autosave cadence ─────────────────────────────────────────────

    def update(self, delta: float) -> bool:
        """Accumulate elapsed time; save once the interval is reached.

        Returns True when a save happened. Time past the threshold is dropped.
        """
        self._accumulator += delta
        if self._accumulator < self.config.autosave_interval:
            return False
        self._accumulator = 0.0
        self.save()
        return True

    # ── Save / load ──────────────────────────────────────────────────

    def build_model(self) -> SaveModel:
        """Snapshot both engines."""
        state = self.economy.state
        return SaveModel(
            version=self.current_version,
            last_save_at=self.clock(),
            currencies=dict(state.balances),
            generators={gid: gs.level for gid, gs in state.generators.items()},
            purchased_upgrades=list(state.purchased_upgrades),
            lifetime_per_generator={
                gid: gs.lifetime_produced for gid, gs in state.generators.items()
            },
            total_lifetime_produced=state.total_lifetime_produced,
            prestige_currency=self.prestige.prestige_currency,
            last_prestige_at=self.prestige.last_prestige_at,
        )

    def encode_model(self, model: SaveModel) -> bytes:
        text = json.dumps(model.to_dict(), sort_keys=True)
        return self.cipher.encode(text.encode("utf-8"))

    def decode_model(self, data: bytes) -> SaveModel:
        return SaveModel.from_dict(decode_record(data, self.cipher))

    def save(self) -> SaveModel:
        model = self.build_model()
        payload = self.encode_model(model)
        tmp_path = self.save_path.with_name(self.save_path.name + ".tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(payload)
            os.replace(tmp_path, self.save_path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            logger.exception("Failed to write save to %s", self.save_path)
            raise PersistenceError(f"Could not write save file: {exc}") from exc
        logger.info("Saved to %s", self.save_path)
        return model

    def load(self) -> SaveModel:
        """Read, migrate and apply the save file.

        With no save file, returns a fresh model and leaves engines untouched.
        """
        if not self.save_path.exists():
            logger.info("No save file at %s", self.save_path)
            return SaveModel(version=self.current_version)

        try:
            data = self.save_path.read_bytes()
        except OSError as exc:
            raise PersistenceError(f"Could not read save file: {exc}") from exc

        model = self.run_migrations(self.decode_model(data))
        self.apply(model)
        logger.info("Loaded save from %s", self.save_path)
        return model

    def load_or_default(self) -> SaveModel:
        """Load, falling back to a fresh state if the save is unusable."""
        try:
            return self.load()
        except PersistenceError:
            logger.exception("Discarding unreadable save at %s", self.save_path)
            self.economy.reset_progress()
            self.prestige.load_state(0.0, self.clock())
            return SaveModel(version=self.current_version, last_save_at=self.clock())

    def apply(self, model: SaveModel) -> None:
        self.economy.load_state(model)
        self.prestige.load_state(model.prestige_currency, model.last_prestige_at)

    def delete(self) -> bool:
        if not self.save_path.exists():
            return False
        self.save_path.unlink()
        return True

    def run_migrations(self, model: SaveModel) -> SaveModel:
        """Step *model* forward one version at a time up to the current one."""
        if model.version > self.current_version:
            raise PersistenceError(
                f"Save version {model.version} is newer than supported {self.current_version}"
            )
        current = model
        while current.version < self.current_version:
            version = current.version
            migration = self._migrations.get(version)
            if migration is not None:
                logger.debug("Migrating save from version %d", version)
                try:
                    current = migration(current)
                except Exception as exc:
                    raise PersistenceError(
                        f"Migration from version {version} failed: {exc}"
                    ) from exc
            current.version = version + 1
        return current
