from __future__ import annotations

import json
import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .generator import BoardGenerator
from .service import CodenamesService
from .state import BASE_NUM_AGENTS
from .store import GameStore, InMemoryGameStore, SQLiteGameStore
from .words import RemoteWordSource, WordListSource, WordSource, default_word_source

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineConfig:
    """Engine wiring: board shape, word source and store."""
    board_size: int = BoardGenerator.TOTAL_CARDS
    base_agents: int = BASE_NUM_AGENTS
    wordlist_path: Optional[str] = None     # defaults to the bundled list
    word_service_url: Optional[str] = None  # takes precedence over wordlist_path
    word_service_timeout_s: float = 10.0
    store_path: Optional[str] = None        # SQLite file; None keeps games in memory
    log_level: str = "INFO"
    seed: Optional[int] = None              # seeds board dealing and starting team


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise ValueError(msg)


def _typed(data: dict, key: str, cast, default):
    value = data.get(key, default)
    try:
        return cast(value)
    except (TypeError, ValueError):
        raise ValueError(f"'{key}' must be a {cast.__name__}, got {value!r}") from None


def load_engine_config(path: str | Path) -> EngineConfig:
    p = Path(path)
    data = json.loads(p.read_text())
    _require(isinstance(data, dict), "Config must be a JSON object")

    known = set(EngineConfig.__dataclass_fields__)
    unknown = sorted(set(data) - known)
    _require(not unknown, f"Unknown config keys: {', '.join(unknown)}")

    cfg = EngineConfig(
        board_size=_typed(data, "board_size", int, BoardGenerator.TOTAL_CARDS),
        base_agents=_typed(data, "base_agents", int, BASE_NUM_AGENTS),
        wordlist_path=data.get("wordlist_path"),
        word_service_url=data.get("word_service_url"),
        word_service_timeout_s=_typed(data, "word_service_timeout_s", float, 10.0),
        store_path=data.get("store_path"),
        log_level=str(data.get("log_level", "INFO")).upper(),
        seed=data.get("seed"),
    )

    _require(cfg.base_agents > 0, "'base_agents' must be positive")
    _require(
        cfg.board_size >= 2 * cfg.base_agents + 2,
        f"'board_size' {cfg.board_size} too small for {cfg.base_agents} agents per team",
    )
    _require(
        cfg.log_level in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
        f"Unknown 'log_level': {cfg.log_level}",
    )
    _require(cfg.seed is None or isinstance(cfg.seed, int), "'seed' must be an integer")
    return cfg


def build_word_source(cfg: EngineConfig, rng: random.Random) -> WordSource:
    if cfg.word_service_url:
        return RemoteWordSource(cfg.word_service_url, timeout_s=cfg.word_service_timeout_s)
    if cfg.wordlist_path:
        return WordListSource.from_file(cfg.wordlist_path, rng=rng)
    return default_word_source(rng=rng)


def build_store(cfg: EngineConfig) -> GameStore:
    if cfg.store_path:
        return SQLiteGameStore(cfg.store_path)
    return InMemoryGameStore()


def build_service(cfg: EngineConfig, store: Optional[GameStore] = None) -> CodenamesService:
    """Wire word source, generator and store into a service."""
    rng = random.Random(cfg.seed)
    generator = BoardGenerator(
        build_word_source(cfg, rng),
        board_size=cfg.board_size,
        base_agents=cfg.base_agents,
        rng=rng,
    )
    logger.debug(
        "Building service: board_size=%d base_agents=%d store=%s",
        cfg.board_size, cfg.base_agents, cfg.store_path or "memory",
    )
    return CodenamesService(store or build_store(cfg), generator, rng=rng)
