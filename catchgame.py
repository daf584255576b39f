# catchgame.py

import itertools
import json
import logging
import random
import re
from dataclasses import dataclass, field
from enum import Enum
from heapq import heappop, heappush
from pathlib import Path

__all__ = [
    'GameConfig', 'FallingItem', 'ScreenState', 'GameSnapshot',
    'Timers', 'HighScoreStore', 'MemoryStore', 'GameLoop',
    'LEFT', 'RIGHT', 'DEFAULT_SYMBOLS', 'HIGH_SCORE_KEY',
]

logger = logging.getLogger(__name__)

LEFT  = -1
RIGHT = 1

DEFAULT_SYMBOLS = ("🎉", "🎂", "⭐", "🎁", "🍰", "❤️")
HIGH_SCORE_KEY  = "birthdayGameHighScore"


# ——— Settings ———
@dataclass(frozen=True)
class GameConfig:
    """Tunable rules of the catch game. Units are play-area pixels and ms."""

    width: int = 320
    height: int = 500
    basket_width: int = 60
    basket_height: int = 30

    spawn_interval_ms: int = 800
    physics_interval_ms: int = 50
    fall_step: float = 5.0

    catch_y: float = 440.0
    miss_y: float = 500.0
    catch_left: float = 20.0     # slack left of the basket's x
    catch_right: float = 70.0    # basket width plus slack

    basket_step: float = 30.0
    basket_min: float = 0.0
    basket_max: float = 300.0
    basket_start: float = 150.0

    spawn_x_max: float = 280.0
    symbols: tuple = DEFAULT_SYMBOLS
    storage_key: str = HIGH_SCORE_KEY

    def __post_init__(self):
        if self.spawn_interval_ms <= 0 or self.physics_interval_ms <= 0:
            raise ValueError("timer intervals must be > 0")
        if self.fall_step <= 0:
            raise ValueError("fall_step must be > 0")
        if self.catch_y >= self.miss_y:
            raise ValueError("catch_y must be below miss_y")
        if not self.symbols:
            raise ValueError("symbols must not be empty")
        if self.basket_min > self.basket_max:
            raise ValueError("basket_min must not exceed basket_max")
        if not self.basket_min <= self.basket_start <= self.basket_max:
            raise ValueError("basket_start must lie within the basket range")


# ——— State ———
class ScreenState(Enum):
    INSTRUCTIONS = "instructions"
    PLAYING      = "playing"
    GAME_OVER    = "game_over"


@dataclass
class FallingItem:
    id: int
    symbol: str
    x: float
    y: float = 0.0


@dataclass(frozen=True)
class GameSnapshot:
    """Everything a front end needs to draw one frame."""

    items: tuple
    basket_x: float
    score: int
    high_score: int
    screen: ScreenState

    @property
    def playing(self):
        return self.screen is ScreenState.PLAYING


# ——— Timers ———
@dataclass
class _Task:
    task_id: int
    due_ms: float
    interval_ms: float
    callback: object
    cancelled: bool = False


class Timers:
    """
    Recurring callbacks driven by elapsed time fed through advance().
    Due callbacks run in due order, ties in registration order. Once
    cancel_all() is called nothing else runs, even mid-advance.
    """

    def __init__(self):
        self.now_ms   = 0.0
        self._ids     = itertools.count(1)
        self._tasks   = {}
        self._queue   = []
        self._closed  = False

    @property
    def active(self):
        return sum(1 for t in self._tasks.values() if not t.cancelled)

    @property
    def closed(self):
        return self._closed

    def call_every(self, interval_ms, callback):
        """Run callback() every interval_ms. Returns a task id."""
        if interval_ms <= 0:
            raise ValueError("interval_ms must be > 0")
        if self._closed:
            raise RuntimeError("timers already cancelled")
        task_id = next(self._ids)
        task = _Task(task_id, self.now_ms + interval_ms, interval_ms, callback)
        self._tasks[task_id] = task
        heappush(self._queue, (task.due_ms, task_id))
        return task_id

    def cancel(self, task_id):
        task = self._tasks.pop(task_id, None)
        if task is not None:
            task.cancelled = True

    def cancel_all(self):
        for task in self._tasks.values():
            task.cancelled = True
        self._tasks.clear()
        self._queue.clear()
        self._closed = True

    def advance(self, delta_ms):
        """Move the clock forward and run every callback that came due."""
        if delta_ms < 0:
            raise ValueError("delta_ms must be >= 0")
        target = self.now_ms + delta_ms
        ran = 0
        while self._queue and not self._closed and self._queue[0][0] <= target:
            due, task_id = heappop(self._queue)
            task = self._tasks.get(task_id)
            if task is None or task.cancelled:
                continue
            # callbacks observe the time they were due at
            self.now_ms = due
            task.callback()
            ran += 1
            if task.cancelled or self._closed:
                continue
            task.due_ms += task.interval_ms
            heappush(self._queue, (task.due_ms, task_id))
        if not self._closed:
            self.now_ms = target
        return ran


# ——— High score persistence ———
def _parse_score(raw):
    text = str(raw).strip()
    if not re.fullmatch(r"[0-9]+", text):
        return 0
    return int(text)


class HighScoreStore:
    """
    One key in a small JSON file, holding the best score as a base-10
    string. Every failure reads as 0 or is logged and dropped.
    """

    def __init__(self, path, key=HIGH_SCORE_KEY):
        self.path = Path(path).expanduser()
        self.key  = key

    def _read_all(self):
        with open(self.path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object in {self.path}")
        return data

    def load(self):
        try:
            data = self._read_all()
        except FileNotFoundError:
            return 0
        except (OSError, ValueError, RecursionError) as exc:
            logger.warning("Could not read high score from %s: %s", self.path, exc)
            return 0
        return _parse_score(data.get(self.key, 0))

    def save(self, value):
        try:
            data = self._read_all()
        except (OSError, ValueError, RecursionError):
            data = {}
        data[self.key] = str(int(value))
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f)
        except OSError as exc:
            logger.warning("Could not save high score to %s: %s", self.path, exc)


class MemoryStore:
    """In-process store with the HighScoreStore interface."""

    def __init__(self, value=None):
        self.value  = value
        self.writes = 0

    def load(self):
        return _parse_score(self.value) if self.value is not None else 0

    def save(self, value):
        self.value = str(int(value))
        self.writes += 1


# ——— Game loop ———
@dataclass
class _Round:
    items: list = field(default_factory=list)
    score: int = 0


class GameLoop:
    """
    Owns the falling items, basket, score and screen state.
    Timers exist only while PLAYING; advance(ms) drives them.
    """

    def __init__(self, config=None, store=None, rng=None):
        self.config     = config or GameConfig()
        self.store      = store if store is not None else MemoryStore()
        self.rng        = rng or random.Random()
        self.screen     = ScreenState.INSTRUCTIONS
        self.basket_x   = self.config.basket_start
        self.high_score = self.store.load()
        self._round     = _Round()
        self._ids       = itertools.count(1)
        self._timers    = None

    # — read-only views —
    @property
    def items(self):
        return list(self._round.items)

    @property
    def score(self):
        return self._round.score

    @property
    def timers(self):
        return self._timers

    def snapshot(self):
        return GameSnapshot(
            items=tuple(FallingItem(i.id, i.symbol, i.x, i.y) for i in self._round.items),
            basket_x=self.basket_x,
            score=self._round.score,
            high_score=self.high_score,
            screen=self.screen,
        )

    # — commands —
    def start(self):
        """Leave the instructions screen. Ignored anywhere else."""
        if self.screen is not ScreenState.INSTRUCTIONS:
            return False
        self._enter_playing()
        logger.info("Round started")
        return True

    def restart(self):
        """Fresh round: score 0, no items, basket centred."""
        self._stop_timers()
        self._round   = _Round()
        self.basket_x = self.config.basket_start
        if self.screen is ScreenState.INSTRUCTIONS:
            return
        self._enter_playing()
        logger.info("Round restarted")

    def move(self, direction):
        cfg = self.config
        x = self.basket_x + direction * cfg.basket_step
        self.basket_x = min(max(x, cfg.basket_min), cfg.basket_max)
        return self.basket_x

    def move_left(self):
        return self.move(LEFT)

    def move_right(self):
        return self.move(RIGHT)

    def advance(self, delta_ms):
        """Feed elapsed time to the running timers; no-op outside PLAYING."""
        if self._timers is None:
            return 0
        return self._timers.advance(delta_ms)

    def close(self):
        """Tear down timers so nothing fires after the front end is gone."""
        self._stop_timers()

    # — timer callbacks —
    def spawn(self):
        cfg = self.config
        item = FallingItem(
            id=next(self._ids),
            symbol=self.rng.choice(cfg.symbols),
            x=self.rng.random() * cfg.spawn_x_max,
            y=0.0,
        )
        self._round.items.append(item)
        logger.debug("Spawned %s #%d at x=%.1f", item.symbol, item.id, item.x)
        return item

    def physics_tick(self):
        """Drop every item one step, then resolve catches and misses."""
        cfg = self.config
        kept = []
        missed = 0
        for item in self._round.items:
            item.y += cfg.fall_step
            if self.is_caught(item):
                self._catch(item)
            elif item.y >= cfg.miss_y:
                missed += 1
            else:
                kept.append(item)
        self._round.items = kept
        if missed:
            self._end_round()

    def is_caught(self, item):
        cfg = self.config
        return (item.y >= cfg.catch_y
                and self.basket_x - cfg.catch_left <= item.x <= self.basket_x + cfg.catch_right)

    # — internals —
    def _catch(self, item):
        self._round.score += 1
        logger.debug("Caught %s #%d, score %d", item.symbol, item.id, self._round.score)
        self._settle_high_score()

    def _settle_high_score(self):
        if self._round.score <= self.high_score:
            return
        self.high_score = self._round.score
        logger.info("New high score: %d", self.high_score)
        self.store.save(self.high_score)

    def _end_round(self):
        self._stop_timers()
        self.screen = ScreenState.GAME_OVER
        self._settle_high_score()
        logger.info("Game over with score %d (high %d)", self._round.score, self.high_score)

    def _enter_playing(self):
        self._stop_timers()
        self.screen = ScreenState.PLAYING
        timers = Timers()
        timers.call_every(self.config.spawn_interval_ms, self.spawn)
        timers.call_every(self.config.physics_interval_ms, self.physics_tick)
        self._timers = timers

    def _stop_timers(self):
        if self._timers is not None:
            self._timers.cancel_all()
            self._timers = None
