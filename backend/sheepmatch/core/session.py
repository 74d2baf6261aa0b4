"""Game session: slot/match state machine over a level's tile set."""
import logging
import time
from collections import deque
from enum import Enum
from functools import partial
from typing import Any, Callable, Deque, Dict, List, Optional, Set

from ..config import get_settings
from ..models.level import Tile, TileStatus, GameState
from .exceptions import AssetFetchError
from .generator import LevelGenerator, get_generator
from .resolver import is_clickable, clickable_ids
from .timers import DeferredQueue

logger = logging.getLogger(__name__)


class Cue(str, Enum):
    """Notifications for audio/video collaborators."""
    CLICK = "click"
    MATCH = "match"
    WIN = "win"
    LOSS = "loss"
    WARNING = "warning"


CueListener = Callable[[Cue], None]

MATCH_SIZE = 3


def _count_types(tiles: List[Tile]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for tile in tiles:
        counts[tile.type] = counts.get(tile.type, 0) + 1
    return counts


def has_pending_match(slot_tiles: List[Tile]) -> bool:
    """Check whether any type already has three tiles among ``slot_tiles``."""
    return any(count >= MATCH_SIZE for count in _count_types(slot_tiles).values())


def find_match(tiles: List[Tile]) -> Optional[List[Tile]]:
    """
    Pick the next three slot tiles to clear.

    The first type (in collection order) with at least three slot-status
    tiles wins; of that type, the three earliest-added tiles are chosen, ties
    broken by collection order.

    Args:
        tiles: Full tile collection.

    Returns:
        The three tiles to match, or None if no type has three in the slot.
    """
    in_slot = [(i, t) for i, t in enumerate(tiles) if t.status == TileStatus.SLOT]
    counts = _count_types([t for _, t in in_slot])

    matched_type = next((tile_type for tile_type, count in counts.items() if count >= MATCH_SIZE), None)
    if matched_type is None:
        return None

    of_type = [(i, t) for i, t in in_slot if t.type == matched_type]
    of_type.sort(key=lambda pair: (pair[1].added_at or 0, pair[0]))
    return [t for _, t in of_type[:MATCH_SIZE]]


class GameSession:
    """Owns one player's tile collection and applies events to it.

    Every external event (level start, click, timer) goes through a method
    here and runs to completion. After each mutation the session re-derives
    matches, win/loss and the last-slot warning.
    """

    RECENT_CUE_LIMIT = 32

    def __init__(
        self,
        session_id: str = "local",
        slot_capacity: Optional[int] = None,
        clear_delay_ms: Optional[int] = None,
        muted: bool = False,
        generator: Optional[LevelGenerator] = None,
        backdrop_client: Optional[Any] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        settings = get_settings()
        self.session_id = session_id
        self.slot_capacity = slot_capacity if slot_capacity is not None else settings.slot_capacity
        self.clear_delay_ms = clear_delay_ms if clear_delay_ms is not None else settings.match_clear_delay_ms
        self.muted = muted

        self._generator = generator or get_generator()
        if backdrop_client is None:
            from ..clients.backdrop import get_backdrop_client
            backdrop_client = get_backdrop_client()
        self._backdrop_client = backdrop_client
        self._clock = clock
        self._timers = DeferredQueue(clock)
        self._listeners: List[CueListener] = []
        self._warning_active = False

        self.level = 1
        self.epoch = 0
        self.state = GameState.START
        self.tiles: List[Tile] = []
        self.backdrop_url: Optional[str] = None
        self.recent_cues: Deque[Cue] = deque(maxlen=self.RECENT_CUE_LIMIT)

    # ----- Level lifecycle -----

    async def start_level(self, level: int) -> None:
        """
        Start (or restart) a level.

        The backdrop lookup is awaited first; its failure is logged and the
        level starts without one. If another level start happened while
        waiting, this one is abandoned.

        Args:
            level: Level number to start.
        """
        self.epoch += 1
        epoch = self.epoch
        self.level = level
        self.state = GameState.LOADING
        self.tiles = []
        self._warning_active = False

        backdrop_url = None
        try:
            backdrop_url = await self._backdrop_client.get_level_backdrop(level)
        except AssetFetchError as e:
            logger.warning(f"Backdrop unavailable for level {level}: {e}")

        if epoch != self.epoch:
            logger.debug(f"Level {level} start superseded (epoch {epoch} -> {self.epoch})")
            return

        self.backdrop_url = backdrop_url
        self.tiles = self._generator.generate(level)
        self.state = GameState.PLAYING
        logger.info(f"Session {self.session_id}: level {level} started with {len(self.tiles)} tiles")
        self._settle()

    async def start_game(self) -> None:
        await self.start_level(1)

    async def restart_level(self) -> None:
        await self.start_level(self.level)

    async def next_level(self) -> None:
        await self.start_level(self.level + 1)

    def load_tiles(self, tiles: List[Tile], level: Optional[int] = None) -> None:
        """Start playing a caller-supplied tile set instead of a generated one."""
        self.epoch += 1
        if level is not None:
            self.level = level
        self.tiles = list(tiles)
        self.backdrop_url = None
        self.state = GameState.PLAYING
        self._warning_active = False
        self._settle()

    # ----- Events -----

    def click(self, tile_id: str) -> bool:
        """
        Move a tile from the board into the slot.

        Reads the live collection, so a tile already taken or blocked by the
        time the click is processed is refused.

        Args:
            tile_id: Id of the clicked tile.

        Returns:
            True if the tile moved into the slot.
        """
        if self.state != GameState.PLAYING:
            return False

        tile = self.get_tile(tile_id)
        if tile is None or tile.status != TileStatus.BOARD:
            return False

        if not is_clickable(tile, self.tiles):
            return False

        if len(self.tiles_with(TileStatus.SLOT)) >= self.slot_capacity:
            return False

        tile.status = TileStatus.SLOT
        tile.added_at = self._clock()
        self._emit(Cue.CLICK)
        self._settle()
        return True

    def tick(self, now: Optional[float] = None) -> int:
        """Fire due timers. Returns how many ran."""
        return self._timers.run_due(self.epoch, now)

    def set_muted(self, muted: bool) -> None:
        """Turn cues on or off. Unmuting replays an active last-slot warning."""
        was_muted = self.muted
        self.muted = muted
        if was_muted and not muted:
            self._warning_active = False
            self._update_warning()

    def add_listener(self, listener: CueListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: CueListener) -> None:
        self._listeners.remove(listener)

    @property
    def pending_timers(self) -> int:
        return self._timers.pending

    # ----- Derived state -----

    def get_tile(self, tile_id: str) -> Optional[Tile]:
        for tile in self.tiles:
            if tile.id == tile_id:
                return tile
        return None

    def tiles_with(self, status: TileStatus) -> List[Tile]:
        return [t for t in self.tiles if t.status == status]

    @property
    def is_last_slot_warning(self) -> bool:
        """One free slot left, nothing matching and no 3-of-a-kind pending."""
        if self.state != GameState.PLAYING:
            return False

        active_in_slot = self.tiles_with(TileStatus.SLOT)
        if len(active_in_slot) != self.slot_capacity - 1:
            return False

        if any(t.status == TileStatus.MATCHING for t in self.tiles):
            return False

        return not has_pending_match(active_in_slot)

    def slot_view(self) -> List[Tile]:
        """Slot and matching tiles ordered by type, then by time added."""
        in_slot = [t for t in self.tiles if t.status in (TileStatus.SLOT, TileStatus.MATCHING)]
        return sorted(in_slot, key=lambda t: (t.type, t.added_at or 0))

    def progress(self) -> Dict[str, Any]:
        total = len(self.tiles)
        cleared = len(self.tiles_with(TileStatus.CLEARED))
        return {
            "total": total,
            "cleared": cleared,
            "remaining": len(self.tiles_with(TileStatus.BOARD)),
            "percent": (cleared / total) * 100 if total > 0 else 0.0,
        }

    def snapshot(self) -> Dict[str, Any]:
        """Everything the presentation layer needs to draw the session."""
        clickable = clickable_ids(self.tiles)
        tiles = []
        for tile in self.tiles:
            data = tile.to_dict()
            data["clickable"] = tile.id in clickable
            tiles.append(data)

        return {
            "session_id": self.session_id,
            "level": self.level,
            "epoch": self.epoch,
            "state": self.state.value,
            "muted": self.muted,
            "backdrop_url": self.backdrop_url,
            "slot_capacity": self.slot_capacity,
            "tiles": tiles,
            "slot": [t.to_dict() for t in self.slot_view()],
            "progress": self.progress(),
            "is_last_slot_warning": self.is_last_slot_warning,
            "recent_cues": [cue.value for cue in self.recent_cues],
        }

    # ----- Internals -----

    def _settle(self) -> None:
        """Re-derive matches, terminal state and warning after a mutation."""
        if self.state == GameState.PLAYING:
            self._resolve_matches()
            self._check_terminal()
        self._update_warning()

    def _resolve_matches(self) -> None:
        while True:
            matched = find_match(self.tiles)
            if matched is None:
                return

            # All three flip together so a partial update never re-triggers
            for tile in matched:
                tile.status = TileStatus.MATCHING

            ids = {t.id for t in matched}
            logger.debug(f"Session {self.session_id}: matched {matched[0].type} {sorted(ids)}")
            self._emit(Cue.MATCH)
            self._timers.call_later(self.clear_delay_ms / 1000.0, self.epoch, partial(self._clear_matched, ids))

    def _clear_matched(self, ids: Set[str]) -> None:
        for tile in self.tiles:
            if tile.id in ids:
                tile.status = TileStatus.CLEARED
        self._settle()

    def _check_terminal(self) -> None:
        slot_tiles = self.tiles_with(TileStatus.SLOT)
        remaining_on_board = len(self.tiles_with(TileStatus.BOARD))
        matching = len(self.tiles_with(TileStatus.MATCHING))

        if self.tiles and remaining_on_board == 0 and not slot_tiles and matching == 0:
            self.state = GameState.WON
            logger.info(f"Session {self.session_id}: level {self.level} won")
            self._emit(Cue.WIN)
            return

        if len(slot_tiles) == self.slot_capacity and not has_pending_match(slot_tiles):
            self.state = GameState.LOST
            logger.info(f"Session {self.session_id}: level {self.level} lost")
            self._emit(Cue.LOSS)

    def _update_warning(self) -> None:
        warning = self.is_last_slot_warning
        if warning and not self._warning_active:
            self._emit(Cue.WARNING)
        self._warning_active = warning

    def _emit(self, cue: Cue) -> None:
        if self.muted:
            return

        self.recent_cues.append(cue)
        for listener in list(self._listeners):
            try:
                listener(cue)
            except Exception:
                logger.exception(f"Cue listener failed on {cue.value}")
