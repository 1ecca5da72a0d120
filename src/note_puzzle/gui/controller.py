"""
Module: gui.controller

Purpose:
    Qt-side owner of one note's play state. Wraps the session engine in a
    QObject so widgets can drive it with method calls and follow it through
    signals, and schedules the delayed return to the lobby after a win.

Key Classes:
    - GameController: Document, active session, selection and render cache

Signals:
    - difficulty_changed(str): Lobby difficulty changed (enum value)
    - session_started(int, str): Group index and session id
    - fragment_selected(object) / selection_cleared(): Pool selection
    - fragment_placed(int, object) / fragment_removed(int, object)
    - group_restored(int): Win; the lobby return follows after win_delay_ms
    - returned_to_lobby(): Session closed

Dependencies:
    - PySide6: QObject, Signal, QTimer
    - note_puzzle.session: Generation, placement, evaluation, view model
    - note_puzzle.rendering: Renderer and render cache
    - note_puzzle.core.utils: Game-state snapshots
    - note_puzzle.parsing: from_text()

Used By:
    - Host views embedding the puzzle
"""

from __future__ import annotations

import logging
import random
from typing import Any, Dict, List, Optional, Union

from PySide6.QtCore import QObject, QTimer, Signal

from note_puzzle.core.models import Difficulty, Document, Fragment, Group, PuzzleSession
from note_puzzle.core.utils import GameState, StateError, deserialize_game_state, serialize_game_state
from note_puzzle.parsing import parse_document
from note_puzzle.rendering import FragmentRenderer, MarkdownFragmentRenderer, RenderCache
from note_puzzle.session import (
    DocumentRow,
    LobbyCard,
    PlacementResult,
    RowKind,
    SessionConfig,
    SessionError,
    check_win_condition,
    document_rows,
    generate_session,
    lobby_cards,
    place_fragment,
    unplace_fragment,
    visible_pool,
)

from .config import GameConfig

logger = logging.getLogger(__name__)


class GameController(QObject):
    """
    Controller for one puzzle view.

    Exclusively owns the Document, at most one active PuzzleSession, the
    selected pool fragment and the render cache. Every mutation goes
    through this object on the Qt event loop.

    Example:
        >>> controller = GameController.from_text(text, "note", "note.md")
        >>> session = controller.start_session(0)
        >>> controller.select_fragment(controller.pool()[0])
        True
        >>> controller.place_selected(session.empty_indices[0])
        <PlacementResult.OK: 'ok'>
    """

    difficulty_changed = Signal(str)
    session_started = Signal(int, str)
    fragment_selected = Signal(object)
    selection_cleared = Signal()
    fragment_placed = Signal(int, object)
    fragment_removed = Signal(int, object)
    group_restored = Signal(int)
    returned_to_lobby = Signal()

    def __init__(
        self,
        document: Document,
        config: Optional[GameConfig] = None,
        renderer: Optional[FragmentRenderer] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.config = config or GameConfig()
        self._document = document
        self._difficulty = self.config.default_difficulty
        self._session: Optional[PuzzleSession] = None
        self._selected: Optional[Fragment] = None
        self._rng = random.Random(self.config.seed)

        self.renderer: FragmentRenderer = renderer or MarkdownFragmentRenderer()
        self.render_cache = RenderCache(max_entries=self.config.render_cache_size)

        # Single-shot lobby return, armed on a win
        self._win_timer = QTimer(self)
        self._win_timer.setSingleShot(True)
        self._win_timer.setInterval(self.config.win_delay_ms)
        self._win_timer.timeout.connect(self._on_win_timeout)
        self._armed_session_id: Optional[str] = None

    @classmethod
    def from_text(
        cls,
        text: str,
        file_name: str = "",
        file_path: str = "",
        config: Optional[GameConfig] = None,
        parent: Optional[QObject] = None,
    ) -> GameController:
        """Parse note text and build a controller for it."""
        config = config or GameConfig()
        document = parse_document(text, file_name, file_path, rng=random.Random(config.seed))
        return cls(document, config, parent=parent)

    # ─────────────────────────────────────────────────────────────────────────
    # State Access
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def document(self) -> Document:
        return self._document

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def session(self) -> Optional[PuzzleSession]:
        return self._session

    @property
    def selected(self) -> Optional[Fragment]:
        return self._selected

    @property
    def active_group(self) -> Optional[Group]:
        if self._session is None:
            return None
        return self._document.groups[self._session.group_index]

    @property
    def in_lobby(self) -> bool:
        return self._session is None

    @property
    def win_pending(self) -> bool:
        """True while the delayed lobby return is armed."""
        return self._win_timer.isActive()

    def lobby(self) -> List[LobbyCard]:
        return lobby_cards(self._document)

    def pool(self) -> List[Fragment]:
        """Visible pool of the active session (empty in the lobby)."""
        if self._session is None:
            return []
        return visible_pool(self._session)

    def rows(self) -> List[DocumentRow]:
        """Document rows of the active group (empty in the lobby)."""
        group = self.active_group
        if group is None:
            return []
        return document_rows(self._session, group)

    # ─────────────────────────────────────────────────────────────────────────
    # Lobby
    # ─────────────────────────────────────────────────────────────────────────

    def set_difficulty(self, difficulty: Union[Difficulty, str]) -> None:
        """
        Select the difficulty for the next session.

        Raises:
            ValueError: If a string does not name a difficulty
        """
        difficulty = Difficulty(difficulty)
        if difficulty is self._difficulty:
            return
        self._difficulty = difficulty
        logger.debug(f"Difficulty set to {difficulty.label}")
        self.difficulty_changed.emit(difficulty.value)

    def start_session(self, group_index: int) -> Optional[PuzzleSession]:
        """
        Start a session for a group, replacing any active one.

        Restored or unknown groups are refused with a warning. A group with
        no playable fragment is solved on the spot.

        Returns:
            The new session, or None if the group cannot be played
        """
        try:
            session = generate_session(
                self._document,
                group_index,
                SessionConfig(difficulty=self._difficulty),
                rng=self._rng,
            )
        except SessionError as e:
            logger.warning(f"Cannot start session: {e}")
            return None

        self._cancel_win_timer()
        self._session = session
        self._set_selection(None)
        self.session_started.emit(group_index, session.session_id)
        self._check_win()
        return session

    def back_to_lobby(self) -> None:
        """Close the active session. Progress on an unwon group is discarded."""
        self._cancel_win_timer()
        had_session = self._session is not None
        self._session = None
        self._set_selection(None)
        if had_session:
            logger.debug("Returned to lobby")
        self.returned_to_lobby.emit()

    # ─────────────────────────────────────────────────────────────────────────
    # Play
    # ─────────────────────────────────────────────────────────────────────────

    def select_fragment(self, fragment: Fragment) -> bool:
        """
        Toggle the selection of a pool fragment.

        Selecting the fragment that is already selected clears the
        selection.

        Returns:
            True if the fragment is now selected
        """
        if self._session is None:
            logger.warning("Cannot select a fragment outside a session")
            return False
        if self._selected is not None and self._selected.id == fragment.id:
            self._set_selection(None)
            return False
        if all(candidate.id != fragment.id for candidate in visible_pool(self._session)):
            logger.warning(f"Cannot select {fragment!r}: not in the pool")
            return False
        self._set_selection(fragment)
        return True

    def place_selected(self, slot_index: int) -> PlacementResult:
        """Place the selected fragment into a slot."""
        if self._selected is None:
            logger.debug(f"Nothing selected for slot {slot_index}")
            return PlacementResult.NOT_IN_POOL
        return self.place(slot_index, self._selected)

    def place(self, slot_index: int, fragment: Fragment) -> PlacementResult:
        """
        Place a pool fragment into a slot and check for a win.

        The selection is cleared when the placed fragment was selected.
        """
        if self._session is None:
            logger.warning(f"Cannot place {fragment!r}: no active session")
            return PlacementResult.OUT_OF_RANGE

        result = place_fragment(self._session, slot_index, fragment)
        if not result:
            return result

        if self._selected is not None and self._selected.id == fragment.id:
            self._set_selection(None)
        self.fragment_placed.emit(slot_index, fragment)
        self._check_win()
        return result

    def unplace(self, slot_index: int) -> PlacementResult:
        """Return a player-placed fragment from a slot to the pool."""
        if self._session is None:
            logger.warning(f"Cannot clear slot {slot_index}: no active session")
            return PlacementResult.OUT_OF_RANGE

        fragment = self._session.slots[slot_index] if self._session.in_range(slot_index) else None
        result = unplace_fragment(self._session, slot_index)
        if not result:
            return result

        self.fragment_removed.emit(slot_index, fragment)
        self._check_win()
        return result

    # ─────────────────────────────────────────────────────────────────────────
    # Rendering
    # ─────────────────────────────────────────────────────────────────────────

    def render(self, text: str, *, full_block: bool) -> str:
        """Render through the view's cache."""
        return self.render_cache.get_or_render(
            text,
            full_block,
            lambda: self.renderer.render(
                text, full_block=full_block, document_path=self._document.file_path
            ),
        )

    def render_fragment(self, fragment: Fragment) -> str:
        return self.render(fragment.text, full_block=False)

    def render_row(self, row: DocumentRow) -> str:
        """HTML for a document row; empty slots render as an empty string."""
        if row.kind is RowKind.BLOCK:
            return self.render(row.block_text or "", full_block=True)
        if row.fragment is None:
            return ""
        return self.render_fragment(row.fragment)

    # ─────────────────────────────────────────────────────────────────────────
    # Snapshot
    # ─────────────────────────────────────────────────────────────────────────

    def get_state(self) -> Dict[str, Any]:
        """Serializable snapshot of difficulty, restored groups and session."""
        state = GameState(document=self._document, difficulty=self._difficulty, session=self._session)
        return serialize_game_state(state)

    def set_state(self, data: Dict[str, Any]) -> bool:
        """
        Resume from a snapshot taken with get_state().

        A malformed snapshot, or one taken from another note, is refused
        and leaves the controller untouched.

        Returns:
            True if the snapshot was applied
        """
        try:
            state = deserialize_game_state(data, self._document)
        except StateError as e:
            logger.warning(f"Ignoring saved state: {e}")
            return False

        self._cancel_win_timer()
        self.set_difficulty(state.difficulty)
        self._session = state.session
        self._set_selection(None)

        if self._session is None:
            self.returned_to_lobby.emit()
        else:
            self.session_started.emit(self._session.group_index, self._session.session_id)
            self._check_win()
        return True

    def teardown(self) -> None:
        """Release the view: stop the timer, drop the session, clear the cache."""
        self._cancel_win_timer()
        self._session = None
        self._selected = None
        self.render_cache.clear()
        logger.debug(f"Controller for {self._document.file_path!r} torn down")

    # ─────────────────────────────────────────────────────────────────────────
    # Internal
    # ─────────────────────────────────────────────────────────────────────────

    def _set_selection(self, fragment: Optional[Fragment]) -> None:
        previous = self._selected
        self._selected = fragment
        if fragment is not None:
            self.fragment_selected.emit(fragment)
        elif previous is not None:
            self.selection_cleared.emit()

    def _check_win(self) -> None:
        session = self._session
        if session is None or self._armed_session_id == session.session_id:
            return
        group = self._document.groups[session.group_index]
        if not check_win_condition(session, group):
            return

        self._set_selection(None)
        self.group_restored.emit(session.group_index)
        self._armed_session_id = session.session_id
        self._win_timer.start()

    def _cancel_win_timer(self) -> None:
        self._win_timer.stop()
        self._armed_session_id = None

    def _on_win_timeout(self) -> None:
        session = self._session
        if session is None or session.session_id != self._armed_session_id:
            logger.debug("Stale win timer ignored")
            return
        self.back_to_lobby()
