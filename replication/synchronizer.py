"""Keeps a local Game in step with a snapshot stored on a shared channel."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from checkers.codec import MalformedStateError, decode, encode
from checkers.game import Game
from checkers.rules import Position
from checkers.state import GameState
from replication.channel import SharedPropertyChannel
from replication.config import SyncConfig

LOGGER = logging.getLogger(__name__)


class Renderer(Protocol):
    def sync(self, state: GameState) -> None:
        ...


class Synchronizer:
    """Publishes local changes and applies remote snapshots wholesale.

    Last received snapshot wins. Self-originated echoes are dropped, and
    snapshots that arrive while one is being applied are coalesced so that at
    most one reconciliation runs at a time.
    """

    def __init__(
        self,
        game: Game,
        channel: SharedPropertyChannel,
        config: Optional[SyncConfig] = None,
        renderer: Optional[Renderer] = None,
    ) -> None:
        self.game = game
        self.channel = channel
        self.config = config or SyncConfig()
        self.renderer = renderer
        self._attached = False
        self._last_published: Optional[str] = None
        self._reconciling = False
        self._pending: Optional[str] = None

    @property
    def state_key(self) -> str:
        return self.config.state_key

    def attach(self) -> None:
        """Subscribe to the channel and adopt any snapshot already stored there."""
        if self._attached:
            return
        self._attached = True
        self.channel.subscribe(self._on_change)

        if self.config.load_initial_state:
            initial = self.channel.read(self.state_key)
            if initial is not None:
                LOGGER.debug("Loading initial snapshot from %s", self.state_key)
                self._receive(initial)
                return
        self._render()

    def submit_move(self, from_pos: Position, to_pos: Position) -> bool:
        """Apply a local move and publish the resulting snapshot on success."""
        if not self.game.make_move(from_pos, to_pos):
            return False
        self.publish()
        return True

    def reset(self) -> None:
        """Reset the local game and publish the fresh snapshot."""
        self.game.reset()
        self.publish()

    def publish(self) -> None:
        snapshot = encode(self.game.get_board_state())
        self._last_published = snapshot
        LOGGER.debug("Publishing snapshot to %s", self.state_key)
        self.channel.publish(self.state_key, snapshot)
        self._render()

    def _on_change(self, key: str, value: str) -> None:
        if key != self.state_key:
            return
        if self.config.suppress_echo and self._last_published is not None and value == self._last_published:
            self._last_published = None
            return
        self._receive(value)

    def _receive(self, value: str) -> None:
        if self._reconciling:
            self._pending = value
            return

        self._reconciling = True
        try:
            next_value: Optional[str] = value
            while next_value is not None:
                self._pending = None
                self._apply_remote(next_value)
                next_value = self._pending
        finally:
            self._reconciling = False
            self._pending = None

    def _apply_remote(self, value: str) -> None:
        try:
            state = decode(value)
        except MalformedStateError:
            LOGGER.exception("Ignoring malformed snapshot on %s", self.state_key)
            return
        self.game.load_board_state(state)
        self._last_published = None
        LOGGER.debug("Loaded remote snapshot from %s", self.state_key)
        self._render()

    def _render(self) -> None:
        if self.renderer is not None:
            self.renderer.sync(self.game.get_board_state())
