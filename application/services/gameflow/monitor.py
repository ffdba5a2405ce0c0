"""Polls the game client and drives lobby enrichment."""
import asyncio
import inspect
from typing import Any, Awaitable, Callable, Optional, Tuple

from config import settings
from core.logging import get_logger, log_context
from domain.entities import LobbyAnalysis
from domain.enums import GameflowPhase
from domain.interfaces import GameClientError, IGameClient, PhaseSnapshot
from application.services.lobby import LobbyDetector, roster_signature
from .classifier import GameflowStateMachine, GameflowStatus, GameflowTransition

StatusCallback = Callable[[GameflowStatus], Any]
RosterCallback = Callable[[LobbyAnalysis], Any]
GameEndedCallback = Callable[[], Any]


async def _maybe_await(result: Any) -> None:
    if inspect.isawaitable(result):
        await result


class GameflowMonitor:
    """Fixed-interval poller. At most one tick runs at a time.

    Each tick: read the phase, classify it, and when identities are visible
    fetch the roster and re-run enrichment if the set of players changed.
    Leaving a live phase clears the session name cache and fires
    ``on_game_ended`` (re-import, last-match roster refresh).
    """

    def __init__(
        self,
        client: IGameClient,
        detector: LobbyDetector,
        interval_s: Optional[float] = None,
        on_status: Optional[StatusCallback] = None,
        on_roster: Optional[RosterCallback] = None,
        on_game_ended: Optional[GameEndedCallback] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.client = client
        self.detector = detector
        self.interval_s = settings.LCU_POLL_INTERVAL_S if interval_s is None else interval_s
        self.on_status = on_status
        self.on_roster = on_roster
        self.on_game_ended = on_game_ended
        self._sleep = sleep
        self._machine = GameflowStateMachine()
        self._lock = asyncio.Lock()
        self._signature: Optional[Tuple[str, ...]] = None
        self._last_status: Optional[GameflowStatus] = None
        self.last_analysis: Optional[LobbyAnalysis] = None
        self._log = get_logger(__name__, service="monitor")

    @property
    def status(self) -> Optional[GameflowStatus]:
        return self._last_status

    async def _snapshot(self) -> PhaseSnapshot:
        try:
            return await self.client.get_phase_snapshot()
        except GameClientError as exc:
            self._log.debug(f"phase poll failed: {exc}")
            return PhaseSnapshot(phase=None)

    async def tick(self) -> Optional[GameflowStatus]:
        """Run one poll cycle. Returns None if a cycle was already in flight."""
        if self._lock.locked():
            self._log.trace("tick skipped, previous cycle still running")
            return None
        async with self._lock:
            transition = self._machine.step(await self._snapshot())
            status = transition.status
            with log_context(phase=status.phase.value):
                await self._handle(transition)
            return status

    async def _handle(self, transition: GameflowTransition) -> None:
        status = transition.status

        if status.phase is GameflowPhase.CLIENT_UNREACHABLE:
            # Credentials change every time the client restarts.
            await self.client.reset()

        if status != self._last_status:
            self._last_status = status
            self._log.info(f"{status.tone.value}: {status.message}")
            await self._notify(self.on_status, "status callback", status)

        if transition.game_ended:
            self._log.info("live session ended")
            self.detector.reset_session()
            self._signature = None
            await self._notify(self.on_game_ended, "game-ended hook")

        if not status.should_enrich:
            if not status.is_live:
                self._signature = None
            return

        await self._enrich()

    async def _notify(self, callback: Optional[Callable[..., Any]], what: str, *args: Any) -> None:
        """Run a caller hook; a failing hook is logged and polling goes on."""
        if callback is None:
            return
        try:
            await _maybe_await(callback(*args))
        except Exception:
            self._log.exception(f"{what} failed")

    async def _enrich(self) -> None:
        try:
            roster = await self.client.get_lobby_roster()
        except GameClientError as exc:
            self._log.debug(f"roster unavailable: {exc}")
            return

        signature = roster_signature(roster)
        if signature == self._signature:
            return

        # Store reads run on the loop thread; ticks never overlap.
        try:
            analysis = self.detector.analyze(roster)
        except Exception:
            self._log.exception("lobby analysis failed, retrying next tick")
            self._signature = None
            return
        self._signature = signature
        self.last_analysis = analysis
        await self._notify(self.on_roster, "roster callback", analysis)

    async def run(self, stop: Optional[asyncio.Event] = None, max_ticks: Optional[int] = None) -> None:
        """Poll until ``stop`` is set (or ``max_ticks`` cycles have run)."""
        ticks = 0
        self._log.info(f"monitor started, interval={self.interval_s}s")
        while not (stop and stop.is_set()):
            await self.tick()
            ticks += 1
            if max_ticks is not None and ticks >= max_ticks:
                break
            await self._sleep(self.interval_s)
        self._log.info("monitor stopped")
