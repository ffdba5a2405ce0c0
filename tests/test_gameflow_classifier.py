import pytest

from application.services.gameflow.classifier import (
    ANONYMIZED_MESSAGE,
    GameflowStateMachine,
    classify,
    ends_live_session,
    should_enrich,
)
from domain.enums import GameflowPhase, StatusTone
from domain.interfaces import PhaseSnapshot


class TestClassify:

    @pytest.mark.parametrize("raw,tone,enrich", [
        (None, StatusTone.ERROR, False),
        ("None", StatusTone.INFO, False),
        ("Lobby", StatusTone.INFO, True),
        ("Matchmaking", StatusTone.INFO, False),
        ("ReadyCheck", StatusTone.INFO, False),
        ("ChampSelect", StatusTone.INFO, True),
        ("GameStart", StatusTone.SUCCESS, True),
        ("InProgress", StatusTone.SUCCESS, True),
        ("Reconnect", StatusTone.WARNING, True),
        ("WaitingForStats", StatusTone.INFO, False),
        ("PreEndOfGame", StatusTone.INFO, False),
        ("EndOfGame", StatusTone.INFO, False),
    ])
    def test_every_phase_has_a_status(self, raw, tone, enrich):
        status = classify(raw)
        assert status.tone is tone
        assert status.message
        assert status.should_enrich is enrich

    def test_unknown_phase_is_treated_as_idle(self):
        status = classify("BrandNewPhase")
        assert status.phase is GameflowPhase.NONE
        assert not status.should_enrich

    def test_anonymized_champ_select_suppresses_enrichment(self):
        status = classify("ChampSelect", anonymized=True)
        assert status.message == ANONYMIZED_MESSAGE
        assert status.anonymized
        assert not status.should_enrich

    def test_anonymity_is_irrelevant_once_in_game(self):
        status = classify("InProgress", anonymized=True)
        assert not status.anonymized
        assert status.should_enrich

    def test_queue_name_is_appended(self):
        assert classify("InProgress", queue_id=420).message == "Game in progress (Ranked Solo/Duo)"
        assert "(" not in classify(None, queue_id=420).message

    def test_should_enrich_helper(self):
        assert should_enrich(GameflowPhase.LOBBY)
        assert not should_enrich(GameflowPhase.LOBBY, anonymized=True)
        assert should_enrich(GameflowPhase.RECONNECT, anonymized=True)


class TestTransitions:

    @pytest.mark.parametrize("previous,current,ended", [
        (GameflowPhase.IN_PROGRESS, GameflowPhase.END_OF_GAME, True),
        (GameflowPhase.IN_PROGRESS, GameflowPhase.CLIENT_UNREACHABLE, True),
        (GameflowPhase.CHAMP_SELECT, GameflowPhase.LOBBY, True),
        (GameflowPhase.CHAMP_SELECT, GameflowPhase.IN_PROGRESS, False),
        (GameflowPhase.LOBBY, GameflowPhase.MATCHMAKING, False),
        (None, GameflowPhase.END_OF_GAME, False),
    ])
    def test_ends_live_session(self, previous, current, ended):
        assert ends_live_session(previous, current) is ended

    def test_state_machine_tracks_previous_phase(self):
        machine = GameflowStateMachine()
        first = machine.step(PhaseSnapshot(phase="InProgress"))
        assert first.previous is None
        assert first.changed
        again = machine.step(PhaseSnapshot(phase="InProgress"))
        assert not again.changed
        ended = machine.step(PhaseSnapshot(phase="EndOfGame"))
        assert ended.game_ended
        machine.reset()
        assert machine.phase is None
