"""
Tests for the game controller (turns, wins, draws, AI scheduling).
"""

import pytest
from hypothesis import given, settings, strategies as st

from logic.config import GameConfig
from logic.errors import EngineInvariantError, InvalidIndexError
from logic.game_controller import GameController
from logic.game_state import GameStatus, PlayerType, Symbol
from logic.win_checker import WinChecker
from scheduling.manual import ImmediateScheduler, ManualScheduler

HUMAN = PlayerType.HUMAN
AI = PlayerType.AUTOMATED


def make_controller(scheduler=None, delay_ms=500):
    scheduler = scheduler if scheduler is not None else ManualScheduler()
    return GameController(scheduler, GameConfig(AI_MOVE_DELAY_MS=delay_ms))


def play(controller, moves):
    for index in moves:
        assert controller.apply_move(index), f"move {index} was rejected"


def state_of(controller):
    return (controller.board_snapshot(), controller.move_count, controller.current_player, controller.is_active)


# ==================== LIFECYCLE ====================

def test_no_game_before_reset():
    controller = make_controller()
    assert not controller.is_active
    assert not controller.apply_move(0)


def test_reset_starts_with_x():
    controller = make_controller()
    controller.reset(HUMAN, HUMAN)
    assert controller.is_active
    assert controller.current_player is Symbol.X
    assert controller.move_count == 0
    assert controller.board_snapshot() == (None,) * 9
    assert controller.current_result().status == GameStatus.ACTIVE


def test_turns_alternate():
    controller = make_controller()
    controller.reset(HUMAN, HUMAN)
    controller.apply_move(4)
    assert controller.current_player is Symbol.O
    controller.apply_move(0)
    assert controller.current_player is Symbol.X
    assert controller.board_snapshot()[4] is Symbol.X
    assert controller.board_snapshot()[0] is Symbol.O
    assert [m.index for m in controller.moves] == [4, 0]


def test_win_scenario():
    controller = make_controller()
    controller.reset(HUMAN, HUMAN)
    play(controller, [0, 1, 4, 2, 8])

    result = controller.current_result()
    assert result.status == GameStatus.WON
    assert result.winner is Symbol.X
    assert result.line == (0, 4, 8)
    assert not controller.is_active
    # No turn switch after the winning move
    assert controller.current_player is Symbol.X
    assert controller.move_count == 5


def test_draw_scenario():
    controller = make_controller()
    controller.reset(HUMAN, HUMAN)
    checker = WinChecker()

    for index in [0, 1, 2, 4, 3, 5, 7, 6, 8]:
        assert controller.current_result().status == GameStatus.ACTIVE
        controller.apply_move(index)
        assert checker.check_winner(controller.board) is None

    assert controller.move_count == 9
    assert controller.current_result().status == GameStatus.DRAW
    assert not controller.is_active


def test_reset_after_game_over():
    controller = make_controller()
    controller.reset(HUMAN, HUMAN)
    play(controller, [0, 1, 4, 2, 8])
    controller.reset(HUMAN, HUMAN)
    assert controller.is_active
    assert controller.current_result().status == GameStatus.ACTIVE
    assert controller.moves == []


def test_reset_keeps_player_types_when_omitted():
    controller = make_controller()
    controller.reset(HUMAN, HUMAN)
    controller.reset()
    assert controller.player_types == {Symbol.X: HUMAN, Symbol.O: HUMAN}


# ==================== REJECTIONS ====================

def test_occupied_cell_is_rejected():
    controller = make_controller()
    controller.reset(HUMAN, HUMAN)
    controller.apply_move(4)
    before = state_of(controller)

    assert not controller.apply_move(4)
    assert state_of(controller) == before


def test_moves_after_game_over_are_rejected():
    controller = make_controller()
    controller.reset(HUMAN, HUMAN)
    play(controller, [0, 1, 4, 2, 8])
    before = state_of(controller)

    assert not controller.apply_move(3)
    assert not controller.apply_move(3, from_ai=True)
    assert state_of(controller) == before


@pytest.mark.parametrize("index", [-1, 9])
def test_invalid_index_raises(index):
    controller = make_controller()
    controller.reset(HUMAN, HUMAN)
    with pytest.raises(InvalidIndexError):
        controller.apply_move(index)
    assert controller.move_count == 0


def test_turn_gate_blocks_human_on_ai_turn():
    scheduler = ManualScheduler()
    controller = make_controller(scheduler)
    controller.reset(AI, HUMAN)
    before = state_of(controller)

    for index in range(9):
        assert not controller.apply_move(index, from_ai=False)
    assert state_of(controller) == before

    # The AI still gets to play its move
    scheduler.advance(500)
    assert controller.move_count == 1
    assert controller.current_player is Symbol.O
    assert controller.apply_move(4)


# ==================== AI SCHEDULING ====================

def test_ai_moves_first_when_playing_x():
    scheduler = ManualScheduler()
    controller = make_controller(scheduler)
    controller.reset(AI, HUMAN)
    assert controller.has_pending_ai_move
    assert scheduler.pending_count == 1
    assert controller.move_count == 0

    scheduler.advance(499)
    assert controller.move_count == 0

    scheduler.advance(1)
    assert controller.move_count == 1
    assert controller.board_snapshot()[0] is Symbol.X
    assert controller.moves[0].from_ai
    assert not controller.has_pending_ai_move


def test_ai_replies_to_human():
    controller = make_controller(ImmediateScheduler())
    controller.reset(HUMAN, AI)
    assert not controller.has_pending_ai_move

    controller.apply_move(4)
    assert controller.move_count == 2
    assert controller.board_snapshot()[0] is Symbol.O
    assert controller.current_player is Symbol.X


def test_ai_blocks_in_game():
    scheduler = ManualScheduler()
    controller = make_controller(scheduler)
    controller.reset(HUMAN, AI)
    controller.apply_move(0)
    scheduler.run_all()
    # Center is the only reply to a corner that doesn't lose
    assert controller.board_snapshot()[4] is Symbol.O

    controller.apply_move(1)
    scheduler.run_all()
    assert controller.board_snapshot()[2] is Symbol.O


def test_no_ai_move_scheduled_after_game_over():
    scheduler = ManualScheduler()
    controller = make_controller(scheduler)
    controller.reset(HUMAN, HUMAN)
    play(controller, [0, 1, 4, 2, 8])
    assert scheduler.pending_count == 0


def test_ai_vs_ai_is_a_draw():
    controller = make_controller(ImmediateScheduler(), delay_ms=0)
    controller.reset(AI, AI)

    assert controller.current_result().status == GameStatus.DRAW
    assert controller.move_count == 9
    assert all(move.from_ai for move in controller.moves)


def test_ai_vs_ai_is_reproducible():
    games = []
    for _ in range(2):
        scheduler = ManualScheduler()
        controller = make_controller(scheduler)
        controller.reset(AI, AI)
        scheduler.run_all()
        games.append([move.index for move in controller.moves])
    assert games[0] == games[1]
    assert len(games[0]) == 9


# ==================== CANCELLATION ====================

def test_reset_cancels_pending_ai_move():
    scheduler = ManualScheduler()
    controller = make_controller(scheduler)
    controller.reset(AI, HUMAN)
    controller.reset(HUMAN, HUMAN)

    assert scheduler.pending_count == 0
    scheduler.run_all()
    assert controller.move_count == 0


def test_back_navigation_cancels_and_deactivates():
    scheduler = ManualScheduler()
    controller = make_controller(scheduler)
    controller.reset(AI, HUMAN)
    controller.on_back_navigation()

    assert not controller.is_active
    assert not controller.has_pending_ai_move
    scheduler.run_all()
    assert controller.move_count == 0
    assert not controller.apply_move(0)


def test_back_navigation_leaves_result_active():
    # An abandoned game is neither won nor drawn
    controller = make_controller()
    controller.reset(HUMAN, HUMAN)
    play(controller, [0, 4])
    controller.on_back_navigation()

    assert not controller.is_active
    assert controller.current_result().status == GameStatus.ACTIVE
    assert not controller.current_result().is_terminal
    assert controller.move_count == 2


class LeakyScheduler(ManualScheduler):
    """A scheduler whose cancel_all does nothing."""

    def cancel_all(self):
        pass


def test_stale_ai_callback_is_dropped():
    scheduler = LeakyScheduler()
    controller = make_controller(scheduler)
    controller.reset(AI, HUMAN)
    controller.reset(AI, HUMAN)
    assert scheduler.pending_count == 2

    scheduler.run_all()
    # Only the second game's callback plays
    assert controller.move_count == 1


def test_ai_move_on_full_board_is_an_invariant_error():
    scheduler = LeakyScheduler()
    controller = make_controller(scheduler)
    controller.reset(AI, HUMAN)
    # Corrupt the state behind the controller's back
    for index in range(9):
        controller.board.set(index, Symbol.O)
    with pytest.raises(EngineInvariantError):
        scheduler.run_all()


# ==================== NOTIFICATIONS ====================

def test_listeners_are_notified():
    controller = make_controller()
    moves = []
    endings = []
    controller.add_move_listener(lambda index, symbol: moves.append((index, symbol)))
    controller.add_game_end_listener(lambda result, line: endings.append((result.status, line)))

    controller.reset(HUMAN, HUMAN)
    play(controller, [0, 1, 4, 2, 8])

    assert moves == [
        (0, Symbol.X), (1, Symbol.O), (4, Symbol.X), (2, Symbol.O), (8, Symbol.X),
    ]
    assert endings == [(GameStatus.WON, (0, 4, 8))]


def test_draw_notifies_without_line():
    controller = make_controller()
    endings = []
    controller.add_game_end_listener(lambda result, line: endings.append((result.status, line)))
    controller.reset(HUMAN, HUMAN)
    play(controller, [0, 1, 2, 4, 3, 5, 7, 6, 8])
    assert endings == [(GameStatus.DRAW, None)]


def test_rejected_move_does_not_notify():
    controller = make_controller()
    moves = []
    controller.add_move_listener(lambda index, symbol: moves.append(index))
    controller.reset(HUMAN, HUMAN)
    controller.apply_move(4)
    controller.apply_move(4)
    assert moves == [4]


def test_move_listener_sees_settled_state():
    scheduler = ManualScheduler()
    controller = make_controller(scheduler)
    seen = []
    controller.add_move_listener(lambda index, symbol: seen.append((
        index, symbol, controller.current_player, controller.is_ai_turn(),
        controller.current_result().status,
    )))

    controller.reset(HUMAN, AI)
    controller.apply_move(4)
    scheduler.run_all()

    assert seen == [
        (4, Symbol.X, Symbol.O, True, GameStatus.ACTIVE),
        (0, Symbol.O, Symbol.X, False, GameStatus.ACTIVE),
    ]


def test_move_listener_sees_game_over():
    controller = make_controller()
    seen = []
    controller.add_move_listener(lambda index, symbol: seen.append(
        (controller.is_active, controller.current_result().status)
    ))
    controller.reset(HUMAN, HUMAN)
    play(controller, [0, 1, 4, 2, 8])

    assert seen[-1] == (False, GameStatus.WON)
    assert all(status == GameStatus.ACTIVE for _, status in seen[:-1])


def test_human_move_is_notified_before_ai_reply():
    controller = make_controller(ImmediateScheduler())
    moves = []
    controller.add_move_listener(lambda index, symbol: moves.append((index, symbol)))
    controller.reset(HUMAN, AI)
    controller.apply_move(4)
    assert moves == [(4, Symbol.X), (0, Symbol.O)]


class FailOnce:
    """Move listener that raises on its first call only."""

    def __init__(self):
        self.calls = 0

    def __call__(self, index, symbol):
        self.calls += 1
        if self.calls == 1:
            raise RuntimeError("listener failed")


def test_failing_listener_still_passes_the_turn():
    controller = make_controller()
    controller.add_move_listener(FailOnce())
    controller.reset(HUMAN, HUMAN)

    with pytest.raises(RuntimeError):
        controller.apply_move(0)

    assert controller.board_snapshot()[0] is Symbol.X
    assert controller.move_count == 1
    assert controller.current_player is Symbol.O
    assert controller.apply_move(1)
    assert controller.board_snapshot()[1] is Symbol.O


def test_failing_listener_still_schedules_ai():
    scheduler = ManualScheduler()
    controller = make_controller(scheduler)
    controller.add_move_listener(FailOnce())
    controller.reset(HUMAN, AI)

    with pytest.raises(RuntimeError):
        controller.apply_move(4)

    assert controller.has_pending_ai_move
    scheduler.run_all()
    assert controller.move_count == 2
    assert controller.current_player is Symbol.X


# ==================== PROPERTIES ====================

@given(st.permutations(range(9)))
def test_never_two_winners(order):
    controller = make_controller()
    controller.reset(HUMAN, HUMAN)
    checker = WinChecker()

    for index in order:
        if not controller.is_active:
            break
        controller.apply_move(index)
        x_line = checker.check_win(controller.board, Symbol.X)
        o_line = checker.check_win(controller.board, Symbol.O)
        assert x_line is None or o_line is None

    result = controller.current_result()
    assert result.is_terminal
    if result.status == GameStatus.WON:
        assert checker.check_win(controller.board, result.winner) == result.line
        assert checker.check_win(controller.board, result.winner.opposite()) is None


@settings(max_examples=15, deadline=None)
@given(st.data())
def test_ai_never_loses(data):
    controller = make_controller(ImmediateScheduler(), delay_ms=0)
    controller.reset(HUMAN, AI)

    while controller.is_active:
        empty = controller.board.empty_cells()
        controller.apply_move(data.draw(st.sampled_from(empty)))

    result = controller.current_result()
    assert result.winner is not Symbol.X
