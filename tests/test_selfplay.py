"""
Unit Tests for Self-Play

Tests for game records and the match runner:
    - 64-byte record layout
    - play_game() runs to a double pass
    - run_matches() appends one record per game
    - Record files feed build_book()
"""

import random

import pytest

from othello_engine.board import FILL_BYTE, PASS_BYTE, BitBoard, Move, Tile, Turn
from othello_engine.book import BookData, OpeningBook, build_book
from othello_engine.config import EngineConfig, MatchConfig
from othello_engine.selfplay import (
    MatchResult,
    append_records,
    decode_records,
    default_factory,
    encode_record,
    play_game,
    read_records,
    run_matches,
)
from othello_engine.selfplay.records import MAX_MOVES, RECORD_SIZE
from othello_engine.strategy import RandomStrategy


def random_factory(seed):
    return RandomStrategy(random.Random(seed))


class TestRecords:
    """Tests for the record format."""

    def test_layout(self):
        result = MatchResult([Move.put(2, 3), Move.put(2, 4), Move.PASS], black=40, white=24)

        record = encode_record(result)

        assert len(record) == RECORD_SIZE
        assert record[:3] == bytes([0x23, 0x24, PASS_BYTE])
        assert set(record[3:62]) == {FILL_BYTE}
        assert record[62] == 40
        assert record[63] == 24

    def test_decode(self):
        result = MatchResult([Move.put(2, 3), Move.PASS, Move.put(7, 7)], black=10, white=54)

        decoded = decode_records(encode_record(result) * 2)

        assert decoded == [result, result]
        assert decoded[0].winner is Turn.WHITE

    def test_long_game_truncated(self):
        moves = [Move.put(i % 8, (i // 8) % 8) for i in range(MAX_MOVES + 4)]
        record = encode_record(MatchResult(moves, 32, 32))

        assert len(decode_records(record)[0].moves) == MAX_MOVES

    def test_bad_length(self):
        with pytest.raises(ValueError):
            decode_records(bytes(RECORD_SIZE + 1))

    def test_append_and_read(self, tmp_path):
        path = tmp_path / "records" / "record.db"
        first = MatchResult([Move.put(2, 3)], 4, 1)
        second = MatchResult([Move.put(3, 2)], 4, 1)

        assert append_records(path, [first]) == 1
        assert append_records(path, [second]) == 1

        assert read_records(path) == [first, second]
        assert path.stat().st_size == 2 * RECORD_SIZE

    def test_winner(self):
        assert MatchResult([], 33, 31).winner is Turn.BLACK
        assert MatchResult([], 32, 32).winner is None


class TestPlayGame:
    """Tests for play_game()."""

    @pytest.mark.parametrize("seed", range(3))
    def test_random_game(self, seed):
        result = play_game(random_factory(seed), random_factory(seed + 50))

        assert result.moves[-2:] == [Move.PASS, Move.PASS]
        assert 4 < result.black + result.white <= 64
        assert result.moves[0] in {Move.put(3, 2), Move.put(2, 3), Move.put(5, 4), Move.put(4, 5)}

    def test_counts_match_replay(self):
        result = play_game(random_factory(1), random_factory(2))
        board = BitBoard()
        for move in result.moves:
            board.apply_move(move)

        assert board.count(Tile.BLACK) == result.black
        assert board.count(Tile.WHITE) == result.white
        assert board.is_game_over()


class TestRunMatches:
    """Tests for run_matches()."""

    def test_writes_one_record_per_game(self, tmp_path):
        config = MatchConfig(games=3, output_path=tmp_path / "record.db", seed=7)

        written = run_matches(config, random_factory)

        assert written == 3
        games = read_records(config.output_path)
        assert len(games) == 3
        for game in games:
            assert game.black + game.white <= 64

    def test_appends(self, tmp_path):
        config = MatchConfig(games=2, output_path=tmp_path / "record.db", seed=1, workers=2)

        run_matches(config, random_factory)
        run_matches(config, random_factory)

        assert len(read_records(config.output_path)) == 4

    def test_default_factory(self, tmp_path):
        config = EngineConfig(search_depth=1, ending_turns=4, book_path=tmp_path / "missing.db")
        factory = default_factory(config)

        first = factory(1)
        second = factory(2)

        assert first.book.data is second.book.data
        assert first.config.random_seed == 1
        assert config.random_seed is None

    def test_invalid_config(self, tmp_path):
        with pytest.raises(ValueError):
            MatchConfig(games=0, output_path=tmp_path / "record.db")


class TestBookFromRecords:
    def test_self_play_book(self, tmp_path):
        config = MatchConfig(games=6, output_path=tmp_path / "record.db", seed=3)
        run_matches(config, random_factory)

        data = BookData(build_book(read_records(config.output_path), max_depth=4))
        book = OpeningBook(data, rng=random.Random(0))

        assert not data.empty
        assert book.gen(Turn.BLACK, None) == (Move.put(2, 3), True)
