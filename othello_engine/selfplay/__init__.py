"""
Self-Play Module

Plays strategies against each other and stores the games in the 64-byte
record format, which build_book() turns into an opening book.

Key Components:
    - play_game: one game to double pass
    - run_matches: many games (optionally threaded) appended to a file
    - MatchResult, encode_record, decode_records: record format
"""

from othello_engine.selfplay.matcher import default_factory, play_game, run_matches
from othello_engine.selfplay.records import (
    MatchResult,
    append_records,
    decode_records,
    encode_record,
    read_records,
)

__all__ = [
    'MatchResult',
    'append_records',
    'decode_records',
    'default_factory',
    'encode_record',
    'play_game',
    'read_records',
    'run_matches',
]
