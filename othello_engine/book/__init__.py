"""
Opening Book Module

Key Components:
    - OpeningBook: per-game cursor (gen / go / reset)
    - BookData: immutable book bytes, shareable across games
    - Transform: symmetry mapping fixed by the first move
    - format: block/record layout, bound searches, encoder
    - build_book: book construction from finished games
"""

from othello_engine.book.book import DEFAULT_BOOK_PATH, BookData, OpeningBook, is_move_byte
from othello_engine.book.builder import build_book
from othello_engine.book.format import BookEntry, BookFormatError, encode_book, find_range
from othello_engine.book.transform import CANONICAL_FIRST, SYMMETRIES, Transform

__all__ = [
    'OpeningBook',
    'BookData',
    'BookEntry',
    'BookFormatError',
    'Transform',
    'CANONICAL_FIRST',
    'DEFAULT_BOOK_PATH',
    'SYMMETRIES',
    'build_book',
    'encode_book',
    'find_range',
    'is_move_byte',
]
