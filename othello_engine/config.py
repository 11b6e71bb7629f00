"""
Engine and self-play configuration.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class EngineConfig:
    """Configuration for the move-selection strategy.

    All tunables of the book, search and endgame phases live here so a
    player can be described (and reproduced) by one object.
    """

    # Midgame search
    search_depth: int = 4
    """Alpha-beta depth in plies"""

    # Endgame
    ending_turns: int = 10
    """Switch to the exact solver once at most this many cells are empty"""

    ending_opt: bool = True
    """Let the solver assume an optimal opponent when pruning"""

    # Opening book
    book_path: Optional[Path] = Path("data/opening.db")
    """Book file; None disables the book"""

    book_sample_size: int = 10
    """Max random candidates compared when picking a book record"""

    book_full_scan_size: int = 3
    """Candidate ranges up to this size are compared entirely"""

    # Reproducibility
    random_seed: Optional[int] = None
    """Seed for book sampling and the random fallback (None for random)"""

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.book_path is not None:
            self.book_path = Path(self.book_path)

        if self.search_depth < 1:
            raise ValueError(f"search_depth must be >= 1, got {self.search_depth}")

        if not 0 <= self.ending_turns <= 60:
            raise ValueError(f"ending_turns must be in [0, 60], got {self.ending_turns}")

        if self.book_sample_size < 1:
            raise ValueError(f"book_sample_size must be positive, got {self.book_sample_size}")

        if self.book_full_scan_size < 1:
            raise ValueError(f"book_full_scan_size must be positive, got {self.book_full_scan_size}")

    @property
    def ending_threshold(self) -> int:
        """Disc count at which the endgame solver takes over."""
        return 64 - self.ending_turns

    def __repr__(self) -> str:
        return (
            f"EngineConfig(\n"
            f"  Search: depth={self.search_depth}\n"
            f"  Ending: last {self.ending_turns} moves, opt={self.ending_opt}\n"
            f"  Book: {self.book_path} (sample={self.book_sample_size}, full scan<={self.book_full_scan_size})\n"
            f"  Seed: {self.random_seed}\n"
            f")"
        )


@dataclass
class MatchConfig:
    """Configuration for self-play record generation."""

    games: int = 100
    """Number of games to play"""

    output_path: Path = Path("data/record.db")
    """Record file (appended to)"""

    workers: int = 1
    """Games played concurrently (threads)"""

    seed: Optional[int] = None
    """Base seed; game i uses seed + i (None for random)"""

    def __post_init__(self):
        self.output_path = Path(self.output_path)

        if self.games <= 0:
            raise ValueError(f"games must be positive, got {self.games}")

        if self.workers <= 0:
            raise ValueError(f"workers must be positive, got {self.workers}")
