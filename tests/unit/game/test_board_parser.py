"""Tests for the board string parser."""

import pytest

from gridchess.game.board_parser import PIECE_TYPE_MAP, parse_board_string
from gridchess.game.engine import Game
from gridchess.game.pieces import PieceType
from gridchess.game.players import Color

STANDARD = """
R2N2B2Q2K2B2N2R2
P2P2P2P2P2P2P2P2
0000000000000000
0000000000000000
0000000000000000
0000000000000000
P1P1P1P1P1P1P1P1
R1N1B1Q1K1B1N1R1
"""


class TestParseBoardString:
    """Tests for parse_board_string function."""

    def test_parse_simple_board_with_kings(self) -> None:
        """Test parsing board with king vs king."""
        board_str = """
00000000K2000000
0000000000000000
0000000000000000
0000000000000000
0000000000000000
0000000000000000
0000000000000000
00000000K1000000
"""
        game = parse_board_string(board_str)

        assert len(game.pieces) == 2
        assert game.king_of(Color.WHITE).location == (4, 7)
        assert game.king_of(Color.BLACK).location == (4, 0)
        assert game.current == Color.WHITE
        game.check_invariants()

    def test_standard_layout_matches_create(self) -> None:
        """Test the standard layout string parses to the starting position."""
        parsed = parse_board_string(STANDARD)
        created = Game.create("white", Color.WHITE, "black", Color.BLACK)

        def cells(game: Game):
            return [(c["x"], c["y"], c["piece_type"], c["color"]) for c in game.snapshot()]

        assert cells(parsed) == cells(created)
        assert not any(p.has_moved for p in parsed.pieces)

    def test_pawns_off_home_row_have_moved(self) -> None:
        """Test a pawn placed past its home row cannot double step."""
        game = parse_board_string(
            """
            00000000K2000000
            0000000000000000
            0000000000000000
            000000P200000000
            0000P10000000000
            0000000000000000
            0000000000000000
            00000000K1000000
            """
        )

        assert game.piece_at(2, 4).has_moved is True
        assert game.piece_at(3, 3).has_moved is True
        assert game.piece_at(4, 7).has_moved is False

    def test_current_player(self) -> None:
        """Test the side to move can be chosen."""
        game = parse_board_string(STANDARD, current=Color.BLACK)
        assert game.current == Color.BLACK

    def test_piece_type_map(self) -> None:
        """Test every piece letter is known."""
        assert PIECE_TYPE_MAP["N"] == PieceType.KNIGHT
        assert set(PIECE_TYPE_MAP.values()) == set(PieceType)

    def test_wrong_row_count(self) -> None:
        """Test a board with too few rows is rejected."""
        with pytest.raises(ValueError, match="Expected 8 rows"):
            parse_board_string("00000000K2000000\n00000000K1000000")

    def test_wrong_row_length(self) -> None:
        """Test a short row is rejected."""
        with pytest.raises(ValueError, match="wrong length"):
            parse_board_string(STANDARD.replace("R1N1B1Q1K1B1N1R1", "R1N1B1Q1K1B1N1"))

    def test_unknown_piece_type(self) -> None:
        """Test an unknown piece letter is rejected."""
        with pytest.raises(ValueError, match="Unknown piece type"):
            parse_board_string(STANDARD.replace("Q1", "X1"))

    def test_invalid_player(self) -> None:
        """Test only players 1 and 2 exist."""
        with pytest.raises(ValueError, match="Invalid player number"):
            parse_board_string(STANDARD.replace("Q1", "Q3"))

    def test_missing_king(self) -> None:
        """Test each side needs a king."""
        with pytest.raises(ValueError, match="no king"):
            parse_board_string(STANDARD.replace("K2", "Q2"))

    def test_two_kings(self) -> None:
        """Test each side has at most one king."""
        with pytest.raises(ValueError, match="more than one king"):
            parse_board_string(STANDARD.replace("Q1", "K1"))
