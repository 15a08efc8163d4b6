"""Tests for piece and player definitions."""

from gridchess.game.pieces import PIECE_ORDER, Piece, PieceType
from gridchess.game.players import Color, Player


class TestPieceType:
    """Tests for the PieceType enum."""

    def test_piece_type_values(self):
        """Test piece type string values."""
        assert PieceType.PAWN.value == "P"
        assert PieceType.KNIGHT.value == "N"
        assert PieceType.BISHOP.value == "B"
        assert PieceType.ROOK.value == "R"
        assert PieceType.QUEEN.value == "Q"
        assert PieceType.KING.value == "K"

    def test_piece_type_str(self):
        """Test piece type string conversion."""
        assert str(PieceType.PAWN) == "P"
        assert str(PieceType.KING) == "K"

    def test_piece_order(self):
        """Test a player's pieces are created pawns first, then the back row."""
        assert len(PIECE_ORDER) == 16
        assert PIECE_ORDER[:8] == [PieceType.PAWN] * 8
        assert PIECE_ORDER.count(PieceType.KING) == 1
        assert PIECE_ORDER.count(PieceType.QUEEN) == 1
        assert PIECE_ORDER[12] == PieceType.KING


class TestPiece:
    """Tests for the Piece class."""

    def test_new_piece(self):
        """Test defaults of a freshly created piece."""
        piece = Piece(id=3, type=PieceType.ROOK, owner=Color.WHITE, location=(0, 7))

        assert piece.has_moved is False
        assert piece.captured is False
        assert piece.is_sliding is True

    def test_captured_piece(self):
        """Test a piece without a location counts as captured."""
        piece = Piece(id=0, type=PieceType.PAWN, owner=Color.BLACK)
        assert piece.captured is True

    def test_sliding_types(self):
        """Test only rooks, bishops and queens slide."""
        sliding = {
            t for t in PieceType if Piece(id=0, type=t, owner=Color.WHITE).is_sliding
        }
        assert sliding == {PieceType.ROOK, PieceType.BISHOP, PieceType.QUEEN}

    def test_piece_str(self):
        """Test rendering uses the owner marker and type letter."""
        assert str(Piece(id=0, type=PieceType.KNIGHT, owner=Color.WHITE)) == "ON"
        assert str(Piece(id=0, type=PieceType.QUEEN, owner=Color.BLACK)) == "XQ"


class TestPlayer:
    """Tests for Color and Player."""

    def test_pawn_direction(self):
        """Test white pawns move toward row 0 and black toward row 7."""
        assert Color.WHITE.pawn_direction == -1
        assert Color.BLACK.pawn_direction == 1
        assert Player("bob", Color.WHITE).pawn_direction == -1

    def test_opponent(self):
        """Test each color's opponent."""
        assert Color.WHITE.opponent == Color.BLACK
        assert Color.BLACK.opponent == Color.WHITE

    def test_unique_ids(self):
        """Test players get distinct identities."""
        assert Player("a", Color.WHITE).id != Player("a", Color.WHITE).id

    def test_piece_count(self):
        """Test piece count covers active and captured pieces."""
        player = Player("bob", Color.WHITE, pieces=[0, 1, 2], dead_pieces=[3])
        assert player.piece_count == 4
