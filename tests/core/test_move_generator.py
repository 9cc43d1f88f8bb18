"""Tests for move legality, castling, en passant and legal move enumeration."""

from dataclasses import replace

import pytest

from chessref.core.enums import Color
from chessref.core.move_generator import MoveGenerator, is_in_check, is_legal_move
from chessref.core.notation import STARTING_FEN, position_from_fen
from chessref.core.position import PROMOTION_TYPES, Position
from chessref.core.types import C1, D6, E1, E2, E4, G1, parse_square


def _legal(fen: str, uci: str) -> bool:
    pos = position_from_fen(fen)
    return is_legal_move(pos, parse_square(uci[:2]), parse_square(uci[2:4]))


def perft(position: Position, depth: int) -> int:
    """Count leaf nodes at *depth*, expanding each promotion into four moves."""
    if depth == 0:
        return 1
    nodes = 0
    for from_sq, to_sq in MoveGenerator(position).generate_legal_moves():
        kinds = PROMOTION_TYPES if position.is_promotion(from_sq, to_sq) else (None,)
        for kind in kinds:
            if depth == 1:
                nodes += 1
                continue
            child, _ = position.apply_move(from_sq, to_sq, kind)
            nodes += perft(child, depth - 1)
    return nodes


class TestBasicLegality:
    def test_opening_pawn_moves(self) -> None:
        assert _legal(STARTING_FEN, "e2e4")
        assert _legal(STARTING_FEN, "e2e3")
        assert not _legal(STARTING_FEN, "e2e5")

    def test_wrong_side_to_move(self) -> None:
        assert not _legal(STARTING_FEN, "e7e5")

    def test_empty_origin(self) -> None:
        assert not _legal(STARTING_FEN, "e4e5")

    def test_cannot_capture_own_piece(self) -> None:
        assert not _legal(STARTING_FEN, "d1d2")

    def test_pawn_diagonal_needs_a_victim(self) -> None:
        assert not _legal(STARTING_FEN, "e2d3")
        assert _legal("4k3/8/8/8/8/3p4/4P3/4K3 w - - 0 1", "e2d3")

    def test_pawn_cannot_capture_straight_ahead(self) -> None:
        assert not _legal("4k3/8/8/8/4p3/4P3/8/4K3 w - - 0 1", "e3e4")


class TestKingSafety:
    def test_pinned_piece_cannot_leave_the_line(self) -> None:
        fen = "4k3/4r3/8/8/8/8/4B3/4K3 w - - 0 1"
        assert not _legal(fen, "e2d3")
        assert _legal(fen, "e1d1")

    def test_must_answer_check(self) -> None:
        fen = "4k3/8/8/8/8/8/3P4/r3K3 w - - 0 1"
        assert not _legal(fen, "d2d3")
        assert not _legal(fen, "e1d1")
        assert not _legal(fen, "e1f1")
        assert _legal(fen, "e1e2")
        assert _legal(fen, "e1f2")

    def test_king_cannot_step_into_attack(self) -> None:
        fen = "3rk3/8/8/8/8/8/8/4K3 w - - 0 1"
        assert not _legal(fen, "e1d1")
        assert not _legal(fen, "e1d2")
        assert _legal(fen, "e1f1")

    def test_kings_cannot_touch(self) -> None:
        fen = "8/8/8/3k4/8/3K4/8/8 w - - 0 1"
        assert not _legal(fen, "d3d4")
        assert _legal(fen, "d3d2")

    def test_capture_of_checking_piece(self) -> None:
        fen = "4k3/8/8/8/8/8/3q4/4K3 w - - 0 1"
        assert _legal(fen, "e1d2")

    def test_is_in_check(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/r3K3 w - - 0 1")
        assert is_in_check(pos, Color.WHITE)
        assert not is_in_check(pos, Color.BLACK)

    def test_missing_king_is_never_in_check(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/r7 w - - 0 1")
        assert not is_in_check(pos, Color.WHITE)


class TestEnPassant:
    FEN = "4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1"

    def test_capture_onto_target(self) -> None:
        assert _legal(self.FEN, "e5d6")

    def test_no_target_no_capture(self) -> None:
        assert not _legal("4k3/8/8/3pP3/8/8/8/4K3 w - - 0 1", "e5d6")

    def test_capture_that_exposes_king_is_illegal(self) -> None:
        # Both pawns leave the fifth rank, opening the rook onto the king.
        fen = "8/8/8/K2pP2r/8/8/8/4k3 w - d6 0 1"
        assert not _legal(fen, "e5d6")
        assert _legal(fen, "e5e6")

    def test_black_captures_en_passant(self) -> None:
        assert _legal("4k3/8/8/8/3Pp3/8/8/4K3 b - d3 0 1", "e4d3")

    def test_target_without_enemy_pawn_beside_it(self) -> None:
        # A stale target next to the mover's own king must not capture it
        pos = replace(position_from_fen("4k3/8/8/3KP3/8/8/8/8 w - - 0 1"), en_passant=D6)
        assert not is_legal_move(pos, parse_square("e5"), D6)
        assert not pos.is_en_passant(parse_square("e5"), D6)
        assert D6 not in MoveGenerator(pos).legal_destinations(parse_square("e5"))

    def test_target_beside_enemy_piece_that_is_not_a_pawn(self) -> None:
        pos = replace(position_from_fen("4k3/8/8/3nP3/8/8/8/4K3 w - - 0 1"), en_passant=D6)
        assert not is_legal_move(pos, parse_square("e5"), D6)


class TestCastling:
    OPEN = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"

    def test_both_sides_legal(self) -> None:
        assert _legal(self.OPEN, "e1g1")
        assert _legal(self.OPEN, "e1c1")

    def test_black_castles(self) -> None:
        fen = "r3k2r/8/8/8/8/8/8/R3K2R b KQkq - 0 1"
        assert _legal(fen, "e8g8")
        assert _legal(fen, "e8c8")

    def test_rights_lost(self) -> None:
        fen = "r3k2r/8/8/8/8/8/8/R3K2R w Qkq - 0 1"
        assert not _legal(fen, "e1g1")
        assert _legal(fen, "e1c1")

    def test_path_occupied(self) -> None:
        assert not _legal("r3k2r/8/8/8/8/8/8/R3KB1R w KQkq - 0 1", "e1g1")
        assert not _legal("r3k2r/8/8/8/8/8/8/RN2K2R w KQkq - 0 1", "e1c1")

    def test_destination_attacked(self) -> None:
        fen = "r3k1r1/8/8/8/8/8/8/R3K2R w KQq - 0 1"
        assert not _legal(fen, "e1g1")
        assert _legal(fen, "e1c1")

    def test_transit_attacked(self) -> None:
        assert not _legal("r3kr2/8/8/8/8/8/8/R3K2R w KQq - 0 1", "e1g1")

    def test_not_out_of_check(self) -> None:
        fen = "r5k1/4r3/8/8/8/8/8/R3K2R w KQ - 0 1"
        assert not _legal(fen, "e1g1")
        assert not _legal(fen, "e1c1")

    def test_rook_path_may_be_attacked(self) -> None:
        # b1 is attacked, but the king never crosses it.
        assert _legal("1r2k3/8/8/8/8/8/8/R3K2R w KQ - 0 1", "e1c1")

    def test_rook_missing(self) -> None:
        assert not _legal("r3k2r/8/8/8/8/8/8/4K2R w KQkq - 0 1", "e1c1")

    def test_two_column_king_move_is_only_castling(self) -> None:
        gen = MoveGenerator(position_from_fen("4k3/8/8/8/3K4/8/8/8 w - - 0 1"))
        assert not gen.is_legal_move(parse_square("d4"), parse_square("f4"))

    def test_castling_handler_directly(self) -> None:
        gen = MoveGenerator(position_from_fen(self.OPEN))
        assert gen.is_castling_legal(E1, G1)
        assert gen.is_castling_legal(E1, C1)
        assert not gen.is_castling_legal(E2, E4)


class TestEnumeration:
    def test_starting_moves(self) -> None:
        gen = MoveGenerator(Position.initial())
        moves = gen.generate_legal_moves()
        assert len(moves) == 20
        assert (E2, E4) in moves

    def test_legal_destinations(self) -> None:
        gen = MoveGenerator(Position.initial())
        assert sorted(gen.legal_destinations(parse_square("g1"))) == sorted(
            [parse_square("f3"), parse_square("h3")]
        )

    def test_no_moves_in_mate(self) -> None:
        pos = position_from_fen(
            "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
        )
        assert not MoveGenerator(pos).has_legal_move()

    def test_no_legal_move_leaves_own_king_in_check(self) -> None:
        pos = position_from_fen(KIWIPETE)
        mover = pos.side_to_move
        for from_sq, to_sq in MoveGenerator(pos).generate_legal_moves():
            child, _ = pos.apply_move(from_sq, to_sq, PROMOTION_TYPES[0])
            assert not is_in_check(child, mover), f"{from_sq}{to_sq}"

    def test_en_passant_square_is_a_destination(self) -> None:
        pos = position_from_fen(TestEnPassant.FEN)
        assert D6 in MoveGenerator(pos).legal_destinations(parse_square("e5"))


# ── Perft (reference counts: https://www.chessprogramming.org/Perft_Results) ──

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"
ENDGAME = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1"
PROMOTIONS = "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1"


class TestPerft:
    @pytest.mark.parametrize(
        ("fen", "depth", "nodes"),
        [
            (STARTING_FEN, 1, 20),
            (STARTING_FEN, 2, 400),
            (KIWIPETE, 1, 48),
            (KIWIPETE, 2, 2_039),
            (ENDGAME, 1, 14),
            (ENDGAME, 2, 191),
            (PROMOTIONS, 1, 6),
            (PROMOTIONS, 2, 264),
        ],
    )
    def test_perft(self, fen: str, depth: int, nodes: int) -> None:
        assert perft(position_from_fen(fen), depth) == nodes

    @pytest.mark.slow
    def test_starting_depth_3(self) -> None:
        assert perft(position_from_fen(STARTING_FEN), 3) == 8_902

    @pytest.mark.slow
    def test_endgame_depth_3(self) -> None:
        assert perft(position_from_fen(ENDGAME), 3) == 2_812
