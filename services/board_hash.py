import hashlib
import json

from models.board import Board

SUPPORTED_ALGORITHMS = ("sha1", "md5")


def _canonical(value) -> bytes:
    return json.dumps(value, separators=(",", ":"), sort_keys=True).encode("utf-8")


def hash_board(board: Board, algorithm: str = "sha1", exclude_values: bool = False,
               normalize: bool = False) -> str:
    """
    Deterministic hex fingerprint of a board, used as the dedup key of stored results.

    exclude_values: hash only which cells are occupied.
    normalize: sort cells inside each row, then the rows, so permutations collide.
    """
    if algorithm not in SUPPORTED_ALGORITHMS:
        raise ValueError(f"Unsupported hash algorithm: {algorithm}")

    if not board or not isinstance(board, list):
        return hashlib.new(algorithm, _canonical(None)).hexdigest()

    board_to_hash = board
    if exclude_values:
        board_to_hash = [[cell is not None for cell in row] for row in board]
    elif normalize:
        sorted_rows = [sorted(row, key=lambda cell: cell or "") for row in board]
        board_to_hash = sorted(sorted_rows, key=lambda row: "".join(cell or "" for cell in row))

    return hashlib.new(algorithm, _canonical(board_to_hash)).hexdigest()


def hash_board_sha1(board: Board) -> str:
    return hash_board(board, algorithm="sha1")


def hash_board_md5(board: Board) -> str:
    return hash_board(board, algorithm="md5")


def hash_board_structure(board: Board) -> str:
    return hash_board(board, exclude_values=True)
