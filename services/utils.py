from models.enums import PlayerMarker

X_MARKER = PlayerMarker.X.value
O_MARKER = PlayerMarker.O.value
MARKERS = (X_MARKER, O_MARKER)


def is_board_malformed(board) -> bool:
    """No rows, a non-list row, or a row whose length differs from the row count."""
    if not isinstance(board, list) or not board:
        return True
    size = len(board)
    return any(not isinstance(row, list) or len(row) != size for row in board)


def count_markers(board):
    count_x = 0
    count_o = 0
    for row in board:
        for cell in row:
            if cell == X_MARKER:
                count_x += 1
            elif cell == O_MARKER:
                count_o += 1
    return count_x, count_o


def other_marker(marker: str) -> str:
    return O_MARKER if marker == X_MARKER else X_MARKER


def copy_board(board):
    return [list(row) for row in board]
