
"""
SGF (Smart Game Format) loading for board snapshots.

Builds BoardState positions from SGF content using the sgfmill library. Meant
for final playout positions dumped by a simulation engine and for setup
(AB/AW) positions. Stones are placed as recorded and captures are not
resolved, so a game record with captures does not load as a real position.
"""

from typing import Any, Dict, List, Optional, Tuple

from sgfmill import sgf

from .board import BoardState, coords_to_gtp, gtp_to_coords
from .config import AppConfig, load_config


def _sgf_point_to_gtp(point: Optional[Tuple[int, int]], board_size: int) -> Optional[str]:
    """
    Convert sgfmill point (row, col) to GTP coordinate (e.g., "D4").

    sgfmill uses (row, col) with row 0 at the bottom and col 0 on the left,
    the same orientation as BoardState (x = col, y = row).
    """
    if point is None:
        return None

    row, col = point
    if not (0 <= row < board_size and 0 <= col < board_size):
        return None

    return coords_to_gtp(col, row)


def _root_property(root, name: str, default: Any) -> Any:
    if not root.has_property(name):
        return default
    return root.get(name)


def parse_sgf(sgf_content: str) -> Dict[str, Any]:
    """
    Parse an SGF string and extract the position.

    Args:
        sgf_content: Raw SGF file content as string

    Returns:
        Dictionary containing:
        - board_size: int
        - komi: float or None if not recorded
        - handicap: int
        - black_stones / white_stones: GTP coordinates of setup stones
        - moves: List of move strings in format "B D4" or "W PASS"
        - metadata: Dict with player names, date, result, etc.

    Raises:
        ValueError: If the content is not valid SGF
    """
    game = sgf.Sgf_game.from_string(sgf_content)
    root = game.get_root()
    board_size = game.get_size()

    komi = _root_property(root, "KM", None)
    handicap = _root_property(root, "HA", 0)

    black_points, white_points, _ = root.get_setup_stones()
    black_stones = sorted(filter(None, (_sgf_point_to_gtp(p, board_size) for p in black_points)))
    white_stones = sorted(filter(None, (_sgf_point_to_gtp(p, board_size) for p in white_points)))

    metadata = {}
    for prop, key in [("PB", "black_player"), ("PW", "white_player"),
                      ("DT", "date"), ("RE", "result"),
                      ("EV", "event"), ("GN", "game_name")]:
        value = _root_property(root, prop, None)
        if value:
            metadata[key] = value

    moves: List[str] = []
    for node in game.get_main_sequence():
        if node is root:
            continue
        colour, point = node.get_move()
        if colour is None:
            continue
        color_letter = colour.upper()
        if point is None:
            moves.append(f"{color_letter} PASS")
        else:
            gtp_coord = _sgf_point_to_gtp(point, board_size)
            if gtp_coord:
                moves.append(f"{color_letter} {gtp_coord}")

    return {
        "board_size": board_size,
        "komi": None if komi is None else float(komi),
        "handicap": int(handicap),
        "black_stones": black_stones,
        "white_stones": white_stones,
        "moves": moves,
        "metadata": metadata,
    }


def board_from_sgf(sgf_content: str, config: Optional[AppConfig] = None) -> BoardState:
    """
    Build a BoardState from a playout snapshot or setup position.

    Setup stones are placed first, then any main line moves are put down as
    plain stones. Nothing is captured, so only move sequences without
    captures give the real position. Komi falls back to the configured
    default and rules come from the configuration. Black setup stones in a
    handicap game are recorded as handicap stones.

    Raises:
        ValueError: If the SGF is invalid or places two stones on one point
    """
    if config is None:
        config = load_config()

    data = parse_sgf(sgf_content)
    komi = data["komi"]
    if komi is None:
        komi = config.board.default_komi

    board = BoardState(size=data["board_size"], komi=komi, rules=config.board.rules)
    for color, stones in (("B", data["black_stones"]), ("W", data["white_stones"])):
        for coord in stones:
            board.place(color, gtp_to_coords(coord, board.size))

    if data["handicap"] >= 2:
        board.handicap_stones = list(data["black_stones"])
        board.next_player = "W"

    board.play_moves(data["moves"])
    return board


def load_sgf_file(file_path: str, config: Optional[AppConfig] = None) -> BoardState:
    """
    Load a board snapshot from an SGF file on disk.

    Args:
        file_path: Path to the SGF file
        config: Configuration for komi/rules defaults

    Returns:
        BoardState with the setup stones and main line moves placed
    """
    with open(file_path, "rb") as f:
        content = f.read().decode("utf-8", errors="replace")
    return board_from_sgf(content, config)
