"""
Terminal shell around a GameSession.

Owns everything the domain layer does not: parsing typed text into squares/commands, drawing the board, and the read/render loop.
"""

import argparse
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence
from uuid import UUID

from chesscore.chess.board import Snapshot
from chesscore.chess.game import GameSession
from chesscore.chess.history import HistoryOutcome
from chesscore.chess.square import FILES, Square, is_algebraic_square
from chesscore.db.database import get_db
from chesscore.db.repository import GameRepository
from chesscore.db.sql_repository import SQLGameRepository

logger = logging.getLogger(__name__)

PROMPT = "Enter move (e.g., e2 e4, or 'undo', 'redo', 'quit'): "
FORMAT_HINT = "Invalid move format. Use 'from to' (e.g., e2 e4)."
EMPTY_SQUARE = "."


# --- COMMANDS ---
@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class Undo:
    pass


@dataclass(frozen=True)
class Redo:
    pass


@dataclass(frozen=True)
class MoveCommand:
    from_square: Square
    to_square: Square


@dataclass(frozen=True)
class Malformed:
    message: str


Command = Quit | Undo | Redo | MoveCommand | Malformed

KEYWORDS: dict[str, Command] = {"quit": Quit(), "undo": Undo(), "redo": Redo()}


def parse_command(text: str) -> Command:
    """
    Session commands are case-insensitive.
    Anything else should be two squares separated by a space or a dash: "e2 e4" / "e2-e4"
    """
    cleaned = text.strip().lower()
    if cleaned in KEYWORDS:
        return KEYWORDS[cleaned]

    parts = cleaned.replace("-", " ").split()
    if len(parts) != 2:
        return Malformed(FORMAT_HINT)

    from_alg, to_alg = parts
    if not (is_algebraic_square(from_alg) and is_algebraic_square(to_alg)):
        return Malformed("Invalid move!")
    return MoveCommand(Square.from_algebraic(from_alg), Square.from_algebraic(to_alg))


# --- RENDERING ---
def render_board(snapshot: Snapshot) -> str:
    """Plain text board: FEN letters for pieces (capitals are white), dots for empty squares"""
    header = "   " + " ".join(FILES)
    lines = [header]
    for row_idx, row in enumerate(snapshot):
        rank = len(snapshot) - row_idx
        cells = " ".join(piece.to_fen() if piece else EMPTY_SQUARE for piece in row)
        lines.append(f"{rank}  {cells}  {rank}")
    lines.append(header)
    return "\n".join(lines)


# --- LOOP ---
def handle_command(session: GameSession, command: Command) -> Optional[str]:
    """Apply one command to the session. Returns a message for the player (None if there is nothing to say)."""
    match command:
        case Undo():
            if session.undo() == HistoryOutcome.NOTHING_TO_UNDO:
                return "No moves to undo!"
        case Redo():
            if session.redo() == HistoryOutcome.NOTHING_TO_REDO:
                return "No moves to redo!"
        case MoveCommand(from_square, to_square):
            result = session.try_move(from_square, to_square)
            if not result.accepted:
                return f"Illegal move! ({result.reason.value})"
        case Malformed(message):
            return message
    return None


def run(
    session: GameSession,
    read_line: Callable[[str], str],
    write: Callable[[str], None],
    on_change: Optional[Callable[[GameSession], None]] = None,
) -> None:
    """
    Read commands until 'quit' (or end of input), redrawing the board after every command.
    on_change only sees commands that actually changed the position.
    """
    message: Optional[str] = None
    while True:
        write(render_board(session.board_snapshot()))
        if message:
            write(message)
        try:
            line = read_line(PROMPT)
        except EOFError:
            break

        command = parse_command(line)
        if isinstance(command, Quit):
            break
        message = handle_command(session, command)
        if on_change is not None and message is None:
            on_change(session)


def open_stored_session(
    repo: GameRepository, game_id: Optional[UUID]
) -> tuple[GameSession, UUID]:
    """Resume a stored game, or store a fresh one."""
    if game_id is None:
        session = GameSession.new_game()
        _, game_id = repo.create_game(session.to_model())
        logger.info("Stored new game %s", game_id)
        return session, game_id

    model = repo.get_game(game_id)
    if model is None:
        raise SystemExit(f"No stored game with id {game_id}")
    logger.info("Resuming game %s", game_id)
    return GameSession.from_model(model), game_id


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chesscore", description="Play chess in the terminal, with undo/redo."
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="verbosity of the log output (default: WARNING)",
    )
    parser.add_argument(
        "--store",
        action="store_true",
        help="persist the game in the database (see CHESSCORE_DATABASE_URL)",
    )
    parser.add_argument(
        "--game-id",
        type=UUID,
        default=None,
        help="resume a stored game (implies --store)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    if not (args.store or args.game_id):
        run(GameSession.new_game(), input, print)
        return

    db_sessions = get_db()
    repo = SQLGameRepository(next(db_sessions))
    try:
        session, game_id = open_stored_session(repo, args.game_id)
        print(f"Game id: {game_id}")
        run(
            session,
            input,
            print,
            on_change=lambda s: repo.update_game(game_id, s.to_model()),
        )
    finally:
        db_sessions.close()


if __name__ == "__main__":
    main()
