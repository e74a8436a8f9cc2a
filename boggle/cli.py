"""
Console front end for Boggle.

Usage:
    boggle play [--size N] [--min-length N] [--dictionary PATH] [--board LETTERS]
    boggle solve LETTERS [--min-length N] [--dictionary PATH]
    boggle serve [--port N]

Examples:
    boggle play
    boggle play --board "FYCL IOMG ORIL HJHU"
    boggle solve FYCLIOMGORILHJHU --min-length 3
"""
import argparse
import logging
import math
import random
import sys
from pathlib import Path

from boggle.errors import BoggleError, InvalidBoardError, WordRejected
from boggle.game import Game, Outcome
from boggle.grid import format_board, parse_board, random_board
from boggle.lexicon import Lexicon, load_lexicon
from boggle.metrics import StageTimer, VisitCounter
from boggle.scoring import total_score
from boggle.search import find_all, rank_words
from boggle.settings import settings

logger = logging.getLogger("boggle")

INTRO = """\
Welcome to Boggle!
This game is a search for words on a 2-D board of letter cubes.
The good news is that you might improve your vocabulary a bit.
The bad news is that you're probably going to lose miserably to
this little dictionary-toting hunk of silicon.
"""

OUTCOME_MESSAGES = {
    Outcome.COMPUTER: "Ha ha ha, I destroyed you. Better luck next time, puny human!",
    Outcome.HUMAN: "WOW, you defeated me! Congratulations!",
    Outcome.DRAW: "It's a draw. You should play again!",
}


def ask_yes_no(prompt: str, ask=input, say=print) -> bool:
    while True:
        answer = ask(prompt).strip().lower()
        if answer in ("y", "yes"):
            return True
        if answer in ("n", "no"):
            return False
        say("Please type a word that begins with 'y' or 'n'.")


def prompt_board(size: int, ask=input, say=print, rng=None) -> list[list[str]]:
    """Random board, or letters typed by the player (re-prompted until valid)."""
    if ask_yes_no("Generate a random board? ", ask, say):
        return random_board(size, rng)
    while True:
        text = ask(f"Type the {size * size} letters on the board: ")
        try:
            return parse_board(text, size)
        except InvalidBoardError:
            say("Invalid board string. Try again.")


def human_turn(game: Game, ask=input, say=print):
    say("It's your turn!")
    while True:
        say(f"Your words: {{{', '.join(game.human_words)}}}")
        say(f"Your score: {game.human_score}")
        word = ask("Type a word (or Enter to stop): ").strip()
        if not word:
            break
        try:
            game.submit(word)
        except WordRejected as e:
            say(e.message)
            continue
        say(f'You found a new word! "{word.upper()}"')
        say("")
    say("")


def computer_turn(game: Game, say=print, delay_ms: int = 0):
    say("It's my turn!")
    timer = StageTimer()
    counter = VisitCounter(delay_ms)
    with timer.stage("computer_turn"):
        result = game.computer_turn(on_visit=counter)
    logger.debug("Computer search visited %d cells", counter.visits)
    say(f"My words: {{{', '.join(result.words)}}}")
    say(f"My score: {result.score}")
    say(OUTCOME_MESSAGES[game.outcome])
    say("")


def play(
    lexicon: Lexicon,
    size: int = 4,
    min_length: int = 4,
    letters: str | None = None,
    ask=input,
    say=print,
    rng: random.Random | None = None,
    delay_ms: int = 0,
):
    say(INTRO)
    ask("Press Enter to begin the game ...")
    while True:
        say("")
        if letters:
            board = parse_board(letters, size)
            letters = None
        else:
            board = prompt_board(size, ask, say, rng)
        say(format_board(board))
        say("")
        game = Game(board, lexicon, min_length)
        human_turn(game, ask, say)
        computer_turn(game, say, delay_ms)
        if not ask_yes_no("Play again? ", ask, say):
            break
    say("Have a nice day.")


def _infer_size(letters: str) -> int:
    count = sum(1 for ch in letters if not ch.isspace() and ch != ",")
    size = math.isqrt(count)
    if size * size != count or size == 0:
        raise InvalidBoardError(f"Invalid board string: {count} letters is not a square board")
    return size


def solve_command(lexicon: Lexicon, letters: str, min_length: int, say=print):
    board = parse_board(letters, _infer_size(letters))
    say(format_board(board))
    say("")
    words = rank_words(find_all(board, lexicon, min_length=min_length))
    for word in words:
        say(word)
    say(f"{len(words)} words, {total_score(words)} points")
    return words


def main(argv=None):
    parser = argparse.ArgumentParser(prog="boggle", description="Boggle: find words on a grid of letter cubes")
    parser.add_argument("--dictionary", type=Path, default=settings.DICTIONARY_PATH,
                        help=f"Word list, one word per line (default: {settings.DICTIONARY_PATH})")
    parser.add_argument("--min-length", type=int, default=settings.MIN_WORD_LENGTH,
                        help=f"Minimum word length (default: {settings.MIN_WORD_LENGTH})")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log search timings")
    sub = parser.add_subparsers(dest="command", required=True)

    play_p = sub.add_parser("play", help="Play against the computer")
    play_p.add_argument("--size", type=int, default=None,
                        help=f"Board size N for an NxN board (default: from --board, else {settings.BOARD_SIZE})")
    play_p.add_argument("--board", type=str, default=None, help="Letters for the first board, row by row")
    play_p.add_argument("--seed", type=int, default=None, help="Random seed for board generation")
    play_p.add_argument("--delay-ms", type=int, default=settings.VISIT_DELAY_MS,
                        help="Pause per cell visited during the computer's search")

    solve_p = sub.add_parser("solve", help="List every word on a board")
    solve_p.add_argument("letters", help="Board letters row by row, e.g. FYCLIOMGORILHJHU")

    serve_p = sub.add_parser("serve", help="Run the HTTP service")
    serve_p.add_argument("--host", type=str, default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=settings.PORT)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose or settings.DEBUG else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == "serve":
        import uvicorn
        settings.DICTIONARY_PATH = args.dictionary
        settings.MIN_WORD_LENGTH = args.min_length
        uvicorn.run("boggle.server:app", host=args.host, port=args.port)
        return 0

    try:
        lexicon = load_lexicon(args.dictionary)
        if args.command == "solve":
            solve_command(lexicon, args.letters, args.min_length)
        else:
            rng = random.Random(args.seed) if args.seed is not None else None
            size = args.size
            if size is None:
                size = _infer_size(args.board) if args.board else settings.BOARD_SIZE
            play(lexicon, size, args.min_length, args.board, rng=rng, delay_ms=args.delay_ms)
    except BoggleError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (EOFError, KeyboardInterrupt):
        print()
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
