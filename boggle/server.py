import logging
import uuid
from collections import OrderedDict
from typing import Annotated, List, Optional

from fastapi import BackgroundTasks, FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from boggle.errors import BoggleError, GameOverError, InvalidBoardError, WordRejected
from boggle.game import Game
from boggle.grid import MAX_BOARD_SIZE, parse_board, random_board
from boggle.lexicon import Lexicon, load_lexicon
from boggle.metrics import StageTimer, VisitCounter
from boggle.scoring import total_score
from boggle.search import find_all, rank_words, verify
from boggle.settings import Settings, settings

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("boggle")


BoardRow = Annotated[List[str], Field(min_length=1, max_length=MAX_BOARD_SIZE)]
Board = Annotated[List[BoardRow], Field(min_length=1, max_length=MAX_BOARD_SIZE)]


class VerifyRequest(BaseModel):
    board: Board
    word: str = Field(..., min_length=1, max_length=MAX_BOARD_SIZE * MAX_BOARD_SIZE)


class SolveRequest(BaseModel):
    board: Board
    exclude: List[str] = Field(default_factory=list)
    min_length: Optional[int] = Field(None, ge=1)


class NewGameRequest(BaseModel):
    letters: Optional[str] = Field(None, max_length=4 * MAX_BOARD_SIZE * MAX_BOARD_SIZE)
    size: Optional[int] = Field(None, ge=1, le=MAX_BOARD_SIZE)
    min_length: Optional[int] = Field(None, ge=1)


class WordRequest(BaseModel):
    word: str


class GameStore:
    """In-memory sessions; the oldest is dropped once max_sessions is reached."""

    def __init__(self, max_sessions: int):
        self.max_sessions = max_sessions
        self._games: "OrderedDict[str, Game]" = OrderedDict()

    def add(self, game: Game) -> str:
        game_id = uuid.uuid4().hex
        self._games[game_id] = game
        while len(self._games) > max(self.max_sessions, 1):
            evicted, _ = self._games.popitem(last=False)
            logger.info("Evicted game %s", evicted)
        return game_id

    def get(self, game_id: str) -> Game:
        game = self._games.get(game_id)
        if game is None:
            raise HTTPException(404, f"Unknown game: {game_id}")
        return game

    def __len__(self):
        return len(self._games)


def _normalize_board(board: list[list[str]]) -> list[list[str]]:
    return [[cell.strip().upper() for cell in row] for row in board]


def create_app(lexicon: Optional[Lexicon] = None, cfg: Optional[Settings] = None) -> FastAPI:
    from contextlib import asynccontextmanager

    cfg = cfg or settings

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        if application.state.lexicon is None:
            logger.info("Loading dictionary from %s", cfg.DICTIONARY_PATH)
            application.state.lexicon = load_lexicon(cfg.DICTIONARY_PATH)
        yield

    application = FastAPI(title="Boggle", lifespan=lifespan)
    application.state.lexicon = lexicon
    application.state.games = GameStore(cfg.MAX_SESSIONS)

    def _lexicon() -> Lexicon:
        if application.state.lexicon is None:
            raise HTTPException(503, "Dictionary not loaded")
        return application.state.lexicon

    @application.get("/health")
    async def health():
        lex = application.state.lexicon
        return {
            "status": "ok",
            "lexicon_loaded": lex is not None,
            "words": len(lex) if lex is not None else 0,
        }

    @application.post("/verify")
    async def verify_word(body: VerifyRequest):
        board = _normalize_board(body.board)
        word = body.word.strip().upper()
        try:
            found = verify(board, word)
        except BoggleError as e:
            raise HTTPException(400, str(e))
        return {"word": word, "found": found}

    @application.post("/solve")
    async def solve(body: SolveRequest):
        lex = _lexicon()
        board = _normalize_board(body.board)
        min_length = body.min_length or cfg.MIN_WORD_LENGTH
        exclude = {w.strip().upper() for w in body.exclude}

        timer = StageTimer()
        counter = VisitCounter()
        with timer.stage("solve"):
            try:
                words = find_all(board, lex, exclude, min_length, on_visit=counter)
            except BoggleError as e:
                raise HTTPException(400, str(e))

        ranked = rank_words(words)
        logger.info("Solved %dx%d board: %d words, %d cells visited",
                    len(board), len(board), len(ranked), counter.visits)
        return JSONResponse({
            "words": ranked,
            "word_count": len(ranked),
            "score": total_score(ranked),
            "cells_visited": counter.visits,
            "stage_timings": timer.summary(),
        })

    @application.post("/games", status_code=201)
    async def new_game(body: Optional[NewGameRequest] = None):
        body = body or NewGameRequest()
        size = body.size or cfg.BOARD_SIZE
        min_length = body.min_length or cfg.MIN_WORD_LENGTH
        if size > MAX_BOARD_SIZE:
            raise HTTPException(400, f"Board size {size} exceeds the maximum of {MAX_BOARD_SIZE}")
        try:
            board = parse_board(body.letters, size) if body.letters else random_board(size)
        except InvalidBoardError as e:
            raise HTTPException(400, str(e))

        game = Game(board, _lexicon(), min_length)
        game_id = application.state.games.add(game)
        logger.info("New game %s: %s", game_id, "".join("".join(r) for r in board))
        return {"game_id": game_id, **game.summary()}

    @application.get("/games/{game_id}")
    async def get_game(game_id: str):
        game = application.state.games.get(game_id)
        return {"game_id": game_id, **game.summary()}

    @application.post("/games/{game_id}/words")
    async def submit_word(game_id: str, body: WordRequest):
        game = application.state.games.get(game_id)
        try:
            gained = game.submit(body.word)
        except WordRejected as e:
            return JSONResponse(
                {"word": e.word, "accepted": False, "reason": e.reason, "message": e.message},
                status_code=400,
            )
        except GameOverError as e:
            raise HTTPException(409, str(e))
        return {
            "word": game.human_words[-1],
            "accepted": True,
            "points": gained,
            "score": game.human_score,
        }

    @application.post("/games/{game_id}/finish")
    async def finish_game(game_id: str, background_tasks: BackgroundTasks):
        from boggle.notifier import send_game_summary

        game = application.state.games.get(game_id)
        timer = StageTimer()
        counter = VisitCounter()
        try:
            with timer.stage("computer_turn"):
                game.computer_turn(on_visit=counter)
        except GameOverError as e:
            raise HTTPException(409, str(e))

        summary = game.summary()
        if cfg.NOTIFY_ENABLED:
            background_tasks.add_task(
                send_game_summary, summary, cfg.NTFY_TOPIC, cfg.NTFY_URL,
                cfg.NOTIFY_WORDS_PER_GROUP,
            )
        return {
            "game_id": game_id,
            **summary,
            "cells_visited": counter.visits,
            "stage_timings": timer.summary(),
        }

    @application.get("/api/settings")
    async def api_get_settings():
        from boggle.settings import get_editable_settings, EDITABLE_FIELDS
        values = get_editable_settings(cfg)
        field_types = {k: v.__name__ for k, v in EDITABLE_FIELDS.items()}
        return JSONResponse({"settings": values, "field_types": field_types})

    @application.post("/api/settings")
    async def api_post_settings(body: dict):
        from boggle.settings import update_settings, get_editable_settings
        errors = update_settings(cfg, **body)
        if errors:
            return JSONResponse({"updated": get_editable_settings(cfg), "errors": errors}, status_code=400)
        logger.info("Settings updated: %s", body)
        return JSONResponse({"updated": get_editable_settings(cfg)})

    return application


app = create_app()
