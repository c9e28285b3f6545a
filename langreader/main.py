from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from typing import List, Optional

from .config import Config, load_config, configure_logging
from .importers import BookImportError
from .models import (
    Book, Flashcard, ImportJsonRequest, ImportTxtRequest, ReviewRequest, SessionReviewRequest,
    SessionScope, SessionState, Settings, SettingsUpdate, Word,
)
from .services import ReaderService
from .storage import JsonStore


def get_reader(request: Request) -> ReaderService:
    return request.app.state.reader


def session_scope(start: int, end: int) -> SessionScope:
    return SessionScope(start_paragraph_number=start, end_paragraph_number=end)


def create_app(config: Optional[Config] = None) -> FastAPI:
    config = config or load_config()
    configure_logging(config)

    reader = ReaderService(JsonStore(config.data_dir))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        reader.load_data()
        yield

    app = FastAPI(title="Bilingual Reader API", lifespan=lifespan)
    app.state.reader = reader

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/book", response_model=Book)
    def get_book(reader: ReaderService = Depends(get_reader)):
        return reader.get_book()

    @app.put("/book", response_model=Book)
    def replace_book(book: Book, reader: ReaderService = Depends(get_reader)):
        return reader.load_book(book)

    @app.post("/book/import/json", response_model=Book)
    def import_json(request: ImportJsonRequest, reader: ReaderService = Depends(get_reader)):
        try:
            return reader.import_json(request.content)
        except BookImportError as e:
            raise HTTPException(status_code=400, detail=str(e))

    @app.post("/book/import/txt", response_model=Book)
    def import_txt(request: ImportTxtRequest, reader: ReaderService = Depends(get_reader)):
        title = request.title.strip()
        if not title:
            raise HTTPException(status_code=400, detail="Please provide a title for the book.")
        try:
            return reader.import_txt(request.content, title, request.language_code.strip())
        except BookImportError as e:
            raise HTTPException(status_code=400, detail=str(e))

    @app.get("/book/words/{word_id}", response_model=Word)
    def get_word(word_id: str, reader: ReaderService = Depends(get_reader)):
        word = reader.find_word(word_id)
        if word is None:
            raise HTTPException(status_code=404, detail="Word not found")
        return word

    @app.get("/flashcards", response_model=List[Flashcard])
    def list_flashcards(reader: ReaderService = Depends(get_reader)):
        return reader.list_cards()

    @app.post("/flashcards/reset")
    def reset_flashcards(reader: ReaderService = Depends(get_reader)):
        reader.reset_progress()
        return {"success": True}

    @app.post("/flashcards/{card_id}/review")
    def review_flashcard(card_id: str, request: ReviewRequest, reader: ReaderService = Depends(get_reader)):
        # Unknown ids are a no-op, reported through the flag
        return {"updated": reader.review_card(card_id, request.rating)}

    @app.get("/session", response_model=SessionState)
    def get_session(scope: SessionScope = Depends(session_scope), reader: ReaderService = Depends(get_reader)):
        return reader.session_state(scope)

    @app.get("/session/preview")
    def preview_session(scope: SessionScope = Depends(session_scope), reader: ReaderService = Depends(get_reader)):
        return {"totalCards": reader.preview_count(scope)}

    @app.post("/session/review", response_model=SessionState)
    def review_session(request: SessionReviewRequest, reader: ReaderService = Depends(get_reader)):
        return reader.review_current(request, request.rating)

    @app.get("/settings", response_model=Settings)
    def get_settings(reader: ReaderService = Depends(get_reader)):
        return reader.get_settings()

    @app.patch("/settings", response_model=Settings)
    def update_settings(changes: SettingsUpdate, reader: ReaderService = Depends(get_reader)):
        return reader.update_settings(changes)

    @app.post("/settings/word-by-word/toggle", response_model=Settings)
    def toggle_word_by_word(reader: ReaderService = Depends(get_reader)):
        return reader.toggle_word_by_word()

    @app.post("/settings/rtl/toggle", response_model=Settings)
    def toggle_rtl(reader: ReaderService = Depends(get_reader)):
        return reader.toggle_rtl()

    return app


app = create_app()
