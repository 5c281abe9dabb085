import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from lyricos.analysis import (
    context_window,
    edit_delta,
    edit_line,
    has_conflict,
    score_suggestions,
    syllable_distribution,
)
from lyricos.config import Settings, load_settings
from lyricos.lyric import LyricClient, LyricGenerationError
from lyricos.models import (
    AnchorRequest,
    AppConfig,
    EditRequest,
    LineRequest,
    LinesRequest,
    RegenerateRequest,
    SuggestRequest,
)
from lyricos.prompts import AVAILABLE_SECTIONS, MUSIC_STYLES, STYLE_EXAMPLES, validate_config
from lyricos.syllables import count_line_syllables

# ───── logger setup ──────────────────────────────────────────────
logging.basicConfig(level=logging.INFO, format="[latency] %(message)s")


def get_client(request: Request) -> LyricClient:
    """The app's LyricClient, built from settings on first use."""
    state = request.app.state
    if state.client is None:
        if not state.settings.api_key:
            raise HTTPException(status_code=503, detail="GROQ_API_KEY is not configured")
        state.client = LyricClient.from_settings(state.settings)
    return state.client


def create_app(client: LyricClient | None = None, settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    app = FastAPI(title="LyricOS")
    app.state.settings = settings
    app.state.client = client

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    def read_root():
        return {"msg": "Hello, LyricOS!"}

    @app.get("/styles")
    def styles():
        return {"styles": MUSIC_STYLES, "examples": STYLE_EXAMPLES, "sections": AVAILABLE_SECTIONS}

    # ───── syllables (no model involved) ─────────────────────────
    @app.post("/syllables")
    def syllables(payload: LineRequest):
        return {"syllables": count_line_syllables(payload.line)}

    @app.post("/syllables/distribution")
    def distribution(payload: LinesRequest):
        return syllable_distribution(payload.lines)

    @app.post("/edit_line")
    def edit(payload: EditRequest):
        line = edit_line(payload.line, payload.text)
        return {"line": line, "delta": edit_delta(line), "conflict": has_conflict(line)}

    @app.post("/validate")
    def validate(cfg: AppConfig):
        return {"conflicts": validate_config(cfg)}

    # ───── model-backed ──────────────────────────────────────────
    @app.post("/lyrics")
    async def make_lyrics(cfg: AppConfig, request: Request):
        if not cfg.topic:
            raise HTTPException(status_code=400, detail="Please enter a topic to generate lyrics.")
        lyric_client = get_client(request)
        try:
            variants = await lyric_client.generate_lyrics(cfg)
        except LyricGenerationError as exc:
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        return {"variants": variants}

    @app.post("/suggest")
    async def suggest(payload: SuggestRequest, request: Request):
        context = payload.context
        if payload.index is not None and payload.lines:
            context = context_window(payload.lines, payload.index)
        current = payload.syllables
        if current is None:
            current = count_line_syllables(payload.line)
        alts = await get_client(request).suggest_alternatives(
            payload.line, context, payload.style, payload.maturity,
        )
        return {"syllables": current, "suggestions": score_suggestions(current, alts)}

    @app.post("/regenerate_line")
    async def regen(payload: RegenerateRequest, request: Request):
        new_line = await get_client(request).regenerate_line(
            payload.line, payload.context, payload.config,
        )
        return {"line": new_line, "syllables": count_line_syllables(new_line)}

    @app.post("/anchors")
    async def anchors(payload: AnchorRequest, request: Request):
        if not payload.topic:
            return {"anchors": []}
        return {"anchors": await get_client(request).suggest_anchors(payload.topic, payload.language)}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=True)
