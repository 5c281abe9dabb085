"""
models.py
---------
Pydantic shapes shared by the API and the Groq client.
"""

from __future__ import annotations

from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, Field

MaturityLevel = Literal["SFW", "Mature", "Explicit"]
MusicStyle = Literal[
    "Devotional", "Romantic", "Pop", "Indie", "Lo-fi",
    "Rap", "EDM", "RnB", "Rock", "Sensual",
]
Language = Literal["English", "Hindi"]
SyllableTightness = Literal["Auto", "Loose", "Medium", "Tight"]
MeterConsistency = Literal["Auto", "Free", "Mostly consistent", "Strict"]
RhymePlacement = Literal["End", "Internal", "Mixed"]
BreathSensitivity = Literal["Auto", "Conservative", "Aggressive"]
LineType = Literal["header", "lyric"]


def new_id() -> str:
    return str(uuid4())


class AppConfig(BaseModel):
    topic: str = ""
    topic_locked: bool = False
    anchors: list[str] = []
    chorus_content: str = ""
    chorus_locked: bool = False
    style: MusicStyle = "Pop"
    duration_minutes: float = 3
    rhyme_required: bool = True
    variant_count: int = Field(default=2, ge=1, le=5)
    maturity: MaturityLevel = "SFW"
    language: Language = "English"

    ai_instructions: str = ""

    # advanced options
    advanced_mode: bool = False
    rhyme_scheme: list[str] = []        # e.g. ["A", "A", "B", "B"]
    custom_structure: list[str] = []    # e.g. ["Intro", "Verse", "Chorus"]
    story_context: str = ""
    custom_style_description: str = ""
    target_bpm: str = ""

    # technical controls
    syllable_tightness: SyllableTightness = "Auto"
    meter_consistency: MeterConsistency = "Auto"
    rhyme_placement: RhymePlacement = "End"
    breath_sensitivity: BreathSensitivity = "Auto"


class LyricLine(BaseModel):
    id: str = Field(default_factory=new_id)
    text: str
    type: LineType = "lyric"
    original_text: str | None = None
    is_edited: bool = False
    syllables: int | None = None
    score: float | None = None
    flags: list[str] = []
    explain: str = ""


class VariantMetadata(BaseModel):
    syllables_avg: float = 0.0
    anchors_used: list[str] = []
    bpm: str = ""
    key: str = ""
    mood: str = ""
    time_signature: str | None = None
    vocal_range: str | None = None
    estimated_duration: str | None = None
    narrative_arc: str | None = None
    warnings: list[str] = []
    structure: list[str] = []
    recommended_instruments: list[str] = []
    lyrical_density: str | None = None


class LyricVariant(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str
    lines: list[LyricLine]
    metadata: VariantMetadata = Field(default_factory=VariantMetadata)


class ConflictWarning(BaseModel):
    id: str
    title: str
    message: str


class SyllableDistribution(BaseModel):
    counts: list[int]
    heights: list[float]       # bar heights in percent of the peak line
    total: int
    peak: int
    average: float


class SuggestionScore(BaseModel):
    text: str
    syllables: int
    diff: int
    label: str


# ───── request bodies ───────────────────────────────────────────
class LineRequest(BaseModel):
    line: str


class LinesRequest(BaseModel):
    lines: list[LyricLine]


class SuggestRequest(BaseModel):
    line: str
    context: list[str] = []
    style: str = "Pop"
    maturity: str = "SFW"
    syllables: int | None = None     # count shown for the selected line, if known
    lines: list[LyricLine] = []      # whole variant, to derive context from
    index: int | None = Field(default=None, ge=0)


class RegenerateRequest(BaseModel):
    line: str
    context: list[str] = []
    config: AppConfig = Field(default_factory=AppConfig)


class EditRequest(BaseModel):
    line: LyricLine
    text: str


class AnchorRequest(BaseModel):
    topic: str
    language: Language = "English"
