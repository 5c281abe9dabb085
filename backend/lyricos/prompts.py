"""
prompts.py
----------
Prompt text for the Groq model plus pre-flight config checks.
"""

from __future__ import annotations

import json

from lyricos.models import AppConfig, ConflictWarning

MUSIC_STYLES = [
    "Pop", "Rap", "RnB", "Rock", "EDM",
    "Indie", "Lo-fi", "Romantic", "Sensual", "Devotional",
]

STYLE_EXAMPLES = {
    "Pop":        ["Party", "Banger", "Vibe"],
    "Rap":        ["Flow", "Bars", "Hype"],
    "RnB":        ["Love", "Soft", "Soul"],
    "Rock":       ["Driving", "Anthem", "Gritty"],
    "EDM":        ["Club", "Energy", "Drop"],
    "Indie":      ["Acoustic", "Folk", "Raw"],
    "Lo-fi":      ["Chill", "Study", "Sleep"],
    "Romantic":   ["Ballad", "Heartfelt", "Slow"],
    "Sensual":    ["Intimate", "Passion", "Mood"],
    "Devotional": ["Spiritual", "Prayer", "Chant"],
}

AVAILABLE_SECTIONS = [
    "Intro", "Verse", "Pre-Chorus", "Chorus",
    "Post-Chorus", "Bridge", "Hook", "Drop",
    "Solo", "Outro", "Refrain", "Breakdown",
]

SYSTEM_INSTRUCTION = """
You are LyricOS, a world-class songwriting engine. Your task is to generate high-quality, singable, and emotionally resonant lyrics based on user constraints.

CORE RULES:
1. THEMATIC ADHERENCE: Every line must orbit the provided Topic and use requested Anchor words naturally.
2. STRUCTURE: Unless specified, create a dynamic structure (e.g., V1, Chorus, V2, Chorus, Bridge, Chorus, Outro).
3. STYLE: Match the tone of the requested genre (e.g., Rap needs internal rhymes and flow; Indie needs raw, poetic imagery).
4. MATURITY: Strictly follow SFW/Mature/Explicit settings. Devotional is always SFW.
5. SYLLABLE CONTROL: Maintain consistent syllable counts within sections to ensure the song is singable.

TECHNICAL OUTPUT:
- You must return valid JSON matching the requested schema.
- For each line, calculate the exact syllable count.
- Use 'header' type for section labels (e.g., [Chorus]) and 'lyric' for actual lines.
- Each variant must be distinct in mood or perspective.
"""

# JSON mode on Groq takes no schema, so the shape is spelled out in the prompt
VARIANT_SCHEMA = {
    "name": "string, creative name for this song variant",
    "metadata": {
        "bpm": "string", "key": "string", "mood": "string",
        "timeSignature": "string", "vocalRange": "string",
        "estimatedDuration": "string", "narrativeArc": "string",
        "anchorsUsed": ["string"], "structure": ["string"],
        "warnings": ["string"], "recommendedInstruments": ["string"],
        "lyricalDensity": "string",
    },
    "content": [{
        "type": "'header' or 'lyric'", "text": "string",
        "syllables": "integer", "score": "number",
        "explain": "string", "flags": ["string"],
    }],
}

# ---------- helpers --------------------------------------------
def _language_clause(language: str) -> str:
    if language == "Hindi":
        return "Language: Hindi (Devanagari/Hinglish as appropriate for style)."
    return "Language: English."


def _chorus_clause(cfg: AppConfig) -> str:
    if not cfg.chorus_content:
        return ""
    mode = "Use exactly" if cfg.chorus_locked else "Build upon"
    return f'CHORUS GUIDE: {mode}: "{cfg.chorus_content}"'


def _advanced_clause(cfg: AppConfig) -> str:
    if not cfg.advanced_mode:
        return "Structure: Dynamic/Emergent based on style."
    return (
        f"Structure: {' -> '.join(cfg.custom_structure)}. "
        f"Context: {cfg.story_context}. BPM: {cfg.target_bpm}. "
        f"Rhyme Scheme: {''.join(cfg.rhyme_scheme)}."
    )


def _style_clause(cfg: AppConfig) -> str:
    if cfg.custom_style_description:
        return f"STYLE: {cfg.style} ({cfg.custom_style_description})"
    return f"STYLE: {cfg.style}"


def _technical_clause(cfg: AppConfig) -> str:
    return (
        f"SYLLABLE TIGHTNESS: {cfg.syllable_tightness}. METER: {cfg.meter_consistency}. "
        f"RHYME: {'required' if cfg.rhyme_required else 'optional'}, {cfg.rhyme_placement}. "
        f"BREATH: {cfg.breath_sensitivity}. TARGET LENGTH: {cfg.duration_minutes} min."
    )


# ---------- prompt builders ------------------------------------
def build_variant_prompt(cfg: AppConfig, index: int, total: int) -> str:
    parts = [
        f"TASK: Write a complete song variant ({index + 1}/{total}).",
        f'TOPIC: "{cfg.topic}". ANCHORS: {", ".join(cfg.anchors)}',
        _style_clause(cfg),
        f"MATURITY: {cfg.maturity}",
        _language_clause(cfg.language),
        _chorus_clause(cfg),
        f"INSTRUCTIONS: {cfg.ai_instructions}" if cfg.ai_instructions else "",
        _advanced_clause(cfg),
        _technical_clause(cfg),
        "IMPORTANT: Syllable counts must be accurate. Use 'header' type for section names.",
        f"Return one JSON object shaped like: {json.dumps(VARIANT_SCHEMA)}",
    ]
    return "\n".join(p for p in parts if p)


def build_suggest_prompt(line: str, context: list[str], style: str, maturity: str) -> str:
    return (
        f'Provide 3 better alternatives for this lyric line: "{line}". '
        f"Context: {' / '.join(context)}. Style: {style}. Maturity: {maturity}. "
        'Return JSON: { "suggestions": ["line1", "line2", "line3"] }'
    )


def build_regenerate_prompt(line: str, context: list[str], cfg: AppConfig) -> str:
    return (
        f'Rewrite this lyric line to be better: "{line}". '
        f"Context: {' / '.join(context)}. Style: {cfg.style}. "
        'JSON: { "newLine": "string" }'
    )


def build_anchor_prompt(topic: str, language: str) -> str:
    return (
        f'Give me 8 anchor words for a song about: "{topic}". '
        f'Language: {language}. JSON: {{ "anchors": [] }}'
    )


# ---------- pre-flight checks ----------------------------------
def validate_config(cfg: AppConfig) -> list[ConflictWarning]:
    """Settings that fight each other; the caller decides whether to go on."""
    warnings = []
    if cfg.style == "Devotional" and cfg.maturity in ("Explicit", "Mature"):
        warnings.append(ConflictWarning(
            id="devotional-explicit",
            title="Cultural Conflict",
            message="Devotional style is generally incompatible with Mature/Explicit content.",
        ))
    if not cfg.rhyme_required and cfg.rhyme_scheme:
        warnings.append(ConflictWarning(
            id="rhyme-logic",
            title="Rhyme Logic Conflict",
            message="Custom Rhyme Scheme defined but Rhyme is OFF.",
        ))
    if cfg.topic_locked and len(cfg.topic) < 3:
        warnings.append(ConflictWarning(
            id="empty-topic",
            title="Empty Topic Locked",
            message="Topic is locked but appears empty.",
        ))
    return warnings
