"""
lyric.py
--------
Groq-based helpers, all hanging off an explicitly constructed LyricClient:
• generate_lyrics (…)       – N full song variants, generated concurrently
• suggest_alternatives (…)  – 3 replacement candidates for one line
• regenerate_line (…)       – a single rewrite of one line
• suggest_anchors (…)       – thematic anchor words for a topic
Model JSON is parsed leniently; per-line syllables fall back to our counter.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any

from groq import AsyncGroq   # cloud LLM

from lyricos.analysis import average_syllables, resolve_line_syllables
from lyricos.config import DEFAULT_MODEL, Settings
from lyricos.models import AppConfig, LyricLine, LyricVariant, VariantMetadata
from lyricos.prompts import (
    SYSTEM_INSTRUCTION,
    build_anchor_prompt,
    build_regenerate_prompt,
    build_suggest_prompt,
    build_variant_prompt,
)

# ───── logger setup ──────────────────────────────────────────────
log = logging.getLogger("latency")


class LyricGenerationError(RuntimeError):
    """No variant could be generated for a request."""


# ---------- helpers --------------------------------------------
def safe_parse_json(text: str | None) -> dict | None:
    """Parse a model reply that may be wrapped in ``` fences or chatter."""
    if not text:
        return None
    cleaned = text.replace("```json", "").replace("```", "").strip()
    first, last = cleaned.find("{"), cleaned.rfind("}")
    if first != -1 and last != -1:
        cleaned = cleaned[first:last + 1]
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        log.warning("LyricOS JSON parse error: %s", exc)
        return None
    return data if isinstance(data, dict) else None


_METADATA_KEYS = {
    "anchorsUsed":            "anchors_used",
    "timeSignature":          "time_signature",
    "vocalRange":             "vocal_range",
    "estimatedDuration":      "estimated_duration",
    "narrativeArc":           "narrative_arc",
    "recommendedInstruments": "recommended_instruments",
    "lyricalDensity":         "lyrical_density",
}


_LIST_FIELDS = {"anchors_used", "structure", "warnings", "recommended_instruments"}


def _str_list(value: Any) -> list[str]:
    """JSON mode enforces no schema: a lone string becomes a one-item list."""
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, list):
        return [str(v) for v in value if isinstance(v, (str, int, float)) and not isinstance(v, bool)]
    return []


def _score(value: Any) -> float:
    if isinstance(value, bool) or not value:
        return 0.9
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.9


def _metadata(raw: dict[str, Any] | None) -> VariantMetadata:
    fields = VariantMetadata.model_fields
    out = {}
    for key, value in (raw if isinstance(raw, dict) else {}).items():
        name = _METADATA_KEYS.get(key, key)
        if name not in fields or name == "syllables_avg" or value is None:
            continue
        if name in _LIST_FIELDS:
            value = _str_list(value)
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(value)   # models like to send "bpm": 92
        elif not isinstance(value, str):
            continue
        out[name] = value
    return VariantMetadata(**out)


def _line(item: dict[str, Any]) -> LyricLine:
    text = str(item.get("text") or "")
    explain = item.get("explain")
    return LyricLine(
        text          = text,
        type          = "header" if item.get("type") == "header" else "lyric",
        original_text = text,
        is_edited     = False,
        syllables     = resolve_line_syllables(text, item.get("syllables")),
        score         = _score(item.get("score")),
        flags         = _str_list(item.get("flags")),
        explain       = explain if isinstance(explain, str) else "",
    )


def build_variant(data: dict[str, Any], index: int) -> LyricVariant:
    """Raises KeyError/TypeError/ValidationError on payloads we can't use."""
    lines = [_line(item) for item in data["content"]]
    metadata = _metadata(data.get("metadata"))
    metadata.syllables_avg = average_syllables(lines)
    return LyricVariant(
        name     = data.get("name") or f"Mix {index + 1}",
        lines    = lines,
        metadata = metadata,
    )


# ---------- client ---------------------------------------------
class LyricClient:
    """
    Thin wrapper around a Groq chat client.

    The caller owns it: build one per app (or per test) and pass it along.
    `client` may be any object exposing an async `chat.completions.create`.
    """

    def __init__(
        self,
        api_key:     str | None = None,
        model:       str        = DEFAULT_MODEL,
        temperature: float      = 0.75,
        client:      Any        = None,
    ):
        self.model = model
        self.temperature = temperature
        self._client = client if client is not None else AsyncGroq(api_key=api_key)

    @classmethod
    def from_settings(cls, settings: Settings) -> "LyricClient":
        return cls(api_key=settings.api_key, model=settings.model, temperature=settings.temperature)

    async def _complete(self, prompt: str, *, system: str | None = None,
                        temperature: float | None = None, tag: str = "chat") -> str:
        messages = [{"role": "user", "content": prompt}]
        if system:
            messages.insert(0, {"role": "system", "content": system})
        t0 = time.perf_counter()
        resp = await self._client.chat.completions.create(
            model           = self.model,
            temperature     = self.temperature if temperature is None else temperature,
            messages        = messages,
            response_format = {"type": "json_object"},
        )
        log.info("%s %.3fs", tag, time.perf_counter() - t0)
        return resp.choices[0].message.content or ""

    # ---------- full-draft generator -------------------------------
    async def generate_variant(self, cfg: AppConfig, index: int, total: int) -> LyricVariant | None:
        prompt = build_variant_prompt(cfg, index, total)
        try:
            text = await self._complete(prompt, system=SYSTEM_INSTRUCTION, tag=f"variant[{index}]")
            data = safe_parse_json(text)
            if data is None:
                return None
            return build_variant(data, index)
        except Exception:
            log.exception("Generation error for variant %d", index)
            return None

    async def generate_lyrics(self, cfg: AppConfig) -> list[LyricVariant]:
        total = cfg.variant_count
        variants = await asyncio.gather(
            *(self.generate_variant(cfg, i, total) for i in range(total))
        )
        valid = [v for v in variants if v is not None]
        if not valid:
            raise LyricGenerationError(
                "Could not generate valid lyrics. Please try a different topic or style."
            )
        return valid

    # ---------- single-line helpers --------------------------------
    async def suggest_alternatives(self, line: str, context: list[str],
                                   style: str, maturity: str) -> list[str]:
        prompt = build_suggest_prompt(line, context, style, maturity)
        try:
            data = safe_parse_json(await self._complete(prompt, temperature=0.9, tag="suggest"))
        except Exception:
            log.exception("Suggestion request failed")
            return []
        suggestions = (data or {}).get("suggestions")
        if not isinstance(suggestions, list):
            return []
        return [str(s) for s in suggestions if isinstance(s, str) and s.strip()]

    async def regenerate_line(self, line: str, context: list[str], cfg: AppConfig) -> str:
        prompt = build_regenerate_prompt(line, context, cfg)
        try:
            data = safe_parse_json(await self._complete(prompt, temperature=0.9, tag="regenerate"))
        except Exception:
            log.exception("Regenerate request failed")
            return line
        new_line = (data or {}).get("newLine")
        return new_line if isinstance(new_line, str) and new_line else line

    async def suggest_anchors(self, topic: str, language: str) -> list[str]:
        if not topic:
            return []
        prompt = build_anchor_prompt(topic, language)
        try:
            data = safe_parse_json(await self._complete(prompt, tag="anchors"))
        except Exception:
            log.exception("Anchor request failed")
            return []
        anchors = (data or {}).get("anchors")
        return [str(a) for a in anchors] if isinstance(anchors, list) else []
