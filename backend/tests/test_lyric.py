from __future__ import annotations

import asyncio

import pytest

from conftest import VARIANT_PAYLOAD, FakeGroq
from lyricos.analysis import has_conflict
from lyricos.lyric import LyricClient, LyricGenerationError, build_variant, safe_parse_json
from lyricos.models import AppConfig


def test_safe_parse_json_strips_fences_and_chatter() -> None:
    text = 'Sure! ```json\n{"suggestions": ["a"]}\n``` hope that helps'
    assert safe_parse_json(text) == {"suggestions": ["a"]}


def test_safe_parse_json_rejects_garbage() -> None:
    assert safe_parse_json("") is None
    assert safe_parse_json(None) is None
    assert safe_parse_json("{not json}") is None
    assert safe_parse_json("[1, 2]") is None


def test_build_variant_fills_defaults_and_counts() -> None:
    variant = build_variant(VARIANT_PAYLOAD, 0)
    header, first, second = variant.lines

    assert variant.name == "Midnight Drive"
    assert header.type == "header"
    assert header.syllables == 0
    assert first.syllables == 3          # model sent 0, counted locally
    assert second.syllables == 7         # model count kept
    assert second.flags == ["locked_word_conflict"]
    assert first.score == 0.9
    assert first.original_text == "I love you"
    assert not first.is_edited
    assert variant.metadata.bpm == "92"
    assert variant.metadata.anchors_used == ["road"]
    assert variant.metadata.syllables_avg == 4.0   # (3 + 5) / 2, recounted


def test_build_variant_default_name() -> None:
    variant = build_variant({"content": [{"type": "lyric", "text": "hey"}]}, 2)
    assert variant.name == "Mix 3"


def test_build_variant_requires_content() -> None:
    with pytest.raises(KeyError):
        build_variant({"name": "x"}, 0)


def test_build_variant_wraps_string_flags() -> None:
    variant = build_variant({"content": [{"text": "hi there", "flags": "locked_word_conflict"}]}, 0)
    line = variant.lines[0]
    assert line.flags == ["locked_word_conflict"]
    assert has_conflict(line)

    odd = build_variant({"content": [{"text": "hi", "flags": {"a": 1}}]}, 0)
    assert odd.lines[0].flags == []


def test_build_variant_tolerates_loose_metadata_and_score() -> None:
    variant = build_variant({
        "metadata": {"anchorsUsed": "rain", "structure": 4, "warnings": ["w", None], "mood": ["x"]},
        "content": [{"text": "hey", "score": "great", "explain": 3}],
    }, 0)
    assert variant.metadata.anchors_used == ["rain"]
    assert variant.metadata.structure == []
    assert variant.metadata.warnings == ["w"]
    assert variant.metadata.mood == ""
    assert variant.lines[0].score == 0.9
    assert variant.lines[0].explain == ""

    assert build_variant({"metadata": "junk", "content": []}, 0).metadata.bpm == ""


def test_generate_lyrics_drops_failed_variants() -> None:
    fake = FakeGroq(VARIANT_PAYLOAD, "no json here", RuntimeError("boom"))
    client = LyricClient(model="m", client=fake)

    variants = asyncio.run(client.generate_lyrics(AppConfig(topic="night", variant_count=3)))

    assert len(variants) == 1
    assert len(fake.calls) == 3
    assert fake.calls[0]["model"] == "m"
    assert fake.calls[0]["messages"][0]["role"] == "system"
    assert fake.calls[0]["response_format"] == {"type": "json_object"}


def test_generate_lyrics_raises_when_nothing_usable() -> None:
    client = LyricClient(model="m", client=FakeGroq("nope"))
    with pytest.raises(LyricGenerationError):
        asyncio.run(client.generate_lyrics(AppConfig(topic="night", variant_count=2)))


def test_single_line_helpers() -> None:
    client = LyricClient(model="m", client=FakeGroq(
        {"suggestions": ["one line", "", "two line"]},
        {"newLine": "a brand new line"},
        {"anchors": ["rain", "glass"]},
    ))
    assert asyncio.run(client.suggest_alternatives("x", [], "Pop", "SFW")) == ["one line", "two line"]
    assert asyncio.run(client.regenerate_line("x", [], AppConfig())) == "a brand new line"
    assert asyncio.run(client.suggest_anchors("storm", "English")) == ["rain", "glass"]


def test_single_line_helpers_degrade_on_failure() -> None:
    client = LyricClient(model="m", client=FakeGroq(RuntimeError("down")))
    assert asyncio.run(client.suggest_alternatives("x", [], "Pop", "SFW")) == []
    assert asyncio.run(client.regenerate_line("keep me", [], AppConfig())) == "keep me"
    assert asyncio.run(client.suggest_anchors("storm", "English")) == []
    assert asyncio.run(client.suggest_anchors("", "English")) == []
