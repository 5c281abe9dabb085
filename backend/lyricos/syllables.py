"""
syllables.py
------------
Script-aware syllable estimator used for every lyric line:
• count_hindi_syllables (…)  – Devanagari aksharas (virama-aware)
• count_syllables (…)        – one token, English vowel-group heuristic
• count_line_syllables (…)   – whole line, brackets stripped, tokens summed
Pure functions over constant tables; safe to call from any thread.
"""

from __future__ import annotations

# ───── character tables ─────────────────────────────────────────
DEVANAGARI_BLOCK = (0x0900, 0x097F)

INDEPENDENT_VOWELS = ((0x0904, 0x0914), (0x0960, 0x0961), (0x0972, 0x0977))
CONSONANTS = ((0x0915, 0x0939), (0x0958, 0x095F), (0x0979, 0x097F))
VIRAMA = "\u094d"

ASCII_LETTERS = frozenset("abcdefghijklmnopqrstuvwxyz")
VOWELS = frozenset("aeiouy")
SUFFIX_BLOCKERS = frozenset("laeiouy")   # letters that keep a trailing e/es

EXCEPTIONS = {"every": 2, "different": 2, "family": 2, "interest": 2}

# JavaScript `\s` semantics for token boundaries
WHITESPACE = frozenset(
    "\t\n\v\f\r \u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)
LINE_TERMINATORS = frozenset("\n\r\u2028\u2029")


def _in_ranges(ch: str, ranges) -> bool:
    cp = ord(ch)
    return any(lo <= cp <= hi for lo, hi in ranges)


# ───── script detection ─────────────────────────────────────────
def is_devanagari(token: str) -> bool:
    lo, hi = DEVANAGARI_BLOCK
    return any(lo <= ord(ch) <= hi for ch in token)


# ───── Devanagari ───────────────────────────────────────────────
def is_independent_vowel(ch: str) -> bool:
    return _in_ranges(ch, INDEPENDENT_VOWELS)


def is_consonant(ch: str) -> bool:
    return _in_ranges(ch, CONSONANTS)


def count_hindi_syllables(word: str) -> int:
    """
    Count aksharas in a Devanagari token.

    Independent vowels always add one. A consonant adds one unless the next
    character is a virama, which makes it the half-form opening a conjunct;
    the cluster's last consonant carries the syllable. Matras, nukta and
    anusvara attach to the preceding syllable and add nothing.
    """
    count = 0
    chars = list(word)  # str iterates by code point
    for i, ch in enumerate(chars):
        if is_independent_vowel(ch):
            count += 1
        elif is_consonant(ch):
            if i + 1 < len(chars) and chars[i + 1] == VIRAMA:
                continue
            count += 1
    return count


# ───── English ──────────────────────────────────────────────────
def _strip_suffix(word: str) -> str:
    # leftmost match wins: "<c>es" is tried one position before "ed" / "<c>e"
    if len(word) >= 3 and word.endswith("es") and word[-3] not in SUFFIX_BLOCKERS:
        return word[:-3]
    if word.endswith("ed"):
        return word[:-2]
    if len(word) >= 2 and word.endswith("e") and word[-2] not in SUFFIX_BLOCKERS:
        return word[:-2]
    return word


def _vowel_groups(word: str) -> int:
    """Vowel runs, each split into chunks of at most two letters."""
    groups, run = 0, 0
    for ch in word + " ":
        if ch in VOWELS:
            run += 1
            continue
        groups += (run + 1) // 2
        run = 0
    return groups


def count_syllables(word: str) -> int:
    if is_devanagari(word):
        return count_hindi_syllables(word)

    word = "".join(ch for ch in word.lower() if ch in ASCII_LETTERS)
    if not word:
        return 0
    if len(word) <= 3:
        return 1
    if word in EXCEPTIONS:
        return EXCEPTIONS[word]

    word = _strip_suffix(word)
    if word.startswith("y"):
        word = word[1:]

    return _vowel_groups(word) or 1


# ───── lines ────────────────────────────────────────────────────
def strip_brackets(line: str) -> str:
    """Drop every [ … ] group that closes before the end of its text line."""
    out, i, n = [], 0, len(line)
    while i < n:
        ch = line[i]
        if ch == "[":
            j = i + 1
            while j < n and line[j] != "]" and line[j] not in LINE_TERMINATORS:
                j += 1
            if j < n and line[j] == "]":
                i = j + 1
                continue
        out.append(ch)
        i += 1
    return "".join(out)


def tokenize(line: str) -> list[str]:
    tokens, cur = [], []
    for ch in line:
        if ch in WHITESPACE:
            if cur:
                tokens.append("".join(cur))
                cur = []
        else:
            cur.append(ch)
    if cur:
        tokens.append("".join(cur))
    return tokens


def count_line_syllables(line: str) -> int:
    """
    Syllables in one lyric line; section markers like [Chorus] are ignored.
    Never raises: anything that isn't text counts as an empty line.
    """
    if not isinstance(line, str):
        return 0
    return sum(count_syllables(tok) for tok in tokenize(strip_brackets(line)))
