"""Text budgeter -- dedupes search snippets and packs them into a char budget."""

from typing import Iterable, List, TypeVar

T = TypeVar("T")

ELLIPSIS = "..."

# Characters that close a sentence (or a quoted / bracketed span).
END_PUNCTUATION = frozenset(".!?*\")}`]$。！？”）】’」_")
START_BOUNDARIES = (".", "!", "?", "\n")

# Pictographic emoji blocks, plus the variation selector that trails many of them.
EMOJI_RANGES = (
    (0x2600, 0x27BF),
    (0x2B00, 0x2BFF),
    (0xFE0F, 0xFE0F),
    (0x1F000, 0x1FAFF),
)


def unique(items: Iterable[T]) -> List[T]:
    """Drop repeats by equality, keeping the first occurrence order."""
    seen = set()
    out: List[T] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        out.append(item)
    return out


def _is_emoji(char: str) -> bool:
    code = ord(char)
    return any(low <= code <= high for low, high in EMOJI_RANGES)


def _last_sentence_end(text: str) -> int:
    """Index of the last char to keep, or -1 when *text* has no boundary.

    Emoji close a sentence too. A punctuation mark standing alone after
    whitespace is not kept.
    """
    for i in range(len(text) - 1, -1, -1):
        if _is_emoji(text[i]):
            return i
        if text[i] in END_PUNCTUATION:
            if i > 0 and text[i - 1].isspace():
                return i - 1
            return i
    return -1


def trim_to_end_sentence(text: str, strict: bool = False) -> str:
    """Cut *text* back to its last complete sentence.

    Text without any boundary is kept whole, unless *strict* is set, in which
    case it is dropped entirely.
    """
    if not text:
        return ""
    last = _last_sentence_end(text)
    if last == -1:
        return "" if strict else text.rstrip()
    return text[: last + 1].rstrip()


def trim_to_start_sentence(text: str) -> str:
    """Drop the leading partial sentence of *text*."""
    if not text:
        return ""
    positions = [text.find(mark) for mark in START_BOUNDARIES]
    positions = [p for p in positions if p > 0]
    if not positions:
        return text
    return text[min(positions) + 1 :].lstrip()


def _clean_bit(bit: str) -> str:
    # Incomplete sentences confuse the model, so cut them off.
    if bit.endswith(ELLIPSIS):
        bit = trim_to_end_sentence(bit[: -len(ELLIPSIS)]).strip()
    if bit.startswith(ELLIPSIS):
        bit = trim_to_start_sentence(bit[len(ELLIPSIS) :]).strip()
    return bit


def assemble_text(text_bits: Iterable[str], budget_chars: int) -> str:
    """Join unique, non-empty bits (one per line) without exceeding *budget_chars*.

    A bit that does not fit is cut to the remaining room and trimmed back to
    its last sentence boundary; a cut bit with no boundary left is dropped.
    The result is empty when nothing usable survived.
    """
    text = ""
    for bit in unique(text_bits):
        if not bit:
            continue

        bit = _clean_bit(bit)
        if not bit:
            continue
        if len(text) >= budget_chars:
            break

        remaining = budget_chars - len(text)
        # +1 for the newline appended after each bit
        if len(bit) + 1 > remaining:
            room = max(0, remaining - 1)
            bit = trim_to_end_sentence(bit[:room], strict=True).strip()

        if not bit:
            continue

        text += bit + "\n"

    return text
