"""Tokenization for the calculator language."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    pos: int
    end: int

    def matches(self, other: "Token") -> bool:
        """Equivalence ignores the source span."""
        return self.kind == other.kind and self.text == other.text

    def describe(self) -> str:
        if self.kind == "EOF":
            return "EOF"
        return f"{self.kind}({self.text})"


OPEN_PAREN = Token("WORD", "(", -1, -1)
CLOSE_PAREN = Token("WORD", ")", -1, -1)


def _is_word_char(ch: str) -> bool:
    return not ch.isspace() and ch != ")"


def _scan_while(source: str, start: int, predicate) -> tuple[str, int]:
    i = start
    while i < len(source) and predicate(source[i]):
        i += 1
    return source[start:i], i


def tokenize(source: str) -> list[Token]:
    tokens: list[Token] = []
    i = 0

    while i < len(source):
        ch = source[i]

        if ch.isspace():
            i += 1
            continue

        if ch in {"(", ")"}:
            tokens.append(Token("WORD", ch, i, i + 1))
            i += 1
            continue

        # Literals run to the next space or ")", so "12ab" is a single NUMBER.
        kind = "NUMBER" if ch.isnumeric() else "WORD"
        text, end = _scan_while(source, i, _is_word_char)
        tokens.append(Token(kind, text, i, end))
        i = end

    tokens.append(Token("EOF", "", len(source), len(source)))
    return tokens
