"""
Adapter: NibbleVariableCodec
Implementuje port VariableCodec.

Każda litera tokenu to jeden nibble (A=0 … P=15). Nibble pakowane są po dwa
na bajt: pierwsza litera = młodszy nibble bajtu 0, druga = starszy nibble
bajtu 0, trzecia = młodszy nibble bajtu 1 itd. Bajty little-endian, więc
litera i trafia na przesunięcie 4*i bitów.

    "A"  → 0      "P"  → 15
    "AB" → 16     "BA" → 1      "AAB" → 256

Indeksy są 0-based. Tokeny różnej długości mogą dawać ten sam indeks
("A", "AA"), dla stałej długości dekodowanie jest injektywne.
"""
from __future__ import annotations

from contracts import VariableIndexOutOfRange

ALPHABET = "ABCDEFGHIJKLMNOP"
_NIBBLE = {letter: value for value, letter in enumerate(ALPHABET)}


class NibbleVariableCodec:
    """Dekoder tokenów zmiennych w schemacie nibble-packed."""

    def decode(self, token: str) -> int:
        if not token:
            raise ValueError("Empty variable token")
        index = 0
        for position, letter in enumerate(token):
            nibble = _NIBBLE.get(letter)
            if nibble is None:
                raise ValueError(f"Invalid variable letter {letter!r} in {token!r}")
            index |= nibble << (4 * position)
        return index

    def resolve(self, token: str, arg_count: int) -> int:
        index = self.decode(token)
        # 0-based: poprawne są indeksy 0 .. arg_count-1
        if index >= arg_count:
            raise VariableIndexOutOfRange(token, index, arg_count)
        return index

    def encode(self, index: int, width: int | None = None) -> str:
        """
        Najkrótszy token dekodujący się do index (dopełniony 'A' do width).
        Odwrotność decode() — używane przez CLI i testy.
        """
        if index < 0:
            raise ValueError(f"Negative index: {index}")
        letters = []
        while True:
            letters.append(ALPHABET[index & 0xF])
            index >>= 4
            if index == 0:
                break
        if width is not None:
            if width < len(letters):
                raise ValueError(f"Index needs {len(letters)} letters, width={width}")
            letters.extend("A" * (width - len(letters)))
        return "".join(letters)
