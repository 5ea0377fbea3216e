"""Split a free-text Korean address into its three administrative levels.

``"서울특별시 강남구 역삼1동"`` -> level1 ``서울특별시`` (시/도), level2
``강남구`` (구/군), level3 ``역삼1동`` (읍/면/동). Parsing is total: any
string, including an empty one, yields a `ParsedAddress`.
"""

from __future__ import annotations

from dataclasses import dataclass

UNKNOWN_REGION = "알 수 없음"


@dataclass(frozen=True)
class ParsedAddress:
    level1: str
    level2: str
    level3: str
    raw: str

    def level(self, depth: int) -> str:
        return (self.level1, self.level2, self.level3)[depth - 1]


def parse_address(raw: str) -> ParsedAddress:
    tokens = str(raw or "").split()
    return ParsedAddress(
        level1=tokens[0] if tokens else UNKNOWN_REGION,
        level2=tokens[1] if len(tokens) > 1 else "",
        level3=tokens[2] if len(tokens) > 2 else "",
        raw=raw,
    )


class AddressParser:
    def parse(self, raw: str) -> ParsedAddress:
        return parse_address(raw)
