"""Fixed instruction set and output schema sent to the annotation model."""

from __future__ import annotations

from typing import Any

from langchain_core.prompts import ChatPromptTemplate
from pydantic import BaseModel, ConfigDict

FURIGANA_SYSTEM_PROMPT = """
You are a Japanese language expert. Given a Japanese paragraph, return a single HTML string for furigana display using ruby tags.

Rules:
1) Wrap EVERY kanji character or kanji word in <ruby>KANJI<rt>READING</rt></ruby>. Do not skip any kanji.
2) Single kanji need ruby tags too: 本 -> <ruby>本<rt>ほん</rt></ruby>.
3) Wrap multi-kanji words as one unit: 今日 -> <ruby>今日<rt>きょう</rt></ruby>.
4) For kanji mixed with kana, wrap only the kanji run: 食べる -> <ruby>食<rt>た</rt></ruby>べる.
5) Write readings in hiragana or katakana.
6) Leave kana-only text, punctuation and whitespace as plain text outside ruby tags.
7) Preserve the exact original characters; do not normalize or change the text.
8) Return only the HTML string: no markdown, no code fences, no explanation.
""".strip()

RESPONSE_FORMAT: dict[str, Any] = {
    "type": "json_schema",
    "json_schema": {
        "name": "furigana_html",
        "description": "HTML string with ruby/rt tags for furigana",
        "strict": True,
        "schema": {
            "type": "object",
            "properties": {
                "html": {
                    "type": "string",
                    "description": (
                        "HTML with <ruby>kanji<rt>reading</rt></ruby> for every "
                        "kanji character, word or phrase"
                    ),
                },
            },
            "required": ["html"],
            "additionalProperties": False,
        },
    },
}


class FuriganaPayload(BaseModel):
    """Expected JSON body of the model response."""

    model_config = ConfigDict(extra="forbid", strict=True)

    html: str


def build_prompt() -> ChatPromptTemplate:
    return ChatPromptTemplate.from_messages(
        [
            ("system", FURIGANA_SYSTEM_PROMPT),
            ("human", "{text}"),
        ]
    )
