from __future__ import annotations
from typing import Annotated, List, Literal, Optional, Tuple, Union
from pydantic import BaseModel, ConfigDict, Field, model_validator

from sarthi.lang import Locale


class KeywordSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    keywords: Tuple[str, ...]

    def hits(self, text: str) -> bool:
        lower = (text or "").lower()
        return any(kw.lower() in lower for kw in self.keywords)


class Match(BaseModel):
    """Conjunction: every keyword set must hit."""
    model_config = ConfigDict(frozen=True)

    all_of: Tuple[KeywordSet, ...]

    def hits(self, text: str) -> bool:
        return bool(self.all_of) and all(ks.hits(text) for ks in self.all_of)


class TopicRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["topic"] = "topic"
    priority: int
    topic: str
    when: Tuple[Match, ...]
    response: str = Field(min_length=1)

    def hits(self, text: str) -> bool:
        return any(m.hits(text) for m in self.when)


class DispatchRule(BaseModel):
    """Two-level rule: a trigger, then the first matching branch or a clarifying prompt."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["dispatch"] = "dispatch"
    priority: int
    topic: str
    when: Tuple[Match, ...]
    branches: Tuple[TopicRule, ...] = Field(min_length=1)
    fallback: str = Field(min_length=1)

    def hits(self, text: str) -> bool:
        return any(m.hits(text) for m in self.when)

    def pick(self, text: str) -> Optional[TopicRule]:
        for branch in self.branches:
            if branch.hits(text):
                return branch
        return None


Rule = Annotated[Union[TopicRule, DispatchRule], Field(discriminator="kind")]


class RuleTable(BaseModel):
    model_config = ConfigDict(frozen=True)

    locale: Locale
    rules: Tuple[Rule, ...]
    fallback: str = Field(min_length=1)

    @model_validator(mode="after")
    def _unique_priorities(self) -> "RuleTable":
        seen = set()
        for r in self.rules:
            if r.priority in seen:
                raise ValueError(f"duplicate priority {r.priority} in {self.locale} table")
            seen.add(r.priority)
        return self

    def ordered(self) -> List[Union[TopicRule, DispatchRule]]:
        return sorted(self.rules, key=lambda r: r.priority)


class Resolution(BaseModel):
    locale: Locale
    normalized: str
    topic: str
    branch: Optional[str] = None
    fallback: bool = False
    text: str


def keywords(name: str, *words: str) -> KeywordSet:
    return KeywordSet(name=name, keywords=tuple(words))

def when(*sets: KeywordSet) -> Match:
    return Match(all_of=tuple(sets))
