from __future__ import annotations
import logging
from functools import lru_cache
from typing import Dict, List, Optional, Union

from sarthi.intents import rules_en, rules_hi
from sarthi.intents.schemas import DispatchRule, Resolution, RuleTable, TopicRule
from sarthi.lang import coerce_locale

logger = logging.getLogger("sarthi")

TABLES: Dict[str, RuleTable] = {
    "hi": rules_hi.TABLE,
    "en": rules_en.TABLE,
}


class RuleCascade:
    """First-match-wins evaluation of one locale's rule table, in priority order."""

    def __init__(self, table: RuleTable):
        self.table = table
        self.rules: List[Union[TopicRule, DispatchRule]] = table.ordered()

    def explain(self, normalized: str) -> Resolution:
        text = normalized or ""
        for rule in self.rules:
            if not rule.hits(text):
                continue
            if isinstance(rule, DispatchRule):
                branch = rule.pick(text)
                if branch is None:
                    return self._result(text, rule.topic, None, rule.fallback)
                return self._result(text, rule.topic, branch.topic, branch.response)
            return self._result(text, rule.topic, None, rule.response)
        return self._result(text, "fallback", None, self.table.fallback, fallback=True)

    def resolve(self, normalized: str) -> str:
        return self.explain(normalized).text

    def _result(self, text: str, topic: str, branch: Optional[str], response: str, fallback: bool = False) -> Resolution:
        logger.debug("Resolved locale=%s topic=%s branch=%s", self.table.locale, topic, branch)
        return Resolution(
            locale=self.table.locale, normalized=text, topic=topic, branch=branch, fallback=fallback, text=response,
        )


@lru_cache(maxsize=len(TABLES))
def cascade_for(locale: str) -> RuleCascade:
    return RuleCascade(TABLES[locale])


def explain(locale: str, normalized: str) -> Resolution:
    return cascade_for(coerce_locale(locale)).explain(normalized)


def resolve(locale: str, normalized: str) -> str:
    """Pick the answer for an already-normalized utterance. Pure; never raises."""
    return explain(locale, normalized).text
