"""Rule cascade: priority order, how-much dispatch and locale fallbacks."""
import pytest

from sarthi.intents import explain, resolve
from sarthi.intents import rules_en, rules_hi
from sarthi.intents.cascade import TABLES, RuleCascade
from sarthi.intents.schemas import DispatchRule, RuleTable, TopicRule, keywords, when
from sarthi.normalize import normalize


def _resolve(locale, raw):
    return explain(locale, normalize(raw))


def test_documents_question_en():
    r = _resolve("en", "What documents are required?")
    assert r.topic == "documents"
    assert r.text.startswith("Documents usually required for PM-KUSUM include")
    assert "Aadhaar card" in r.text
    assert "Bank passbook" in r.text
    assert "Land records" in r.text


def test_land_question_hi_goes_through_how_much():
    r = _resolve("hi", "कितनी जमीन चाहिए")
    assert (r.topic, r.branch) == ("how_much", "how_much_land")
    assert "1 मेगावाट" in r.text
    assert "4–5 एकड़" in r.text


@pytest.mark.parametrize("locale, raw", [
    ("en", "what benefits do small farmers get"),
    ("en", "is there any benefit if I am a small scale farmer"),
    ("hi", "छोटे किसान को क्या लाभ मिलेगा"),
    ("hi", "chhote kisan ko kya labh"),
    ("hi", "kya chhote wale kisaan ko faida hai"),
])
def test_small_farmer_beats_benefits(locale, raw):
    r = _resolve(locale, raw)
    table = rules_hi if locale == "hi" else rules_en
    assert r.topic == "small_farmer"
    assert r.text == table.RESPONSES["small_farmer"]
    assert r.text != table.RESPONSES["benefits"]


@pytest.mark.parametrize("locale, raw", [
    ("en", "How much can I grow with agrovoltaic panels?"),
    ("en", "how many crops in agro solar"),
    ("hi", "agro solar me kitni fasal"),
    ("hi", "एग्रोवोल्टाइक में कितना उगेगा"),
])
def test_how_much_with_agrovoltaics_gets_combined_answer(locale, raw):
    r = _resolve(locale, raw)
    table = rules_hi if locale == "hi" else rules_en
    assert r.topic == "agrovoltaics"
    assert r.branch is None
    assert r.text == table.RESPONSES["agrovoltaics"]
    assert r.text != table.RESPONSES["how_much_clarify"]


@pytest.mark.parametrize("locale, raw", [("en", "how much is it"), ("hi", "कितना")])
def test_bare_how_much_asks_what_about(locale, raw):
    r = _resolve(locale, raw)
    table = rules_hi if locale == "hi" else rules_en
    assert r.topic == "how_much"
    assert r.branch is None
    assert r.text == table.RESPONSES["how_much_clarify"]


@pytest.mark.parametrize("locale, raw, branch", [
    ("en", "how much emi and cost", "how_much_loan"),
    ("en", "how many years for payback", "payback"),
    ("en", "how much sunlight is needed", "sun_hours"),
    ("en", "how much money do i pay", "how_much_cost"),
    ("en", "how much land", "how_much_land"),
    ("en", "how many hours of power", "daytime_hours"),
    ("hi", "kitna loan aur kharcha", "how_much_loan"),
    ("hi", "kitna kharcha lagega", "how_much_cost"),
    ("hi", "kitni dhoop chahiye", "sun_hours"),
    ("hi", "kitne saal me paisa wapas", "payback"),
    ("hi", "kitne ghante bijli", "daytime_hours"),
])
def test_how_much_branch_order(locale, raw, branch):
    r = _resolve(locale, raw)
    assert r.topic == "how_much"
    assert r.branch == branch


@pytest.mark.parametrize("locale, raw, topic", [
    ("en", "my substation is far", "substation"),
    ("en", "what are the benefits", "benefits"),
    ("en", "who is eligible", "eligibility"),
    ("en", "tell me about the tender fee", "tender"),
    ("en", "maintenance needed", "maintenance"),
    ("en", "feeder level solarisation", "feeder"),
    ("en", "which agency runs it", "agency"),
    ("en", "precautions", "dos_and_donts"),
    ("en", "will crops be affected", "farming_impact"),
    ("en", "bank loan", "loan"),
    ("hi", "सब्सिडी के बारे में बताइए", "subsidy"),
    ("hi", "सब स्टेशन दूर है", "substation"),
    ("hi", "दस्तावेज", "documents"),
    ("hi", "टेंडर फीस", "tender"),
    ("hi", "क्या सावधानी रखें", "dos_and_donts"),
])
def test_fixed_phrase_groups(locale, raw, topic):
    assert _resolve(locale, raw).topic == topic


@pytest.mark.parametrize("locale, raw, table", [
    ("en", "xyz qwerty", rules_en),
    ("hi", "नमस्ते", rules_hi),
])
def test_fallback_menu(locale, raw, table):
    r = _resolve(locale, raw)
    assert r.fallback is True
    assert r.text == table.FALLBACK
    assert resolve(locale, normalize(raw)) == table.FALLBACK


def test_empty_text_resolves_to_fallback():
    assert resolve("en", "") == rules_en.FALLBACK


def test_resolve_is_deterministic():
    answers = {resolve("hi", "kitna paisa lagega") for _ in range(5)}
    assert len(answers) == 1


def test_locale_aliases():
    assert resolve("Hindi", "कितना") == rules_hi.RESPONSES["how_much_clarify"]
    assert resolve("en-US", "how much") == rules_en.RESPONSES["how_much_clarify"]


def test_dispatch_rule_in_isolation():
    dispatch = next(r for r in rules_en.TABLE.rules if isinstance(r, DispatchRule))
    assert dispatch.pick("emi cost").topic == "how_much_loan"
    assert dispatch.pick("cost of land").topic == "how_much_cost"
    assert dispatch.pick("nothing here") is None


def test_tables_cover_same_topics():
    def topics(table):
        out = set()
        for r in table.rules:
            out.add(r.topic)
            if isinstance(r, DispatchRule):
                out.update(b.topic for b in r.branches)
        return out
    assert topics(TABLES["hi"]) == topics(TABLES["en"])


def test_table_rejects_duplicate_priorities():
    rule = TopicRule(priority=1, topic="a", when=(when(keywords("a", "a")),), response="A")
    other = TopicRule(priority=1, topic="b", when=(when(keywords("b", "b")),), response="B")
    with pytest.raises(ValueError):
        RuleTable(locale="en", fallback="menu", rules=(rule, other))


def test_cascade_orders_by_priority_not_position():
    low = TopicRule(priority=5, topic="late", when=(when(keywords("x", "solar")),), response="late")
    high = TopicRule(priority=1, topic="early", when=(when(keywords("y", "solar")),), response="early")
    cascade = RuleCascade(RuleTable(locale="en", fallback="menu", rules=(low, high)))
    assert cascade.resolve("solar pump") == "early"
    assert cascade.resolve("wind") == "menu"


@pytest.mark.parametrize("locale, raw", [("hi", "substation kitni door"), ("en", "how far is the substation, how much")])
def test_how_much_outranks_substation(locale, raw):
    r = _resolve(locale, raw)
    table = rules_hi if locale == "hi" else rules_en
    assert r.topic == "how_much"
    assert r.text != table.RESPONSES["substation"]
