from types import SimpleNamespace

import pytest

from strategia.models.notification import NotificationVariant
from strategia.services.suggestion_engine import KEY_AREAS, SuggestionEngine, extract_key_focus
from strategia.tests.helpers import RecordingNotifier


def contribution(line, text, examples=()):
    return SimpleNamespace(strategic_line=line, contribution=text, examples=list(examples))


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Automation of billing and more AUTOMATION, plus customer service", "automation"),
        ("data analytics and automation", "data analytics"),
        ("Sustainability first", "sustainability"),
        ("Nothing relevant here", "customer service"),
        ("", "customer service"),
    ],
)
def test_extract_key_focus(text, expected):
    assert extract_key_focus(text) == expected


def test_vocabulary_order():
    assert KEY_AREAS[0] == "customer service"
    assert len(KEY_AREAS) == 10


def test_one_suggestion_per_line_with_rule_scores():
    suggestions = SuggestionEngine.generate(
        [
            contribution("Customer Success", "Improve customer service", ["24/7 customer service"]),
            contribution("Operational Excellence", "More automation"),
            contribution("Innovation", "New product development ideas"),
            contribution("Customer Success", "Self-service capabilities for clients"),
        ]
    )

    assert [s.confidence_score for s in suggestions] == [0.87, 0.92, 0.84]
    assert suggestions[0].objective == "Enhance customer experience through customer service"
    assert suggestions[1].objective == "Optimize automation processes for greater efficiency"
    assert suggestions[2].objective == "Develop innovative solutions in product development"
    assert suggestions[0].kpis[0] == "Improve customer satisfaction score by 15%"


def test_general_suggestion_added_when_fewer_than_three():
    suggestions = SuggestionEngine.generate(
        [contribution("Financial Growth", "Market expansion into LATAM", ["market expansion"])]
    )

    assert len(suggestions) == 2
    assert suggestions[0].objective == "Drive financial performance through market expansion"
    assert suggestions[0].confidence_score == 0.91
    general = suggestions[1]
    assert general.objective == "Build organizational capabilities to excel in market expansion"
    assert general.confidence_score == 0.82
    assert general.kpis == [
        "Establish cross-functional excellence in market expansion",
        "Develop comprehensive market expansion measurement framework",
        "Achieve top-quartile industry performance in market expansion metrics",
    ]


def test_unknown_line_uses_default_rule():
    suggestions = SuggestionEngine.generate([contribution("Community", "talent development")])

    assert suggestions[0].objective == "Strengthen capabilities in talent development"
    assert suggestions[0].confidence_score == 0.75


def test_no_contributions_no_suggestions():
    assert SuggestionEngine.generate([]) == []


def test_accepts_dict_contributions():
    suggestions = SuggestionEngine.generate(
        [{"strategic_line": "Innovation", "contribution": "quality assurance", "examples": []}]
    )
    assert suggestions[0].objective == "Develop innovative solutions in quality assurance"


def test_engine_failure_is_notified(monkeypatch):
    notifier = RecordingNotifier()
    engine = SuggestionEngine(notifier)

    def broken(contributions):
        raise ValueError("rule table corrupted")

    monkeypatch.setattr(SuggestionEngine, "generate", staticmethod(broken))

    assert engine.get_suggestions([contribution("Innovation", "x")], user_id=5) == []
    assert notifier.sent[0]["title"] == "AI Suggestion Error"
    assert notifier.sent[0]["description"] == "Could not generate AI suggestions at this time"
    assert notifier.sent[0]["variant"] == NotificationVariant.DESTRUCTIVE
