"""Motor de sugerencias de objetivos basado en reglas.

Agrupa las contribuciones por línea estratégica y aplica una plantilla por
línea. El foco clave se elige por conteo de frases de un vocabulario fijo.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from strategia.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

KEY_AREAS: Sequence[str] = (
    "customer service",
    "digital transformation",
    "data analytics",
    "self-service capabilities",
    "automation",
    "market expansion",
    "product development",
    "talent development",
    "quality assurance",
    "sustainability",
)


@dataclass(frozen=True)
class SuggestionRule:
    objective: str
    kpis: Sequence[str]
    confidence_score: float


@dataclass
class Suggestion:
    objective: str
    kpis: List[str] = field(default_factory=list)
    confidence_score: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "objective": self.objective,
            "kpis": list(self.kpis),
            "confidence_score": self.confidence_score,
        }


LINE_RULES: Dict[str, SuggestionRule] = {
    "Customer Success": SuggestionRule(
        objective="Enhance customer experience through {focus}",
        kpis=(
            "Improve customer satisfaction score by 15%",
            "Reduce customer support tickets by 25%",
            "Increase customer retention rate to 90%",
        ),
        confidence_score=0.87,
    ),
    "Operational Excellence": SuggestionRule(
        objective="Optimize {focus} processes for greater efficiency",
        kpis=(
            "Reduce process cycle time by 30%",
            "Decrease operational costs by 20%",
            "Improve resource utilization by 25%",
        ),
        confidence_score=0.92,
    ),
    "Innovation": SuggestionRule(
        objective="Develop innovative solutions in {focus}",
        kpis=(
            "Launch 3 new innovative features quarterly",
            "Increase innovation-driven revenue by 15%",
            "Reduce time-to-market for new ideas by 40%",
        ),
        confidence_score=0.84,
    ),
    "Financial Growth": SuggestionRule(
        objective="Drive financial performance through {focus}",
        kpis=(
            "Increase revenue by 20% year-over-year",
            "Improve profit margin by 5 percentage points",
            "Optimize cost structure saving 15% in targeted areas",
        ),
        confidence_score=0.91,
    ),
}

DEFAULT_RULE = SuggestionRule(
    objective="Strengthen capabilities in {focus}",
    kpis=(
        "Improve key metrics by 20%",
        "Enhance team capabilities through targeted training",
        "Implement 3 best practices industry benchmarks",
    ),
    confidence_score=0.75,
)

GENERAL_RULE = SuggestionRule(
    objective="Build organizational capabilities to excel in {focus}",
    kpis=(
        "Establish cross-functional excellence in {focus}",
        "Develop comprehensive {focus} measurement framework",
        "Achieve top-quartile industry performance in {focus} metrics",
    ),
    confidence_score=0.82,
)

MIN_SUGGESTIONS = 3


def extract_key_focus(text: str) -> str:
    """Frase del vocabulario con más apariciones; empate conserva la primera."""
    best_match = KEY_AREAS[0]
    highest_count = 0
    for area in KEY_AREAS:
        count = len(re.findall(re.escape(area), text or "", flags=re.IGNORECASE))
        if count > highest_count:
            highest_count = count
            best_match = area
    return best_match


def _combined_text(contributions: Iterable[Any]) -> str:
    parts = []
    for item in contributions:
        examples = " ".join(_field(item, "examples") or [])
        parts.append(f"{_field(item, 'contribution') or ''} {examples}")
    return " ".join(parts)


def _field(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def _apply(rule: SuggestionRule, focus: str) -> Suggestion:
    return Suggestion(
        objective=rule.objective.format(focus=focus),
        kpis=[kpi.format(focus=focus) for kpi in rule.kpis],
        confidence_score=rule.confidence_score,
    )


class SuggestionEngine:
    """Genera sugerencias de objetivos a partir de contribuciones."""

    def __init__(self, notifier: NotificationService) -> None:
        self.notifier = notifier

    @staticmethod
    def generate(contributions: Sequence[Any]) -> List[Suggestion]:
        suggestions: List[Suggestion] = []
        lines = list(dict.fromkeys(_field(c, "strategic_line") for c in contributions))
        for line in lines:
            line_items = [c for c in contributions if _field(c, "strategic_line") == line]
            rule = LINE_RULES.get(line, DEFAULT_RULE)
            suggestions.append(_apply(rule, extract_key_focus(_combined_text(line_items))))

        if len(suggestions) < MIN_SUGGESTIONS and contributions:
            suggestions.append(_apply(GENERAL_RULE, extract_key_focus(_combined_text(contributions))))
        return suggestions

    def get_suggestions(self, contributions: Sequence[Any], *, user_id: int) -> List[Suggestion]:
        """Como ``generate``, pero un fallo se notifica y devuelve lista vacía."""
        try:
            return self.generate(contributions)
        except Exception:
            logger.exception("Error generating suggestions for user %s", user_id)
            self.notifier.notify_error(
                user_id=user_id,
                title="AI Suggestion Error",
                description="Could not generate AI suggestions at this time",
            )
            return []
