import logging
import threading
import uuid
from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from typing import Dict, List, Optional

from strategia.core.exceptions import MissingInformationException, ResourceNotFoundException
from strategia.schemas.strategic.initiative import InitiativeCreate, InitiativeStatus
from strategia.schemas.strategic.objective import ObjectiveCreate
from strategia.schemas.strategic.perspective import PerspectiveCreate, PlanningDraftCreate
from strategia.services.auth_store import AuthEvent, AuthState, AuthStore
from strategia.utils.text import split_lines

logger = logging.getLogger(__name__)

EXPERTS: Dict[str, str] = {
    "exp1": "Technology",
    "exp2": "Talent and Culture",
    "exp3": "Risks",
}


def _new_id() -> str:
    return uuid.uuid4().hex[:12]


@dataclass
class Objective:
    title: str
    description: str = ""
    kpis: List[str] = field(default_factory=list)
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Initiative:
    objective_id: str
    title: str
    start_date: date
    end_date: date
    description: str = ""
    responsible_person: str = ""
    status: InitiativeStatus = InitiativeStatus.PLANNING
    actions: List[str] = field(default_factory=list)
    id: str = field(default_factory=_new_id)


@dataclass
class Perspective:
    initiative_id: str
    expert_id: str
    argument: str
    id: str = field(default_factory=_new_id)

    @property
    def expert_name(self) -> str:
        return EXPERTS[self.expert_id]


@dataclass
class PlanningDraft:
    company_name: str
    area_name: str
    area_responsibilities: List[str]
    strategic_lines: List[str]


class StrategyWorkspace:
    """Entidades locales de la sesión: objetivos, iniciativas, perspectivas."""

    def __init__(self) -> None:
        self.objectives: List[Objective] = []
        self.initiatives: List[Initiative] = []
        self.perspectives: List[Perspective] = []
        self.alternatives: List[str] = []
        self.devils_advocate: List[str] = []
        self.draft: Optional[PlanningDraft] = None

    # Objetivos

    def add_objective(self, data: ObjectiveCreate) -> Objective:
        objective = Objective(title=data.title, description=data.description.strip(), kpis=list(data.kpis))
        self.objectives.append(objective)
        return objective

    def get_objective(self, objective_id: str) -> Optional[Objective]:
        return next((o for o in self.objectives if o.id == objective_id), None)

    def remove_objective(self, objective_id: str) -> Objective:
        objective = self.get_objective(objective_id)
        if objective is None:
            raise ResourceNotFoundException("Objective not found")
        self.objectives.remove(objective)
        return objective

    # Iniciativas

    def add_initiative(self, data: InitiativeCreate) -> Initiative:
        if not data.objective_id or not data.title or not data.start_date or not data.end_date:
            raise MissingInformationException(
                "Missing information: objective, title, start date and end date are required"
            )
        if self.get_objective(data.objective_id) is None:
            raise ResourceNotFoundException("Objective not found")
        if data.end_date < data.start_date:
            raise MissingInformationException("End date cannot be before start date")

        initiative = Initiative(
            objective_id=data.objective_id,
            title=data.title,
            start_date=data.start_date,
            end_date=data.end_date,
            description=data.description.strip(),
            responsible_person=data.responsible_person.strip(),
            status=data.status,
            actions=split_lines(data.actions),
        )
        self.initiatives.append(initiative)
        return initiative

    def get_initiative(self, initiative_id: str) -> Optional[Initiative]:
        return next((i for i in self.initiatives if i.id == initiative_id), None)

    def initiatives_with_objectives(self) -> List[dict]:
        rows = []
        for initiative in self.initiatives:
            objective = self.get_objective(initiative.objective_id)
            row = asdict(initiative)
            row["objective_title"] = objective.title if objective else None
            rows.append(row)
        return rows

    # Perspectivas

    def add_perspective(self, data: PerspectiveCreate) -> Perspective:
        argument = (data.argument or "").strip()
        if not data.initiative_id or not data.expert_id or not argument:
            raise MissingInformationException(
                "Missing information: initiative, expert and argument are required"
            )
        if self.get_initiative(data.initiative_id) is None:
            raise ResourceNotFoundException("Initiative not found")
        if data.expert_id not in EXPERTS:
            raise ResourceNotFoundException("Expert not found")
        perspective = Perspective(
            initiative_id=data.initiative_id,
            expert_id=data.expert_id,
            argument=argument,
        )
        self.perspectives.append(perspective)
        return perspective

    def matrix(self) -> List[dict]:
        """Iniciativas x expertos con los argumentos registrados."""
        rows = []
        for initiative in self.initiatives:
            cells = {
                expert_id: [
                    p.argument
                    for p in self.perspectives
                    if p.initiative_id == initiative.id and p.expert_id == expert_id
                ]
                for expert_id in EXPERTS
            }
            rows.append({"initiative_id": initiative.id, "initiative": initiative.title, "experts": cells})
        return rows

    def add_alternative(self, text: str) -> str:
        return self._add_text(self.alternatives, text, "Alternative strategy cannot be empty")

    def add_devils_point(self, text: str) -> str:
        return self._add_text(self.devils_advocate, text, "Devil's advocate point cannot be empty")

    @staticmethod
    def _add_text(target: List[str], text: str, error: str) -> str:
        cleaned = (text or "").strip()
        if not cleaned:
            raise MissingInformationException(error)
        target.append(cleaned)
        return cleaned

    # Borrador de planificación

    def set_draft(self, data: PlanningDraftCreate) -> PlanningDraft:
        lines = [data.strategic_line_1.strip()]
        if data.strategic_line_2 and data.strategic_line_2.strip():
            lines.append(data.strategic_line_2.strip())
        self.draft = PlanningDraft(
            company_name=data.company_name.strip(),
            area_name=data.area_name.strip(),
            area_responsibilities=split_lines(data.area_responsibilities),
            strategic_lines=lines,
        )
        return self.draft


class WorkspaceStore:
    """Un ``StrategyWorkspace`` por sesión; se descarta al cerrar sesión."""

    def __init__(self, auth_store: AuthStore) -> None:
        self._workspaces: Dict[str, StrategyWorkspace] = {}
        self._lock = threading.Lock()
        self._unsubscribe = auth_store.subscribe(self._on_auth_event)

    def _on_auth_event(self, event: AuthEvent, state: AuthState) -> None:
        if event == AuthEvent.SIGNED_OUT:
            self.discard(state.session_token)

    def get(self, session_token: str) -> StrategyWorkspace:
        with self._lock:
            workspace = self._workspaces.get(session_token)
            if workspace is None:
                workspace = StrategyWorkspace()
                self._workspaces[session_token] = workspace
            return workspace

    def discard(self, session_token: str) -> None:
        with self._lock:
            if self._workspaces.pop(session_token, None) is not None:
                logger.info("Workspace discarded")

    def __len__(self) -> int:
        with self._lock:
            return len(self._workspaces)
