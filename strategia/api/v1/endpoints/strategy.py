from dataclasses import asdict
from typing import Dict

from fastapi import APIRouter, Depends, Query, Response, status

from strategia.api.deps import get_workspace
from strategia.schemas.strategic.perspective import PlanningDraftCreate
from strategia.services.export_service import ExportService
from strategia.services.workspace import StrategyWorkspace
from strategia.templates.api import ApiResponseTemplate

router = APIRouter()

EXPORT_FORMATS = {
    "csv": (ExportService.export_to_csv, "text/csv", "csv"),
    "xlsx": (
        ExportService.export_to_excel,
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "xlsx",
    ),
    "pdf": (ExportService.export_to_pdf, "application/pdf", "pdf"),
}


@router.get("/draft")
async def get_draft(workspace: StrategyWorkspace = Depends(get_workspace)) -> Dict:
    draft = asdict(workspace.draft) if workspace.draft else None
    return ApiResponseTemplate.success(data=draft, message="Planning draft")


@router.post("/draft", status_code=status.HTTP_201_CREATED)
async def save_draft(
    data: PlanningDraftCreate,
    workspace: StrategyWorkspace = Depends(get_workspace),
) -> Dict:
    draft = workspace.set_draft(data)
    return ApiResponseTemplate.success(data=asdict(draft), message="Planning draft saved")


@router.get("/export")
async def export_strategy(
    format: str = Query("csv", pattern="^(csv|xlsx|pdf)$"),
    workspace: StrategyWorkspace = Depends(get_workspace),
) -> Response:
    exporter, media_type, extension = EXPORT_FORMATS[format]
    return Response(
        content=exporter(workspace),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="strategy.{extension}"'},
    )
