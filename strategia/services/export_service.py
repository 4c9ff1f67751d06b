import csv
import io
from datetime import datetime
from typing import List, Sequence, Tuple

from openpyxl import Workbook
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen.canvas import Canvas

from strategia.services.workspace import EXPERTS, StrategyWorkspace

Section = Tuple[str, Sequence[str], List[Sequence]]


class ExportService:
    """Servicio para exportar la estrategia de la sesión a CSV, Excel o PDF."""

    @staticmethod
    def _sections(workspace: StrategyWorkspace) -> List[Section]:
        objectives = {o.id: o.title for o in workspace.objectives}
        initiatives = {i.id: i.title for i in workspace.initiatives}
        return [
            (
                "Objectives",
                ("Title", "Description", "KPIs"),
                [(o.title, o.description, "; ".join(o.kpis)) for o in workspace.objectives],
            ),
            (
                "Initiatives",
                ("Objective", "Title", "Responsible", "Start", "End", "Status", "Actions"),
                [
                    (
                        objectives.get(i.objective_id, ""),
                        i.title,
                        i.responsible_person,
                        i.start_date.isoformat(),
                        i.end_date.isoformat(),
                        i.status.value,
                        "; ".join(i.actions),
                    )
                    for i in workspace.initiatives
                ],
            ),
            (
                "Perspectives",
                ("Initiative", "Expert", "Argument"),
                [
                    (initiatives.get(p.initiative_id, ""), EXPERTS[p.expert_id], p.argument)
                    for p in workspace.perspectives
                ],
            ),
            ("Alternative strategies", ("Strategy",), [(text,) for text in workspace.alternatives]),
            ("Devil's advocate", ("Point",), [(text,) for text in workspace.devils_advocate]),
        ]

    @staticmethod
    def export_to_csv(workspace: StrategyWorkspace) -> bytes:
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(("Section", "Field 1", "Field 2", "Field 3", "Field 4", "Field 5", "Field 6", "Field 7"))
        for title, _headers, rows in ExportService._sections(workspace):
            for row in rows:
                writer.writerow((title, *row))
        return buffer.getvalue().encode("utf-8")

    @staticmethod
    def export_to_excel(workspace: StrategyWorkspace) -> bytes:
        wb = Workbook()
        wb.remove(wb.active)
        for title, headers, rows in ExportService._sections(workspace):
            # Excel limita los nombres de hoja a 31 caracteres sin apóstrofos
            sheet = wb.create_sheet(title=title.replace("'", "")[:31])
            sheet.append(list(headers))
            for row in rows:
                sheet.append(list(row))

        buffer = io.BytesIO()
        wb.save(buffer)
        buffer.seek(0)
        return buffer.read()

    @staticmethod
    def export_to_pdf(workspace: StrategyWorkspace) -> bytes:
        buffer = io.BytesIO()
        canvas = Canvas(buffer, pagesize=letter)
        width, height = letter
        margin = 40
        y = height - margin
        line_height = 16

        canvas.setFont("Helvetica-Bold", 14)
        canvas.drawString(margin, y, "Strategy export")
        y -= line_height
        canvas.setFont("Helvetica", 9)
        canvas.drawString(margin, y, f"Generated {datetime.utcnow().isoformat()}")
        y -= line_height * 2

        for title, headers, rows in ExportService._sections(workspace):
            lines = [" | ".join(str(value) for value in row) for row in rows] or ["(none)"]
            for index, text in enumerate([title, " | ".join(headers), *lines]):
                if y < margin:
                    canvas.showPage()
                    y = height - margin
                canvas.setFont("Helvetica-Bold" if index == 0 else "Helvetica", 12 if index == 0 else 10)
                canvas.drawString(margin, y, text[:110])
                y -= line_height
            y -= line_height

        canvas.save()
        buffer.seek(0)
        return buffer.read()
