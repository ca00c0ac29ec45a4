import csv
import io
import logging
from pathlib import Path

from fastapi import FastAPI, UploadFile, File, HTTPException, Request
from fastapi.responses import HTMLResponse, Response
from fastapi.templating import Jinja2Templates

from . import rules
from .errors import CsvIntakeError
from .models import NormalizeResponse, HealthResponse, NormalizedTable, TableSummary, ViewState
from .normalize import apply_upload, normalize_csv_bytes, table_to_rows

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


def _render(request: Request, view: ViewState) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": rules.PAGE_TITLE,
            "view": view,
            "placeholder": rules.PLACEHOLDER,
            "tooltip": rules.MISSING_TOOLTIP,
        },
    )


def create_app() -> FastAPI:
    logging.basicConfig(level=rules.LOG_LEVEL)

    app = FastAPI(
        title="csvtable",
        description="Upload a CSV and view it as a normalized table",
        version="0.1.0",
    )
    app.state.view = ViewState()

    @app.get("/health", response_model=HealthResponse)
    def health():
        return {"ok": True}

    @app.get("/", response_class=HTMLResponse)
    def index(request: Request):
        return _render(request, request.app.state.view)

    @app.post("/", response_class=HTMLResponse)
    async def upload(request: Request, file: UploadFile = File(...)):
        raw = await file.read()
        request.app.state.view = apply_upload(request.app.state.view, file.filename, raw)
        return _render(request, request.app.state.view)

    @app.post("/normalize", response_model=NormalizeResponse)
    async def normalize_csv(file: UploadFile = File(...)):
        raw = await file.read()
        try:
            table = normalize_csv_bytes(file.filename, raw)
        except CsvIntakeError as exc:
            raise HTTPException(status_code=422, detail=exc.message)

        return {
            "headers": table.headers,
            "rows": table.rows,
            "summary": TableSummary(
                rows=len(table.rows),
                columns=len(table.headers),
                dropped_columns=table.dropped_columns,
                dropped_rows=table.dropped_rows,
            ),
        }

    @app.get("/export.csv")
    def export_csv(request: Request):
        view = request.app.state.view
        if not view.rows:
            raise HTTPException(status_code=404, detail="No table loaded")

        outp = io.StringIO(newline="")
        writer = csv.writer(outp, delimiter=",", lineterminator="\n")
        writer.writerows(table_to_rows(NormalizedTable(headers=view.headers, rows=view.rows)))
        return Response(
            content=outp.getvalue().encode("utf-8-sig"),
            media_type="text/csv",
            headers={"Content-Disposition": 'attachment; filename="table.csv"'},
        )

    return app


app = create_app()
