from typing import Any, Dict, List, Optional

from fastapi import Body, Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from config import get_settings
from database import InstitutionRepository, get_db
from editor import InstitutionEditor
from errors import IdMismatch, InstitutionNotFound, PedipontrenError
from forms import field_paths, form_layout
from logging_config import get_logger, setup_logging
from schemas import (
    INSTITUTION_METADATA,
    YEARS,
    InstitutionType,
    dump_institution,
    parse_institution,
)
from stats import AID_CATEGORIES, aid_trend
from views import dashboard_view, list_view

settings = get_settings()
setup_logging(settings.log_level, settings.log_format)
logger = get_logger("api")

DELETE_PROMPT = "Apakah Anda yakin ingin menghapus data ini?"

app = FastAPI(title="SI-Pedipontren API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PedipontrenError)
async def pedipontren_error_handler(request: Request, exc: PedipontrenError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.to_dict()})


@app.exception_handler(ValidationError)
async def record_validation_handler(request: Request, exc: ValidationError):
    # Records are validated inside the handlers, not by FastAPI
    logger.warning("Rejected record: %d validation error(s)", exc.error_count())
    return JSONResponse(
        status_code=422,
        content={"detail": exc.errors(include_url=False, include_context=False)},
    )


@app.get("/")
def root():
    return {"message": "SI-Pedipontren API running"}


@app.get("/metadata")
def get_metadata():
    return {
        "types": [
            {"type": t.value, "label": INSTITUTION_METADATA[t]["label"], "color": INSTITUTION_METADATA[t]["color"]}
            for t in InstitutionType
        ],
        "years": list(YEARS),
    }


# ---------- Dashboard ----------
@app.get("/stats")
def get_stats(db: InstitutionRepository = Depends(get_db)):
    return dashboard_view(db.list()).model_dump(mode="json")


@app.get("/stats/aid/{category}")
def get_aid_trend(category: str, db: InstitutionRepository = Depends(get_db)):
    if category not in AID_CATEGORIES:
        raise HTTPException(status_code=404, detail=f"Unknown aid category '{category}'")
    return {"category": category, "items": [p.model_dump() for p in aid_trend(db.list(), category)]}


# ---------- Institutions ----------
@app.get("/institutions")
def list_institutions(
    institution_type: Optional[InstitutionType] = Query(None, alias="type"),
    db: InstitutionRepository = Depends(get_db),
):
    return {"items": [dump_institution(i) for i in db.list(institution_type)]}


@app.get("/views/{institution_type}")
def get_list_view(institution_type: InstitutionType, db: InstitutionRepository = Depends(get_db)):
    return list_view(institution_type, db.list(institution_type), settings.region_name).model_dump(mode="json")


@app.post("/institutions/new")
def new_institution(
    institution_type: InstitutionType = Query(InstitutionType.PONPES, alias="type"),
    db: InstitutionRepository = Depends(get_db),
):
    editor = InstitutionEditor.for_new(db, institution_type)
    return {"title": editor.title, "subtitle": editor.subtitle, "item": dump_institution(editor.form_data)}


@app.get("/institutions/{institution_id}")
def get_institution(institution_id: str, db: InstitutionRepository = Depends(get_db)):
    item = db.get(institution_id)
    if item is None:
        raise InstitutionNotFound(institution_id)
    return dump_institution(item)


@app.post("/institutions")
def save_institution(payload: Dict[str, Any] = Body(...), db: InstitutionRepository = Depends(get_db)):
    item = parse_institution(payload)
    created = db.save(item)
    return {"id": item.id, "created": created, "item": dump_institution(item)}


@app.put("/institutions/{institution_id}")
def replace_institution(
    institution_id: str,
    payload: Dict[str, Any] = Body(...),
    db: InstitutionRepository = Depends(get_db),
):
    body_id = payload.get("id")
    if body_id is None:
        payload = {**payload, "id": institution_id}
    elif body_id != institution_id:
        raise IdMismatch(institution_id, body_id)
    item = parse_institution(payload)
    created = db.save(item)
    return {"id": item.id, "created": created, "item": dump_institution(item)}


class FieldUpdate(BaseModel):
    path: str
    value: Any = None


class EditRequest(BaseModel):
    updates: List[FieldUpdate]


@app.patch("/institutions/{institution_id}")
def edit_institution(institution_id: str, payload: EditRequest, db: InstitutionRepository = Depends(get_db)):
    # All updates land on a detached copy; nothing is stored unless every one applies
    editor = InstitutionEditor.for_existing(db, institution_id)
    for update in payload.updates:
        editor.update_field(update.path, update.value)
    item = editor.commit(db)
    return {"id": item.id, "item": dump_institution(item)}


@app.delete("/institutions/{institution_id}")
def delete_institution(
    institution_id: str,
    confirm: bool = False,
    db: InstitutionRepository = Depends(get_db),
):
    if not confirm:
        return {"deleted": False, "confirm": DELETE_PROMPT}
    return {"deleted": db.delete(institution_id)}


# ---------- Forms ----------
@app.get("/form/{institution_type}")
def get_form_layout(institution_type: InstitutionType):
    layout = form_layout(institution_type)
    return {**layout.model_dump(mode="json"), "paths": field_paths(layout)}


# ---------- Export (not implemented) ----------
@app.post("/export/excel")
def export_excel():
    logger.info("Excel export requested")
    return {"message": "Mengekspor ke Excel..."}


@app.post("/export/pdf")
def export_pdf():
    logger.info("PDF export requested")
    return {"message": "Mengekspor ke PDF..."}


# ---------- Utilities ----------
@app.get("/test")
def test_store(db: InstitutionRepository = Depends(get_db)):
    return {
        "backend": "✅ Running",
        "store": "in-memory",
        "seed_source": settings.seed_path or "built-in",
        "records": len(db),
        "types": {t.value: len(db.list(t)) for t in InstitutionType},
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
