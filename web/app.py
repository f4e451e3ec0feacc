"""
FastAPI web form for Bill Search Tool
"""

from fastapi import FastAPI, Request, Form, Body, HTTPException
from fastapi.templating import Jinja2Templates
from fastapi.responses import HTMLResponse, JSONResponse
from typing import Optional, Dict, Any
import logging
import os
from pathlib import Path

from storage.record_store import RecordStore, RecordLoadError
from search.criteria import SearchCriteria, UnknownCriterionError, InvalidCriterionError
from search.orchestrator import BillSearch, ResultsWriteError
from utils.config import AppConfig, load_config
from utils.exporters import get_exporter

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Bill Search Tool",
    description="Search a legislative bill spreadsheet and save the matching bills",
    version="1.0.0"
)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

# Initialize components (lazy loading)
config: Optional[AppConfig] = None
record_store: Optional[RecordStore] = None


def get_config() -> AppConfig:
    global config
    if config is None:
        config = load_config()
    return config


def get_record_store() -> Optional[RecordStore]:
    """The loaded spreadsheet, or None until one has been loaded"""
    global record_store
    if record_store is None:
        data_file = get_config().data_file
        if data_file and os.path.exists(data_file):
            try:
                record_store = RecordStore.from_csv(data_file)
            except RecordLoadError as e:
                logger.warning(f"Configured data file could not be loaded: {e}")
    return record_store


def set_record_store(store: Optional[RecordStore]):
    global record_store
    record_store = store


def _render(request: Request, message: str = "", error: str = "",
            output_folder: str = "", form: Optional[Dict[str, str]] = None):
    store = get_record_store()
    return templates.TemplateResponse(request, "search.html", {
        "file_path": store.source_path if store else "",
        "record_count": len(store) if store else 0,
        "output_folder": output_folder or get_config().output_dir,
        "form": form or {},
        "message": message,
        "error": error
    })


@app.get("/", response_class=HTMLResponse)
async def home(request: Request):
    """Search form"""
    return _render(request)


@app.post("/load", response_class=HTMLResponse)
async def load_file(request: Request, file_path: str = Form(...)):
    """Load a bill spreadsheet from a path on the server"""

    try:
        store = RecordStore.from_csv(file_path)
    except RecordLoadError as e:
        logger.error(f"Load error: {e}")
        return _render(request, error=f"An error occurred: {e}")

    set_record_store(store)
    return _render(request, message=f"File loaded successfully! ({len(store)} bills)")


@app.post("/search", response_class=HTMLResponse)
async def search_page(
    request: Request,
    output_folder: str = Form(""),
    title: str = Form(""),
    description: str = Form(""),
    legislative_session: str = Form(""),
    keywords: str = Form(""),
    senators_intro_committee: str = Form(""),
    representatives: str = Form(""),
    senator_author: str = Form(""),
    representative_author: str = Form(""),
    committee: str = Form("")
):
    """Run a search and save the results to the output folder"""

    form = {
        "title": title,
        "description": description,
        "legislative_session": legislative_session,
        "keywords": keywords,
        "senators_intro_committee": senators_intro_committee,
        "representatives": representatives,
        "senator_author": senator_author,
        "representative_author": representative_author,
        "committee": committee
    }

    store = get_record_store()
    if store is None:
        return _render(request, error="Please load a file first.",
                       output_folder=output_folder, form=form)

    if not output_folder.strip() or not os.path.isdir(output_folder):
        return _render(request, error="Please select a valid output folder.",
                       output_folder=output_folder, form=form)

    cfg = get_config()
    criteria = SearchCriteria.from_form(**form)
    output_path = cfg.results_path_for(output_dir=output_folder)

    try:
        bill_search = BillSearch(store, exporter=get_exporter(cfg.export_format),
                                 trim_tokens=cfg.trim_tokens)
        outcome = bill_search.search_by_criteria(criteria, output_path)
    except (ResultsWriteError, ValueError) as e:
        logger.error(f"Search error: {e}")
        return _render(request, error=f"An error occurred: {e}",
                       output_folder=output_folder, form=form)

    if outcome.found:
        message = f"Search results saved to: \n{outcome.output_path}"
    else:
        message = "No matching results found."

    return _render(request, message=message, output_folder=output_folder, form=form)


@app.post("/api/search")
async def api_search(criteria: Dict[str, Any] = Body(...)):
    """Match bills against a criteria mapping such as {"Committee": ["Judiciary"]}"""

    store = get_record_store()
    if store is None:
        raise HTTPException(status_code=409, detail="Please load a file first.")

    cfg = get_config()
    try:
        search_criteria = SearchCriteria.from_mapping(criteria, strict=cfg.strict_criteria)
    except (UnknownCriterionError, InvalidCriterionError) as e:
        raise HTTPException(status_code=422, detail=str(e))

    matches = BillSearch(store, trim_tokens=cfg.trim_tokens).find_matches(search_criteria)

    return {
        "criteria": search_criteria.to_mapping(),
        "total_results": len(matches),
        "results": [record.to_dict() for record in matches]
    }


@app.get("/api/stats")
async def api_stats():
    """Bill counts per committee"""

    store = get_record_store()
    if store is None:
        raise HTTPException(status_code=409, detail="Please load a file first.")

    return {
        "total_records": len(store),
        "committees": [
            {"committee": stat.committee, "count": stat.count}
            for stat in store.committee_statistics()
        ]
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""

    store = get_record_store()
    return JSONResponse(content={
        "status": "healthy",
        "loaded_file": store.source_path if store else None,
        "total_records": len(store) if store else 0
    })


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
