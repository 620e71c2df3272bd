from typing import List

from fastapi import Depends, FastAPI, File, Form, HTTPException, UploadFile
from pydantic import ValidationError

from .config import get_settings
from .departments import DepartmentRegistry, known_departments, registry
from .enhance import ChatCompletionEnhancer, Enhancer, TransformationError, interpret
from .logger import setup_logging
from .models import (
    Department,
    EnhanceRequest,
    EnhanceResponse,
    HealthResponse,
    NormalizationOptions,
    NormalizeRequest,
    NormalizeResponse,
    ProcessRequest,
    ProcessResponse,
)
from .normalize import process_html, process_html_bytes

setup_logging(get_settings().log_level)

app = FastAPI(
    title="html-url-normalizer",
    description="Department-specific URL rewriting for HTML pages moving to the new document paths",
    version="0.1.0",
)


def get_enhancer() -> Enhancer:
    return ChatCompletionEnhancer(get_settings())


def get_registry() -> DepartmentRegistry:
    return registry


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.get("/departments", response_model=List[Department])
def departments():
    return known_departments()


@app.post("/normalize", response_model=NormalizeResponse)
def normalize_html(request: NormalizeRequest):
    return process_html(request.html, request.options)


@app.post("/normalize/file", response_model=NormalizeResponse)
async def normalize_html_file(
    file: UploadFile = File(...),
    secretaria: str = Form(...),
    normalize_special_chars: bool = Form(False),
    relativize_links: bool = Form(False),
    debug: bool = Form(True),
):
    if not file.filename.lower().endswith((".html", ".htm")):
        raise HTTPException(status_code=422, detail="Only HTML files are supported")

    try:
        options = NormalizationOptions(
            secretaria=secretaria,
            normalize_special_chars=normalize_special_chars,
            relativize_links=relativize_links,
            debug=debug,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False)) from exc

    raw = await file.read()
    return process_html_bytes(raw, options)


@app.post("/enhance", response_model=EnhanceResponse)
async def enhance_html(
    request: EnhanceRequest,
    enhancer: Enhancer = Depends(get_enhancer),
    rules: DepartmentRegistry = Depends(get_registry),
):
    try:
        html = await interpret(request.html, request.department, enhancer, rules)
    except TransformationError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return {"html": html}


@app.post("/process", response_model=ProcessResponse)
async def process(
    request: ProcessRequest,
    enhancer: Enhancer = Depends(get_enhancer),
    rules: DepartmentRegistry = Depends(get_registry),
):
    normalization = process_html(request.html, request.options)
    if not request.enhance:
        return ProcessResponse(normalization=normalization)

    try:
        enhanced = await interpret(
            normalization.processed_html, request.options.secretaria, enhancer, rules
        )
    except TransformationError as exc:
        return ProcessResponse(normalization=normalization, enhancement_error=str(exc))
    return ProcessResponse(normalization=normalization, enhanced_html=enhanced)
