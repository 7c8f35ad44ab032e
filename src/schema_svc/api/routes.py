"""FastAPI routes for the Event Schema API."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

from ..catalog.types import EntityKind
from ..pipelines import Generator, Inspector, Translator
from ..views.composer import ViewComposer, summarize
from ..views.options import (
    EXTENSION,
    EXTENSIONS,
    SPACES,
    VERBOSE,
    normalize_extensions,
    normalize_profiles,
    translate_options,
    view_options,
)
from ..views.types import InternalError, NotFound, ViewOptions, ViewResult
from .models import ErrorResponse, ExtensionModel, ProfileModel, VersionResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Schema"])

# Documented error shapes of single-entry routes
_ERRORS = {404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
_BODY_ERRORS = {400: {"model": ErrorResponse}}

# Configuration - will be set during app startup
_composer: ViewComposer | None = None
_translator: Translator | None = None
_inspector: Inspector | None = None
_generator: Generator | None = None


def configure(
    composer: ViewComposer,
    translator: Translator | None = None,
    inspector: Inspector | None = None,
    generator: Generator | None = None,
) -> None:
    """Configure the schema routes.

    Args:
        composer: View composer bound to the loaded catalog
        translator: Optional event translation pipeline
        inspector: Optional event validation pipeline
        generator: Optional sample data generator
    """
    global _composer, _translator, _inspector, _generator
    _composer = composer
    _translator = translator
    _inspector = inspector
    _generator = generator


def _get_composer() -> ViewComposer:
    """Get the composer, raising if not configured."""
    if _composer is None:
        raise HTTPException(status_code=503, detail="Schema catalog not initialized")
    return _composer


def _view_response(result: ViewResult) -> Any:
    """Translate a composition outcome into an HTTP response."""
    if isinstance(result, NotFound):
        return JSONResponse(status_code=404, content={"error": result.message})
    if isinstance(result, InternalError):
        return JSONResponse(status_code=500, content={"error": result.message})
    return result.to_dict()


def _extensions(request: Request) -> frozenset[str]:
    return normalize_extensions(request.query_params.get(EXTENSIONS))


def _profiles(request: Request) -> frozenset[str] | None:
    return normalize_profiles(request.query_params.get("profiles"))


def _invalid_body(exc: ValueError) -> JSONResponse:
    logger.warning(f"Rejected request body: {exc}")
    return JSONResponse(status_code=400, content={"error": "Request body is not valid JSON"})


def _sample(
    kind: EntityKind,
    identifier: str,
    request: Request,
    profiles: frozenset[str] | None = None,
    translate: bool = False,
) -> Any:
    """Generate sample data for a class or object, optionally translated."""
    composer = _get_composer()
    if _generator is None:
        raise HTTPException(status_code=503, detail="Sample generator not configured")
    if translate and _translator is None:
        raise HTTPException(status_code=503, detail="Translator not configured")

    options = ViewOptions(include_nested_objects=True, profiles=profiles)
    result = composer.resolve_view(kind, request.query_params.get(EXTENSION), identifier, options)
    if isinstance(result, (NotFound, InternalError)):
        return _view_response(result)

    try:
        sample = _generator.generate(result.to_dict())
        if translate:
            sample = _translator.translate(sample, translate_options(request.query_params))
    except Exception:
        logger.exception(f"Unable to generate sample for {kind.value}: {identifier}")
        return JSONResponse(status_code=500, content={"error": InternalError(identifier).message})
    return sample


# =============================================================================
# Schema metadata
# =============================================================================

@router.get("/api/version", response_model=VersionResponse)
async def version():
    """Schema version."""
    composer = _get_composer()
    return VersionResponse(version=composer.catalog.version)


@router.get("/api/data_types")
async def data_types():
    """Data types known to the schema."""
    composer = _get_composer()
    return composer.catalog.data_types


@router.get("/api/extensions", response_model=list[ExtensionModel])
async def extensions():
    """Schema extensions."""
    composer = _get_composer()
    return [
        ExtensionModel(**ext.to_dict())
        for _, ext in sorted(composer.catalog.extensions.items())
    ]


@router.get("/api/profiles", response_model=list[ProfileModel])
async def profiles():
    """Schema profiles."""
    composer = _get_composer()
    return [
        ProfileModel(**profile.to_dict())
        for _, profile in sorted(composer.catalog.profiles.items())
    ]


@router.get("/api/dictionary")
async def dictionary(request: Request):
    """Attribute dictionary, without internal links."""
    composer = _get_composer()
    return composer.dictionary_view(_extensions(request))


# =============================================================================
# Categories
# =============================================================================

@router.get("/api/categories")
async def list_categories(request: Request):
    """Categories visible for the requested extensions."""
    composer = _get_composer()
    views = composer.list_views(EntityKind.CATEGORY, _extensions(request))
    return [summarize(v) for v in views]


@router.get("/api/categories/{id}", responses=_ERRORS)
async def get_category(id: str, request: Request):
    """A category and the summaries of its classes."""
    composer = _get_composer()
    result = composer.resolve_category_view(
        request.query_params.get(EXTENSION), id, extensions=_extensions(request),
    )
    if isinstance(result, (NotFound, InternalError)):
        return _view_response(result)
    return summarize(result)


@router.get("/export/category/{id}", responses=_ERRORS)
async def export_category(id: str, request: Request):
    """A category with its full, optionally profile-filtered, classes."""
    composer = _get_composer()
    result = composer.resolve_category_view(
        request.query_params.get(EXTENSION),
        id,
        profiles=_profiles(request),
        extensions=_extensions(request),
    )
    if isinstance(result, NotFound):
        return JSONResponse(
            status_code=404,
            content={"error": f"The category '{id}' was not found."},
        )
    return _view_response(result)


# =============================================================================
# Classes
# =============================================================================

@router.get("/api/base_event", responses=_ERRORS)
async def base_event(request: Request):
    """The base event class."""
    composer = _get_composer()
    options = view_options(request.query_params)
    return _view_response(composer.resolve_view(EntityKind.CLASS, None, "base_event", options))


@router.get("/api/classes")
async def list_classes(request: Request):
    """Class summaries."""
    composer = _get_composer()
    views = composer.list_views(EntityKind.CLASS, _extensions(request), _profiles(request))
    return [summarize(v) for v in views]


@router.get("/api/classes/{id}", responses=_ERRORS)
async def get_class(id: str, request: Request):
    """
    A single class.

    Query parameters:
    - extension: extension that defines the class
    - objects=1: include every referenced object under `objects`
    - profiles: comma list; restrict profile attributes to these profiles
    """
    composer = _get_composer()
    options = view_options(request.query_params)
    result = composer.resolve_view(
        EntityKind.CLASS, request.query_params.get(EXTENSION), id, options,
    )
    return _view_response(result)


@router.get("/export/classes")
async def export_classes(request: Request):
    """All visible classes, in full."""
    composer = _get_composer()
    views = composer.list_views(EntityKind.CLASS, _extensions(request), _profiles(request))
    return {v.name: v.to_dict() for v in views}


# =============================================================================
# Objects
# =============================================================================

@router.get("/api/objects")
async def list_objects(request: Request):
    """Object summaries."""
    composer = _get_composer()
    views = composer.list_views(EntityKind.OBJECT, _extensions(request))
    return [summarize(v) for v in views]


@router.get("/api/objects/{id}", responses=_ERRORS)
async def get_object(id: str, request: Request):
    """A single object; accepts the same parameters as /api/classes/{id}."""
    composer = _get_composer()
    options = view_options(request.query_params)
    result = composer.resolve_view(
        EntityKind.OBJECT, request.query_params.get(EXTENSION), id, options,
    )
    return _view_response(result)


@router.get("/export/objects")
async def export_objects(request: Request):
    """All visible objects, in full."""
    composer = _get_composer()
    views = composer.list_views(EntityKind.OBJECT, _extensions(request), _profiles(request))
    return {v.name: v.to_dict() for v in views}


@router.get("/export/schema")
async def export_schema(request: Request):
    """Every visible class and object in full, with the data types and version."""
    composer = _get_composer()
    extensions = _extensions(request)
    profiles = _profiles(request)
    return {
        "classes": {
            v.name: v.to_dict()
            for v in composer.list_views(EntityKind.CLASS, extensions, profiles)
        },
        "objects": {
            v.name: v.to_dict()
            for v in composer.list_views(EntityKind.OBJECT, extensions, profiles)
        },
        "types": composer.catalog.data_types,
        "version": composer.catalog.version,
    }


# =============================================================================
# Sample data
# =============================================================================

@router.get("/sample/base_event", responses=_ERRORS)
async def sample_base_event(request: Request):
    """Random sample of the base event."""
    return _sample(EntityKind.CLASS, "base_event", request)


@router.get("/sample/classes/{id}", responses=_ERRORS)
async def sample_class(id: str, request: Request):
    """
    Random sample event of a class.

    Query parameters:
    - extension: extension that defines the class
    - profiles: comma list; restrict profile attributes to these profiles
    - _mode, _spaces: when `_mode` is given, translate the sample
    """
    return _sample(
        EntityKind.CLASS,
        id,
        request,
        profiles=_profiles(request),
        translate=VERBOSE in request.query_params,
    )


@router.get("/sample/objects/{id}", responses=_ERRORS)
async def sample_object(id: str, request: Request):
    """Random sample data of an object."""
    return _sample(EntityKind.OBJECT, id, request)


# =============================================================================
# Event translation and validation
# =============================================================================

@router.post("/api/translate", responses=_BODY_ERRORS)
async def translate(request: Request):
    """
    Translate event data.

    `_mode` controls how attribute names and enum values are translated;
    `_spaces` controls how spaces in translated names are handled. Both may be
    given as query parameters or as keys of a single JSON event.
    """
    if _translator is None:
        raise HTTPException(status_code=503, detail="Translator not configured")

    try:
        data = await request.json()
    except ValueError as e:
        return _invalid_body(e)

    if isinstance(data, dict):
        params = {k: data[k] for k in (VERBOSE, SPACES) if k in data}
        params.update(request.query_params)
        options = translate_options(params)
        event = {k: v for k, v in data.items() if k not in (VERBOSE, SPACES)}
        return _translator.translate(event, options)

    options = translate_options(request.query_params)
    if isinstance(data, list):
        return [_translator.translate(event, options) for event in data]

    # Not an event; echo it back
    return data


@router.post("/api/validate", responses=_BODY_ERRORS)
async def validate(request: Request):
    """Validate a single event (JSON object) or a list of events (JSON array)."""
    if _inspector is None:
        raise HTTPException(status_code=503, detail="Inspector not configured")

    try:
        data = await request.json()
    except ValueError as e:
        return _invalid_body(e)

    if isinstance(data, dict):
        return _inspector.validate(data)
    if isinstance(data, list):
        return [_inspector.validate(event) for event in data]
    return {"error": "The data does not look like an event", "data": data}
