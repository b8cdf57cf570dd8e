"""
Schema Markup Generator - FastAPI Application
Main entry point with REST API endpoints.
"""
from typing import Any, Dict, List, Union

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from schema_markup import __version__
from schema_markup.config import config
from schema_markup.exceptions import ExtractionError, FetchError, FetchTimeoutError, InvalidInputError
from schema_markup.generators.schema_generator import SchemaGenerator
from schema_markup.layers.extraction import ExtractionLayer
from schema_markup.models.content import ExtractionRequest, SchemaType
from schema_markup.models.session import EditSession
from schema_markup.utils.logger import get_logger, set_trace_id
from schema_markup.validators.jsonld import extract_schema_types, validate_jsonld


# Initialize FastAPI app
app = FastAPI(
    title="Schema Markup Generator",
    description="Extracts page data and generates schema.org JSON-LD markup",
    version=__version__,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

# Initialize layers
extraction_layer = ExtractionLayer()
schema_generator = SchemaGenerator()

logger = get_logger("main")


# Request models
class AnalyzeRequest(BaseModel):
    """Request model for page analysis."""
    url: Any = None
    types: Any = None


class ValidateRequest(BaseModel):
    """Request model for JSON-LD validation."""
    content: Any = None


class GenerateRequest(BaseModel):
    """Request model for schema generation from extracted data and edits."""
    types: List[SchemaType] = Field(default_factory=list)
    extracted: Dict[str, Union[Dict[str, Any], List[Dict[str, Any]]]] = Field(default_factory=dict)
    manual: Dict[str, Union[Dict[str, Any], List[Dict[str, Any]]]] = Field(default_factory=dict)


def error_response(error: ExtractionError) -> JSONResponse:
    """Map an extraction error onto the {error, details?} shape."""
    if isinstance(error, InvalidInputError):
        status_code = 400
    elif isinstance(error, FetchTimeoutError):
        status_code = 504
    elif isinstance(error, FetchError):
        status_code = 502
    else:
        status_code = 500
    
    body: Dict[str, Any] = {"error": error.message}
    if error.details:
        body["details"] = error.details
    return JSONResponse(status_code=status_code, content=body)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies in the same {error, details} shape."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    
    logger.info("request_rejected", path=request.url.path, errors=len(errors))
    message = first.get("msg", "invalid value")
    return error_response(InvalidInputError(
        "Invalid request body",
        details=f"{location}: {message}" if location else message,
    ))


# API Routes
@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.post("/api/analyze")
async def analyze(request: AnalyzeRequest):
    """
    Fetch a page and extract data for the requested schema types.
    
    Existing schema detection always runs. A fetch failure aborts the
    whole request.
    """
    set_trace_id()
    
    logger.info("analyze_request", url=request.url, types=request.types)
    
    try:
        result = await extraction_layer.extract(
            ExtractionRequest(url=request.url, types=request.types)
        )
    except ExtractionError as e:
        logger.error(
            "analyze_error",
            error=e.message,
            error_type=type(e).__name__,
            url=request.url,
            status_code=getattr(e, "status_code", None)
        )
        return error_response(e)
    
    logger.info("analyze_completed", url=request.url, extracted_types=result.get_extracted_types())
    return result.to_dict()


@app.post("/api/validate")
async def validate(request: ValidateRequest):
    """Validate a JSON-LD candidate and list the schema types it declares."""
    set_trace_id()
    
    verdict = validate_jsonld(request.content)
    response = verdict.to_dict()
    response["types"] = extract_schema_types(verdict.data) if verdict.valid else []
    
    logger.info(
        "validate_completed",
        valid=verdict.valid,
        error_type=verdict.error_type.value if verdict.error_type else None
    )
    return response


@app.post("/api/generate")
async def generate(request: GenerateRequest):
    """Generate JSON-LD from extracted data merged with manual edits."""
    set_trace_id()
    
    session = EditSession(
        selected_types=request.types,
        extracted=request.extracted,
        manual=request.manual,
    )
    collection = schema_generator.generate(session)
    
    return {
        "schemas": collection.schemas,
        "script_tag": collection.to_script_tag(),
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.HOST, port=config.PORT)
