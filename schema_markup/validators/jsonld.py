"""
JSON-LD Validator for the Schema Markup Generator.

Classifies a text blob first as JSON and then as plausible schema.org
content. Everything here is a pure function of its input.
"""
import json
import re
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from schema_markup.utils.logger import LayerLogger

logger = LayerLogger("jsonld_validator")

BYTE_ORDER_MARK = "\ufeff"

# callback({...}) or callback([...]); as served by some JSONP endpoints
JSONP_PATTERN = re.compile(r"^[\w$]+\((.*)\);?$", re.DOTALL)

SCHEMA_INDICATORS = ("@context", "@type", "type", "@graph")

# Consulted for logging only: objects with any @type are accepted.
KNOWN_SCHEMA_TYPES = [
    "Product", "Organization", "Person", "Article",
    "WebPage", "Event", "LocalBusiness", "Review",
    "BreadcrumbList", "FAQPage", "ItemList",
]


class ValidationErrorType(str, Enum):
    """Failure classes reported on a verdict."""
    INVALID_INPUT = "invalid_input"
    PARSE_FAILURE = "parse_failure"
    SCHEMA_IMPLAUSIBLE = "schema_implausible"


class ValidationVerdict(BaseModel):
    """Result of validating a JSON-LD candidate."""
    valid: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    error_type: Optional[ValidationErrorType] = None
    
    @classmethod
    def failure(cls, error: str, error_type: ValidationErrorType) -> "ValidationVerdict":
        return cls(valid=False, error=error, error_type=error_type)
    
    def to_dict(self) -> Dict[str, Any]:
        """Serialize as {valid, data?, error?, error_type?}."""
        result: Dict[str, Any] = {"valid": self.valid}
        if self.valid:
            result["data"] = self.data
        if self.error is not None:
            result["error"] = self.error
        if self.error_type is not None:
            result["error_type"] = self.error_type.value
        return result


def validate_jsonld(content: Any) -> ValidationVerdict:
    """
    Validate raw JSON-LD text.
    
    Args:
        content: Candidate text, typically the body of a ld+json script
    
    Returns:
        ValidationVerdict carrying the parsed data when valid
    """
    if not content or not isinstance(content, str):
        return ValidationVerdict.failure("Empty or invalid content", ValidationErrorType.INVALID_INPUT)
    
    trimmed = content.strip()
    if not trimmed:
        return ValidationVerdict.failure("Empty content", ValidationErrorType.INVALID_INPUT)
    
    if trimmed.startswith(BYTE_ORDER_MARK):
        trimmed = trimmed[1:].strip()
    
    jsonp_match = JSONP_PATTERN.match(trimmed)
    if jsonp_match:
        trimmed = jsonp_match.group(1)
    
    if not trimmed.startswith(("{", "[")):
        if trimmed.startswith("<"):
            return ValidationVerdict.failure(
                "HTML content instead of JSON-LD", ValidationErrorType.PARSE_FAILURE
            )
        return ValidationVerdict.failure(
            "Content does not appear to be JSON", ValidationErrorType.PARSE_FAILURE
        )
    
    try:
        parsed = parse_json(trimmed)
    except json.JSONDecodeError as e:
        return ValidationVerdict.failure(
            _describe_parse_error(trimmed, e), ValidationErrorType.PARSE_FAILURE
        )
    except ValueError as e:
        return ValidationVerdict.failure(f"Invalid JSON: {e}", ValidationErrorType.PARSE_FAILURE)
    
    schema_verdict = validate_schema_content(parsed)
    if not schema_verdict.valid:
        return schema_verdict
    
    return ValidationVerdict(valid=True, data=parsed)


def _reject_constant(name: str):
    raise ValueError(f"Unexpected token {name}")


def parse_json(text: str) -> Any:
    """json.loads without the NaN / Infinity extensions."""
    return json.loads(text, parse_constant=_reject_constant)


def _describe_parse_error(text: str, error: json.JSONDecodeError) -> str:
    """Guess the likely cause of a JSON syntax error."""
    if "<!--" in text or "-->" in text:
        return "JSON contains HTML comments"
    if "&quot;" in text or "&amp;" in text:
        return "JSON contains unescaped HTML entities"
    return f"Invalid JSON: {error.msg} at line {error.lineno} column {error.colno}"


def validate_schema_content(parsed: Any) -> ValidationVerdict:
    """
    Check that parsed JSON looks like schema.org markup.
    
    Arrays need at least one element with a schema indicator; objects need
    @context, @graph, @type or type. Scalars are never schema markup.
    """
    if parsed is None:
        return ValidationVerdict.failure(
            "Parsed content is null or undefined", ValidationErrorType.SCHEMA_IMPLAUSIBLE
        )
    
    if isinstance(parsed, list):
        if not parsed:
            return ValidationVerdict.failure(
                "Empty array is not valid schema markup", ValidationErrorType.SCHEMA_IMPLAUSIBLE
            )
        if any(_has_schema_indicator(item) for item in parsed):
            return ValidationVerdict(valid=True, data=parsed)
        return ValidationVerdict.failure(
            "Array items do not contain valid schema.org markup",
            ValidationErrorType.SCHEMA_IMPLAUSIBLE,
        )
    
    if isinstance(parsed, dict):
        if _present(parsed.get("@context")) or _present(parsed.get("@graph")):
            return ValidationVerdict(valid=True, data=parsed)
        
        type_value = parsed.get("@type") if _present(parsed.get("@type")) else parsed.get("type")
        if _present(type_value):
            if not _is_known_type(type_value):
                logger.log_decision(
                    decision="accept_unknown_type",
                    reason="@type outside the common type list",
                    schema_type=str(type_value)
                )
            return ValidationVerdict(valid=True, data=parsed)
        
        return ValidationVerdict.failure(
            "Object does not contain schema.org indicators (@context, @type, or @graph)",
            ValidationErrorType.SCHEMA_IMPLAUSIBLE,
        )
    
    return ValidationVerdict.failure(
        "Content is not an object or array", ValidationErrorType.SCHEMA_IMPLAUSIBLE
    )


def _present(value: Any) -> bool:
    # Containers count as present even when empty: {"@graph": []} is a graph.
    return isinstance(value, (list, dict)) or bool(value)


def _has_schema_indicator(item: Any) -> bool:
    return isinstance(item, dict) and any(_present(item.get(key)) for key in SCHEMA_INDICATORS)


def _is_known_type(type_value: Any) -> bool:
    first = type_value[0] if isinstance(type_value, list) and type_value else type_value
    if not isinstance(first, str):
        return False
    return any(known in first for known in KNOWN_SCHEMA_TYPES)


def extract_schema_types(data: Any) -> List[Any]:
    """
    Flatten the @type / type values of validated JSON-LD.
    
    Arrays and @graph members are walked recursively; an object with a
    @graph contributes only its members' types.
    """
    types: List[Any] = []
    
    if not data:
        return types
    
    if isinstance(data, list):
        for item in data:
            types.extend(extract_schema_types(item))
        return types
    
    if not isinstance(data, dict):
        return types
    
    graph = data.get("@graph")
    if isinstance(graph, list):
        for item in graph:
            types.extend(extract_schema_types(item))
        return types
    
    for key in ("@type", "type"):
        value = data.get(key)
        if not value:
            continue
        if isinstance(value, list):
            types.extend(value)
        else:
            types.append(value)
    
    return types
