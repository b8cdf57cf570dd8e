"""Utils package initialization."""
from schema_markup.utils.logger import get_logger, LayerLogger, set_trace_id, get_trace_id
from schema_markup.utils.text import decode_html_entities, strip_tags, to_plain_text, clean_text

__all__ = [
    "get_logger",
    "LayerLogger",
    "set_trace_id",
    "get_trace_id",
    "decode_html_entities",
    "strip_tags",
    "to_plain_text",
    "clean_text",
]
