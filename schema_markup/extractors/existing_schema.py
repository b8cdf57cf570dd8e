"""
Existing schema detection.

JSON-LD script blocks are parsed one by one; microdata and RDFa are only
counted.
"""
import re
from typing import List, Optional

from schema_markup.models.content import ExistingSchemaEntry
from schema_markup.utils.logger import LayerLogger
from schema_markup.validators.jsonld import extract_schema_types, parse_json, validate_schema_content

JSONLD_SCRIPT_PATTERN = re.compile(
    r"""<script[^>]*type=["']application/ld\+json["'][^>]*>(.*?)</script>""",
    re.IGNORECASE | re.DOTALL,
)
MICRODATA_PATTERN = re.compile(r"<[^>]+itemscope[^>]*>", re.IGNORECASE)
RDFA_PATTERN = re.compile(r"<[^>]+(?:property|typeof|vocab)[^>]*>", re.IGNORECASE)


class ExistingSchemaExtractor:
    """Reports structured data islands already embedded in a page."""
    
    schema_type = "existing_schema"
    
    def __init__(self):
        self.logger = LayerLogger("existing_schema_extractor")
    
    def extract(self, html: str, url: Optional[str] = None) -> List[ExistingSchemaEntry]:
        entries = self._extract_jsonld(html)
        
        microdata_count = len(MICRODATA_PATTERN.findall(html))
        if microdata_count:
            entries.append(ExistingSchemaEntry(
                type="Microdata",
                count=microdata_count,
                note="Microdata detected (detailed extraction not implemented)"
            ))
        
        rdfa_count = len(RDFA_PATTERN.findall(html))
        if rdfa_count:
            entries.append(ExistingSchemaEntry(
                type="RDFa",
                count=rdfa_count,
                note="RDFa detected (detailed extraction not implemented)"
            ))
        
        self.logger.log_extraction(
            schema_type=self.schema_type,
            strategy="markup_scan",
            items_found=len(entries),
            jsonld_blocks=sum(1 for e in entries if e.type == "JSON-LD"),
            microdata_elements=microdata_count,
            rdfa_elements=rdfa_count,
            url=url
        )
        return entries
    
    def _extract_jsonld(self, html: str) -> List[ExistingSchemaEntry]:
        entries = []
        for index, block in enumerate(JSONLD_SCRIPT_PATTERN.findall(html), start=1):
            raw = block.strip()
            
            if not raw.startswith(("{", "[")):
                entries.append(ExistingSchemaEntry(
                    type="JSON-LD",
                    index=index,
                    error="Invalid JSON-LD format: content must start with { or [",
                    raw=raw
                ))
                continue
            
            try:
                data = parse_json(raw)
            except ValueError as e:
                self.logger.log_decision(
                    decision="record_parse_error",
                    reason=str(e),
                    block_index=index
                )
                entries.append(ExistingSchemaEntry(
                    type="JSON-LD",
                    index=index,
                    error="Invalid JSON",
                    raw=raw
                ))
                continue
            
            entry = ExistingSchemaEntry(
                type="JSON-LD",
                index=index,
                data=data,
                raw=raw,
                types=extract_schema_types(data)
            )
            verdict = validate_schema_content(data)
            if not verdict.valid:
                entry.warning = verdict.error
            entries.append(entry)
        return entries
