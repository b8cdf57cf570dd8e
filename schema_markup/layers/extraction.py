"""
Extraction Layer for the Schema Markup Generator.
Validates a request, fetches the page once and runs the requested
extractors over the markup.
"""
from typing import Iterable, List, Optional

from schema_markup.adapters.fetcher import ContentFetcher
from schema_markup.exceptions import InvalidInputError
from schema_markup.extractors import (
    BreadcrumbExtractor,
    CarouselExtractor,
    ExistingSchemaExtractor,
    FAQExtractor,
    ProductExtractor,
)
from schema_markup.models.content import ExtractionRequest, ExtractionResult, SchemaType
from schema_markup.utils.logger import LayerLogger


class ExtractionLayer:
    """
    Extraction Orchestrator.
    
    This layer:
    - Rejects malformed requests before any network traffic
    - Issues exactly one fetch per request; a fetch failure aborts everything
    - Runs each requested extractor independently over the same markup
    - Always runs existing schema detection
    
    Extractors keep no per-request state, so one layer instance can serve
    concurrent requests.
    """
    
    def __init__(self, fetcher: Optional[ContentFetcher] = None):
        self.logger = LayerLogger("extraction_layer")
        self.fetcher = fetcher or ContentFetcher()
        self.product_extractor = ProductExtractor()
        self.breadcrumb_extractor = BreadcrumbExtractor()
        self.faq_extractor = FAQExtractor()
        self.carousel_extractor = CarouselExtractor()
        self.existing_schema_extractor = ExistingSchemaExtractor()
    
    async def extract(self, request: ExtractionRequest) -> ExtractionResult:
        """
        Fetch the request URL and extract the requested schema types.
        
        Args:
            request: URL plus requested type names
        
        Returns:
            ExtractionResult with one record per requested type
        
        Raises:
            InvalidInputError: Bad URL or type list
            FetchError: The page could not be retrieved
        """
        types = self.resolve_types(request.types)
        self.validate_url(request.url)
        
        self.logger.log_action(
            "extraction",
            "started",
            url=request.url,
            types=[t.value for t in types]
        )
        
        fetched = await self.fetcher.fetch(request.url)
        
        if fetched.url != request.url:
            self.logger.log_decision(
                decision="use_final_url",
                reason=f"followed {fetched.redirects} redirect(s)",
                url=request.url,
                final_url=fetched.url
            )
        
        result = self.extract_from_markup(fetched.html, types, fetched.url)
        result.url = request.url
        return result
    
    def extract_from_markup(
        self,
        html: str,
        types: Iterable[SchemaType],
        url: Optional[str] = None,
    ) -> ExtractionResult:
        """Run the requested extractors over already fetched markup."""
        result = ExtractionResult(url=url or "")
        requested = set(types)
        
        if SchemaType.PRODUCT in requested:
            result.product = self.product_extractor.extract(html, url)
        if SchemaType.BREADCRUMB in requested:
            result.breadcrumb = self.breadcrumb_extractor.extract(html, url)
        if SchemaType.FAQ in requested:
            result.faq = self.faq_extractor.extract(html, url)
        if SchemaType.CAROUSEL in requested:
            result.carousel = self.carousel_extractor.extract(html, url)
        
        result.existing_schema = self.existing_schema_extractor.extract(html, url)
        
        self.logger.log_action(
            "extraction",
            "completed",
            url=url,
            extracted_types=result.get_extracted_types(),
            existing_schema_count=len(result.existing_schema),
            content_length=len(html)
        )
        return result
    
    def resolve_types(self, types: object) -> List[SchemaType]:
        """
        Turn requested type names into SchemaType members.
        
        Unknown names are logged and ignored; duplicates collapse.
        """
        if not types or not isinstance(types, (list, tuple, set)):
            raise InvalidInputError("Please select at least one schema type")
        
        resolved: List[SchemaType] = []
        ignored: List[str] = []
        for name in types:
            if not isinstance(name, str):
                raise InvalidInputError("Schema type names must be strings")
            try:
                schema_type = SchemaType(name.strip().lower())
            except ValueError:
                ignored.append(name)
                continue
            if schema_type not in resolved:
                resolved.append(schema_type)
        
        if ignored:
            self.logger.log_decision(
                decision="ignore_unknown_types",
                reason="type names have no extractor",
                ignored=ignored
            )
        return resolved
    
    @staticmethod
    def validate_url(url: object) -> str:
        if not url or not isinstance(url, str) or not url.startswith(("http://", "https://")):
            raise InvalidInputError("Please provide a valid URL starting with http:// or https://")
        return url
