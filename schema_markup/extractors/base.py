"""
Shared fallback-chain machinery for the field extractors.
"""
from typing import Callable, List, Optional, Tuple

from schema_markup.utils.logger import LayerLogger

# A strategy inspects the markup (and optionally the page URL) and returns the
# items it found. An empty list means "no match": the chain moves on.
Strategy = Callable[[str, Optional[str]], list]


class FallbackExtractor:
    """
    Base class for extractors built from an ordered list of strategies.
    
    Subclasses list their strategies in priority order; the first one that
    returns at least one item wins and later strategies are never run.
    """
    
    schema_type: str = ""
    max_items: Optional[int] = None
    
    def __init__(self):
        self.logger = LayerLogger(f"{self.schema_type}_extractor")
    
    def strategies(self) -> List[Tuple[str, Strategy]]:
        """Return (name, strategy) pairs in the order they should be tried."""
        raise NotImplementedError
    
    def extract(self, html: str, url: Optional[str] = None) -> list:
        """Run the chain and cap the winning strategy's items."""
        strategy_name, items = self.run_chain(html, url)
        if self.max_items is not None:
            items = items[:self.max_items]
        self.logger.log_extraction(
            schema_type=self.schema_type,
            strategy=strategy_name,
            items_found=len(items),
            url=url
        )
        return items
    
    def run_chain(self, html: str, url: Optional[str] = None) -> Tuple[Optional[str], list]:
        """
        Try each strategy in order.
        
        Returns:
            (name of the winning strategy, its items), or (None, []) when
            every strategy came back empty
        """
        previous = None
        for name, strategy in self.strategies():
            if previous is not None:
                self.logger.log_fallback(
                    from_source=previous,
                    to_source=name,
                    reason="no qualifying items",
                    url=url
                )
            items = strategy(html, url)
            if items:
                return name, items
            previous = name
        return None, []
