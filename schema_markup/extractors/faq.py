"""
FAQ extractor.

Tier order:
1. Headings paired with paragraphs inside a "faq" classed section
2. Question lead-ins ("Q:", "### What ...?") in the page text
"""
import re
from typing import List, Optional

from schema_markup.extractors.base import FallbackExtractor
from schema_markup.models.content import FAQItem
from schema_markup.utils.text import clean_text, strip_tags, to_plain_text

_FLAGS = re.IGNORECASE | re.DOTALL

FAQ_SECTION_PATTERN = re.compile(
    r"""<(?:section|div)[^>]*class=["'][^"']*faq[^"']*["'][^>]*>(.*?)</(?:section|div)>""", _FLAGS
)
QUESTION_HEADING_PATTERN = re.compile(r"<h[2-6][^>]*>([^<]+)</h[2-6]>", re.IGNORECASE)
ANSWER_PARAGRAPH_PATTERN = re.compile(r"<p[^>]*>([^<]+)</p>", re.IGNORECASE)

# Tried in order; the first one with any match is the only one used. Length
# limits apply to "body"; a "###" question keeps its lead word when emitted.
QUESTION_PATTERNS = [
    re.compile(r"Q:\s*(?P<body>[^?]+\?)", re.IGNORECASE),
] + [
    re.compile(rf"###\s*(?P<lead>{word})\s+(?P<body>[^?]+\?)", re.IGNORECASE)
    for word in ("What", "How", "Why", "Can", "Does")
]
NEXT_QUESTION_PATTERN = re.compile(r"(?:Q:|###\s*(?:What|How|Why|Can|Does))")

ANSWER_WINDOW = 500
MAX_ANSWER_LENGTH = 500


class FAQExtractor(FallbackExtractor):
    """Extracts up to 10 question/answer pairs."""
    
    schema_type = "faq"
    max_items = 10
    
    def strategies(self):
        return [
            ("faq_section", self._from_faq_section),
            ("question_patterns", self._from_question_patterns),
        ]
    
    def _from_faq_section(self, html: str, url: Optional[str]) -> List[FAQItem]:
        section = FAQ_SECTION_PATTERN.search(html)
        if not section:
            return []
        
        body = section.group(1)
        questions = QUESTION_HEADING_PATTERN.findall(body)
        answers = ANSWER_PARAGRAPH_PATTERN.findall(body)
        
        items = []
        for question, answer in zip(questions, answers):
            question_text = clean_text(strip_tags(question))
            answer_text = clean_text(strip_tags(answer))
            if not question_text or not answer_text:
                break
            items.append(FAQItem(question=question_text, answer=answer_text))
        return items
    
    def _from_question_patterns(self, html: str, url: Optional[str]) -> List[FAQItem]:
        text = to_plain_text(html)
        
        for pattern in QUESTION_PATTERNS:
            matches = list(pattern.finditer(text))
            if not matches:
                continue
            
            items = []
            for match in matches:
                body = match.group("body").strip()
                if not 10 < len(body) < 200:
                    continue
                lead = match.groupdict().get("lead")
                question = f"{lead} {body}" if lead else body
                
                answer_start = match.end()
                next_question = NEXT_QUESTION_PATTERN.search(text, answer_start)
                answer_end = answer_start + ANSWER_WINDOW
                if next_question:
                    answer_end = min(answer_end, next_question.start())
                answer = text[answer_start:answer_end].strip()
                
                if 20 < len(answer) < 1000:
                    items.append(FAQItem(
                        question=clean_text(question),
                        answer=clean_text(answer[:MAX_ANSWER_LENGTH])
                    ))
            return items
        
        return []
