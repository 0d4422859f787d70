"""OpenAI-backed review classifier.

Uses chat completions in JSON mode. Errors propagate to the caller, which
decides how to degrade (see ``franchise.classifier.fallback``).
"""

import json
import os

import openai
import structlog

from franchise.classifier.port import ClassificationResult, Classifier, ExtractedTerm

logger = structlog.get_logger(__name__)

DEFAULT_MODEL = "gpt-4o"

# Per-call bounds for the provider client (seconds, retries)
DEFAULT_TIMEOUT = 15.0
DEFAULT_MAX_RETRIES = 1

CLASSIFY_INSTRUCTIONS = (
    "You moderate reviews on a franchise review platform. Return a JSON object with "
    '"category" (clean, needs_review or rejected), "sentiment" (positive, negative or neutral), '
    '"sentimentScore" (-1.0 to 1.0), "flags" (list of strings such as profanity, spam, '
    'defamatory, personal_attack, fake_review) and "summary" (one sentence).'
)

EXTRACT_INSTRUCTIONS = (
    "Extract franchise-relevant key words and phrases (support, training, profit, culture, "
    "communication, fees, marketing, territory and similar) from the review. Return a JSON "
    'object {"keywords": [{"word": "...", "sentiment": "positive|negative|neutral"}]}.'
)


class OpenAIClassifier(Classifier):
    """Classifier calling the OpenAI chat completions API."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        client=None,
        timeout: float | None = None,
        max_retries: int | None = None,
    ) -> None:
        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        self.model = model or os.getenv("OPENAI_MODEL", DEFAULT_MODEL)
        self.timeout = timeout if timeout is not None else float(os.getenv("OPENAI_TIMEOUT", DEFAULT_TIMEOUT))
        self.max_retries = (
            max_retries if max_retries is not None else int(os.getenv("OPENAI_MAX_RETRIES", DEFAULT_MAX_RETRIES))
        )
        self._client = client

    def _get_client(self):
        if self._client is None:
            self._client = openai.OpenAI(api_key=self.api_key, timeout=self.timeout, max_retries=self.max_retries)
        return self._client

    def _complete_json(self, instructions: str, user_content: str) -> dict:
        response = self._get_client().chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": instructions},
                {"role": "user", "content": user_content},
            ],
            response_format={"type": "json_object"},
            temperature=0.3,
        )
        content = response.choices[0].message.content or "{}"
        return json.loads(content)

    def classify(self, title: str, content: str) -> ClassificationResult:
        raw = self._complete_json(CLASSIFY_INSTRUCTIONS, f"Title: {title}\n\nContent: {content}")
        result = ClassificationResult.from_raw(raw)
        logger.info(
            "review_classified",
            model=self.model,
            category=result.category,
            sentiment=result.sentiment,
        )
        return result

    def extract_terms(self, content: str) -> list[ExtractedTerm]:
        raw = self._complete_json(EXTRACT_INSTRUCTIONS, content)
        items = raw.get("keywords", []) if isinstance(raw, dict) else raw

        terms = []
        for item in items or []:
            if not isinstance(item, dict) or not item.get("word"):
                continue
            terms.append(ExtractedTerm(word=str(item["word"]), sentiment=str(item.get("sentiment") or "neutral")))
        return terms
