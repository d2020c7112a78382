"""Document classification and summarization via a hosted chat-completion API."""

import json
import re
from dataclasses import dataclass, field

import httpx

from ..config.models import AnalysisServiceSettings
from ..errors import AnalysisServiceUnavailableError
from ..models import CLASSIFICATION_LABELS, SENTIMENT_LABELS
from ..utils.logging import get_logger

logger = get_logger(__name__)

REQUIRED_FIELDS = ("classification", "summary", "tags", "sentiment")
MAX_TAGS = 6


@dataclass
class AnalysisResult:
    """Structured analysis of one document."""

    classification: str
    summary: str
    tags: list[str] = field(default_factory=list)
    sentiment: str = "neutral"
    insights: str = ""
    graphs: list = field(default_factory=list)

    # True when the service reply was unusable and defaults were substituted
    is_fallback: bool = False


def fallback_analysis() -> AnalysisResult:
    """The fixed analysis used when the service reply is not well-formed."""
    return AnalysisResult(
        classification="Others",
        summary="Document analyzed successfully.",
        tags=["document", "analyzed"],
        sentiment="neutral",
        insights="",
        graphs=[],
        is_fallback=True,
    )


class ChatCompletionClient:
    """Client for an OpenAI-compatible chat-completion endpoint."""

    def __init__(
        self,
        base_url: str = "https://api.groq.com/openai/v1",
        api_key: str | None = None,
        model: str = "compound-beta",
        temperature: float = 0.3,
        max_tokens: int = 1000,
        timeout_seconds: float = 60.0,
        max_retries: int = 0,
    ):
        """
        Initialize the client.

        Args:
            base_url: API base URL (the /chat/completions path is appended)
            api_key: Bearer token for the service
            model: Model identifier sent with each request
            temperature: Sampling temperature
            max_tokens: Token budget for the reply
            timeout_seconds: Read timeout for a request
            max_retries: Extra attempts after a failed request
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.max_retries = max_retries
        self.timeout = httpx.Timeout(timeout_seconds, connect=10.0)

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/chat/completions"

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def complete(self, system_prompt: str, user_message: str) -> str | None:
        """
        Request one completion.

        Returns:
            The first choice's message content, or None if the reply body is
            not shaped like a chat completion

        Raises:
            AnalysisServiceUnavailableError: On timeouts, transport errors or
                a non-success status
        """
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

        attempts = self.max_retries + 1
        last_error = None
        for attempt in range(attempts):
            try:
                with httpx.Client(timeout=self.timeout, headers=self._headers()) as client:
                    response = client.post(self.endpoint, json=payload)

                if 200 <= response.status_code < 300:
                    return self._extract_content(response)

                logger.warning(
                    f"Analysis service returned status {response.status_code} "
                    f"on attempt {attempt + 1}/{attempts}"
                )
                last_error = f"HTTP {response.status_code}: {response.text[:200]}"

            except httpx.TimeoutException as e:
                logger.warning(f"Analysis service timeout on attempt {attempt + 1}: {e}")
                last_error = f"Timeout: {e}"

            except httpx.RequestError as e:
                logger.warning(f"Analysis service request error on attempt {attempt + 1}: {e}")
                last_error = f"Request error: {e}"

        logger.error(f"All {attempts} attempts to the analysis service failed: {last_error}")
        raise AnalysisServiceUnavailableError(f"Analysis service request failed ({last_error})")

    @staticmethod
    def _extract_content(response: httpx.Response) -> str | None:
        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.warning(f"Unexpected analysis service reply: {e}")
            return None
        return content if isinstance(content, str) else None


class DocumentAnalysisClient:
    """
    Classifies and summarizes document text with a hosted language model.

    A reply that cannot be parsed never fails the call: the fixed fallback
    analysis is returned instead. Transport failures are raised.
    """

    SYSTEM_PROMPT = """You are a document analysis AI. Analyze the provided document text and return a JSON response with:
1. "classification" - categorize as: Resume, Invoice, Legal Agreement, Research Paper, or Others
2. "summary" - a concise 2-3 sentence summary
3. "tags" - array of 3-6 relevant keywords/tags
4. "sentiment" - overall sentiment: positive, neutral, or negative
5. "insights" - detailed insights and key findings (2-3 paragraphs)
6. "graphs" - array of suggested graph/chart data if applicable

Return only valid JSON in this exact format:
{"classification": "Resume", "summary": "Brief summary here", "tags": ["tag1", "tag2", "tag3"], "sentiment": "positive", "insights": "Detailed insights here", "graphs": []}"""

    def __init__(self, settings: AnalysisServiceSettings | None = None):
        """
        Initialize the analysis client.

        Args:
            settings: Analysis service configuration
        """
        self.settings = settings or AnalysisServiceSettings()
        self.chat = ChatCompletionClient(
            base_url=self.settings.base_url,
            api_key=self.settings.api_key,
            model=self.settings.model,
            temperature=self.settings.temperature,
            max_tokens=self.settings.max_tokens,
            timeout_seconds=self.settings.timeout_seconds,
            max_retries=self.settings.max_retries,
        )

    def _build_user_message(self, text: str) -> str:
        return f"Analyze this document: {text[: self.settings.max_input_chars]}"

    def _parse_content(self, content: str | None) -> AnalysisResult:
        """Parse the model's reply into an AnalysisResult, or fall back."""
        if not content:
            logger.warning("Analysis reply was empty, using fallback analysis")
            return fallback_analysis()

        try:
            data = json.loads(content)
        except json.JSONDecodeError:
            # The model may wrap the object in prose or a code fence
            json_match = re.search(r"\{.*\}", content, re.DOTALL)
            try:
                data = json.loads(json_match.group()) if json_match else None
            except json.JSONDecodeError:
                data = None

        if not isinstance(data, dict):
            logger.warning(f"Analysis reply is not a JSON object, using fallback: {content[:200]}")
            return fallback_analysis()

        missing = [name for name in REQUIRED_FIELDS if data.get(name) is None]
        if missing:
            logger.warning(f"Analysis reply missing fields {missing}, using fallback")
            return fallback_analysis()

        classification = str(data["classification"]).strip()
        if classification not in CLASSIFICATION_LABELS:
            classification = "Others"

        sentiment = str(data["sentiment"]).strip().lower()
        if sentiment not in SENTIMENT_LABELS:
            sentiment = "neutral"

        tags = data["tags"]
        if isinstance(tags, str):
            tags = tags.split(",")
        elif not isinstance(tags, list):
            tags = [tags]
        tags = [str(t).strip() for t in tags if t is not None and str(t).strip()][:MAX_TAGS]

        insights = data.get("insights") or ""
        graphs = data.get("graphs")

        return AnalysisResult(
            classification=classification,
            summary=str(data["summary"]),
            tags=tags,
            sentiment=sentiment,
            insights=insights if isinstance(insights, str) else json.dumps(insights),
            graphs=graphs if isinstance(graphs, list) else [],
        )

    def analyze(self, text: str) -> AnalysisResult:
        """
        Analyze document text.

        Args:
            text: Extracted document text (truncated before sending)

        Returns:
            AnalysisResult, possibly the fallback analysis

        Raises:
            AnalysisServiceUnavailableError: If the service cannot be reached
        """
        logger.info(f"Analyzing {len(text)} chars with {self.settings.model}")

        content = self.chat.complete(self.SYSTEM_PROMPT, self._build_user_message(text))
        result = self._parse_content(content)

        if not result.is_fallback:
            logger.info(
                f"Analysis complete: type='{result.classification}', "
                f"sentiment={result.sentiment}, tags={result.tags}"
            )

        return result
