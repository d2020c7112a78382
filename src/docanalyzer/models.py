"""Persisted document records."""

import datetime
import uuid

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

CLASSIFICATION_LABELS = ("Resume", "Invoice", "Legal Agreement", "Research Paper", "Others")
SENTIMENT_LABELS = ("positive", "neutral", "negative")


class DocumentMetrics(BaseModel):
    """Simple statistics for one document."""

    word_count: int = Field(ge=0)
    page_count: int | None = Field(default=None, ge=0)
    reading_time: int = Field(ge=0, description="Estimated reading time in minutes")
    sentiment: str = "neutral"

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class AnalyzedDocument(BaseModel):
    """
    One uploaded document with its extracted text and analysis.

    Serialized with camelCase keys (fullText, wordCount, ...) so the stored
    collection keeps a stable JSON layout.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    type: str = "Others"
    tags: list[str] = Field(default_factory=list)
    summary: str = ""
    full_text: str
    date: str = Field(default_factory=lambda: datetime.date.today().isoformat())
    metadata: DocumentMetrics
    insights: str = ""
    graphs: list = Field(default_factory=list)

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    def to_record(self) -> dict:
        """Serialize to the stored JSON layout."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_record(cls, record: dict) -> "AnalyzedDocument":
        return cls.model_validate(record)
