from uuid import uuid4
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import List, Literal, Optional

Kind = Literal["grammar", "vocabulary", "style"]
Severity = Literal["error", "warning", "suggestion"]


def new_id() -> str:
    return uuid4().hex


class Correction(BaseModel):
    """
    One flagged issue, located by half-open offsets into the analysed text.
    Offsets count Unicode code points (Python str indices), not UTF-16 units.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_id)
    kind: Kind = Field(alias="type")
    severity: Severity
    original: str
    suggestion: str
    explanation: str = ""
    start_index: int = Field(alias="startIndex", ge=0)
    end_index: int = Field(alias="endIndex", ge=0)

    @model_validator(mode="after")
    def check_range(self):
        if self.end_index <= self.start_index:
            raise ValueError("endIndex must be greater than startIndex")
        return self


class FeedbackResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    original: str
    corrections: List[Correction] = []
    overall_score: int = Field(alias="overallScore", ge=0, le=100)
    summary: str


class TextSegment(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str
    correction: Optional[Correction] = None
    start_offset: int = Field(alias="startOffset")


class FeedbackRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: Optional[str] = None  # missing or null is rejected as empty text
    context: Optional[str] = None
    # free strings: the level only steers wording, unknown languages fall back
    user_level: Optional[str] = Field("intermediate", alias="userLevel")
    target_language: Optional[str] = Field("en", alias="targetLanguage")
    message_id: Optional[str] = Field(None, alias="messageId")


class SegmentRequest(BaseModel):
    text: str
    corrections: List[Correction] = []


class Message(BaseModel):
    id: str = Field(default_factory=new_id)
    role: Literal["user", "assistant", "system"] = "user"
    parts: List[dict] = []
