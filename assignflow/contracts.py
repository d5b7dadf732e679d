"""Wire contracts exchanged with the assignment service."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class AssignmentStatus(str, Enum):
    """Lifecycle status of an assignment."""

    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"


class WireModel(BaseModel):
    """Base for models using camelCase names on the wire."""

    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        """Serialize using wire field names."""
        return self.model_dump(by_alias=True, mode="json")


# ----------------------------------------------------------------------
# Validation errors


class AssignmentFieldError(WireModel):
    """Validation error attached to an assignment-level field."""

    scope: Literal["assignment"] = "assignment"
    field: str
    message: str


class QuestionError(WireModel):
    """Validation error attached to a single question."""

    scope: Literal["question"] = "question"
    question_id: str = Field(alias="questionId")
    message: str


ValidationError = Annotated[
    Union[AssignmentFieldError, QuestionError], Field(discriminator="scope")
]

validation_error_adapter: TypeAdapter = TypeAdapter(ValidationError)


# ----------------------------------------------------------------------
# Request payloads


class QuestionOption(WireModel):
    id: str
    text: str
    is_correct: bool = Field(default=False, alias="isCorrect")


class DraftQuestion(WireModel):
    """Question as sent with a draft or publish request."""

    id: str
    type: str = "multiple_choice"
    content: str = ""
    options: List[QuestionOption] = Field(default_factory=list)


class BasicInfo(WireModel):
    title: str
    description: str = ""
    due_date: Optional[str] = Field(default=None, alias="dueDate")


class AssignmentPayload(WireModel):
    """Request body for both save-draft and publish."""

    basic_info: BasicInfo = Field(alias="basicInfo")
    questions: List[DraftQuestion] = Field(default_factory=list)
    class_id: Optional[str] = Field(default=None, alias="classId")

    @property
    def title(self) -> str:
        return self.basic_info.title


# ----------------------------------------------------------------------
# Responses


class SaveDraftResponse(WireModel):
    """Result of a create or update call."""

    assignment_id: str = Field(alias="assignmentId")
    status: AssignmentStatus
    updated_at: str = Field(alias="updatedAt")


class PublishResponse(WireModel):
    assignment_id: str = Field(alias="assignmentId")
    status: AssignmentStatus
    published_at: str = Field(alias="publishedAt")


class AssignmentSnapshot(WireModel):
    """Full assignment as returned by ``load``."""

    assignment_id: str = Field(alias="assignmentId")
    status: AssignmentStatus
    title: str
    description: str = ""
    due_date: Optional[str] = Field(default=None, alias="dueDate")
    class_id: Optional[str] = Field(default=None, alias="classId")
    questions: List[DraftQuestion] = Field(default_factory=list)
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")
    published_at: Optional[str] = Field(default=None, alias="publishedAt")


# ----------------------------------------------------------------------
# Entity identity


class Unsaved(BaseModel):
    """The assignment has not been created remotely yet."""

    model_config = ConfigDict(frozen=True)


class Saved(BaseModel):
    """The assignment exists remotely under ``assignment_id``."""

    model_config = ConfigDict(frozen=True)

    assignment_id: str


EntityRef = Union[Unsaved, Saved]


def entity_ref(assignment_id: Optional[str]) -> EntityRef:
    """Build an :data:`EntityRef` from a nullable identifier."""
    return Saved(assignment_id=assignment_id) if assignment_id else Unsaved()
