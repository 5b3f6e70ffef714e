from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class DimensionStatus(str, Enum):
    """Presence of a prompt structure component"""
    PRESENT = "present"
    PARTIALLY_PRESENT = "partially present"
    MISSING = "missing"


DIMENSIONS = ("role", "action", "context", "format", "tone")

STATUS_ALIASES = {
    "clearly present": DimensionStatus.PRESENT.value,
    "partially_present": DimensionStatus.PARTIALLY_PRESENT.value,
    "partial": DimensionStatus.PARTIALLY_PRESENT.value,
}


class DimensionAssessment(BaseModel):
    status: DimensionStatus
    explanation: str = ""

    model_config = ConfigDict(use_enum_values=True)

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v):
        if isinstance(v, str):
            s = v.strip().lower()
            return STATUS_ALIASES.get(s, s)
        return v


class EvaluationResult(BaseModel):
    """
    Rubric evaluation of a single prompt, as produced by the model
    """

    role: DimensionAssessment
    action: DimensionAssessment
    context: DimensionAssessment
    format: DimensionAssessment
    tone: DimensionAssessment
    techniques: List[str] = Field(default_factory=list)
    mismatches: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    score: int = Field(ge=0, le=10, description="Out of 10")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "role": {"status": "missing", "explanation": "No persona is given"},
                "action": {"status": "present", "explanation": "Asks for a summary"},
                "context": {"status": "partially present", "explanation": "Mentions meeting notes only"},
                "format": {"status": "missing", "explanation": "No output format"},
                "tone": {"status": "missing", "explanation": "No tone requested"},
                "techniques": [],
                "mismatches": [],
                "suggestions": [
                    "Assign a role such as 'You are an executive assistant'",
                    "Specify the output as a bullet list of decisions",
                    "Ask for a concise, neutral tone",
                ],
                "score": 3,
            }
        }
    )


class EvaluateRequest(BaseModel):
    """Evaluation request"""
    use_case: str = Field(..., alias="useCase")
    prompt: str = Field(...)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("use_case", "prompt")
    @classmethod
    def validate_not_blank(cls, v):
        if not v or len(v.strip()) == 0:
            raise ValueError("Field cannot be empty")
        return v.strip()


class EvaluateResponse(BaseModel):
    evaluation: EvaluationResult


class SubmitEvaluationRequest(BaseModel):
    """
    Evaluate a prompt and store it in the caller's history.
    use_case == "custom" selects custom_use_case.
    """
    use_case: Optional[str] = None
    custom_use_case: Optional[str] = None
    prompt: str

    @model_validator(mode="after")
    def validate_use_case_choice(self):
        if self.use_case == "custom":
            self.use_case = None
        use_case = (self.use_case or "").strip()
        # A selected use case wins over leftover custom text
        custom = "" if use_case else (self.custom_use_case or "").strip()
        if not use_case and not custom:
            raise ValueError("Please select or enter a use case")
        if not self.prompt or not self.prompt.strip():
            raise ValueError("Please enter your prompt")
        self.use_case = use_case or None
        self.custom_use_case = custom or None
        self.prompt = self.prompt.strip()
        return self

    @property
    def use_case_text(self) -> str:
        return self.use_case or self.custom_use_case


class SubmitEvaluationResponse(BaseModel):
    evaluation: EvaluationResult
    stored: bool
    evaluation_id: Optional[str] = None
    error: Optional[str] = None


class EvaluationRecord(BaseModel):
    """Persisted evaluation as shown in the history list"""
    id: str
    use_case: Optional[str] = None
    custom_use_case: Optional[str] = None
    prompt: str
    evaluation_result: dict
    score: int
    created_at: datetime

    # Display fields
    use_case_label: str = ""
    created_at_display: str = ""
    score_band: str = ""
    status_bands: dict = Field(default_factory=dict)

    model_config = ConfigDict(from_attributes=True)
