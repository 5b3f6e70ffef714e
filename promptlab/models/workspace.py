import logging
from typing import ClassVar, List, Optional, Tuple
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from pydantic import BaseModel, Field, ValidationError, model_validator

CUSTOM_USE_CASE = "custom"
EVALUATE_FRAGMENT = "evaluate"


class EditHandoff(BaseModel):
    """
    Prior evaluation values handed to the evaluation form for re-editing.
    Travels as URL query parameters and is consumed once.
    """
    edit_id: str = Field(..., alias="editId", min_length=1)
    use_case: Optional[str] = Field(None, alias="useCase")
    custom_use_case: Optional[str] = Field(None, alias="customUseCase")
    prompt: str = Field(..., min_length=1)

    model_config = {"populate_by_name": True}

    QUERY_KEYS: ClassVar[tuple] = ("editId", "useCase", "customUseCase", "prompt")

    @model_validator(mode="after")
    def validate_use_case(self):
        if not self.use_case and not self.custom_use_case:
            raise ValueError("Either useCase or customUseCase is required")
        return self

    @classmethod
    def from_evaluation(cls, evaluation) -> "EditHandoff":
        return cls(
            edit_id=evaluation.id,
            use_case=evaluation.use_case,
            custom_use_case=evaluation.custom_use_case,
            prompt=evaluation.prompt,
        )

    def to_url(self, base_url: str) -> str:
        parts = urlsplit(base_url)
        query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k not in self.QUERY_KEYS]
        params = self.model_dump(by_alias=True, exclude_none=True)
        query.extend((key, params[key]) for key in self.QUERY_KEYS if key in params)
        return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query), EVALUATE_FRAGMENT))

    @classmethod
    def consume(cls, url: str) -> Tuple[Optional["EditHandoff"], str]:
        """
        Read a hand-off from `url` and return it with the URL stripped of
        the hand-off parameters. Incomplete parameters give None.
        """
        parts = urlsplit(url)
        pairs = parse_qsl(parts.query, keep_blank_values=True)
        params = {k: v for k, v in pairs if k in cls.QUERY_KEYS and v}
        remaining = [(k, v) for k, v in pairs if k not in cls.QUERY_KEYS]
        cleaned = urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(remaining), EVALUATE_FRAGMENT))

        if "editId" not in params:
            return None, cleaned
        try:
            handoff = cls.model_validate(params)
        except ValidationError as e:
            logging.warning(f"Ignoring incomplete edit parameters: {e.errors()}")
            return None, cleaned
        return handoff, cleaned


class Workspace(BaseModel):
    """
    Per-user form state shared between the generator and evaluator views
    """
    generated_use_cases: List[str] = Field(default_factory=list)
    department: str = ""
    daily_tasks: str = ""
    selected_use_case: str = ""
    custom_use_case: str = ""
    prompt: str = ""
    editing_id: Optional[str] = None

    def resolved_use_case(self) -> str:
        if self.selected_use_case == CUSTOM_USE_CASE:
            return self.custom_use_case
        return self.selected_use_case

    def apply_handoff(self, handoff: EditHandoff) -> None:
        self.editing_id = handoff.edit_id
        if handoff.use_case == CUSTOM_USE_CASE or handoff.custom_use_case:
            self.selected_use_case = CUSTOM_USE_CASE
            self.custom_use_case = handoff.custom_use_case or ""
        elif handoff.use_case in self.generated_use_cases:
            self.selected_use_case = handoff.use_case
            self.custom_use_case = ""
        else:
            self.selected_use_case = CUSTOM_USE_CASE
            self.custom_use_case = handoff.use_case
        self.prompt = handoff.prompt


class WorkspaceUpdate(BaseModel):
    department: Optional[str] = None
    daily_tasks: Optional[str] = None
    selected_use_case: Optional[str] = None
    custom_use_case: Optional[str] = None
    prompt: Optional[str] = None


class ConsumeEditRequest(BaseModel):
    url: str


class ConsumeEditResponse(BaseModel):
    loaded: bool
    url: str
    workspace: Workspace
