from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UseCaseRequest(BaseModel):
    """Use case generation request"""
    department: str = Field(...)
    tasks: Optional[str] = None

    @field_validator("department")
    @classmethod
    def validate_department(cls, v):
        if not v or len(v.strip()) == 0:
            raise ValueError("Please enter your department")
        return v.strip()


class UseCaseResponse(BaseModel):
    use_cases: List[str] = Field(..., alias="useCases", min_length=4, max_length=4)

    model_config = ConfigDict(populate_by_name=True)
