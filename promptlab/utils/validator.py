import json
import re
import logging
from typing import Dict, Any, List, Optional
from pydantic import ValidationError

from promptlab.models.evaluate import DIMENSIONS, DimensionStatus, EvaluationResult

logger = logging.getLogger(__name__)

USE_CASE_COUNT = 4

FALLBACK_USE_CASES = [
    "Generate professional emails for {department} department communications",
    "Create summaries of long documents and reports for {department} team",
    "Draft formal responses to common {department} inquiries and requests",
    "Analyze and categorize feedback or data relevant to {department} operations",
]

USE_CASE_KEYWORDS = ("generat", "writ", "creat", "draft", "email", "summar", "analyz")

NUMBERED_LINE = re.compile(r"^\d+\.")
NUMBER_PREFIX = re.compile(r"^\d+\.\s*")
BULLET_PREFIX = re.compile(r"^[\d.\-*•\s]+")
JSON_OBJECT = re.compile(r"\{[\s\S]*\}")

PARSE_FAILURE_EXPLANATION = "Unable to parse evaluation"


def extract_use_cases(text: str, department: str) -> List[str]:
    """
    Turn free-text model output into exactly 4 use cases.

    Numbered lines are preferred. When they do not give exactly 4, lines that
    look like prompting tasks are used instead, and any shortfall is padded
    with department templates.
    """
    lines = [line.strip() for line in (text or "").split("\n")]
    lines = [line for line in lines if line]

    use_cases = _extract_numbered(lines)

    if len(use_cases) != USE_CASE_COUNT:
        logger.warning(
            f"Numbered parsing gave {len(use_cases)} use cases, trying keyword parsing"
        )
        use_cases = _extract_by_keywords(lines)[:USE_CASE_COUNT]

    if len(use_cases) < USE_CASE_COUNT:
        logger.warning(f"Padding {USE_CASE_COUNT - len(use_cases)} fallback use cases for {department}")
        while len(use_cases) < USE_CASE_COUNT:
            use_cases.append(FALLBACK_USE_CASES[len(use_cases)].format(department=department))

    return use_cases[:USE_CASE_COUNT]


def _extract_numbered(lines: List[str]) -> List[str]:
    result = []
    for line in lines:
        if NUMBERED_LINE.match(line):
            use_case = NUMBER_PREFIX.sub("", line, count=1).strip()
            if use_case:
                result.append(use_case)
    return result


def _extract_by_keywords(lines: List[str]) -> List[str]:
    result = []
    for line in lines:
        lowered = line.lower()
        if len(line) > 20 and any(keyword in lowered for keyword in USE_CASE_KEYWORDS):
            clean = BULLET_PREFIX.sub("", line, count=1).strip()
            if len(clean) > 15:
                result.append(clean)
    return result


def fallback_evaluation() -> Dict[str, Any]:
    """Result used when the model output cannot be parsed"""
    dimension = {"status": DimensionStatus.MISSING.value, "explanation": PARSE_FAILURE_EXPLANATION}
    result: Dict[str, Any] = {name: dict(dimension) for name in DIMENSIONS}
    result.update({
        "techniques": [],
        "mismatches": ["Unable to evaluate due to parsing error"],
        "suggestions": [
            "Please try again - there was an issue processing your prompt",
            "Check if your prompt is properly formatted",
            "Consider simplifying your prompt structure",
        ],
        "score": 0,
    })
    return result


def extract_evaluation(text: str) -> Dict[str, Any]:
    """
    Parse the first JSON object in the model output as an EvaluationResult.
    Falls back to fallback_evaluation() on any failure, never raises.
    """
    match = JSON_OBJECT.search(text or "")
    if not match:
        logger.error(f"No JSON found in response: {text}")
        return fallback_evaluation()

    candidate = match.group(0)
    data = _load_json(candidate)
    if data is None:
        return fallback_evaluation()

    try:
        data = normalize_evaluation_fields(data)
        validated = EvaluationResult(**data)
        return validated.model_dump()
    except (ValidationError, TypeError) as e:
        logger.error(f"Evaluation failed validation: {e}")
        return fallback_evaluation()


def _load_json(candidate: str) -> Optional[Any]:
    try:
        return json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.warning(f"Invalid JSON, attempting repair: {e}")

    try:
        data = json.loads(clean_json_string(candidate))
        logger.info("JSON repaired successfully after cleaning")
        return data
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse JSON: {e} Text: {candidate}")
        return None


def clean_json_string(json_str: str) -> str:
    """
    Clean common JSON formatting issues from LLM output
    """
    # Remove markdown code blocks
    cleaned = re.sub(r'```json\s*', '', json_str)
    cleaned = re.sub(r'```\s*', '', cleaned)

    cleaned = cleaned.strip()

    # Fix trailing commas before closing brackets
    cleaned = re.sub(r',(\s*[}\]])', r'\1', cleaned)

    # Remove comments (single line and multi-line)
    cleaned = re.sub(r'^\s*//.*?$', '', cleaned, flags=re.MULTILINE)
    cleaned = re.sub(r'/\*.*?\*/', '', cleaned, flags=re.DOTALL)

    return cleaned


def normalize_evaluation_fields(data: Any) -> Any:
    """
    Normalize common LLM JSON deviations:
    - Convert a numeric-like score ("7", "7/10", 7.0) to an int in 0-10
    - Wrap a bare string list field into a one-item list
    """
    if not isinstance(data, dict):
        return data

    if "score" in data:
        data["score"] = coerce_score(data["score"])

    for key in ("techniques", "mismatches", "suggestions"):
        value = data.get(key)
        if isinstance(value, str):
            data[key] = [value.strip()] if value.strip() else []

    return data


def coerce_score(value: Any) -> Any:
    """Coerce to an int clamped to 0-10; anything unparseable is returned as-is"""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        m = re.match(r"^\s*(-?\d+(?:\.\d+)?)", value)
        if not m:
            return value
        value = float(m.group(1))
    if not isinstance(value, (int, float)):
        return value

    if value < 0:
        logger.warning(f"score {value} below minimum, setting to 0")
        return 0
    if value > 10:
        logger.warning(f"score {value} above maximum, setting to 10")
        return 10
    return int(round(value))
