from typing import Dict, Any, List, Optional, Tuple
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from promptlab.services.gemini_service import GeminiServices, get_gemini_service
from promptlab.prompts import prompt_evaluation, use_case_generation
from promptlab.repository import evaluation_repository
from promptlab.utils.validator import extract_evaluation, extract_use_cases

STORE_FAILURE_MESSAGE = "Evaluation completed but could not be saved to your history"


class EvaluationPipeline:
    """
    Prompt builder -> Gemini -> response extractor, for both
    use case generation and prompt evaluation
    """

    def __init__(self, gemini: Optional[GeminiServices] = None):
        self.gemini = gemini or get_gemini_service()

    async def generate_use_cases(self, department: str, tasks: Optional[str] = None) -> List[str]:
        """Always returns exactly 4 use cases"""
        logging.info(f"Generating use cases for department: {department}")

        prompt = use_case_generation.get_use_case_generation_prompt(department, tasks)
        logging.debug(f"Use case prompt built | tasks_len={len(tasks or '')} | prompt_len={len(prompt)}")
        text = await self.gemini.generate_use_case_text(
            prompt=prompt,
            system_instruction=use_case_generation.USE_CASE_SYSTEM_INSTRUCTION,
        )
        logging.debug(f"Generated text: {text}")

        use_cases = extract_use_cases(text, department)
        logging.info(f"Final use cases: {use_cases}")
        return use_cases

    async def evaluate(self, use_case: str, prompt: str) -> Dict[str, Any]:
        """
        Score a prompt against a use case.
        Unparseable model output yields the fallback result rather than an error.
        """
        logging.info(f"Evaluating prompt for use case: {use_case}")

        evaluation_prompt = prompt_evaluation.get_prompt_evaluation_prompt(use_case, prompt)
        logging.debug(f"Evaluation prompt built | use_case_len={len(use_case)} | prompt_len={len(prompt)}")
        text = await self.gemini.generate_with_retry(
            prompt=evaluation_prompt,
            system_instruction=prompt_evaluation.EVALUATION_SYSTEM_INSTRUCTION,
        )

        evaluation = extract_evaluation(text)
        logging.info(f"Evaluation completed with score {evaluation['score']}")
        return evaluation

    async def submit(
        self,
        db: Session,
        user_id: str,
        use_case: Optional[str],
        custom_use_case: Optional[str],
        prompt: str,
    ) -> Tuple[Dict[str, Any], Optional[str], Optional[str]]:
        """
        Evaluate and store as a new record.
        Returns (evaluation, evaluation_id, error); a storage failure still
        returns the evaluation, with evaluation_id None and an error message.
        """
        evaluation = await self.evaluate(use_case or custom_use_case, prompt)

        try:
            record = evaluation_repository.create_evaluation(
                db=db,
                user_id=user_id,
                use_case=use_case,
                custom_use_case=custom_use_case,
                prompt=prompt,
                evaluation_result=evaluation,
                score=evaluation["score"],
            )
        except (SQLAlchemyError, ValueError) as e:
            logging.error(f"Failed to store evaluation for user {user_id}: {e}")
            return evaluation, None, STORE_FAILURE_MESSAGE

        return evaluation, record.id, None


_evaluation_pipeline = None

def get_evaluation_pipeline() -> EvaluationPipeline:
    global _evaluation_pipeline
    if _evaluation_pipeline is None:
        _evaluation_pipeline = EvaluationPipeline()
    return _evaluation_pipeline
