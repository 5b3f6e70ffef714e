SCORING_RUBRIC = """**Scoring Criteria** (Out of 10)
    Just because Role, Action, Context, Format and Tone are present don't give full marks, check for clarity, completeness of information, specificity and alignment with use case also.
    Score the prompt based on:
    - if role present (1 point)
    - if action/task present (1 point)
    - if context present (1 point)
    - if format and tone present (2 point)
    - Clarity (1 points)
    - Completeness of information (1 points)
    - Specificity (1 points)
    - Alignment with use case (1 points)
    - give other one point if you think the prompt is perfect"""

EVALUATION_SYSTEM_INSTRUCTION = f"""{SCORING_RUBRIC}
You are a professional prompt evaluation expert. Respond only with valid JSON format as specified."""

EVALUATION_RESPONSE_FORMAT = """{
      "role": {"status": "present/partially present/missing", "explanation": "brief explanation"},
      "action": {"status": "present/partially present/missing", "explanation": "brief explanation"},
      "context": {"status": "present/partially present/missing", "explanation": "brief explanation"},
      "format": {"status": "present/partially present/missing", "explanation": "brief explanation"},
      "tone": {"status": "present/partially present/missing", "explanation": "brief explanation"},
      "techniques": ["list of detected techniques"],
      "mismatches": ["list of mismatches with use case, empty if none"],
      "suggestions": ["suggestion 1", "suggestion 2", "suggestion 3"],
      "score": numerical_score_out_of_10
    }"""


def get_prompt_evaluation_prompt(use_case: str, prompt: str) -> str:
    """
    Generate prompt evaluation prompt
    """
    return f"""You are a Prompt Quality Evaluator.

    Your task is to evaluate a prompt written by a user according to the following criteria:

    1. **Prompt Structure Presence**
    Check if the following components are clearly specified in the prompt.
    - Role: Who is being asked to perform the task (e.g., "You are a travel planner")
    - Action/Task: What is being asked (e.g., "Plan a 5-day trip to Italy")
    - Context: Any relevant background info or constraints (e.g., "For a family with kids under 10")
    - Format: How the output should look (e.g., "Return as a bullet-point itinerary")
    - Tone: Desired style of writing (e.g., "Friendly and concise")
    For each of these components, evaluate whether it is:
    - **present** (clearly and strongly expressed)
    - **partially present** (implied or weakly mentioned)
    - **missing** (not present at all)

    2. {SCORING_RUBRIC}

    3. **Use Case and Prompt Matching**
    Check if the prompt is logically aligned with the use case provided.

    4. **Constructive Feedback**
    Suggest how the prompt can be improved.
    - Mention missing elements (like tone, format, context, etc.)
    - Suggest better phrasing or structure.
    - Give 2-3 short actionable tips.

    WARNING: Just because a technique is mentioned by name or keyword in the prompt, **do not assume it's actually used**. Only confirm a technique if it is actively demonstrated in the structure or content of the prompt.

    * Point out **missing elements**, **vagueness**, or any **confusing parts**.
    * Give **3 clear and constructive suggestions** to improve the prompt.

    Use Case: {use_case}
    Prompt to Evaluate: {prompt}

    Return your response in this exact JSON format:
    {EVALUATION_RESPONSE_FORMAT}"""
