from typing import Optional

USE_CASE_SYSTEM_INSTRUCTION = """You are a use case generator expert. Generate exactly 4 use cases, one per line, without numbering or bullet points."""

DEFAULT_TASKS_HINT = (
    "refer to standard team tasks from the document below if none provided and if the "
    "department is not in the below document you can assume some tasks related to the given department"
)

TEAM_RESPONSIBILITIES = """**Product Design**
- Creating wireframes and prototypes
- Collaborating with engineering/product teams
- Presenting designs to stakeholders
- Building and maintaining design systems
- Conducting user research (interviews, usability tests)

**Program Management**
- Managing admissions processes and campus deployments
- Onboarding and training BOAs/PMAs/PMs
- Tracking progress of new hires
- Coordinating logistics for campus readiness
- Regularly updating stakeholders

**Accounting**
- Recording transactions in ERP
- Invoice validation and payment reconciliation
- Preparing budgets and analyzing spending
- Processing refunds
- Filing statutory returns (GST, TDS, etc.)

**Content Team**
- Writing web copy and microcopy
- Creating scripts, brochures, social media posts
- Translating/localizing assets
- Drafting email newsletters and presentation decks
- Video subtitle writing and influencer content scripting"""

COMPANY_CONTEXT = """NxtWave is an Indian edtech startup focused on building job-ready skills in emerging tech (AI, ML, Full Stack Dev, etc.) via online programs and NIAT college degrees. Their clients include tech students and professionals. They work in both online (CCBP Academy) and offline (NIAT B.Tech programs) models, offering training, placement support, and industry-recognized certification."""


def get_use_case_generation_prompt(department: str, tasks: Optional[str] = None) -> str:
    """
    Generate the use case generation prompt.
    Blank tasks fall back to the team responsibilities reference.
    """
    task_block = tasks.strip() if tasks and tasks.strip() else DEFAULT_TASKS_HINT

    return f"""Don't give use cases that are not related to NxtWave (mentioned in the context dump, refer to it so you know what NxtWave is, what they do, and who their clients are). Don't assume anything. Don't give scenarios where it involves building complex systems or custom applications. The scope is limited to simple prompting tasks only.

    You are conducting a GenAI workshop to teach employees how to write effective prompts. The focus is on using the **basic prompt structure**: Role, Action/Task, Context, Format, Tone.

    GOAL: Generate **4 simple and realistic AI use cases** that help employees from the **{department}** department use prompting in their daily work.

    You are a Use Case Generator Agent. I will give you:
    - A department name
    - The key tasks that team performs

    Your job is to output 4 use cases where an employee from that department can use AI to help with their **actual** work (based on responsibilities listed below). These should be:
    - Simple and practical (e.g., "generate a formal email", "summarize a document", "create meeting notes")
    - Easy to express using Role, Action/Task, Context, Format, and Tone
    - Aligned with what that department typically does at NxtWave

    ---

    Department: **{department}**
    Tasks:
    {task_block}

    ---

    Please provide exactly 4 use cases (one per line, no bullets or numbering).

    TEAM RESPONSIBILITIES REFERENCE:
    {TEAM_RESPONSIBILITIES}

    ---

    CONTEXT DUMP:
    {COMPANY_CONTEXT}
    """
