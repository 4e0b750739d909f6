from typing import List, Optional

from langchain_core.prompts import PromptTemplate

from roadmap_pipeline.prompts.goal_extraction import quote_user_text
from roadmap_pipeline.schemas import ROADMAP_SCHEMA_VERSION
from roadmap_pipeline.state import GoalDescriptor

ROADMAP_PROMPT = """
You are an expert roadmap builder and learning specialist.

Your task is to generate a structured learning roadmap based on the goal below.

Additionally, detect if the user wants calendar integration: only set triggerCalendar to true if they explicitly mention scheduling, reminders, deadlines, calendar events, check-ins, etc.
When triggerCalendar is true, put a one-sentence justification in calendarIntentReason; otherwise set it to null.

User's original message:
\"\"\"{original_message}\"\"\"

Roadmap goal:
- Goal: {goal}
- Already known: {known}
- Experience level: {experience_level}
- Preferred format: {format_preference}
- Timeframe: {timeframe}
- Specific focus: {specific_focus}

Examples where triggerCalendar = true:
- "Make a 6-week plan with weekly reminders"
- "Add this to my calendar with deadlines"

Examples where triggerCalendar = false:
- "Give me a roadmap to learn TypeScript"
- "How to master backend development"

OUTPUT SHAPE:
- roadmap: ordered list of stages, in the order they should be learned
  - each stage: id, title, description, nodes
  - each node: id, title, description, resources
  - each resource: type, title, link, description
- triggerCalendar: boolean
- calendarIntentReason: string or null

ROADMAP GUIDELINES:
- Each stage: meaningful title, 2-3 sentence description explaining why it's important
- Stage ids are unique within the roadmap; node ids are unique within their stage
- Each node: detailed 2-3 sentence educational description
- Exactly 3 high-quality resources per node (video, article, project mix)
- Use reputable sources (MDN, official docs, FreeCodeCamp, Traversy Media, etc.)
- Realistic and valid-looking links
- Respect the preferred format, timeframe and specific focus when they are given

Output must be valid JSON matching the schema. No markdown. No extra text.
""".strip()

ROADMAP_PROMPT_VERSION = "1.0"
# Schema version the guideline text above was written against.
ROADMAP_PROMPT_SCHEMA = ROADMAP_SCHEMA_VERSION

NOT_SPECIFIED = "not specified"

_TEMPLATE = PromptTemplate.from_template(ROADMAP_PROMPT)


def _render_list(values: Optional[List[str]]) -> str:
    if not values:
        return NOT_SPECIFIED
    return ", ".join(values)


def build_roadmap_prompt(goal: GoalDescriptor, original_message: str) -> str:
    return _TEMPLATE.format(
        original_message=quote_user_text(original_message),
        goal=goal.goal,
        known=_render_list(goal.known),
        experience_level=goal.experience_level or NOT_SPECIFIED,
        format_preference=goal.format_preference or NOT_SPECIFIED,
        timeframe=goal.timeframe or NOT_SPECIFIED,
        specific_focus=_render_list(goal.specific_focus),
    )
