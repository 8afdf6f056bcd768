"""Prompt templates for the three generation steps."""

SCENARIOS_SYSTEM_PROMPT = (
    "You are a strategic business consultant specializing in market entry strategies. "
    "Provide detailed, practical solutions that consider both opportunities and risks."
)

PERSONAS_SYSTEM_PROMPT = (
    "You are a market research expert specializing in user personas. "
    "Create detailed, realistic personas that represent different market segments."
)

FEEDBACK_SYSTEM_PROMPT = (
    "You are a market research expert analyzing how different personas would react to "
    "business solutions. Provide detailed, realistic feedback and honest scores."
)

SCENARIOS_PROMPT_TEMPLATE = """Based on the following company information and market challenge, generate {count} distinct solutions for market entry.

Company Information:
{company_info}

Market Challenge:
{market_challenge}

Format every solution exactly like this:

Solution 1: [Title]
- Description: [2-3 sentences describing the approach]
- Advantages: [comma-separated list of key advantages]
- Challenges: [comma-separated list of risks or challenges]
- Timeline: [estimated implementation timeline]
- Resources: [required resources or investments]

Number the solutions sequentially. Do not use JSON."""

PERSONAS_PROMPT_TEMPLATE = """Based on the following company information and market challenge, generate {count} market personas: half from the current target audience and half from potential new audiences.

Company Information:
{company_info}

Market Challenge:
{market_challenge}

Wrap every persona in markers and follow this layout exactly:

[PERSONA_START]
Persona 1: [Full Name] ([Current Audience or New Audience])
Basic Information: [Full Name], [Age], [Occupation]
Background and Context: [2-3 sentences]
Goals: [comma-separated list]
Pain Points: [comma-separated list]
Tech Savviness: [Low, Medium or High]
[PERSONA_END]

Do not use JSON."""

FEEDBACK_PROMPT_TEMPLATE = """Based on the following solutions and personas, analyze how each persona would react to each solution.

SOLUTIONS:
{scenarios}

PERSONAS:
{personas}

Wrap the analysis of every solution in markers and follow this layout exactly:

[SOLUTION_ANALYSIS_START]
Analysis for Solution 1: [Solution Title exactly as given]
Feasibility Score: [0-100]%
Return Score: [0-100]%
Risk Score: [0-100]%
Market readiness: [0-100]%
Resource requirements: [0-100]%

[PERSONA_FEEDBACK_START]
**[Persona Full Name]:**
- Initial reaction: [Positive, Neutral or Negative]
- Potential benefits: [what this persona gains]
- Key concerns: [what worries this persona]
[First Person Quote]: "[one or two sentences in the persona's own voice]"
[PERSONA_FEEDBACK_END]

(repeat the persona block for every persona)

Overall Analysis: [short summary]
[SOLUTION_ANALYSIS_END]

Use the exact persona names and solution titles. Do not use JSON."""

DEFAULT_SOLUTION_COUNT = 3
DEFAULT_PERSONA_COUNT = 6


def build_scenarios_prompt(company_info: str, market_challenge: str, count: int = DEFAULT_SOLUTION_COUNT) -> str:
    return SCENARIOS_PROMPT_TEMPLATE.format(
        count=count,
        company_info=company_info.strip(),
        market_challenge=market_challenge.strip(),
    )


def build_personas_prompt(company_info: str, market_challenge: str, count: int = DEFAULT_PERSONA_COUNT) -> str:
    return PERSONAS_PROMPT_TEMPLATE.format(
        count=count,
        company_info=company_info.strip(),
        market_challenge=market_challenge.strip(),
    )


def build_feedback_prompt(scenarios: str, personas: str) -> str:
    """The feedback prompt embeds both earlier documents verbatim."""
    return FEEDBACK_PROMPT_TEMPLATE.format(scenarios=scenarios.strip(), personas=personas.strip())
