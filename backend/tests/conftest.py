"""Shared sample documents shaped like real generator output."""
import pytest

DELIMITED_PERSONAS = """Here are the personas you asked for.

[PERSONA_START]
Persona 1: Maria Chen (Current Audience)
Basic Information: Maria Chen, 34, Product Manager
Background and Context: Leads a remote product team and evaluates new tooling every quarter.
Goals: Faster releases, fewer meetings
[PERSONA_END]

[PERSONA_START]
Persona 2: David Okafor (New Audience)
Basic Information: David Okafor, 52, Owner, Okafor Logistics
Background and Context: Runs a mid-sized logistics business and distrusts subscription software.
[PERSONA_END]
"""

HEADING_PERSONAS = """Below are two personas.

**Persona 1: Maria Chen**
- **Age:** 34
- **Occupation:** Product Manager
- **Background:** Leads a remote product team.

### Persona 2: James Wright
Basic Information: James Wright, 45, CFO
Context: Oversees budgets for a regional bank.
"""

SCENARIOS = """Solution 1: Premium Partner Program
- Description: Partner with established retailers to offer a premium tier.
  Partners receive co-marketing support.
- Advantages: Fast credibility, shared marketing costs, existing foot traffic
- Challenges:
  - Revenue sharing reduces margins
  - Dependence on partner priorities
  - Slower iteration
- Timeline: 6 months

Solution 2: Direct-to-Consumer Launch
- Description: Sell directly online with a freemium entry plan.
- Advantages: Full control of pricing; direct customer data
- Challenges: High acquisition costs

**Strategy 3: Enterprise Pilot Network**
- Description: Run paid pilots with five enterprise customers.
"""

DELIMITED_FEEDBACK = """[SOLUTION_ANALYSIS_START]
Analysis for Solution 1: Premium Partner Program
Feasibility Score: 82%
Return Score: 47%
Risk Score: 35%

[PERSONA_FEEDBACK_START]
**Maria Chen:**
- Initial reaction: Positive
- Potential benefits: She hopes for easier vendor management
[First Person Quote]: "I'd finally have one place to manage every partner."
[PERSONA_FEEDBACK_END]

[PERSONA_FEEDBACK_START]
**David Okafor (New Audience):**
- Initial reaction: Negative
- Potential benefits: Access to retail shelf space
- Key concerns: He is worried about revenue sharing eating his margins
[PERSONA_FEEDBACK_END]

Overall Analysis: Strong fit for existing customers.
[SOLUTION_ANALYSIS_END]

[SOLUTION_ANALYSIS_START]
Analysis for Solution 2: Direct-to-Consumer Launch
Risk Score: 30%
Market readiness: 90%
Resource requirements: 40%

[PERSONA_FEEDBACK_START]
**Unknown Stakeholder:**
[First Person Quote]: "Not sure this is for me."
[PERSONA_FEEDBACK_END]
[SOLUTION_ANALYSIS_END]

[SOLUTION_ANALYSIS_START]
Analysis for Solution 3: Enterprise Pilot Network
Feasibility Score: 90%
Return Score: 88%

[PERSONA_FEEDBACK_START]
**David Okafor:**
[First Person Quote]: "Paid pilots? Only if the results are guaranteed."
[PERSONA_FEEDBACK_END]
[SOLUTION_ANALYSIS_END]
"""

OLD_FORMAT_FEEDBACK = """Analysis for Solution 1: Premium Partner Program

Risk Score: 40%
Market readiness: 70%
Resource requirements: 50%

Persona Feedback:
- Maria Chen (Current Audience):
  Initial reaction: Positive
  Potential benefits: She hopes for easier vendor management
  Key concerns: Onboarding time for her team

- David Okafor (New Audience):
  Initial reaction: Negative
  Key concerns: He is worried about revenue sharing

Overall Analysis: Promising but resource heavy.

---

Analysis for Solution 2: Direct-to-Consumer Launch

Risk Score: 20%
Resource requirements: 30%

Persona Feedback:
**Maria Chen**
Potential benefits: Direct support from the vendor
"""


@pytest.fixture
def delimited_personas():
    return DELIMITED_PERSONAS


@pytest.fixture
def heading_personas():
    return HEADING_PERSONAS


@pytest.fixture
def scenarios_text():
    return SCENARIOS


@pytest.fixture
def delimited_feedback():
    return DELIMITED_FEEDBACK


@pytest.fixture
def old_format_feedback():
    return OLD_FORMAT_FEEDBACK
