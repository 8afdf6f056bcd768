"""Unit tests for quote reconciliation and synthesis."""
import pytest
from marketsim.models.report import AnalysisBlock, Persona, PersonaFeedbackEntry, SolutionOutline
from marketsim.services.feedback_extractor import extract_feedback_blocks
from marketsim.services.matchers import resolve_outline, resolve_persona
from marketsim.services.quote_reconciler import (
    CONCERN,
    POSITIVE,
    classify_sentiment,
    insight_quotes,
    quotes_for_solution,
    reconcile_quotes,
    to_first_person,
)


@pytest.fixture
def personas():
    """Persona map as produced by the persona extractor."""
    return {
        "maria chen": Persona(
            key="maria chen",
            name="Maria Chen",
            age="34",
            role="Product Manager",
            description="Leads a remote product team.",
        ),
        "david okafor": Persona(key="david okafor", name="David Okafor", age="52", role="Owner"),
    }


@pytest.fixture
def outline():
    return SolutionOutline(
        index=1,
        title="Premium Partner Program",
        advantages=("Fast credibility", "Shared marketing costs"),
        challenges=("Revenue sharing reduces margins",),
    )


def _block(*entries):
    return AnalysisBlock(title="Premium Partner Program", persona_feedback=tuple(entries))


class TestReconcileQuotes:

    def test_direct_quote_used_verbatim(self, personas):
        """Test a captured quote is wrapped in quotes and carries persona details."""
        entry = PersonaFeedbackEntry(
            persona_name_raw="**Maria Chen (Current Audience):**",
            raw_text="",
            quote="I'd switch tomorrow.",
        )
        quotes = reconcile_quotes(_block(entry), personas)

        assert len(quotes) == 1
        assert quotes[0].quote == '"I\'d switch tomorrow."'
        assert quotes[0].is_persona is True
        assert quotes[0].full_persona_details == "Maria Chen, 34, Product Manager"
        assert quotes[0].description == "Leads a remote product team."

    def test_benefits_and_concerns_are_templated(self, personas):
        """Test third-person fields become first-person quotes."""
        entry = PersonaFeedbackEntry(
            persona_name_raw="David Okafor",
            raw_text=(
                "- Potential benefits: He hopes for more foot traffic\n"
                "- Key concerns: He is worried about revenue sharing eating his margins"
            ),
        )
        quotes = reconcile_quotes(_block(entry), personas)

        assert [quote.quote for quote in quotes] == [
            '"I\'m really hoping for more foot traffic."',
            '"I\'m worried about revenue sharing eating my margins."',
        ]
        assert [quote.sentiment for quote in quotes] == [POSITIVE, CONCERN]

    def test_unresolved_persona_is_skipped(self, personas):
        entry = PersonaFeedbackEntry(persona_name_raw="Unknown Stakeholder", raw_text="", quote="Hmm.")

        assert reconcile_quotes(_block(entry), personas) == []

    def test_entry_without_fields_yields_nothing(self, personas):
        entry = PersonaFeedbackEntry(persona_name_raw="Maria Chen", raw_text="- Initial reaction: Neutral")

        assert reconcile_quotes(_block(entry), personas) == []


class TestInsightFallback:

    def test_insights_from_outline(self, personas, outline):
        """Test advantages become Key Insights and challenges Considerations."""
        quotes = quotes_for_solution(_block(), personas, outline)

        assert [quote.name for quote in quotes] == ["Key Insight", "Key Insight", "Consideration"]
        assert quotes[0].quote == '"Fast credibility"'
        assert not any(quote.is_persona for quote in quotes)

    def test_generic_insight_without_outline(self):
        quotes = insight_quotes("Moon Base", None)

        assert len(quotes) == 1
        assert quotes[0].name == "Market Analysis"
        assert quotes[0].quote.startswith("Moon Base offers significant market potential")

    def test_persona_quotes_suppress_insights(self, personas, outline):
        entry = PersonaFeedbackEntry(persona_name_raw="Maria Chen", raw_text="", quote="Love it.")
        quotes = quotes_for_solution(_block(entry), personas, outline)

        assert [quote.name for quote in quotes] == ["Maria Chen"]


class TestFirstPerson:

    @pytest.mark.parametrize("text,sentiment,expected", [
        ("She hopes for easier vendor management", POSITIVE, "I'm really hoping for easier vendor management."),
        ("They value their weekends.", POSITIVE, "I really value my weekends."),
        ("Onboarding time for her team", CONCERN, "I'm concerned about onboarding time for my team."),
        ("Access to retail shelf space", POSITIVE, "I'm excited about access to retail shelf space."),
        ("ROI within a year", POSITIVE, "I'm excited about ROI within a year."),
    ])
    def test_rewrites(self, text, sentiment, expected):
        assert to_first_person(text, sentiment) == expected

    def test_classify_sentiment(self):
        assert classify_sentiment("I'd love a cheaper plan") == POSITIVE
        assert classify_sentiment("I'm worried this is too expensive") == CONCERN
        assert classify_sentiment("Fine.") == POSITIVE


class TestMatchers:

    def test_persona_lookup_falls_back_to_containment(self, personas):
        assert resolve_persona("Maria", personas).name == "Maria Chen"
        assert resolve_persona("Dr. David Okafor, owner", personas).name == "David Okafor"
        assert resolve_persona("", personas) is None

    def test_outline_lookup_order(self, outline):
        other = SolutionOutline(index=2, title="Premium Partner Program Plus")
        outlines = [other, outline]

        assert resolve_outline("premium partner program", outlines) is outline
        assert resolve_outline("Partner Program", outlines) is other
        assert resolve_outline("The Premium Partner Program Plus Initiative", outlines) is other
        assert resolve_outline("Moon Base", outlines) is None


def test_concerns_survive_interleaved_fields(personas):
    """Test a concern after an extra bold field is still templated for the persona."""
    text = (
        "Analysis for Solution 1: Premium Partner Program\n"
        "Persona Feedback:\n"
        "**Maria Chen**\n"
        "- **Expected adoption timeframe:** 6 months\n"
        "- **Key concerns:** She is worried about cost\n"
    )
    block = extract_feedback_blocks(text)[0]
    quotes = reconcile_quotes(block, personas)

    assert [(q.name, q.quote) for q in quotes] == [("Maria Chen", '"I\'m worried about cost."')]
