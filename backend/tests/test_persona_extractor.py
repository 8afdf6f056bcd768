"""Unit tests for persona extraction."""
import pytest
from marketsim.services.persona_extractor import (
    extract_personas,
    parse_basic_information,
    summarize_personas,
)


class TestDelimitedPersonas:
    """Personas wrapped in [PERSONA_START]/[PERSONA_END] markers."""

    def test_extracts_every_block(self, delimited_personas):
        """Test one persona per block, keyed by lower-cased name."""
        personas = extract_personas(delimited_personas)

        assert set(personas) == {"maria chen", "david okafor"}

    def test_basic_information_fields(self, delimited_personas):
        """Test name, age and role come from Basic Information."""
        maria = extract_personas(delimited_personas)["maria chen"]

        assert maria.name == "Maria Chen"
        assert maria.age == "34"
        assert maria.role == "Product Manager"
        assert maria.full_details == "Maria Chen, 34, Product Manager"
        assert maria.description.startswith("Leads a remote product team")
        assert maria.audience == "Current Audience"

    def test_role_keeps_commas(self, delimited_personas):
        """Test everything after the age belongs to the role."""
        david = extract_personas(delimited_personas)["david okafor"]

        assert david.role == "Owner, Okafor Logistics"

    def test_duplicate_names_keep_last(self):
        """Test a repeated persona overwrites the earlier one."""
        text = (
            "[PERSONA_START]\nBasic Information: Ana Ruiz, 30, Designer\n[PERSONA_END]\n"
            "[PERSONA_START]\nBasic Information: Ana Ruiz, 31, Art Director\n[PERSONA_END]\n"
        )
        personas = extract_personas(text)

        assert len(personas) == 1
        assert personas["ana ruiz"].role == "Art Director"

    def test_header_name_used_without_basic_information(self):
        """Test the persona heading supplies the name when nothing else does."""
        text = "[PERSONA_START]\nPersona 3: Lee Park (Skeptic)\nContext: Runs a bakery.\n[PERSONA_END]"
        lee = extract_personas(text)["lee park"]

        assert lee.age is None
        assert lee.description == "Runs a bakery."
        assert lee.full_details == "Lee Park"


class TestHeadingPersonas:
    """Free-form markdown personas split on Persona N: headings."""

    def test_fallback_to_headings(self, heading_personas):
        """Test both personas are recovered without markers."""
        personas = extract_personas(heading_personas)

        assert set(personas) == {"maria chen", "james wright"}

    def test_separate_age_and_occupation_fields(self, heading_personas):
        """Test bold Age/Occupation bullets fill in the details."""
        maria = extract_personas(heading_personas)["maria chen"]

        assert maria.age == "34"
        assert maria.role == "Product Manager"
        assert maria.description == "Leads a remote product team."

    def test_context_used_as_description(self, heading_personas):
        """Test Context is accepted when Background is missing."""
        james = extract_personas(heading_personas)["james wright"]

        assert james.full_details == "James Wright, 45, CFO"
        assert james.description == "Oversees budgets for a regional bank."


class TestPersonaEdgeCases:

    @pytest.mark.parametrize("text", ["", "No personas were produced this time."])
    def test_no_personas(self, text):
        assert extract_personas(text) == {}

    def test_extraction_is_idempotent(self, delimited_personas):
        """Test parsing the same text twice gives equal results."""
        assert extract_personas(delimited_personas) == extract_personas(delimited_personas)

    def test_parse_basic_information_strips_prefixes(self):
        assert parse_basic_information("Name: Ana Ruiz, Age: 30, Designer") == ("Ana Ruiz", "30", "Designer")

    def test_summaries_truncate_long_descriptions(self):
        text = (
            "[PERSONA_START]\nBasic Information: Ana Ruiz, 30, Designer\n"
            f"Background: {'word ' * 80}\n[PERSONA_END]"
        )
        summary = summarize_personas(text)[0]

        assert summary["name"] == "Ana Ruiz"
        assert len(summary["description"]) <= 160
        assert summary["description"].endswith("...")
