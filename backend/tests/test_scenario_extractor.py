"""Unit tests for solution outline extraction."""
from marketsim.models.report import NO_DESCRIPTION
from marketsim.services.scenario_extractor import (
    extract_solution_titles,
    extract_solution_titles_and_descriptions,
)


class TestScenarioExtractor:

    def test_one_outline_per_heading(self, scenarios_text):
        """Test Solution and Strategy headings both start an outline."""
        outlines = extract_solution_titles_and_descriptions(scenarios_text)

        assert [outline.index for outline in outlines] == [1, 2, 3]
        assert extract_solution_titles(scenarios_text) == [
            "Premium Partner Program",
            "Direct-to-Consumer Launch",
            "Enterprise Pilot Network",
        ]

    def test_multiline_description_is_collapsed(self, scenarios_text):
        outline = extract_solution_titles_and_descriptions(scenarios_text)[0]

        assert outline.description == (
            "Partner with established retailers to offer a premium tier. "
            "Partners receive co-marketing support."
        )

    def test_lists_are_capped_at_two_items(self, scenarios_text):
        """Test inline and nested bullet lists both yield at most two items."""
        outline = extract_solution_titles_and_descriptions(scenarios_text)[0]

        assert outline.advantages == ("Fast credibility", "shared marketing costs")
        assert outline.challenges == ("Revenue sharing reduces margins", "Dependence on partner priorities")

    def test_semicolon_separated_list(self, scenarios_text):
        outline = extract_solution_titles_and_descriptions(scenarios_text)[1]

        assert outline.advantages == ("Full control of pricing", "direct customer data")
        assert outline.challenges == ("High acquisition costs",)

    def test_missing_sections(self):
        """Test a bare heading gets the default description and no lists."""
        outline = extract_solution_titles_and_descriptions("Solution 1: Bare Idea\n")[0]

        assert outline.description == NO_DESCRIPTION
        assert outline.advantages == ()
        assert outline.challenges == ()

    def test_empty_title_gets_numbered_name(self):
        outline = extract_solution_titles_and_descriptions("Solution 2:\n- Description: Something.")[0]

        assert outline.title == "Solution 2"
        assert outline.description == "Something."

    def test_headings_need_keyword_case_and_number(self):
        """Test lower-case keywords and unnumbered headings are ignored."""
        text = "solution 1: lower case\nSolution: no number\nStrategy 4: Real One\n"

        assert extract_solution_titles(text) == ["Real One"]

    def test_empty_document(self):
        assert extract_solution_titles_and_descriptions("") == []

    def test_uniformly_indented_fields(self):
        """Test fields indented under the heading still end at the next sibling field."""
        text = (
            "Solution 1: Partner Program\n"
            "   - Description: Partner with retailers.\n"
            "   - Advantages: Fast credibility, shared costs\n"
            "   - Challenges:\n"
            "       - Lower margins\n"
            "       - Slower iteration\n"
        )
        outline = extract_solution_titles_and_descriptions(text)[0]

        assert outline.description == "Partner with retailers."
        assert outline.advantages == ("Fast credibility", "shared costs")
        assert outline.challenges == ("Lower margins", "Slower iteration")

    def test_title_keeps_trailing_symbols(self):
        """Test markup stripping leaves characters such as # in titles."""
        text = "**Solution 1: Learn C#**\n- Description: Teach C# to analysts.\n"

        assert extract_solution_titles(text) == ["Learn C#"]
