"""Unit tests for prompt builders."""
from marketsim.services.prompts import (
    build_feedback_prompt,
    build_personas_prompt,
    build_scenarios_prompt,
)


class TestPrompts:

    def test_scenarios_prompt_embeds_inputs(self):
        prompt = build_scenarios_prompt("  Acme {clinics}  ", "Enter hospitals", count=4)

        assert "Acme {clinics}" in prompt
        assert "Enter hospitals" in prompt
        assert "generate 4 distinct solutions" in prompt
        assert "Solution 1: [Title]" in prompt

    def test_personas_prompt_requests_markers(self):
        prompt = build_personas_prompt("Acme", "Enter hospitals")

        assert "[PERSONA_START]" in prompt
        assert "Basic Information:" in prompt

    def test_feedback_prompt_embeds_documents(self):
        prompt = build_feedback_prompt("Solution 1: Go\n", "Persona 1: Ana\n")

        assert "Solution 1: Go" in prompt
        assert "Persona 1: Ana" in prompt
        assert "[SOLUTION_ANALYSIS_START]" in prompt
        assert "[First Person Quote]" in prompt
