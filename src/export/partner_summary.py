"""Partner Summary - AI investor narrative built from the underwriting results.

The narrative is generated by Gemini from a fixed data payload. Generation
is best-effort: any failure is logged and replaced by a placeholder message
so the caller always gets text back.
"""

import logging
from typing import Any, Dict, Optional

from src.calculations.financials import FinancialResult
from src.calculations.walkability import WalkabilityResult
from src.config import Settings
from src.models.project import ProjectState

logger = logging.getLogger(__name__)

EMPTY_RESPONSE_MESSAGE = "Summary generation failed."
ERROR_MESSAGE = "Error generating AI summary. Please check your API key and network connection."


def build_narrative_payload(
    state: ProjectState,
    fin: FinancialResult,
    walk: WalkabilityResult,
) -> Dict[str, Any]:
    """Collect the figures the narrative is allowed to cite.

    The payload is a snapshot: it does not track later edits to the state.
    """
    return {
        "total_project_cost": fin.total_project_cost,
        "required_equity": fin.required_equity,
        "dscr": fin.dscr,
        "phase1_dscr": fin.phase1_dscr,
        "walkability_score": walk.final_score,
        "walkability_grade": walk.grade,
        "five_min_walk_compliant": walk.five_min_walk_compliant,
        "break_even_rent_psf": fin.break_even_rent_psf,
        "site_acres": state.site_acres,
        "total_build_sf": state.total_build_sf,
        "phase1_sf": state.phase1_sf,
        "hard_cost_psf": state.hard_cost_psf,
    }


def format_partner_prompt(payload: Dict[str, Any]) -> str:
    """Render the executive-summary prompt for a payload."""
    return f"""
Generate a professional, high-impact executive summary for a real estate investment partner for a walkable mixed-use project.

KEY DATA:
- Total Cost: ${payload['total_project_cost']:,.0f}
- Required Equity: ${payload['required_equity']:,.0f}
- DSCR (Conservative): {payload['dscr']:.2f}
- Phase 1 Standalone DSCR: {payload['phase1_dscr']:.2f}
- Walkability Score: {payload['walkability_score']:.0f}/100 ({payload['walkability_grade']})
- 5-Min Walk Compliance: {'Yes' if payload['five_min_walk_compliant'] else 'No'}
- Break-even Rent: ${payload['break_even_rent_psf']:.2f}/SF

PROJECT DETAILS:
- Acres: {payload['site_acres']:g}
- Total SF: {payload['total_build_sf']:,.0f}
- Phase 1 SF: {payload['phase1_sf']:,.0f}
- Hard Cost/SF: ${payload['hard_cost_psf']:,.2f}

Write exactly three short paragraphs:
1. Financial Confidence: Explain why the project pencils using the DSCR and Break-even numbers.
2. Place Identity: Describe why the walkability score makes this a superior destination compared to traditional suburban retail.
3. Capital Discipline: Highlight the phase strategy and why Phase 1 is a safe standalone bet for partners.

Tone: Institutional, calm, precise. No fluff.
""".strip()


def get_gemini_model(settings: Settings):
    """Get a configured Gemini model.

    Raises:
        ValueError: If no API key is configured.
        ImportError: If google-generativeai is not installed.
    """
    if not settings.gemini_api_key:
        raise ValueError("GEMINI_API_KEY is not configured")

    import google.generativeai as genai

    genai.configure(api_key=settings.gemini_api_key)
    return genai.GenerativeModel(settings.gemini_model)


def generate_narrative(
    state: ProjectState,
    fin: FinancialResult,
    walk: WalkabilityResult,
    settings: Optional[Settings] = None,
    model: Optional[Any] = None,
) -> str:
    """Generate the three-paragraph partner narrative.

    Never raises: errors degrade to a placeholder string.

    Args:
        state: Project snapshot the results were computed from.
        fin: Financial result.
        walk: Walkability result.
        settings: API key, model name and temperature (default: from env).
        model: Object with ``generate_content(prompt, generation_config=...)``;
            built from settings when omitted.

    Returns:
        Narrative text, or a placeholder message on failure.
    """
    try:
        settings = settings or Settings.from_env()
        prompt = format_partner_prompt(build_narrative_payload(state, fin, walk))
        if model is None:
            model = get_gemini_model(settings)
        response = model.generate_content(
            prompt,
            generation_config={"temperature": settings.narrative_temperature},
        )
        text = (response.text or "").strip()
    except Exception as e:
        logger.warning("Narrative generation failed: %s", e)
        return ERROR_MESSAGE

    if not text:
        logger.warning("Narrative generation returned an empty response")
        return EMPTY_RESPONSE_MESSAGE
    return text
