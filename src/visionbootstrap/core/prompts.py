"""Instruction composition for component synthesis.

The instruction embeds the chosen style, the user's structure guide and
content, and a fixed brief of design-fidelity requirements and variation
themes. Empty structure/content inputs fall back to neutral defaults so the
model never receives blank sections.
"""

from __future__ import annotations

DEFAULT_STRUCTURE_GUIDE = "Modern responsive layout."
DEFAULT_USER_CONTENT = "Professional copy relevant to the design."

STOCK_IMAGE_TOOL_NAME = "get_freepik_images"

VARIATION_THEMES: dict[str, str] = {
    "V1": "Standard Interpretation - Polished and balanced.",
    "V2": "Modern/Offset - Creative spacing and asymmetric flow.",
    "V3": "Minimalist - High whitespace and extreme legibility.",
    "V4": "Dark/Elevated - Premium dark mode with glowing accents.",
}

DESIGN_FIDELITY_REQUIREMENTS: tuple[str, ...] = (
    "MICRO-INTERACTIONS: Every interactive element must have smooth transitions (cubic-bezier).",
    "HOVER EFFECTS: Complex states (lift, layered shadows, scale, color shifts).",
    "DEPTH: Multi-layered soft shadows.",
    "LINE WORK: Semi-transparent borders (rgba) for a premium feel.",
    "ANIMATIONS: entry states (slide-up, reveal).",
    "MODERN FEATURES: Glassmorphism, gradients, clean overflow handling.",
)

INSTRUCTION_TEMPLATE = """Act as a world-class senior frontend architect and UI/UX designer.

TASK: Create a UI component in "{style}" style.

STRICT CONTENT REQUIREMENT:
- You MUST use the exact text and data provided in the "CONTENT SPECIFICATION" below.
- DO NOT use generic "Lorem Ipsum" or random placeholder text.
- If the user provided titles, prices, or descriptions, they MUST appear in all 4 variations.

STRICT STRUCTURE REQUIREMENT:
- Adhere to the "COMPONENT STRUCTURE GUIDE" for the layout logic.

INPUTS:
1. COMPONENT STRUCTURE GUIDE: "{structure_guide}"
2. CONTENT SPECIFICATION: "{user_content}"
3. DESIGN STYLE: "{style}"

CRITICAL: Generate EXACTLY 4 distinct variations (V1 to V4). Every variation MUST be ultra-modern, professional, and visually stunning while keeping the EXACT SAME content provided by the user.

DESIGN FIDELITY REQUIREMENTS:
{requirements}

VARIATION THEMES:
{themes}

TECHNICAL STACK:
- Bootstrap 5.3.
- Custom CSS must be scoped to the component.
- Use real images from '{tool_name}'.

Return JSON object with 'themes', 'guide', 'content', and an array of 4 'variations' (themeName, html, css)."""


def build_instruction(style: str, structure_guide: str, user_content: str) -> str:
    """Compose the single synthesis instruction.

    Args:
        style: Aesthetic category name.
        structure_guide: Layout instructions (blank uses the default).
        user_content: Copy and data to embed (blank uses the default).

    Returns:
        Instruction text sent as the first user turn.
    """
    requirements = "\n".join(
        f"{i}. {line}" for i, line in enumerate(DESIGN_FIDELITY_REQUIREMENTS, start=1)
    )
    themes = "\n".join(f"{name}: {brief}" for name, brief in VARIATION_THEMES.items())

    return INSTRUCTION_TEMPLATE.format(
        style=style,
        structure_guide=(structure_guide or "").strip() or DEFAULT_STRUCTURE_GUIDE,
        user_content=(user_content or "").strip() or DEFAULT_USER_CONTENT,
        requirements=requirements,
        themes=themes,
        tool_name=STOCK_IMAGE_TOOL_NAME,
    )
