"""Two-step cartoon generation: a scripted comic, then the image."""

import logging
import re
from typing import Optional

from .llm_provider import LLMProvider
from .models import CartoonResult, CartoonScript
from .prompts import CARTOON_SCRIPT_INSTRUCTIONS, build_cartoon_script_prompt

logger = logging.getLogger(__name__)

MAX_EXCERPT_CHARS = 2000
IMAGE_SIZE = "1024x1024"

_STYLE_RE = re.compile(r"STYLE:\s*(.+)", re.IGNORECASE)
_CHARACTER_RE = re.compile(r"CHARACTER:\s*(.+)", re.IGNORECASE)
_PANEL_RES = [
    re.compile(r"PANEL 1[^:]*:\s*(.+?)(?=PANEL 2|$)", re.IGNORECASE | re.DOTALL),
    re.compile(r"PANEL 2[^:]*:\s*(.+?)(?=PANEL 3|$)", re.IGNORECASE | re.DOTALL),
    re.compile(r"PANEL 3[^:]*:\s*(.+?)(?=PANEL 4|$)", re.IGNORECASE | re.DOTALL),
    re.compile(r"PANEL 4[^:]*:\s*(.+?)$", re.IGNORECASE | re.DOTALL),
]


def extract_haiku(main_summary: str) -> str:
    """First blank-line-separated block of the main summary."""
    parts = main_summary.strip().split("\n\n")
    return parts[0] or main_summary


def parse_script(raw: str) -> Optional[CartoonScript]:
    """Parse the STYLE / CHARACTER / PANEL 1-4 format, or None if incomplete."""
    style = _STYLE_RE.search(raw)
    character = _CHARACTER_RE.search(raw)
    panels = [pattern.search(raw) for pattern in _PANEL_RES]

    if not style or not character or not all(panels):
        return None

    return CartoonScript(
        style=style.group(1).strip(),
        character=character.group(1).strip(),
        panels=[match.group(1).strip() for match in panels],
        raw=raw,
    )


def build_image_prompt(script: CartoonScript) -> str:
    """Image prompt laying the four panels out as a 2x2 grid."""
    return f"""Create a 4-panel comic strip (2x2 grid layout) with clear panel borders.

STYLE: {script.style} - simple, clean line art

CHARACTER DESIGN: {script.character}
(Keep this character consistent across ALL panels)

PANEL 1 (top-left): {script.panels[0]}

PANEL 2 (top-right): {script.panels[1]}

PANEL 3 (bottom-left): {script.panels[2]}

PANEL 4 (bottom-right): {script.panels[3]}

Requirements:
- 2x2 grid with clear black borders between panels
- Consistent character design across all 4 panels
- Light/white background
- Minimal or no text in the image
- Each panel should be visually distinct and tell the story
- Draw EXACTLY what is described - no interpretation"""


class CartoonIllustrator:
    """Generate a cartoon for an article; never raises."""

    def __init__(self, llm_provider: LLMProvider, script_model: str, image_model: str) -> None:
        """
        Initialize illustrator.

        Args:
            llm_provider: LLM provider for both steps
            script_model: Model that writes the panel script
            image_model: Model that draws the image
        """
        self.llm_provider = llm_provider
        self.script_model = script_model
        self.image_model = image_model

    async def generate(self, haiku: str, title: str, excerpt: str) -> CartoonResult:
        """Write a script, then draw it."""
        logger.info("Step 1: Generating cartoon script...")
        try:
            raw = await self.llm_provider.respond(
                build_cartoon_script_prompt(haiku, title, excerpt, MAX_EXCERPT_CHARS),
                self.script_model,
                instructions=CARTOON_SCRIPT_INSTRUCTIONS,
                web_search=True,
            )
        except Exception as e:
            logger.warning("Cartoon script generation failed: %s", e)
            return CartoonResult(error=f"Script generation failed: {e}")

        if not raw:
            return CartoonResult(error="Script generation returned an empty response")

        script = parse_script(raw)
        if script is None:
            return CartoonResult(error="Could not parse cartoon script", prompt=raw)

        logger.info("Step 2: Generating image (%s style)...", script.style)
        prompt = build_image_prompt(script)
        try:
            image = await self.llm_provider.generate_image(prompt, self.image_model, IMAGE_SIZE)
        except Exception as e:
            logger.warning("Image generation failed: %s", e)
            return CartoonResult(error=f"Image generation failed: {e}", prompt=prompt)

        if not image:
            return CartoonResult(error="Image generation returned no data", prompt=prompt)

        return CartoonResult(image_b64=image, prompt=prompt)
