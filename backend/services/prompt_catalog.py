from typing import List, Optional

from models.prompt import PromptCategory

PREDEFINED_PROMPTS: List[PromptCategory] = [
    PromptCategory(
        category="Background",
        icon="🎨",
        prompts=[
            "Remove background",
            "Replace background with white",
            "Make background transparent",
            "Add blur to background",
            "Change background to beach scene",
        ],
    ),
    PromptCategory(
        category="Color & Style",
        icon="🌈",
        prompts=[
            "Make it black and white",
            "Apply sepia filter",
            "Increase saturation",
            "Add vintage style",
            "Apply cyberpunk style",
        ],
    ),
    PromptCategory(
        category="Enhancement",
        icon="✨",
        prompts=[
            "Enhance resolution",
            "Sharpen the image",
            "Brighten the image",
            "Increase contrast",
            "Apply HDR effect",
        ],
    ),
    PromptCategory(
        category="Artistic",
        icon="🎭",
        prompts=[
            "Make it look like a cartoon",
            "Convert to oil painting style",
            "Apply sketch effect",
            "Add watercolor effect",
            "Make it look like a comic book",
        ],
    ),
    PromptCategory(
        category="Professional",
        icon="💼",
        prompts=[
            "Professional headshot enhancement",
            "Smooth skin and remove blemishes",
            "Perfect lighting for portrait",
            "Corporate photo style",
            "LinkedIn profile optimization",
        ],
    ),
]


def list_categories(category: Optional[str] = None) -> List[PromptCategory]:
    """Return all categories, or the one whose name matches ``category`` case-insensitively."""
    if category is None:
        return list(PREDEFINED_PROMPTS)
    wanted = category.strip().lower()
    return [c for c in PREDEFINED_PROMPTS if c.category.lower() == wanted]
