"""Keyword matcher that turns an edit instruction into a task list.

The plan is shown to the user as a preview only. The edit proxy never
reads it; the AI gateway receives the raw instruction.
"""
from typing import List, Sequence, Tuple

from models.edit_preview import EditPlan, EditTask

# (phrases, tasks) in the order they are checked. Any phrase matching adds
# all of the rule's tasks.
KEYWORD_RULES: Sequence[Tuple[Tuple[str, ...], Tuple[dict, ...]]] = (
    # Background
    (("remove background",), ({"action": "remove_background"},)),
    (("white background", "background white"), (
        {"action": "remove_background"},
        {"action": "replace_background", "value": "white"},
    )),
    (("transparent background",), ({"action": "remove_background"},)),
    # Color
    (("black and white", "grayscale"), ({"action": "apply_filter", "filter": "grayscale"},)),
    (("sepia", "vintage"), ({"action": "apply_filter", "filter": "sepia"},)),
    # Enhancement
    (("enhance", "upscale", "improve resolution"), ({"action": "upscale", "value": "2x"},)),
    (("sharpen",), ({"action": "sharpen"},)),
    (("blur",), ({"action": "blur"},)),
    (("brighten", "brighter"), ({"action": "adjust_brightness", "value": 20},)),
    (("darken", "darker"), ({"action": "adjust_brightness", "value": -20},)),
    (("increase contrast",), ({"action": "adjust_contrast", "value": 20},)),
    (("saturation",), ({"action": "adjust_saturation", "value": 20},)),
    # Style
    (("cartoon",), ({"action": "apply_style", "style": "cartoon"},)),
    (("oil painting",), ({"action": "apply_style", "style": "oil_painting"},)),
    (("sketch",), ({"action": "apply_style", "style": "sketch"},)),
    (("cyberpunk",), ({"action": "apply_style", "style": "cyberpunk"},)),
    (("hdr",), ({"action": "apply_filter", "filter": "hdr"},)),
    # Retouching
    (("smooth skin", "beauty mode"), ({"action": "retouch_skin"},)),
    (("remove blemish",), ({"action": "remove_blemishes"},)),
)


def parse_edit_request(request: str) -> EditPlan:
    lower_request = request.lower()
    tasks: List[EditTask] = []

    for phrases, rule_tasks in KEYWORD_RULES:
        if any(phrase in lower_request for phrase in phrases):
            tasks.extend(EditTask(**task) for task in rule_tasks)

    if not tasks:
        tasks.append(EditTask(action="custom_prompt", description=request))

    return EditPlan(edit_tasks=tasks)


def preview_message(instruction: str) -> str:
    return f'I\'ve generated the editing instructions for: "{instruction}"'
