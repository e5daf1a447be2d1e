"""
Turn-by-turn vocabulary shared by the routing providers and the route
synthesizer: canonical maneuver codes, their phrases, and translation of
provider-specific maneuver encodings.
"""
import re
from typing import Optional

MANEUVER_PHRASES = {
    "turn-left": "Turn left",
    "turn-right": "Turn right",
    "turn-sharp-left": "Turn sharp left",
    "turn-sharp-right": "Turn sharp right",
    "turn-slight-left": "Turn slight left",
    "turn-slight-right": "Turn slight right",
    "continue": "Continue straight",
    "merge": "Merge",
    "ramp-left": "Take the ramp on the left",
    "ramp-right": "Take the ramp on the right",
    "fork-left": "Keep left at the fork",
    "fork-right": "Keep right at the fork",
    "roundabout-enter": "Enter the roundabout",
    "roundabout-exit": "Exit the roundabout",
    "uturn": "Make a U-turn",
    "depart": "Start your journey",
    "arrive": "You have arrived at your destination",
}

# OpenRouteService step `type` values
ORS_STEP_TYPES = {
    0: "turn-left",
    1: "turn-right",
    2: "turn-sharp-left",
    3: "turn-sharp-right",
    4: "turn-slight-left",
    5: "turn-slight-right",
    6: "continue",
    7: "roundabout-enter",
    8: "roundabout-exit",
    9: "uturn",
    10: "arrive",
    11: "depart",
    12: "fork-left",
    13: "fork-right",
}

_OSRM_ROUNDABOUT_ENTER = {"roundabout", "rotary", "roundabout turn"}
_OSRM_ROUNDABOUT_EXIT = {"exit roundabout", "exit rotary"}
_OSRM_PASSTHROUGH = {"depart", "arrive", "merge"}


def ors_maneuver(step_type) -> str:
    try:
        return ORS_STEP_TYPES.get(int(step_type), "continue")
    except (TypeError, ValueError):
        return "continue"


def _side(modifier: str) -> Optional[str]:
    if "left" in modifier:
        return "left"
    if "right" in modifier:
        return "right"
    return None


def osrm_maneuver(step_type: Optional[str], modifier: Optional[str] = None) -> Optional[str]:
    """
    Canonical code for an OSRM (type, modifier) pair, or None when there is
    no sensible code and the instruction text should be cleaned up instead.
    """
    step_type = (step_type or "").lower()
    modifier = (modifier or "").lower()
    side = _side(modifier)

    if modifier == "uturn":
        return "uturn"
    if step_type in _OSRM_PASSTHROUGH:
        return step_type
    if step_type in _OSRM_ROUNDABOUT_EXIT:
        return "roundabout-exit"
    if step_type in _OSRM_ROUNDABOUT_ENTER:
        return "roundabout-enter"
    if step_type == "fork" and side:
        return f"fork-{side}"
    if step_type in ("on ramp", "off ramp") and side:
        return f"ramp-{side}"
    if step_type in ("turn", "end of road") and side:
        if modifier.startswith("sharp"):
            return f"turn-sharp-{side}"
        if modifier.startswith("slight"):
            return f"turn-slight-{side}"
        return f"turn-{side}"
    if step_type in ("continue", "new name") and modifier in ("", "straight"):
        return "continue"
    return None


def normalize_instruction(
    instruction: Optional[str],
    maneuver: Optional[str] = None,
    road: Optional[str] = None,
) -> str:
    """
    A known maneuver code wins over the provider's text, keeping the road
    name when the provider gives one. Otherwise the text is tidied:
    lower-cased, "Turn"/"Continue" capitalized, and a bare left/right
    turned into "Turn left"/"Turn right".
    """
    if maneuver and maneuver in MANEUVER_PHRASES:
        phrase = MANEUVER_PHRASES[maneuver]
        if not road or maneuver == "arrive":
            return phrase
        return f"{phrase} {'on' if maneuver == 'depart' else 'onto'} {road}"

    text = (instruction or "").strip()
    if not text:
        return "Continue straight"

    text = text.lower()
    text = re.sub(r"\bturn\b", "Turn", text)
    text = re.sub(r"\bcontinue\b", "Continue", text)
    if "Turn" not in text:
        text = re.sub(r"\b(left|right)\b", r"Turn \1", text, count=1)
    return text[0].upper() + text[1:]


def distance_label(km: float) -> str:
    return f"{km:.1f} km"


def duration_label(minutes: float) -> str:
    minutes = round(minutes)
    if minutes < 60:
        return f"{minutes} min"
    return f"{minutes // 60}h {minutes % 60}m"
