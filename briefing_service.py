from __future__ import annotations

import random
from typing import Dict, List, Optional, Sequence, Tuple

from loguru import logger
from openai import OpenAI

import config
from protocol_config import MONDAY, SUNDAY
from timeline import Phase

UV_ALERT_THRESHOLD = 6

OFFLINE_MESSAGE = "COMMS LINK OFFLINE. NO API KEY CONFIGURED."
NO_INTEL_MESSAGE = "NO INTEL AVAILABLE."
LINK_INTERRUPTED_MESSAGE = "COMMS LINK INTERRUPTED. TRY AGAIN LATER."
UNCLEAR_MESSAGE = "Negative. Transmission unclear."

BRIEFING_DATABASE: Dict[str, Tuple[str, ...]] = {
    "SUNDAY_OPS": (
        "OPERATION SHIELD: Torso is today's objective. Keep the head at 90 degrees; chest precision decides the final result.",
        "FADE PROTOCOL: Shoulders are on the list. Aim for a transition, not total clearance. A checkerboard pattern keeps it natural.",
        "TORSO INCURSION: Pecs and abdomen in the scope. Overlap shots by about 20% so no stripes survive.",
        "STERNUM WARNING: The skin over the bone is thin. Single shot, no heavy overlap here.",
        "ACROMION LINE: Define the border on the shoulder. Past the armpit line the hair is friendly territory.",
        "LOWER SWEEP: From the navel to the belt line. Fast-growth area, be meticulous.",
        "SUNDAY MISSION: Short but technical. Sunday calm is ideal for precise torso mapping.",
        "END OF TORSO OP: Target neutralised. Apply aloe vera and get ready for tomorrow's leg run.",
    ),
    "MONDAY_OPS": (
        "BLUE MONDAY SURVIVAL: Monday is beaten with fire. Hit the legs at full power; laziness is the enemy.",
        "OPERATION TITAN: Thighs in the scope. Largest area of the week, switch to continuous mode and keep moving.",
        "SHIN IMPACT ZONE: Pain alert over the bone. Drop one power level if the hit is too much.",
        "CALF SWEEP: Cover the back of the leg. Use a floor mirror so no flank is left exposed.",
        "KNEE MANOEUVRE: Bend the joint to stretch the skin. A stretched follicle is an easier target.",
        "QUAD STRATEGY: Split the thigh into three vertical strips and clear them one by one.",
        "MONDAY CADENCE: Keep the pace. If you tire, switch legs and keep the blood moving.",
        "END OF MONDAY TRANSMISSION: Volume operation complete. Blue Monday defeated.",
    ),
    "PHASE_1": (
        "HOSTILITIES OPEN: What you fire today takes about 14 days to fall. Look for execution, not instant results.",
        "WEEKLY BOMBARDMENT: We are in the attack phase. Consistency is the only way to win.",
        "REGROWTH ALERT: Hair may look stronger before it dies. Keep firing.",
        "ATTRITION WAR: Every hit weakens the follicles, even when you cannot see it yet.",
        "SURGICAL STRIKE: Leave no millimetre untreated. Phase one takes no survivors.",
        "GOLDEN RULE: Perfect shave equals painless session. Do not skimp on blades.",
        "WEEK 12 ON THE HORIZON: Prepare to lower the frequency soon.",
    ),
    "PHASE_2_3": (
        "SNIPER MODE: Only fire where you see activity. Efficiency over volume.",
        "FORTNIGHTLY WATCH: One session every 14 days to clear the stragglers.",
        "MAINTENANCE STATUS: Once a month. A reminder to the follicles of who is in charge.",
        "TOUCH-UP SESSION: Ten minutes are enough now. Quality over quantity.",
        "REGROWTH WATCH: Hormones or stress can wake follicles. Fire without mercy if it happens.",
        "AUGUST EXCEPTION: If the sun is extreme, abort. We resume in September.",
    ),
    "SAFETY": (
        "SOLAR STORM: UV index above 6. If you were exposed today, abort the mission; burn risk is real.",
        "TAN ALERT: If your skin tone has changed the device cannot tell hair from tissue. Proceed with extreme caution.",
        "EYE SAFETY: Goggles on. A reflected flash can damage the retina.",
        "IRRITATION ALERT: If the skin is red before you start, abort. Never fire on inflamed tissue.",
        "POST-SUN STRATEGY: Beach less than 48 hours ago means residual heat in the skin. Wait.",
        "72H RULE: Keep treated zones out of direct sun for at least three days.",
    ),
    "FLAVOR": (
        "LINK ESTABLISHED: Equipment at 100%. Capacitors charged. Begin the sequence.",
        "IRON DISCIPLINE: You are not a user, you are an operator. Keep the schedule and results follow.",
        "ORDER OF THE DAY: Shave, fire, hydrate. Repeat until total victory.",
        "SUCCESS FACTOR: Patience wins wars. Look for perfect execution today, not the result.",
        "CODE OF HONOUR: You made a promise to your future self. Keep it today.",
    ),
}

MISSION_PROMPT = (
    "Write a short tactical military mission briefing (at most 3 sentences) for an operator "
    "following a home IPL hair-removal protocol.\n"
    "Current phase: {phase}.\n"
    "Target session: {session_type}.\n"
    "Protocol: Sunday (torso, precision) and Monday (legs, brute force) to beat the Monday slump.\n"
    "Environmental intel: UV index is {uv_index}.\n"
    "Tone: serious, encouraging, focused on discipline.\n"
    "If the UV index is high (>3), warn about sun exposure."
)

INTEL_OFFICER_PROMPT = (
    "You are the intelligence officer of an IPL tracking app. The user follows the "
    "Sunday-Monday protocol: Sunday torso (detail and precision), Monday legs (brute force). "
    "Phase 1 (12 weeks) is weekly, phase 2 is fortnightly, phase 3 is monthly with August off. "
    "Answer questions about IPL safety, skin care, the schedule and pain management. "
    "Keep answers concise, tactical and authoritative, with occasional military jargon."
)

_client: Optional[OpenAI] = None


def _get_client() -> Optional[OpenAI]:
    """Build the OpenAI client once; None when no API key is configured."""
    global _client
    if _client is not None:
        return _client
    if not config.OPENAI_API_KEY:
        return None
    _client = OpenAI(api_key=config.OPENAI_API_KEY)
    return _client


def get_context_aware_briefing(
    phase: Phase,
    day_of_week: int,
    uv_index: float = 0,
    rng: Optional[random.Random] = None,
) -> str:
    """
    Pick a canned briefing for the current context.

    ``day_of_week`` uses the protocol numbering (0=Sunday, 1=Monday).
    Priorities: high-UV safety warnings, then Sunday/Monday session advice,
    then phase advice on other days, with general motivation mixed in.
    """
    rng = rng or random.Random()

    if uv_index >= UV_ALERT_THRESHOLD and rng.random() > 0.2:
        return rng.choice(BRIEFING_DATABASE["SAFETY"])

    if day_of_week == SUNDAY:
        focus, threshold = BRIEFING_DATABASE["SUNDAY_OPS"], 0.3
    elif day_of_week == MONDAY:
        focus, threshold = BRIEFING_DATABASE["MONDAY_OPS"], 0.3
    elif phase == Phase.ATTACK:
        focus, threshold = BRIEFING_DATABASE["PHASE_1"], 0.4
    else:
        focus, threshold = BRIEFING_DATABASE["PHASE_2_3"], 0.4

    if rng.random() > threshold:
        return rng.choice(focus)
    return rng.choice(focus + BRIEFING_DATABASE["FLAVOR"])


def get_mission_briefing(phase: Phase, uv_index: float, session_type: str) -> str:
    """Ask the model for a mission briefing; degrade to a fixed message on failure."""
    client = _get_client()
    if client is None:
        return OFFLINE_MESSAGE

    prompt = MISSION_PROMPT.format(
        phase=Phase(phase).value, session_type=session_type, uv_index=uv_index
    )
    try:
        completion = client.chat.completions.create(
            model=config.OPENAI_MODEL,
            messages=[{"role": "user", "content": prompt}],
        )
    except Exception as exc:
        logger.error(f"Mission briefing request failed: {exc}")
        return LINK_INTERRUPTED_MESSAGE

    content = completion.choices[0].message.content
    return content.strip() if content else NO_INTEL_MESSAGE


def _history_to_messages(history: Sequence[str]) -> List[Dict[str, str]]:
    """Convert "User: ..." / "Model: ..." transcript lines to chat messages."""
    messages: List[Dict[str, str]] = []
    for line in history:
        if line.startswith("User:"):
            messages.append({"role": "user", "content": line[len("User:"):].strip()})
        elif line.startswith("Model:"):
            messages.append({"role": "assistant", "content": line[len("Model:"):].strip()})
        else:
            messages.append({"role": "assistant", "content": line.strip()})
    return messages


def chat_with_intel_officer(message: str, history: Sequence[str]) -> str:
    client = _get_client()
    if client is None:
        return OFFLINE_MESSAGE

    messages = [{"role": "system", "content": INTEL_OFFICER_PROMPT}]
    messages.extend(_history_to_messages(history))
    messages.append({"role": "user", "content": message})
    try:
        completion = client.chat.completions.create(
            model=config.OPENAI_MODEL,
            messages=messages,
        )
    except Exception as exc:
        logger.error(f"Intel officer chat failed: {exc}")
        return LINK_INTERRUPTED_MESSAGE

    content = completion.choices[0].message.content
    return content.strip() if content else UNCLEAR_MESSAGE
