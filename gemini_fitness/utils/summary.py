"""Motivational summary of a finished workout."""

import json
import logging
from typing import Any, Dict

from gemini_fitness.models.workout_session import SetStatus, WorkoutSession
from gemini_fitness.utils.prompts import FALLBACK_SUMMARY, SUMMARY_PROMPT

logger = logging.getLogger(__name__)


def _format_load(weight: Any, reps: Any) -> str:
    return f"{weight} lbs x {reps} reps"


def build_workout_digest(session: WorkoutSession) -> Dict[str, Any]:
    """Compact view of a session for the summary prompt."""
    return {
        "name": session.template_name,
        "exercises": [
            {
                "name": exercise.name,
                "status": exercise.status.value,
                "sets": [
                    {
                        "suggested": _format_load(s.suggested_weight, s.suggested_reps),
                        "completed": (
                            _format_load(s.completed_weight, s.completed_reps)
                            if s.status == SetStatus.COMPLETED
                            else s.status.value
                        ),
                    }
                    for s in exercise.sets
                ],
            }
            for exercise in session.exercises
        ],
    }


def build_summary_prompt(session: WorkoutSession) -> str:
    digest = build_workout_digest(session)
    return SUMMARY_PROMPT.format(workout_data=json.dumps(digest, indent=2))


def fetch_workout_summary(session: WorkoutSession, generator: Any) -> str:
    """
    Ask the text generator for a summary of the session.

    Exactly one attempt is made. Any failure, including an empty answer,
    yields FALLBACK_SUMMARY instead of an error.

    Args:
        session: Completed workout session
        generator: Object with a ``generate_text(prompt)`` method

    Returns:
        Markdown summary text
    """
    try:
        text = generator.generate_text(build_summary_prompt(session))
    except Exception as e:
        logger.error(f"Error fetching workout summary: {e}", exc_info=True)
        return FALLBACK_SUMMARY

    if not isinstance(text, str) or not text.strip():
        logger.warning(f"Empty workout summary for {session.id}, using fallback")
        return FALLBACK_SUMMARY
    return text
