"""Prompts for the workout summary."""

SUMMARY_PROMPT = """Analyze the following completed workout data and provide an encouraging and insightful summary.
The user has just finished this session. Congratulate them on their hard work.
Highlight any exercises where they successfully completed all sets.
Point out any patterns, like if they struggled with a particular exercise.
Keep it concise, friendly, and motivating. Use Markdown for formatting with headers, bold text, and lists.

Workout Data:
{workout_data}
"""

FALLBACK_SUMMARY = (
    "### Great Job! \n\n"
    "You pushed through and completed your workout. Consistency is key, "
    "and you're doing fantastic. Keep up the amazing work!"
)
