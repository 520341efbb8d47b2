"""Prompt builders for weekly plan and supplementary exercise generation.

Prompts carry the full profile, guidelines derived from experience and goal,
and any coverage/recovery advisories. They ask for strict JSON, but output
is still treated as untrusted and goes through extraction and validation.
"""

from app.planning.schema.inputs import MissedWorkout, UserProfile
from app.planning.schema.week_schedule import DAYS_OF_WEEK, ExerciseSlot

SYSTEM_PROMPT = """You are an expert strength and conditioning coach.

Rules:
- Output valid JSON only.
- Do not include explanations or text outside JSON.
- Only use exercises the athlete's equipment allows.
- Never guess exact loads; a separate progression engine assigns weights.
"""

GOLDILOCKS_TEXT = (
    "If the user does not specify a time constraint, aim for a per-session duration in the 45–60 minute "
    "Goldilocks zone. Prefer closer to 45 minutes when in doubt, while preserving Tier 1 compounds."
)

EXERCISE_FORMAT_REQUIREMENTS = """EXERCISE FORMAT REQUIREMENTS:
Each exercise must have this EXACT structure:
- "name": string (prefer from available exercises list)
- "target_sets": number (typically 3-5 based on experience level)
- "target_reps": number (not a string, e.g., 10 not "8-12")
- "rest_time_sec": number (rest time in seconds between sets)
- "notes": string (technique tips, can be empty string "")"""

EQUIPMENT_RULES = """   - If the user has NO equipment selected (bodyweight only), you MUST only use bodyweight exercises (no dumbbells, barbells, machines, cables, etc.)
   - If the user has specific equipment, you MUST verify that each exercise's required equipment is in the list above
   - Exercises that require equipment NOT in the list above are FORBIDDEN"""

_DEFAULT_GUIDELINE = "Intermediate level training (moderate volume, balanced approach)"

# (keywords, guideline); first match wins
_EXPERIENCE_GUIDELINES: tuple[tuple[tuple[str, ...], str], ...] = (
    (
        ("brand new", "new to"),
        "BEGINNER: Lower volume (2-3 sets per exercise), focus on form and technique, full-body or upper/lower "
        "splits, 8-12 reps per set, longer rest periods (90-120 seconds), emphasis on learning proper movement patterns",
    ),
    (
        ("less than 1 year",),
        "BEGINNER-INTERMEDIATE: Moderate volume (3-4 sets per exercise), continue focusing on form, can use "
        "push/pull/legs or upper/lower splits, 8-15 reps per set, rest periods 60-90 seconds",
    ),
    (
        ("1–2 years", "1-2 years"),
        "INTERMEDIATE: Moderate to higher volume (3-5 sets per exercise), can use specialized splits "
        "(push/pull/legs, body part splits), 6-12 reps per set, rest periods 60-90 seconds, can introduce more "
        "advanced techniques",
    ),
    (
        ("2–4 years", "2-4 years"),
        "INTERMEDIATE-ADVANCED: Higher volume (4-5 sets per exercise), specialized splits, varied rep ranges "
        "(4-15), rest periods 60-120 seconds, can include advanced techniques and periodization",
    ),
    (
        ("4+ years", "4+"),
        "ADVANCED: High volume (4-6 sets per exercise), highly specialized splits, varied rep ranges (3-20), "
        "optimized rest periods, advanced techniques, periodization, and intensity methods",
    ),
)

_GOAL_CONSIDERATIONS: tuple[tuple[tuple[str, ...], str], ...] = (
    (
        ("lose weight", "weight loss"),
        "GOAL: Weight Loss - Include higher rep ranges (12-20), incorporate cardio elements, circuit-style training "
        "options, focus on calorie burn and metabolic stress",
    ),
    (
        ("build muscle", "muscle gain", "hypertrophy"),
        "GOAL: Muscle Building - Focus on hypertrophy rep ranges (8-12), progressive overload emphasis, volume "
        "accumulation, adequate rest for recovery",
    ),
    (
        ("lift heavier", "strength"),
        "GOAL: Strength - Lower rep ranges (3-6), higher intensity, longer rest periods (2-5 minutes), focus on "
        "compound movements, progressive overload on weight",
    ),
    (
        ("lean", "defined", "definition"),
        "GOAL: Lean & Defined - Combination approach: moderate rep ranges (8-15), include both strength and "
        "hypertrophy work, some metabolic conditioning, balanced volume",
    ),
)


def _first_keyword_match(value: str | None, table: tuple[tuple[tuple[str, ...], str], ...], default: str) -> str:
    if not value:
        return default
    lowered = value.lower()
    for keywords, text in table:
        if any(keyword in lowered for keyword in keywords):
            return text
    return default


def experience_guidelines(experience_level: str | None) -> str:
    return _first_keyword_match(experience_level, _EXPERIENCE_GUIDELINES, _DEFAULT_GUIDELINE)


def goal_considerations(goal: str | None) -> str:
    return _first_keyword_match(goal, _GOAL_CONSIDERATIONS, "")


def format_weight(value: float | None, use_imperial: bool) -> str:
    """Format a weight stored in kilograms."""
    if value is None:
        return "N/A"
    if use_imperial:
        return f"{round(value * 2.20462)} lbs"
    return f"{round(value, 1):g} kg"


def format_height(value: float | None, use_imperial: bool) -> str:
    """Format a height stored in centimeters."""
    if value is None:
        return "N/A"
    if use_imperial:
        total_inches = round(value / 2.54)
        return f"{total_inches // 12}'{total_inches % 12}\""
    return f"{round(value)} cm"


def format_equipment(equipment: list[str]) -> str:
    names = [item.strip() for item in equipment if item and item.strip()]
    if not names:
        return "Full gym access (all equipment available)"
    return ", ".join(names)


def _profile_section(profile: UserProfile) -> str:
    weight = format_weight(profile.current_weight, profile.use_imperial)
    lines = [
        "USER PROFILE:",
        f"- Age: {profile.age or 'N/A'} years old",
        f"- Gender: {profile.gender or 'Not specified'}",
        f"- Current Weight: {weight}",
    ]
    if profile.goal_weight:
        lines.append(f"- Goal Weight: {format_weight(profile.goal_weight, profile.use_imperial)}")
    lines.extend(
        [
            f"- Height: {format_height(profile.height, profile.use_imperial)}",
            f"- Training Goal: {profile.goal or 'General fitness'}",
            f"- Training Frequency: {profile.days_per_week or 'N/A'} days per week",
            f"- Equipment Access: {format_equipment(profile.equipment_access)}",
            f"- Experience Level: {profile.experience_level or 'Not specified'}",
        ]
    )
    if profile.duration_target_min:
        lines.append(f"- Session Duration Target: {profile.duration_target_min} minutes")
    return "\n".join(lines)


def _guidelines_section(profile: UserProfile) -> str:
    text = f"TRAINING GUIDELINES:\n{experience_guidelines(profile.experience_level)}"
    goal_text = goal_considerations(profile.goal)
    if goal_text:
        text += f"\n\n{goal_text}"
    return text


def _exercise_list_section(available_exercises: list[str], strict_note: str) -> str:
    if not available_exercises:
        return ""
    return f"AVAILABLE EXERCISES FROM DATABASE:\n{', '.join(available_exercises)}\n\nIMPORTANT: {strict_note}"


def _missed_section(missed_workouts: list[MissedWorkout]) -> str:
    if not missed_workouts:
        return ""
    lines = [
        "MISSED/INCOMPLETE WORKOUTS ANALYSIS:",
        f"The user has {len(missed_workouts)} missed or incomplete workout(s) from recent weeks:",
    ]
    lines.extend(
        f"- {mw.day}: Planned {mw.exercises_planned} exercises, completed {mw.exercises_completed} "
        f"({mw.exercises_missed} missed)"
        for mw in missed_workouts
    )
    lines.extend(
        [
            "",
            "IMPORTANT: Consider these patterns when generating the new plan:",
            "- If user consistently misses certain days, consider adjusting schedule or reducing volume on those days",
            "- If user completes partial workouts, consider breaking workouts into smaller, more manageable sessions",
            "- Account for any patterns in missed exercises (e.g., always skipping leg day, or struggling with long sessions)",
        ]
    )
    return "\n".join(lines)


def build_full_plan_prompt(
    profile: UserProfile,
    available_exercises: list[str] | None = None,
    coverage_recommendations: list[str] | None = None,
    recovery_notes: list[str] | None = None,
    missed_workouts: list[MissedWorkout] | None = None,
) -> str:
    """Build the user prompt for a full weekly plan.

    Args:
        profile: User profile
        available_exercises: Catalog plus user-authored exercise names
        coverage_recommendations: Advisory lines from coverage analysis
        recovery_notes: Warnings followed by recommendations from recovery analysis
        missed_workouts: Recently missed or partial sessions

    Returns:
        Formatted prompt string
    """
    days_per_week = profile.days_per_week or 3
    equipment = format_equipment(profile.equipment_access)

    sections = [
        "Generate a comprehensive weekly workout plan in JSON format.",
        _profile_section(profile),
        _guidelines_section(profile),
        f"TIME GUIDELINES:\n- {GOLDILOCKS_TEXT}",
    ]
    if coverage_recommendations:
        sections.append("MOVEMENT PATTERN COVERAGE ANALYSIS:\n" + "\n".join(coverage_recommendations))
    if recovery_notes:
        sections.append("RECOVERY CONSIDERATIONS:\n" + "\n".join(recovery_notes))
    missed = _missed_section(missed_workouts or [])
    if missed:
        sections.append(missed)
    if profile.workout_feedback:
        sections.append(f"USER FEEDBACK TO CONSIDER:\n{profile.workout_feedback}")

    day_blocks = ",\n".join(
        f'    "{day}": {{\n      "exercises": [...]\n    }}' for day in DAYS_OF_WEEK[1:]
    )
    sections.append(
        "The response must be STRICTLY valid JSON in this exact format:\n"
        "{\n"
        '  "week_schedule": {\n'
        '    "Monday": {\n'
        '      "exercises": [\n'
        "        {\n"
        '          "name": "Bench Press",\n'
        '          "target_sets": 3,\n'
        '          "target_reps": 10,\n'
        '          "rest_time_sec": 90,\n'
        '          "notes": "Keep elbows tucked and squeeze scapula at top"\n'
        "        }\n"
        "      ]\n"
        "    },\n"
        f"{day_blocks}\n"
        "  }\n"
        "}"
    )

    requirements = [
        f"1. CRITICAL: The user wants to train {days_per_week} days per week. You MUST only generate workouts for "
        f"exactly {days_per_week} days. The remaining days should have empty exercises arrays.",
        f"2. Choose the best {days_per_week} days based on recovery and muscle group balance (e.g., for 3 days: "
        "Monday/Wednesday/Friday or Tuesday/Thursday/Saturday; for 4 days: Monday/Tuesday/Thursday/Friday; etc.)",
        f"3. Include ALL 7 days (Monday through Sunday) in the response, but only {days_per_week} should have exercises.",
        "4. Follow the experience level guidelines for volume, intensity, and rep ranges.",
        "5. Consider the user's goal when selecting exercises and rep ranges.",
        "6. CRITICAL EQUIPMENT REQUIREMENT: You MUST only use exercises that can be performed with the available "
        f"equipment: {equipment}\n{EQUIPMENT_RULES}\n   - When in doubt, prefer bodyweight alternatives",
        '7. Include technique tips and focus points in the "notes" field for each exercise.',
        "8. Ensure proper rest periods based on experience level and exercise intensity.",
        f"9. Create a balanced program that targets all major muscle groups throughout the {days_per_week} workout days.",
    ]
    if profile.goal_weight:
        requirements.append(
            f"10. Consider the weight difference (current: {format_weight(profile.current_weight, profile.use_imperial)}, "
            f"goal: {format_weight(profile.goal_weight, profile.use_imperial)}) when designing the program."
        )
    requirements.append(
        "11. Do NOT guess exact barbell/dumbbell weights. Focus on appropriate relative difficulty, set/rep schemes, "
        "and rest times. A separate progression engine will assign concrete loads from the user's workout history."
    )
    sections.append("REQUIREMENTS:\n" + "\n".join(requirements))

    exercise_list = _exercise_list_section(
        available_exercises or [],
        "You MUST prefer exercises from this list. Only create custom exercises if none from the list are suitable "
        "for the specific muscle group or movement pattern needed.",
    )
    if exercise_list:
        sections.append(exercise_list)

    sections.append(EXERCISE_FORMAT_REQUIREMENTS)
    sections.append("Return ONLY the JSON object, no other text.")
    return "\n\n".join(sections)


def build_supplementary_prompt(
    profile: UserProfile,
    day: str,
    existing_exercises: list[ExerciseSlot],
    available_exercises: list[str] | None = None,
) -> str:
    """Build the user prompt for exercises that complement an existing day."""
    equipment = format_equipment(profile.equipment_access)
    existing_names = [slot.name for slot in existing_exercises if slot.name]
    existing_list = ", ".join(existing_names) if existing_names else "None"

    sections = [
        f"Generate supplementary exercises for {day} workout in JSON format.",
        _profile_section(profile),
        _guidelines_section(profile),
    ]
    if existing_names:
        sections.append(
            f"EXISTING EXERCISES ANALYSIS:\nThe user already has these exercises for {day}: {existing_list}\n"
            "Generate exercises that COMPLEMENT these existing exercises. Consider:\n"
            "- Different muscle groups or angles\n"
            "- Opposing muscle groups (if existing are push, add pull; if legs, add upper body)\n"
            "- Different movement patterns (if existing are compound, add isolation; if isolation, add compound)\n"
            "- Exercise variety and balance"
        )
    if profile.workout_feedback:
        sections.append(f"USER FEEDBACK TO CONSIDER:\n{profile.workout_feedback}")

    sections.append(
        "IMPORTANT:\n"
        f"- DO NOT duplicate or replace existing exercises: {existing_list}\n"
        "- Only add exercises that COMPLEMENT and work well with the existing exercises\n"
        f"- CRITICAL EQUIPMENT REQUIREMENT: You MUST only use exercises that can be performed with the available equipment: {equipment}\n"
        f"{EQUIPMENT_RULES}\n"
        "- Follow experience level guidelines for volume and rep ranges"
    )
    exercise_list = _exercise_list_section(
        available_exercises or [],
        "You MUST prefer exercises from this list. Only create custom exercises if none from the list are suitable.",
    )
    if exercise_list:
        sections.append(exercise_list)

    sections.append(EXERCISE_FORMAT_REQUIREMENTS)
    sections.append(
        "The response must be STRICTLY valid JSON array in this exact format:\n"
        "[\n"
        "  {\n"
        '    "name": "Exercise Name",\n'
        '    "target_sets": 3,\n'
        '    "target_reps": 10,\n'
        '    "rest_time_sec": 90,\n'
        '    "notes": "Form tips and technique focus"\n'
        "  }\n"
        "]"
    )
    sections.append("Return ONLY the JSON array, no other text.")
    return "\n\n".join(sections)
