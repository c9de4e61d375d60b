"""Weakness-to-strength fixes derived from an analysis."""

from typing import List

from ..analysis import AnalysisResult, ImprovementArea
from ..analysis.rules import clamp
from ..config import constants
from .base import WeaknessFix

PROTAGONIST_THRESHOLD = 12
CONFLICT_THRESHOLD = 15
STAKES_THRESHOLD = 12
HOOK_THRESHOLD = 15

# Improvement-area category -> example/guide key
EXAMPLE_KEYS = {
    'Central Conflict': 'Conflict',
    'Stakes Definition': 'Stakes',
    'Unique Selling Point': 'Hook',
    'Market Positioning': 'Market',
}

WEAK_EXAMPLES = {
    'Protagonist': 'A man tries to save his family.',
    'Conflict': 'Things go wrong.',
    'Stakes': 'She might fail.',
    'Hook': 'A typical story in a familiar setting.',
    'Genre': "It's kind of a drama-comedy-thriller.",
    'Market': 'It appeals to everyone.',
}

STRONG_EXAMPLES = {
    'Protagonist': 'A disgraced surgeon with a god complex must save the child he failed to save years ago.',
    'Conflict': 'When a ruthless developer threatens to demolish the orphanage hiding her past, she must '
                "choose between exposing her true identity or losing everything she's built.",
    'Stakes': 'She has 48 hours to clear her name - or lose custody of her children forever.',
    'Hook': "In a world where memories are currency, a memory-poor janitor discovers she's the only one "
            'who remembers the assassination of the president.',
    'Genre': 'A contained psychological thriller with elevated horror elements.',
    'Market': 'For fans of GONE GIRL who want the tension of PANIC ROOM.',
}

GUIDES = {
    'Protagonist': [
        '1. Define their greatest fear',
        '2. Connect the fear to the plot',
        '3. Add a distinctive voice/trait',
        '4. Show their transformation arc',
    ],
    'Conflict': [
        '1. Identify the antagonistic force',
        "2. Create direct opposition to protagonist's goal",
        '3. Add escalating obstacles',
        '4. Build to a climactic confrontation',
    ],
    'Stakes': [
        "1. Define what's at risk personally",
        '2. Add professional/social consequences',
        '3. Include universal implications',
        '4. Make failure irreversible',
    ],
    'Hook': [
        '1. Ask "What if?" about your premise',
        '2. Combine unexpected elements',
        '3. Add contemporary relevance',
        '4. Lead with the hook in your pitch',
    ],
}

DEFAULT_WEAK_EXAMPLE = 'Generic description without specifics.'
DEFAULT_STRONG_EXAMPLE = 'Specific, compelling description with clear elements.'
DEFAULT_GUIDE = ['1. Analyze the weakness', '2. Apply targeted improvement', '3. Test with feedback', '4. Iterate']

PROTAGONIST_FIX = WeaknessFix(
    weakness_category='Protagonist',
    current_issue='Your protagonist lacks distinctiveness or a clear driving flaw.',
    actionable_fix="Add a specific flaw or wound that directly connects to the story's conflict.",
    example_before='A detective investigates a murder.',
    example_after='A disgraced detective, fired for planting evidence, investigates the one murder '
                  'that could prove his instincts were right all along.',
    step_by_step_guide=[
        "1. Identify your protagonist's core flaw (fear, obsession, trauma)",
        '2. Connect this flaw to WHY they care about solving this problem',
        '3. Show how the flaw creates internal conflict during the journey',
        '4. Ensure the resolution requires them to confront this flaw',
        '5. Add one distinctive trait that makes them memorable',
    ],
    priority_level=1,
    potential_score_increase=12,
)

CONFLICT_FIX = WeaknessFix(
    weakness_category='Central Conflict',
    current_issue='The central conflict is either unclear or not compelling enough.',
    actionable_fix='Externalize the conflict with a clear antagonistic force and add escalating obstacles.',
    example_before='A woman struggles to find herself after divorce.',
    example_after='A woman rebuilding her life after divorce must fight her manipulative ex in a custody '
                  "battle that forces her to expose secrets she's buried for years.",
    step_by_step_guide=[
        '1. Identify the EXTERNAL obstacle (person, institution, force)',
        "2. Make the antagonist's goals directly oppose your protagonist's",
        '3. Add a ticking clock or deadline for urgency',
        '4. Create escalating obstacles that test the protagonist',
        '5. Ensure the climax is a direct confrontation with this conflict',
    ],
    priority_level=1,
    potential_score_increase=15,
)

STAKES_FIX = WeaknessFix(
    weakness_category='Stakes',
    current_issue="The consequences of failure aren't clear or compelling.",
    actionable_fix='Add personal, professional, AND universal stakes that escalate throughout.',
    example_before='He must stop the villain.',
    example_after='He must stop the villain before the bomb destroys the hospital where his daughter is '
                  'in surgery, knowing the only way in requires sacrificing the partner who saved his life.',
    step_by_step_guide=[
        '1. Define PERSONAL stakes (what does the protagonist lose?)',
        '2. Add PROFESSIONAL stakes (career, reputation, legacy)',
        '3. Include UNIVERSAL stakes (what does the world/community lose?)',
        '4. Make failure irreversible - no easy fixes',
        '5. Add a moral cost to success (what must they sacrifice?)',
    ],
    priority_level=2,
    potential_score_increase=10,
)

HOOK_FIX = WeaknessFix(
    weakness_category='Unique Hook',
    current_issue='The concept lacks a distinctive element that sets it apart.',
    actionable_fix='Add a "what if" twist that makes this concept feel fresh and marketable.',
    example_before='A cop hunts a serial killer.',
    example_after='A cop hunts a serial killer who livestreams his crimes to millions of devoted followers, '
                  'and the only way to catch him is to become his most famous fan.',
    step_by_step_guide=[
        '1. Ask "What if?" about one element (setting, premise, character)',
        "2. Research what's been done, then subvert expectations",
        '3. Combine two familiar elements in an unexpected way',
        '4. Add a contemporary/timely angle that feels relevant',
        "5. Ensure the hook is in your logline's first sentence",
    ],
    priority_level=1,
    potential_score_increase=18,
)


def fix_for_area(area: ImprovementArea) -> WeaknessFix:
    """
    Turn an improvement area into a fix.

    Priority is 10 - impact clamped to [1, 5]; the potential gain is the
    impact level itself.
    """
    key = EXAMPLE_KEYS.get(area.category, area.category)
    return WeaknessFix(
        weakness_category=area.category,
        current_issue=area.issue,
        actionable_fix=area.suggestion,
        example_before=WEAK_EXAMPLES.get(key, DEFAULT_WEAK_EXAMPLE),
        example_after=STRONG_EXAMPLES.get(key, DEFAULT_STRONG_EXAMPLE),
        step_by_step_guide=list(GUIDES.get(key, DEFAULT_GUIDE)),
        priority_level=int(clamp(10 - area.impact_level, 1, 5)),
        potential_score_increase=area.impact_level,
    )


class WeaknessFixBuilder:
    """Collect fixes for an analysis, most urgent first."""

    def build(self, result: AnalysisResult) -> List[WeaknessFix]:
        """
        Generate actionable fixes.

        One fix per improvement area, then dedicated fixes for protagonist
        < 12, conflict < 15, stakes < 12 and hook < 15. Sorted ascending by
        priority (ties keep insertion order), top six returned.

        Args:
            result: Analysis to draw weaknesses from

        Returns:
            Up to six WeaknessFix
        """
        fixes = [fix_for_area(area) for area in result.improvement_areas]

        breakdown = result.logline_breakdown
        if breakdown.protagonist < PROTAGONIST_THRESHOLD:
            fixes.append(PROTAGONIST_FIX)
        if breakdown.conflict < CONFLICT_THRESHOLD:
            fixes.append(CONFLICT_FIX)
        if breakdown.stakes < STAKES_THRESHOLD:
            fixes.append(STAKES_FIX)
        if breakdown.unique_hook < HOOK_THRESHOLD:
            fixes.append(HOOK_FIX)

        fixes.sort(key=lambda f: f.priority_level)
        return fixes[:constants.MAX_WEAKNESS_FIXES]
