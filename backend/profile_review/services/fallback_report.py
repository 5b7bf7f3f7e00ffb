"""
Fallback report used when the analysis assistant cannot produce an answer
"""
from typing import Any

from profile_review.models import AnalysisResult, describe_objective
from profile_review.services.profile_normalizer import extract_name

FALLBACK_TEMPLATE = """# LinkedIn Profile Analysis: {name}

**Objective:** {objective}

## 1. General Summary
{name}, your profile already has the foundation recruiters look for. The points below focus on what \
will make it stand out for your goal: {objective}.

## 2. Strengths
- You have an active LinkedIn presence, which is the first step to being found by recruiters.
- Your profile shows technical experience and interest in the development field.
- You are investing in your own growth by asking for a professional review.

## 3. Improvement Opportunities
- **Headline:** use "Developer" or "Programmer" + your field (e.g. "Front-end Developer | React | TypeScript"). \
Avoid words like "student", "looking for opportunities" or seniority levels.
- **About section:** tell your story in 3 short paragraphs: who you are, what you build and what you are looking for.
- **Experiences and projects:** describe results, not only tasks, and link to your repositories.
- **Skills:** list the technologies you actually use and ask colleagues for endorsements.

## 4. Practical Recommendations
- Use a profile photo with a neutral background and a smile. A phone camera is enough as long as it looks professional.
- Choose a cover photo related to your field of work.
- If the "Open to Work" badge is on, remove it and signal availability through your content instead.
- Add 2-3 featured projects with a short description of the problem and the stack used.
- Connect with recruiters and developers in your target area and comment on their posts.

## 5. Immediate Actions
1. Rewrite your headline following the Developer + field pattern.
2. Update your profile and cover photos.
3. Rewrite your about section with a clear objective.
4. Add measurable results to your last two experiences.
5. Publish one post this week about something you built or learned.

## 6. Comparative Analysis
Competitive profiles in tech combine a clear headline, a well-written about section, projects with links \
and consistent activity. Closing these gaps puts your profile at the same level as the candidates who get \
contacted first.

## 7. Final Message
{name}, every adjustment here is small and doable. Apply the immediate actions this week and your profile \
will work for you while you keep learning. Keep going!
"""


def build_fallback_report(profile: Any, objective: str) -> AnalysisResult:
    """Deterministic report built only from total functions; never raises."""
    name = extract_name(profile)
    objective_description = describe_objective(objective) or "General profile improvement"
    text = FALLBACK_TEMPLATE.format(name=name, objective=objective_description)
    return AnalysisResult(
        analysis_text=text,
        objective=objective,
        is_structured_format=False,
        is_fallback=True,
    )
