"""
Canned career-chat answers used when the OpenAI API is not available
"""

RESUME_RESPONSE = """To write an effective developer resume, include these sections:

1. **Header**: name, contact, LinkedIn, GitHub, portfolio.
2. **Professional summary**: 2-3 sentences about your skills and goals.
3. **Technical skills**: languages, frameworks and tools you master.
4. **Experience**: highlight relevant projects, responsibilities and results.
5. **Education**: formal education and relevant courses.
6. **Personal projects**: GitHub links with short descriptions.

Extra tips:
- Tailor it for each job
- Use keywords from the job description
- Quantify results whenever possible
- Keep it concise (2 pages at most)

Do you want me to go deeper into any of these sections?"""

INTERVIEW_RESPONSE = """To stand out in developer interviews:

**Before the interview:**
1. Research the company, its products and its stack
2. Review programming fundamentals
3. Practice algorithms and data structures
4. Prepare examples from previous projects (STAR method)
5. Test your setup for remote interviews

**During the interview:**
1. Think out loud while solving problems
2. Ask clarifying questions before you start
3. Discuss complexity and trade-offs of your solutions
4. Be honest when you don't know something

**For take-home and live coding tests:**
- Read the whole problem before starting
- Explain your approach before coding
- Consider edge cases and error handling

Should I go deeper into any of these topics?"""

LINKEDIN_RESPONSE = """To highlight your technical skills on LinkedIn:

1. **Featured section**: put your 3-5 most relevant skills or projects at the top.
2. **Headline**: besides your role, include 2-3 main technologies (e.g. "React Developer | Node.js | TypeScript").
3. **Skills section**: add relevant technical skills ordered by proficiency.
4. **Endorsements**: ask colleagues and managers for skill-specific recommendations.
5. **Projects**: add projects with technical descriptions and links.
6. **Content**: share or write posts about the technologies you know.
7. **Consistency**: make sure your skills also appear in your experience descriptions.

Need help with any of these points?"""

PORTFOLIO_RESPONSE = """A strong developer portfolio favors quality over quantity:

1. Pick 3-4 projects that show different skills.
2. For each one, explain the problem, your solution and the stack used.
3. Deploy them so recruiters can try them in one click.
4. Keep the README of every repository clean, with screenshots and setup steps.
5. Link the portfolio from your resume, LinkedIn and GitHub profile.

Want feedback on a specific project?"""

GITHUB_RESPONSE = """To get your GitHub profile recruiter-ready:

1. Create a profile README with who you are, your stack and how to reach you.
2. Pin your best 4-6 repositories.
3. Write clear READMEs: description, screenshots, how to run, technologies.
4. Keep commits small with meaningful messages.
5. Keep a steady activity history, even with small contributions.

Should I review any of your repositories' structure with you?"""

DEFAULT_RESPONSE = """Thanks for your message! I can help with several areas of your developer career:

- Writing and optimizing your resume
- Tips for technical and behavioral interviews
- Improving your LinkedIn profile
- Portfolio and project guidance
- Salary negotiation strategies
- Preparing for coding tests
- Career transition advice
- Optimizing your GitHub profile

Could you tell me more specifically what you need? I'm here to help!"""

# First matching keyword group wins
FALLBACK_RESPONSES = (
    (('resume', 'cv', 'currículo', 'curriculo'), RESUME_RESPONSE),
    (('interview', 'entrevista'), INTERVIEW_RESPONSE),
    (('linkedin', 'profile', 'perfil'), LINKEDIN_RESPONSE),
    (('portfolio', 'portfólio'), PORTFOLIO_RESPONSE),
    (('github',), GITHUB_RESPONSE),
)


def get_fallback_response(message: str) -> str:
    lower_message = (message or '').lower()
    for keywords, response in FALLBACK_RESPONSES:
        if any(keyword in lower_message for keyword in keywords):
            return response
    return DEFAULT_RESPONSE
