from __future__ import annotations

SYSTEM_PROMPT_IMPROVE = (
    "You are an expert resume writer and ATS optimization specialist. "
    "Rewrite resume bullet points so they start with strong action verbs, include measurable results, "
    "and naturally use the keywords an applicant-tracking system looks for. "
    "Never invent employers, degrees, or dates. "
    "Return ONLY valid JSON, with no markdown fences and no commentary."
)

IMPROVE_RESUME_TEMPLATE = (
    "Improve this resume for the role of {job_role} at {company}.\n\n"
    "Target keywords: {job_keywords}\n\n"
    "Resume:\n{resume}\n\n"
    "Respond with a JSON object using exactly this schema:\n"
    '{{"improvedBullets": [{{"original": string, "improved": string, "reasoning": string, "impactScore": number}}], '
    '"missingKeywords": [string], "formatTips": [string], "estimatedImprovement": number}}\n'
    "Return at most 5 improved bullets and 5 format tips. estimatedImprovement is the expected ATS score gain (0-30)."
)

EXTRACT_KEYWORDS_TEMPLATE = (
    "You are an expert in extracting job requirements. "
    "Extract the top 10 most important keywords, skills, and phrases from this job description. "
    "Return ONLY a JSON array of strings, nothing else.\n\n"
    "Job description:\n{job_description}"
)

ATS_REVIEW_TEMPLATE = (
    "You are an expert ATS reviewer. Given the resume text and job context, produce a JSON object with keys: "
    "atsScore (0-100), issues (array of {{type, message, severity, fixSuggestion}}), missingKeywords (array), "
    "matchedKeywords (array), formatting (object), recommendation (string), "
    "confidenceLevel (high|medium|low). Resume:\n\n{resume}\n\n"
    "JobRole: {job_role}\nCompany: {company}\nJobDescription: {job_description}"
)


def build_improve_prompt(resume: str, job_role: str, company: str, job_keywords: list[str]) -> str:
    user = IMPROVE_RESUME_TEMPLATE.format(
        resume=resume,
        job_role=job_role,
        company=company,
        job_keywords=", ".join(job_keywords),
    )
    return f"{SYSTEM_PROMPT_IMPROVE}\n\n{user}"


def build_keyword_prompt(job_description: str) -> str:
    return EXTRACT_KEYWORDS_TEMPLATE.format(job_description=job_description)


def build_ats_review_prompt(resume: str, job_role: str, company: str, job_description: str | None) -> str:
    return ATS_REVIEW_TEMPLATE.format(
        resume=resume,
        job_role=job_role,
        company=company,
        job_description=job_description or "",
    )
