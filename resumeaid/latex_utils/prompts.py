from typing import List

from resumeaid.models.profile import Profile

PLACEHOLDERS = (
    "Company Name",
    "Position, Location",
    "University Name",
    "Project Name",
    "Brief description",
    "Another Company",
    "Month Year",
    "XYZ Company",
)


def is_placeholder_content(content: str) -> bool:
    """True when the model echoed template placeholders instead of profile data."""
    return any(p in content for p in PLACEHOLDERS)


def _numbered(entries: List[str]) -> str:
    return "\n".join(f"{i}. {e}" for i, e in enumerate(entries, 1))


def _experience_block(profile: Profile) -> str:
    if not profile.experience:
        return "No experience data provided"
    blocks = []
    for i, exp in enumerate(profile.experience, 1):
        responsibilities = "\n".join(f"   - {d}" for d in exp.description)
        blocks.append(
            f"{i}. {exp.position} at {exp.company}\n"
            f"   Location: {exp.location}\n"
            f"   Duration: {exp.start_date} - {'Present' if exp.current else exp.end_date}\n"
            f"   Responsibilities:\n{responsibilities}\n"
            f"   Technologies: {', '.join(exp.technologies)}"
        )
    return "\n\n".join(blocks)


def _education_block(profile: Profile) -> str:
    if not profile.education:
        return "No education data provided"
    blocks = []
    for i, edu in enumerate(profile.education, 1):
        block = (
            f"{i}. {edu.degree} in {edu.field}\n"
            f"   Institution: {edu.institution}\n"
            f"   Location: {edu.location}\n"
            f"   Duration: {edu.start_date} - {'Present' if edu.current else edu.end_date}"
        )
        if edu.gpa:
            block += f"\n   GPA: {edu.gpa}"
        blocks.append(block)
    return "\n\n".join(blocks)


def _projects_block(profile: Profile) -> str:
    if not profile.projects:
        return "No projects data provided"
    blocks = []
    for i, proj in enumerate(profile.projects, 1):
        duration = proj.start_date + (f" - {proj.end_date}" if proj.end_date else "")
        block = (
            f"{i}. {proj.name}\n"
            f"   Description: {proj.description}\n"
            f"   Technologies: {', '.join(proj.technologies)}\n"
            f"   Duration: {duration}"
        )
        if proj.link:
            block += f"\n   Link: {proj.link}"
        blocks.append(block)
    return "\n\n".join(blocks)


def _certifications_block(profile: Profile) -> str:
    if not profile.certifications:
        return "No certifications"
    blocks = []
    for i, cert in enumerate(profile.certifications, 1):
        block = f"{i}. {cert.name}\n   Issuer: {cert.issuer}\n   Issue Date: {cert.issue_date}"
        if cert.expiry_date:
            block += f"\n   Expiry: {cert.expiry_date}"
        if cert.credential_id:
            block += f"\n   ID: {cert.credential_id}"
        if cert.link:
            block += f"\n   Link: {cert.link}"
        blocks.append(block)
    return "\n\n".join(blocks)


def build_resume_prompt(profile: Profile, job_description: str | None, target_role: str) -> str:
    contact = [
        f"Name: {profile.full_name}",
        f"Email: {profile.email}",
        f"Phone: {profile.phone}",
        f"Location: {profile.location}",
    ]
    if profile.linkedin:
        contact.append(f"LinkedIn: {profile.linkedin}")
    if profile.github:
        contact.append(f"GitHub: {profile.github}")
    if profile.portfolio:
        contact.append(f"Portfolio: {profile.portfolio}")

    links = " | ".join(f"\\href{{{link}}}{{Link}}" for link in profile.links())
    optional_sections = []
    if profile.certifications:
        optional_sections.append("\\section*{Certifications}\n[List certifications]")
    if profile.achievements:
        optional_sections.append("\\section*{Achievements}\n[List achievements]")
    if profile.publications:
        optional_sections.append("\\section*{Publications}\n[List publications]")

    return f"""You are a resume writer. Generate a professional resume in LaTeX format using ONLY the data provided below.

CRITICAL RULES:
1. DO NOT include: \\documentclass, \\usepackage, \\hypersetup, \\begin{{document}}, \\end{{document}}
2. DO NOT use placeholder text like "Company Name" or "Project Name"
3. USE ONLY the actual data from the profile below
4. Return ONLY the LaTeX body content

CANDIDATE DATA:
{chr(10).join(contact)}

EXPERIENCE ({len(profile.experience)} entries):
{_experience_block(profile)}

EDUCATION ({len(profile.education)} entries):
{_education_block(profile)}

TECHNICAL SKILLS ({len(profile.technical_skills)} skills):
{', '.join(profile.technical_skills) or 'No technical skills'}

SOFT SKILLS ({len(profile.soft_skills)} skills):
{', '.join(profile.soft_skills) or 'No soft skills'}

PROJECTS ({len(profile.projects)} entries):
{_projects_block(profile)}

CERTIFICATIONS ({len(profile.certifications)} entries):
{_certifications_block(profile)}

LANGUAGES ({len(profile.languages)} languages):
{', '.join(profile.languages) or 'No languages'}

ACHIEVEMENTS ({len(profile.achievements)} achievements):
{_numbered(profile.achievements) or 'No achievements'}

PUBLICATIONS ({len(profile.publications)} publications):
{_numbered(profile.publications) or 'No publications'}

TARGET ROLE: {target_role}

JOB DESCRIPTION:
{job_description or 'No job description provided'}

NOW GENERATE A PROFESSIONAL RESUME IN LATEX FORMAT USING THE ACTUAL DATA ABOVE.
Use this structure:

\\begin{{center}}
\\textbf{{\\Large {profile.full_name}}} \\\\
{profile.email} | {profile.phone} | {profile.location} \\\\
{links}
\\end{{center}}

\\section*{{Professional Summary}}
[Write 2-3 sentences for {target_role}]

\\section*{{Experience}}
[Format each with \\textbf{{Position}} -- \\textbf{{Company}}, Location \\hfill Dates
\\begin{{itemize}} for each responsibility
\\textit{{Technologies: ...}}]

\\section*{{Education}}
[Format each entry]

\\section*{{Technical Skills}}
[List all skills]

\\section*{{Projects}}
[Format each project]

{chr(10).join(optional_sections)}

USE ONLY REAL DATA FROM ABOVE. NO PLACEHOLDERS."""


def build_analysis_prompt(resume_text: str, target_role: str, max_chars: int = 5000) -> str:
    return (
        "Act as an AI Career Coach and Senior Recruiter.\n"
        f'Analyze this resume for the specific target role: "{target_role}".\n'
        f"Resume Text: {resume_text[:max_chars]}\n\n"
        "Rules for JSON generation:\n"
        f"1. atsScore: 0-100 based on keyword density for a {target_role}.\n"
        "2. riskFactor: Start with 'Low', 'Medium', or 'High' followed by a short reason.\n"
        f"3. jobProbability: Predicted percentage of landing an interview for {target_role}.\n"
        f"4. improvements: An array of 4-5 specific, actionable points to improve this resume for the role of {target_role}.\n"
        '5. roadmap: An array of 4 objects with "period" (e.g., "Week 1") and "task" (a specific learning goal).\n'
        "6. interviewRiskDetection: A single sentence warning about a potential weak spot.\n"
        "7. personalBrandingScore: A value from 40-95.\n\n"
        "Return ONLY raw JSON."
    )
