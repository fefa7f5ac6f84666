from fakes import make_profile
from resumeaid.latex_utils.prompts import (
    build_analysis_prompt,
    build_resume_prompt,
    is_placeholder_content,
)
from resumeaid.latex_utils.sanitizer import LatexSanitizer
from resumeaid.latex_utils.templates import render_template_resume


def test_template_resume_uses_profile_data(profile):
    body = render_template_resume(profile, None, "Software Engineer")
    assert "\\textbf{\\Large Ada Lovelace}" in body
    assert "\\section*{Experience}" in body
    assert "Analytical Engines Ltd" in body
    assert "Present" in body
    assert "\\section*{Education}" in body
    assert "\\section*{Languages}" in body
    assert "\\href{https://github.com/ada}{GitHub}" in body
    assert not is_placeholder_content(body)


def test_template_resume_escapes_user_text(profile):
    body = render_template_resume(profile, None, "Engineer")
    assert "R\\&D throughput by 50\\%" in body
    assert "C\\#" in body


def test_template_resume_skips_empty_sections():
    profile = make_profile(experience=[], projects=[], achievements=[], languages=[], softSkills=[])
    body = render_template_resume(profile, None, "Analyst")
    assert "\\section*{Experience}" not in body
    assert "\\section*{Projects}" not in body
    assert "\\section*{Achievements}" not in body
    assert "Analyst with experience in Python, LaTeX, Go." in body


def test_template_resume_is_already_clean(profile):
    body = render_template_resume(profile, "Build things", "Engineer")
    assert LatexSanitizer.sanitize(body) == body


def test_template_resume_prefers_profile_summary():
    profile = make_profile(summary="Mathematician & writer")
    body = render_template_resume(profile, None, "Engineer")
    assert "Mathematician \\& writer" in body


def test_placeholder_detection():
    assert is_placeholder_content("\\textbf{Company Name} -- Position, Location")
    assert is_placeholder_content("Graduated Month Year")
    assert not is_placeholder_content("\\textbf{Acme} -- Engineer")


def test_resume_prompt_lists_profile_sections(profile):
    prompt = build_resume_prompt(profile, "Python and Go required", "Backend Engineer")
    assert "Name: Ada Lovelace" in prompt
    assert "EXPERIENCE (1 entries):" in prompt
    assert "1. Lead Programmer at Analytical Engines Ltd" in prompt
    assert "Duration: 1842-01 - Present" in prompt
    assert "TARGET ROLE: Backend Engineer" in prompt
    assert "Python and Go required" in prompt
    assert "\\href{https://linkedin.com/in/ada}{Link}" in prompt
    assert "\\section*{Achievements}" in prompt
    assert "\\section*{Publications}" not in prompt
    assert "No certifications" in prompt


def test_resume_prompt_without_job_description(profile):
    prompt = build_resume_prompt(profile, None, "Engineer")
    assert "No job description provided" in prompt


def test_analysis_prompt_truncates_resume_text():
    text = "x" * 6000
    prompt = build_analysis_prompt(text, "Data Scientist", max_chars=5000)
    assert "x" * 5000 in prompt
    assert "x" * 5001 not in prompt
    assert 'target role: "Data Scientist"' in prompt
    for key in (
        "atsScore",
        "riskFactor",
        "jobProbability",
        "improvements",
        "roadmap",
        "interviewRiskDetection",
        "personalBrandingScore",
    ):
        assert key in prompt
