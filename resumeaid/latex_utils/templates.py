from typing import List

from resumeaid.latex_utils.writer import escape_latex
from resumeaid.models.profile import Profile


def _dates(start: str, end: str, current: bool) -> str:
    return f"{escape_latex(start)} -- {'Present' if current else escape_latex(end)}"


def _joined(items: List[str]) -> str:
    return ", ".join(escape_latex(i) for i in items)


def _header(profile: Profile) -> List[str]:
    lines = [
        "\\begin{center}",
        f"\\textbf{{\\Large {escape_latex(profile.full_name)}}} \\\\",
        f"{escape_latex(profile.email)} | {escape_latex(profile.phone)} | {escape_latex(profile.location)} \\\\",
    ]
    links = [
        f"\\href{{{url}}}{{{label}}}"
        for url, label in (
            (profile.linkedin, "LinkedIn"),
            (profile.github, "GitHub"),
            (profile.portfolio, "Portfolio"),
        )
        if url
    ]
    if links:
        lines.append(" | ".join(links))
    lines.append("\\end{center}")
    return lines


def _summary(profile: Profile, target_role: str) -> List[str]:
    if profile.summary:
        return ["\\section*{Professional Summary}", escape_latex(profile.summary)]
    years = f"{len(profile.experience)}+ years of experience" if profile.experience else "experience"
    top_skills = _joined(profile.technical_skills[:3])
    sentence = (
        f"{escape_latex(target_role) or 'Professional'} with {years}"
        f"{f' in {top_skills}' if top_skills else ''}. "
        "Proven track record of delivering high-quality solutions and driving results in fast-paced environments."
    )
    return ["\\section*{Professional Summary}", sentence]


def _experience(profile: Profile) -> List[str]:
    out = ["\\section*{Experience}"]
    for exp in profile.experience:
        out.append(
            f"\\textbf{{{escape_latex(exp.position)}}} -- \\textbf{{{escape_latex(exp.company)}}}, "
            f"{escape_latex(exp.location)} \\hfill {_dates(exp.start_date, exp.end_date, exp.current)}"
        )
        bullets = [d for d in exp.description if d.strip()]
        if bullets:
            out.append("\\begin{itemize}")
            out.extend(f"\\item {escape_latex(d)}" for d in bullets)
            out.append("\\end{itemize}")
        if exp.technologies:
            out.append(f"\\textit{{Technologies: {_joined(exp.technologies)}}}")
        out.append("")
    return out


def _education(profile: Profile) -> List[str]:
    out = ["\\section*{Education}"]
    for edu in profile.education:
        out.append(
            f"\\textbf{{{escape_latex(edu.degree)} in {escape_latex(edu.field)}}} "
            f"\\hfill {_dates(edu.start_date, edu.end_date, edu.current)}"
        )
        out.append(f"{escape_latex(edu.institution)}, {escape_latex(edu.location)}")
        if edu.gpa:
            out.append(f"GPA: {escape_latex(edu.gpa)}")
        out.append("")
    return out


def _projects(profile: Profile) -> List[str]:
    out = ["\\section*{Projects}"]
    for proj in profile.projects:
        link = f" (\\href{{{proj.link}}}{{Link}})" if proj.link else ""
        out.append(f"\\textbf{{{escape_latex(proj.name)}}}{link}")
        out.append(escape_latex(proj.description))
        if proj.technologies:
            out.append(f"\\textit{{Technologies: {_joined(proj.technologies)}}}")
        period = escape_latex(proj.start_date)
        if proj.end_date:
            period += f" - {escape_latex(proj.end_date)}"
        out.append(f"\\textit{{{period}}}")
        out.append("")
    return out


def _certifications(profile: Profile) -> List[str]:
    out = ["\\section*{Certifications}"]
    for cert in profile.certifications:
        out.append(
            f"\\textbf{{{escape_latex(cert.name)}}} -- {escape_latex(cert.issuer)} \\hfill {escape_latex(cert.issue_date)}"
        )
        if cert.credential_id:
            out.append(f"Credential ID: {escape_latex(cert.credential_id)}")
        if cert.link:
            out.append(f"\\href{{{cert.link}}}{{View Certificate}}")
        out.append("")
    return out


def _itemized(title: str, entries: List[str]) -> List[str]:
    return [f"\\section*{{{title}}}", "\\begin{itemize}", *(f"\\item {escape_latex(e)}" for e in entries), "\\end{itemize}", ""]


def render_template_resume(profile: Profile, job_description: str | None, target_role: str) -> str:
    """Deterministic resume body built only from profile data.

    Used whenever the LLM path cannot produce usable content. Sections without
    data are left out; all user text is escaped.
    """
    lines: List[str] = [*_header(profile), ""]
    lines += [*_summary(profile, target_role), ""]

    if profile.experience:
        lines += _experience(profile)
    if profile.education:
        lines += _education(profile)
    if profile.technical_skills:
        lines += ["\\section*{Technical Skills}", _joined(profile.technical_skills), ""]
    if profile.soft_skills:
        lines += ["\\section*{Soft Skills}", _joined(profile.soft_skills), ""]
    if profile.projects:
        lines += _projects(profile)
    if profile.certifications:
        lines += _certifications(profile)
    if profile.languages:
        lines += ["\\section*{Languages}", _joined(profile.languages), ""]
    if profile.achievements:
        lines += _itemized("Achievements", profile.achievements)
    if profile.publications:
        lines += _itemized("Publications", profile.publications)

    return "\n".join(lines).strip()
