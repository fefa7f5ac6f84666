import re


PREAMBLE = r"""\documentclass[11pt,a4paper]{article}

\usepackage[margin=1.5cm]{geometry}
\usepackage{enumitem}
\usepackage{hyperref}
\usepackage{xcolor}

\hypersetup{
  colorlinks=true,
  urlcolor=blue,
  linkcolor=blue
}

\setlength{\parindent}{0pt}
\setlength{\parskip}{4pt}

\begin{document}
"""

CLOSING = "\\end{document}"

_LATEX_SPECIALS = {
    "&": r"\&",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "_": r"\_",
    "{": r"\{",
    "}": r"\}",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
    "<": r"\textless{}",
    ">": r"\textgreater{}",
}
_SPECIALS_RE = re.compile(r"[&%$#_{}~^<>]")


def escape_latex(text: str | None) -> str:
    """Escape LaTeX special characters in user-provided text."""
    if not text:
        return ""
    # Split on backslashes first so their replacement is not escaped again
    parts = text.split("\\")
    escaped = [_SPECIALS_RE.sub(lambda m: _LATEX_SPECIALS[m.group(0)], p) for p in parts]
    return r"\textbackslash{}".join(escaped)


def strip_document_wrapper(content: str) -> str:
    """Remove preamble and document wrapper fragments from body content."""
    content = content.replace("\\begin{document}", "").replace("\\end{document}", "")
    content = re.sub(r"\\documentclass[^\n]*\n?", "", content)
    content = re.sub(r"\\usepackage[^\n]*\n?", "", content)
    content = re.sub(r"\\hypersetup\{[\s\S]*?\}", "", content)
    return content.strip()


def wrap_document(content: str | None) -> str:
    """Wrap a body fragment in the fixed preamble and closing marker.

    The content is never trusted to be free of its own \\documentclass or
    document environment; those are always stripped first.
    """
    body = strip_document_wrapper(content or "")
    return f"{PREAMBLE}\n{body}\n\n{CLOSING}"
