import re
from typing import Dict, List, Optional, Set, Tuple


# Commands that only appear when the model leaks template/preamble artifacts.
DENIED_COMMANDS = ("\\hrefdefaultcolor", "\\hrefcolor", "\\newcommand", "\\moderncv")

LIST_ENVIRONMENTS = ("itemize", "enumerate")
TRACKED_ENVIRONMENTS = ("itemize", "enumerate", "center")
STRUCTURAL_BOUNDARIES = (
    "\\section",
    "\\subsection",
    "\\begin{center}",
    "\\end{center}",
    "\\end{document}",
)
END_DOCUMENT = "\\end{document}"

_FENCE_LINE_RE = re.compile(r"^[^\S\n]*```[\w+-]*[^\S\n]*(?:\n|$)", re.MULTILINE)
_FENCE_LANG_RE = re.compile(r"```latex?", re.IGNORECASE)
_ITEM_RE = re.compile(r"\\item(?![A-Za-z@])")
_TAG_RE = re.compile(r"\\(begin|end)\{(itemize|enumerate|center)\}")


def _list_tags(line: str) -> List[Tuple[str, str]]:
    return [(m.group(1), m.group(2)) for m in _TAG_RE.finditer(line) if m.group(2) in LIST_ENVIRONMENTS]


def _is_item(trimmed: str) -> bool:
    return _ITEM_RE.match(trimmed) is not None


def _is_boundary(trimmed: str) -> bool:
    return trimmed.startswith(STRUCTURAL_BOUNDARIES)


def _closes_top(trimmed: str, open_lists: List[Tuple[str, int]]) -> bool:
    return bool(open_lists) and trimmed.startswith(f"\\end{{{open_lists[-1][0]}}}")


def _next_non_blank(lines: List[str], start: int) -> str:
    for line in lines[start:]:
        if line.strip():
            return line.strip()
    return ""


def _cut(line: str, start: int, end: int) -> str:
    """Drop line[start:end] without gluing its neighbours into a new token."""
    before, after = line[:start], line[end:]
    if not after.strip() and before.strip():
        return before.rstrip()
    if before.strip() and (before[-1].isspace() or after[0].isspace()):
        return before + after
    # keeps the line from turning into an \item or boundary line
    return before + "{}" + after


class LatexSanitizer:
    """Best-effort structural repair of LaTeX body text produced by an LLM.

    The pipeline is strip -> repair orphaned items -> balance environments.
    None of the stages raise on malformed input, and running the pipeline
    on its own output changes nothing.
    """

    @staticmethod
    def strip_artifacts(text: str) -> str:
        """Remove code fences and deny-listed commands, then trim."""
        previous = None
        while text != previous:
            previous = text
            text = _FENCE_LINE_RE.sub("", text)
            text = _FENCE_LANG_RE.sub("", text)
            text = text.replace("```", "")
            for command in DENIED_COMMANDS:
                text = text.replace(command, "")
        return text.strip()

    @staticmethod
    def repair_orphaned_items(text: str) -> str:
        """Make sure every \\item line sits inside an open list environment.

        Lists are tracked on a flat stack of (environment, line index) markers.
        A list close only pops when it names the environment on top of the
        stack; any other close is left in place for the balancer to drop.
        Synthetic closes reuse the environment recorded on the marker.
        """
        lines = text.split("\n")
        fixed: List[str] = []
        open_lists: List[Tuple[str, int]] = []

        def close_all() -> None:
            while open_lists:
                env, _ = open_lists.pop()
                fixed.append(f"\\end{{{env}}}")

        for i, line in enumerate(lines):
            trimmed = line.strip()

            if open_lists and _is_boundary(trimmed):
                close_all()
            if _is_item(trimmed) and not open_lists:
                fixed.append("\\begin{itemize}")
                open_lists.append(("itemize", i))
            fixed.append(line)

            for kind, env in _list_tags(line):
                if kind == "begin":
                    open_lists.append((env, i))
                elif open_lists and open_lists[-1][0] == env:
                    open_lists.pop()

            # Two blank lines in a row inside a list read as a section break
            if trimmed == "" and i > 0 and lines[i - 1].strip() == "" and open_lists:
                following = _next_non_blank(lines, i + 1)
                if not _is_item(following) and not _closes_top(following, open_lists):
                    close_all()

        close_all()
        return "\n".join(fixed)

    @staticmethod
    def environment_counts(text: str) -> Dict[str, Tuple[int, int]]:
        """Return {environment: (opens, closes)} for the tracked environments."""
        return {
            env: (text.count(f"\\begin{{{env}}}"), text.count(f"\\end{{{env}}}"))
            for env in TRACKED_ENVIRONMENTS
        }

    @staticmethod
    def balance_environments(text: str) -> str:
        """Match open/close tags for each tracked environment.

        List environments share one stack, so a close only matches the list
        opened last; `center` is matched on its own. Closes that match nothing
        are dropped (the whole line when it holds only the tag). Opens left
        unmatched get closes, innermost first, right before the last
        \\end{document} line or at the end.
        """
        lines = text.split("\n")
        lists: List[Tuple[str, Tuple[int, int]]] = []
        centers: List[Tuple[int, int]] = []
        stray: Dict[int, List[Tuple[int, int]]] = {}
        last_tag_line = -1

        for n, line in enumerate(lines):
            for m in _TAG_RE.finditer(line):
                kind, env = m.group(1), m.group(2)
                last_tag_line = n
                if kind == "begin":
                    if env == "center":
                        centers.append((n, m.start()))
                    else:
                        lists.append((env, (n, m.start())))
                elif env == "center" and centers:
                    centers.pop()
                elif env != "center" and lists and lists[-1][0] == env:
                    lists.pop()
                else:
                    stray.setdefault(n, []).append(m.span())

        unclosed = [(pos, env) for env, pos in lists] + [(pos, "center") for pos in centers]
        closing = [f"\\end{{{env}}}" for _, env in sorted(unclosed, reverse=True)]

        insert_at = len(lines)
        for n in range(len(lines) - 1, -1, -1):
            if lines[n].strip().startswith(END_DOCUMENT):
                if n > last_tag_line:
                    insert_at = n
                break

        # lines holding nothing but one unmatched close
        dropped: Set[int] = {
            n for n, spans in stray.items()
            if len(spans) == 1 and lines[n].strip() == lines[n][spans[0][0]:spans[0][1]]
        }
        kept: List[str] = []
        skip_blank = False
        for n, line in enumerate(lines):
            if n == insert_at:
                kept.extend(closing)
            if n in dropped:
                # do not let two blank lines meet where the tag used to be
                if kept and not kept[-1].strip() and n + 1 < len(lines) and not lines[n + 1].strip():
                    skip_blank = True
                continue
            if skip_blank:
                skip_blank = False
                if not line.strip():
                    continue
            for start, end in reversed(stray.get(n, [])):
                line = _cut(line, start, end)
            kept.append(line)

        if insert_at == len(lines):
            kept.extend(closing)
        return "\n".join(kept)

    @staticmethod
    def sanitize(text: Optional[str]) -> str:
        if not text:
            return ""
        text = LatexSanitizer.strip_artifacts(text)
        text = LatexSanitizer.repair_orphaned_items(text)
        text = LatexSanitizer.balance_environments(text)
        return text.strip()


def sanitize_latex(text: Optional[str]) -> str:
    """Module-level shortcut for LatexSanitizer.sanitize."""
    return LatexSanitizer.sanitize(text)
