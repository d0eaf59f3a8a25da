import difflib
from typing import Callable, Dict, List, Optional

from git import Commit, Repo

from core.contracts.models import ChangedFileSet, ChangeReport, FileDiff
from utils.errors import DiffError
from utils.git import get_head_commit, read_committed_file, read_worktree_file
from utils.logger import logger

MAX_DIFF_SIZE = 4000
TRUNCATION_MARKER = "\n...diff truncated...\n"
REPORT_HEADER = "The following changes have been made:\n"
MAX_INLINE_LINE_LENGTH = 1000


def render_unified(path: str, old: str, new: str) -> str:
    """Renders a line diff in unified format."""
    lines = difflib.unified_diff(
        old.splitlines(),
        new.splitlines(),
        fromfile=f"a/{path}",
        tofile=f"b/{path}",
        lineterm="",
    )
    return "\n".join(lines)


def _mark_changes(old: str, new: str) -> str:
    parts: List[str] = []
    if old:
        parts.append(f"[-{old}-]")
    if new:
        parts.append(f"{{+{new}+}}")
    return "".join(parts)


def _render_line_pair(old: str, new: str) -> str:
    """Character diff of one replaced line."""
    if max(len(old), len(new)) > MAX_INLINE_LINE_LENGTH:
        return _mark_changes(old, new)
    matcher = difflib.SequenceMatcher(None, old, new, autojunk=False)
    parts: List[str] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            parts.append(old[i1:i2])
        else:
            parts.append(_mark_changes(old[i1:i2], new[j1:j2]))
    return "".join(parts)


def render_inline(path: str, old: str, new: str) -> str:
    """
    Renders a character diff as running text.

    Deleted text is wrapped in ``[-...-]`` and inserted text in ``{+...+}``.
    Lines are matched first and characters are compared only within replaced
    line pairs. Lines longer than ``MAX_INLINE_LINE_LENGTH`` are marked whole.
    """
    old_lines = old.splitlines(keepends=True)
    new_lines = new.splitlines(keepends=True)
    matcher = difflib.SequenceMatcher(None, old_lines, new_lines)
    parts: List[str] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            parts.extend(old_lines[i1:i2])
            continue
        removed, added = old_lines[i1:i2], new_lines[j1:j2]
        paired = min(len(removed), len(added))
        for old_line, new_line in zip(removed, added):
            parts.append(_render_line_pair(old_line, new_line))
        parts.append(_mark_changes("".join(removed[paired:]), "".join(added[paired:])))
    return "".join(parts)


RENDERERS: Dict[str, Callable[[str, str, str], str]] = {
    "unified": render_unified,
    "inline": render_inline,
}


def truncate(diff: str, max_size: int) -> str:
    """Keeps the first ``max_size`` characters and appends the truncation marker."""
    if len(diff) <= max_size:
        return diff
    return diff[:max_size] + TRUNCATION_MARKER


class ChangeDescriber:
    """
    Builds the change report for a set of changed files.

    Each file is compared between its HEAD version (empty if the file did
    not exist there) and its current content on disk.
    """

    def __init__(self, repo: Repo, max_size: int = MAX_DIFF_SIZE, style: str = "unified"):
        if max_size <= 0:
            raise ValueError("max_size must be a positive integer.")
        if style not in RENDERERS:
            raise ValueError(f"Unknown diff style '{style}'. Available styles: {list(RENDERERS)}")
        self.repo = repo
        self.max_size = max_size
        self._render = RENDERERS[style]

    def get_diff(self, path: str, head: Optional[Commit] = None) -> FileDiff:
        """
        Computes the rendered (and possibly truncated) diff of a single file.

        Raises:
            DiffError: If either version of the file cannot be read.
        """
        baseline = read_committed_file(head, path)
        if baseline is None:
            logger.debug(f"'{path}' has no HEAD version; using an empty baseline.")
            baseline = ""
        current = read_worktree_file(self.repo, path)

        diff = self._render(path, baseline, current)
        truncated = len(diff) > self.max_size
        if truncated:
            logger.debug(f"Diff for '{path}' is {len(diff)} characters; truncating to {self.max_size}.")
        return FileDiff(path=path, diff=truncate(diff, self.max_size), truncated=truncated)

    def describe(self, files: ChangedFileSet) -> ChangeReport:
        """
        Concatenates one ``File: <path>`` section per changed file, in order.

        Raises:
            DiffError: If any file cannot be described.
        """
        head = get_head_commit(self.repo)
        if head is None:
            logger.info("Repository has no commits yet; every file is treated as new.")

        sections: List[FileDiff] = []
        text = [REPORT_HEADER]
        for path in files.paths:
            try:
                section = self.get_diff(path, head)
            except DiffError:
                logger.error(f"Could not generate diff for '{path}'.")
                raise
            sections.append(section)
            text.append(f"File: {path}\n{section.diff}\n")

        logger.info(f"Described {len(sections)} changed file(s).")
        return ChangeReport(sections=sections, text="".join(text))
