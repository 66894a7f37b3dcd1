"""Text listing of refactoring candidates."""

from typing import List

from ..models.candidate import FileStats

_HEURISTICS = {
    "safe": (
        "If a function is unsafe and has no raw pointers as parameters, "
        "it may be a good candidate for making safe.",
        "No candidates found for functions to convert from unsafe to safe "
        "using a simple heuristic.",
    ),
    "bool": (
        "If a function returns i32 and all return statements return literal "
        "0 or 1 values, it may be a good candidate for converting to return bool.",
        "No candidates found for functions to convert from i32 to bool "
        "using a simple heuristic.",
    ),
}


def format_candidates(file_stats: List[FileStats], kind: str) -> str:
    """Advisory listing of candidates grouped by file.

    Args:
        file_stats: Files with at least one candidate
        kind: 'safe' or 'bool'

    Returns:
        Text ending with a newline
    """
    explanation, empty_message = _HEURISTICS[kind]
    if not file_stats:
        return empty_message + "\n"

    lines = [
        "These candidates are chosen using a very simple heuristic.",
        explanation,
        "Note that there may be other reasons why these functions shouldn't be converted.",
        "",
    ]
    for stats in file_stats:
        lines.append(f"{stats.filename}:")
        for candidate in stats.candidates:
            lines.append(
                f"\t{candidate.fn_name} @ {stats.filename}:{candidate.line_number}"
            )

    total = sum(stats.count for stats in file_stats)
    lines += ["", f"Found {total} candidates over {len(file_stats)} files"]
    return "\n".join(lines) + "\n"
