"""Active and in-path state of menu candidates."""

from dataclasses import dataclass

from sitemenu.core.source import normalize_path


@dataclass(frozen=True)
class ActiveState:
    """Position of a candidate relative to the currently viewed node."""

    is_active: bool = False
    in_path: bool = False


def resolve_active_state(candidate_path: object, current_path: object) -> ActiveState:
    """Compare a candidate path with the path of the current node.

    The candidate is active when it is the current node, and in path when
    its path is a proper string prefix of the current path. Both flags are
    never set together. Trailing slashes are ignored, and empty or
    malformed paths resolve to neither.

    Args:
        candidate_path: Path of the node being placed in the menu
        current_path: Path of the node being rendered

    Returns:
        ActiveState for the candidate
    """
    if not isinstance(candidate_path, str) or not isinstance(current_path, str):
        return ActiveState()
    if not candidate_path.startswith("/") or not current_path.startswith("/"):
        return ActiveState()

    candidate = normalize_path(candidate_path)
    current = normalize_path(current_path)
    if candidate == current:
        return ActiveState(is_active=True)

    # Raw prefix match: "/site/a" is also in the path of "/site/ab"
    return ActiveState(in_path=current.startswith(candidate))
