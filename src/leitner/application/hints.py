from leitner.domain.constants import HINT_MASK_CHAR


def get_hint(back: str | None) -> str:
    """Mask an answer, keeping only its first character: ``"Hello"`` -> ``"H____"``."""
    if not back or not isinstance(back, str):
        return ""
    return back[0] + HINT_MASK_CHAR * (len(back) - 1)
