from datetime import datetime


def get_date_suffix_for_filename() -> str:
    """Returns the current date as a YYYY-MM-DD string for filenames."""
    return datetime.now().strftime("%Y-%m-%d")


def truncate(text: str, width: int) -> str:
    """
    Shortens text to `width` characters plus an ellipsis marker so it fits a
    fixed-width table column. Text within the width is returned untouched.
    """
    if len(text) > width:
        return text[:width] + "..."
    return text


def contains_ignore_case(haystack: str, needle: str) -> bool:
    """Case-insensitive substring test. An empty needle matches everything."""
    return needle.casefold() in haystack.casefold()


def equals_ignore_case(left: str, right: str) -> bool:
    return left.casefold() == right.casefold()
