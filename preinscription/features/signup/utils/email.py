import re

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]{2,}$")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def is_valid_email(email: str) -> bool:
    """
    Loose syntactic check: ``local@domain.tld`` with no whitespace, a single
    ``@`` and a top-level part of at least two characters.
    """
    return EMAIL_PATTERN.match(email) is not None
