"""
Email and password checks for signup and admin-created accounts.

A strict regex runs first; the libraries then do the deeper checks.
"""
from __future__ import annotations

import re

from email_validator import EmailNotValidError, validate_email
from password_strength import PasswordPolicy

# password_strength uses specific built-in test names; letters are checked by regex below.
password_policy = PasswordPolicy.from_names(length=8, numbers=1)


def is_valid_email(email: str) -> bool:
    email = (email or "").strip()
    if not email or len(email) > 254:
        return False
    # Basic regex (strict) - always enforced
    if not re.fullmatch(r"[^@\s]+@[^@\s.][^@\s]*\.[^@\s]+", email):
        return False
    try:
        # Syntax only; signup must not depend on DNS.
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


# 8-64 chars, at least one letter and one number, no whitespace
def is_valid_password(pw: str) -> bool:
    if not pw or len(pw) < 8 or len(pw) > 64:
        return False
    if re.search(r"\s", pw):
        return False
    if not (re.search(r"[A-Za-z]", pw) and re.search(r"\d", pw)):
        return False
    return not password_policy.test(pw)


__all__ = ["is_valid_email", "is_valid_password", "password_policy"]
