"""
Display helpers for user names and money amounts
"""
import models


def mask_email(email: str) -> str:
    """
    Mask an email address for display to other users.
    Example: jules@example.com -> ju***s@example.com
    """
    if not email or "@" not in email:
        return "Someone"

    user_part, domain_part = email.split("@", 1)
    if len(user_part) > 3:
        return f"{user_part[:2]}***{user_part[-1]}@{domain_part}"
    elif len(user_part) > 1:
        return f"{user_part[0]}***@{domain_part}"
    return f"***@{domain_part}"


def get_user_display_name(user: models.User) -> str:
    """
    Name shown to other users: full_name if set, otherwise the masked email.
    """
    if not user:
        return "Someone"

    if user.full_name:
        return user.full_name

    return mask_email(user.email)


def format_amount(cents: int) -> str:
    """Format an amount in cents as dollars, e.g. 1250 -> $12.50"""
    return f"${cents / 100:.2f}"
