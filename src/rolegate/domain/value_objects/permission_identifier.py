"""Permission identifiers - "resource:action" strings and wildcards."""

WILDCARD = "*"
SEPARATOR = ":"


def split_identifier(identifier: str) -> tuple[str, str] | None:
    """Split "resource:action" into its parts.

    Returns None when there is no separator or either part is empty.
    Extra separators are ignored past the second segment.
    """
    parts = identifier.split(SEPARATOR)
    if len(parts) < 2:
        return None
    resource, action = parts[0], parts[1]
    if not resource or not action:
        return None
    return resource, action


def is_valid_identifier(identifier: str) -> bool:
    """Accept the global wildcard or a well-formed "resource:action"."""
    if identifier == WILDCARD:
        return True
    return identifier.count(SEPARATOR) == 1 and split_identifier(identifier) is not None


def resource_wildcard(resource: str) -> str:
    return f"{resource}{SEPARATOR}{WILDCARD}"


def action_wildcard(action: str) -> str:
    return f"{WILDCARD}{SEPARATOR}{action}"
