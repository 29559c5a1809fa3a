"""Schema declaration text for the retry directive"""

DECLARATION_TEMPLATE = (
    "directive @{name}(retries: Int, minTimeout: Int, maxTimeout: Int, factor: Int) "
    "on FIELD_DEFINITION"
)


def retry_declaration(name: str) -> str:
    """Build the schema declaration for a retry directive named ``name``"""
    return DECLARATION_TEMPLATE.format(name=name)


def directive_config_key(name: str) -> str:
    """Context key holding per-request configuration for the directive

    Args:
        name: Directive name (e.g. "retry")

    Returns:
        Key such as "retryDirectiveConfig"
    """
    return f"{name}DirectiveConfig"
