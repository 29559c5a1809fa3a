"""Tests for schema declaration text"""

from resolver_retry.domain.declaration import directive_config_key, retry_declaration


def test_declaration_contains_directive_signature():
    declaration = retry_declaration("retry")
    assert "@retry(retries: Int, minTimeout: Int, maxTimeout: Int, factor: Int)" in declaration


def test_declaration_is_verbatim():
    assert retry_declaration("backoff") == (
        "directive @backoff(retries: Int, minTimeout: Int, maxTimeout: Int, factor: Int) "
        "on FIELD_DEFINITION"
    )


def test_context_key_follows_directive_name():
    assert directive_config_key("retry") == "retryDirectiveConfig"
    assert directive_config_key("flaky") == "flakyDirectiveConfig"
