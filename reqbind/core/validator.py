from functools import lru_cache

from reqbind.binding.validation import DEFAULT_GROUPS, DEFAULT_MESSAGES, DEFAULT_RULES, Validator


@lru_cache
def get_validator() -> Validator:
    """
    The process-wide validator. Built on first use, never mutated.

    Every endpoint binder is compiled against this instance at import time.
    """
    return Validator(rules=DEFAULT_RULES, messages=DEFAULT_MESSAGES, groups=DEFAULT_GROUPS)
