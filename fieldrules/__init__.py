# fieldrules exports
from fieldrules.config import settings, get_settings
from fieldrules.logging import configure_logging, get_logger, bind_context, clear_context
from fieldrules.errors import (
    RuleError,
    UnknownRule,
    RuleViolation,
    TypeMismatch,
    BadParameter,
    InvalidRuleFunction,
)
from fieldrules.validation import (
    RuleSpec,
    parse_tag,
    RuleRegistry,
    default_registry,
    ErrorReport,
    ValidationError,
    Validator,
    default_validator,
    validate,
    valid,
    check,
    set_tag,
    set_name_tag,
    set_read_name_tag,
    set_validation_func,
    remove_validation_func,
    with_tag,
    validated_body,
)

__version__ = "0.1.0"
