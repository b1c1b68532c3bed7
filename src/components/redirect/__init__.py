"""
Redirect component - redirect annotation parsing.
"""

from ._impl import (
    DEFAULT_PERMANENT_REDIRECT_CODE,
    DEFAULT_TEMPORAL_REDIRECT_CODE,
    FROM_TO_WWW_REDIRECT,
    PERMANENT_REDIRECT,
    PERMANENT_REDIRECT_CODE,
    REDIRECT_ANNOTATIONS,
    RELATIVE_REDIRECTS,
    TEMPORAL_REDIRECT,
    TEMPORAL_REDIRECT_CODE,
    VALID_CODES,
    RedirectParser,
    check_annotation_risk,
    parse_bool,
    parse_code,
    resolve_code,
    validate_url,
)
from .component import (
    create_redirect_parser,
    run,
    run_batch,
    run_parse,
    run_validate,
)
from .models import (
    AnnotationField,
    ParseBatchInput,
    ParseRedirectInput,
    ParseResult,
    ParseStatus,
    RedirectBatchOutput,
    RedirectClass,
    RedirectConfig,
    RedirectParseOutput,
    RedirectValidateOutput,
    RedirectValidationError,
    RiskLevel,
    SkippedResource,
    ValidateAnnotationsInput,
)
from .ports import AnnotatedResource, AnnotationAccessorPort, AnnotationParserPort

__all__ = [
    # Entry points
    "run",
    "run_batch",
    "run_parse",
    "run_validate",
    "create_redirect_parser",
    # Input models
    "ParseBatchInput",
    "ParseRedirectInput",
    "ValidateAnnotationsInput",
    # Output models
    "ParseResult",
    "ParseStatus",
    "RedirectBatchOutput",
    "RedirectConfig",
    "RedirectParseOutput",
    "RedirectValidateOutput",
    "RedirectValidationError",
    "SkippedResource",
    # Registry
    "AnnotationField",
    "RedirectClass",
    "RiskLevel",
    "REDIRECT_ANNOTATIONS",
    "VALID_CODES",
    # Ports
    "AnnotatedResource",
    "AnnotationAccessorPort",
    "AnnotationParserPort",
    # _impl re-exports
    "DEFAULT_PERMANENT_REDIRECT_CODE",
    "DEFAULT_TEMPORAL_REDIRECT_CODE",
    "FROM_TO_WWW_REDIRECT",
    "PERMANENT_REDIRECT",
    "PERMANENT_REDIRECT_CODE",
    "RELATIVE_REDIRECTS",
    "TEMPORAL_REDIRECT",
    "TEMPORAL_REDIRECT_CODE",
    "RedirectParser",
    "check_annotation_risk",
    "parse_bool",
    "parse_code",
    "resolve_code",
    "validate_url",
]
