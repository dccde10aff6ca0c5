"""
Data Validator - Checks values against schema descriptions

Schema descriptions are rendered to JSON Schema and executed with
jsonschema's draft 2020-12 validator. Lazy resource references are
resolved through a referencing.Registry whose retrieve hook asks the
ResolutionContext, so every dereference happens at check time.

Supports:
- Format checks (email, uri, uuid, date, date-time, time)
- Top-level preprocessing (e.g. hydra: prefix stripping)
- Top-level optional schemas (ABSENT is accepted)
- Per-issue path, message and failing keyword
"""

from dataclasses import dataclass, field as dataclass_field
from typing import Any, Dict, List, Optional, Tuple
import logging
import re

from jsonschema import Draft202012Validator, FormatChecker
from referencing import Registry, Resource
from referencing.exceptions import NoSuchResource, Unresolvable
from referencing.jsonschema import DRAFT202012

from src.schema.context import ResolutionContext, ResourceReferenceError, UnknownResourceReference
from src.schema.description import (
    ABSENT,
    OptionalSchema,
    PreprocessedSchema,
    SchemaNode,
    find_context,
    title_from_urn,
)

logger = logging.getLogger(__name__)


_PARTIAL_TIME = re.compile(
    r"^([01]\d|2[0-3]):[0-5]\d(:([0-5]\d|60)(\.\d+)?)?(Z|z|[+-]([01]\d|2[0-3]):[0-5]\d)?$"
)

_EMAIL = re.compile(
    r"^(?!\.)(?!.*\.\.)[A-Za-z0-9_'+\-.]*[A-Za-z0-9_+-]@([A-Za-z0-9][A-Za-z0-9\-]*\.)+[A-Za-z]{2,}$"
)

FORMAT_CHECKER = FormatChecker()


@FORMAT_CHECKER.checks("time")
def _is_time_of_day(instance: Any) -> bool:
    # HH:MM[:SS[.frac]] with an optional offset
    if not isinstance(instance, str):
        return True
    return bool(_PARTIAL_TIME.match(instance))


@FORMAT_CHECKER.checks("email")
def _is_email(instance: Any) -> bool:
    # local@domain.tld, no leading or doubled dots in the local part
    if not isinstance(instance, str):
        return True
    return bool(_EMAIL.match(instance))


@dataclass
class ValidationIssue:
    """One conformance failure"""
    path: Tuple[Any, ...]
    message: str
    keyword: str  # failing JSON Schema keyword: "type", "const", "required", ...

    @property
    def location(self) -> str:
        return ".".join(str(p) for p in self.path) or "<root>"

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"


@dataclass
class ValidationResult:
    """Outcome of safe_validate (mirrors a safe-parse result)"""
    success: bool
    data: Any = None
    issues: List[ValidationIssue] = dataclass_field(default_factory=list)

    def __bool__(self) -> bool:
        return self.success


class SchemaValidationError(ValueError):
    """Raised by validate() when a value does not conform"""

    def __init__(self, issues: List[ValidationIssue]):
        self.issues = issues
        details = "; ".join(str(issue) for issue in issues[:5])
        if len(issues) > 5:
            details += f" (+{len(issues) - 5} more)"
        super().__init__(f"Value does not conform to schema: {details}")


class SchemaValidator:
    """
    Checks values against one schema description

    Usage:
    ```python
    schema_set = schemas_from_resources(resources)
    validator = SchemaValidator(schema_set.schemas["Book"])
    result = validator.safe_validate({"@id": "/books/1", "@type": "Book"})
    if not result.success:
        for issue in result.issues:
            print(issue)
    ```
    """

    def __init__(self, schema: SchemaNode, context: Optional[ResolutionContext] = None):
        """
        Args:
            schema: Schema description to check against
            context: Context for lazy references (found in schema if omitted)
        """
        self.schema = schema
        if context is None:
            context = find_context(schema)
        self.context = context if context is not None else ResolutionContext()
        self._json_schema = schema.to_json_schema()
        self._resources: Dict[str, Resource] = {}
        self._validator = Draft202012Validator(
            self._json_schema,
            registry=Registry(retrieve=self._retrieve),
            format_checker=FORMAT_CHECKER,
        )

    @property
    def json_schema(self) -> Dict[str, Any]:
        return self._json_schema

    def _retrieve(self, uri: str) -> Resource:
        """Registry hook: dereference a lazy resource reference"""
        title = title_from_urn(uri)
        if title is None:
            raise NoSuchResource(ref=uri)

        if title not in self._resources:
            schema = self.context.resolve(title)
            self._resources[title] = DRAFT202012.create_resource(schema.to_json_schema())
            logger.debug(f"Resolved lazy reference to {title}")
        return self._resources[title]

    def safe_validate(self, value: Any = ABSENT) -> ValidationResult:
        """
        Check a value and report issues instead of raising

        Raises:
            ResourceReferenceError: a lazy reference could not be resolved
        """
        schema = self.schema
        if isinstance(schema, PreprocessedSchema):
            if value is not ABSENT:
                value = schema.preprocess(value)
            schema = schema.inner

        if value is ABSENT:
            if isinstance(schema, OptionalSchema):
                return ValidationResult(success=True, data=ABSENT)
            issue = ValidationIssue(path=(), message="Value is required", keyword="required")
            return ValidationResult(success=False, issues=[issue])

        try:
            issues = [
                ValidationIssue(
                    path=tuple(error.absolute_path),
                    message=error.message,
                    keyword=str(error.validator),
                )
                for error in self._validator.iter_errors(value)
            ]
        except Unresolvable as error:
            raise _reference_error(error) from error

        if issues:
            return ValidationResult(success=False, issues=issues)
        return ValidationResult(success=True, data=value)

    def validate(self, value: Any = ABSENT) -> Any:
        """
        Check a value and return the accepted data

        Raises:
            SchemaValidationError: value does not conform
            ResourceReferenceError: a lazy reference could not be resolved
        """
        result = self.safe_validate(value)
        if not result.success:
            raise SchemaValidationError(result.issues)
        return result.data

    def is_valid(self, value: Any = ABSENT) -> bool:
        return self.safe_validate(value).success


def _reference_error(error: BaseException) -> ResourceReferenceError:
    """Dig the context error out of the referencing exception chain"""
    current: Optional[BaseException] = error
    while current is not None:
        if isinstance(current, ResourceReferenceError):
            return current
        current = current.__cause__
    ref = getattr(error, "ref", str(error))
    return UnknownResourceReference(title_from_urn(ref) or ref)


def safe_validate(schema: SchemaNode, value: Any = ABSENT) -> ValidationResult:
    """Check value against schema without raising on conformance failures"""
    return SchemaValidator(schema).safe_validate(value)


def validate(schema: SchemaNode, value: Any = ABSENT) -> Any:
    """Check value against schema, raising SchemaValidationError on failure"""
    return SchemaValidator(schema).validate(value)
