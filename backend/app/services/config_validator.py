"""
Validation of site configuration documents.

Wraps the pydantic schemas in ``app.schemas.site_config`` and translates their
errors into path-qualified violations such as::

    "handlers.broken-backlinks.groupedURLs" must be an array
"""
import re
from typing import Any

from pydantic import BaseModel, ValidationError

from app.core.exceptions import (
    ConfigSchemaViolation,
    ConfigValidationError,
    InvalidImportConfigError,
    UnknownImportTypeError,
    Violation,
)
from app.schemas.site_config import IMPORT_SCHEMAS, SiteConfigSchema

UNION_MISMATCH = "union_mismatch"

_MESSAGES = {
    "missing": "is required",
    "extra_forbidden": "is not allowed",
    "string_type": "must be a string",
    "bool_type": "must be a boolean",
    "bool_parsing": "must be a boolean",
    "int_type": "must be a number",
    "int_parsing": "must be a number",
    "int_from_float": "must be an integer",
    "float_type": "must be a number",
    "float_parsing": "must be a number",
    "list_type": "must be an array",
    "dict_type": "must be of type object",
    "model_type": "must be of type object",
    "model_attributes_type": "must be of type object",
    "greater_than_equal": "must be greater than or equal to {ge}",
    "greater_than": "must be greater than {gt}",
    "less_than_equal": "must be less than or equal to {le}",
    "less_than": "must be less than {lt}",
    "union_tag_invalid": "does not match any of the allowed types",
    "union_tag_not_found": "does not match any of the allowed types",
}

_LITERAL_VALUE = re.compile(r"'((?:[^'\\]|\\.)*)'")


def format_path(path: tuple[str | int, ...]) -> str:
    """Render a location as ``imports[0].destinations[0]``."""
    label = ""
    for segment in path:
        if isinstance(segment, int):
            label += f"[{segment}]"
        elif label:
            label += f".{segment}"
        else:
            label = str(segment)
    return label or "value"


def _normalize_path(loc: tuple[str | int, ...]) -> tuple[str | int, ...]:
    # Discriminated unions put the matched tag into the location
    if len(loc) >= 3 and loc[0] == "imports" and isinstance(loc[1], int) and loc[2] in IMPORT_SCHEMAS:
        return loc[:2] + loc[3:]
    return loc


def _describe(error: dict[str, Any]) -> tuple[str, dict[str, Any]]:
    error_type = error["type"]
    ctx = dict(error.get("ctx") or {})
    extra: dict[str, Any] = {}

    if error_type == "literal_error":
        valids = _LITERAL_VALUE.findall(str(ctx.get("expected", "")))
        extra["valids"] = valids
        if len(valids) == 1:
            return f"must be [{valids[0]}]", extra
        return f"must be one of [{', '.join(valids)}]", extra

    for bound in ("ge", "gt", "le", "lt"):
        if bound in ctx:
            # Float fields report integral bounds as 1.0
            if isinstance(ctx[bound], float) and ctx[bound].is_integer():
                ctx[bound] = int(ctx[bound])
            extra["limit"] = ctx[bound]

    template = _MESSAGES.get(error_type)
    if template is None:
        return error["msg"][:1].lower() + error["msg"][1:], extra
    return template.format(**ctx), extra


def _violation(error: dict[str, Any]) -> Violation:
    path = _normalize_path(tuple(error["loc"]))
    label = format_path(path)
    text, extra = _describe(error)
    context = {
        "label": label,
        "key": path[-1] if path else None,
        "value": error.get("input"),
        **extra,
    }
    return Violation(
        message=f'"{label}" {text}',
        path=path,
        type=error["type"],
        context=context,
    )


def _import_index(path: tuple[str | int, ...]) -> int | None:
    if len(path) >= 2 and path[0] == "imports" and isinstance(path[1], int):
        return path[1]
    return None


def _collapse_import_mismatches(violations: list[Violation], candidate: Any) -> list[Violation]:
    """Report an import entry as a whole when no variant can be attributed.

    That is the case when the ``type`` tag is missing or unknown, or a required
    field of the tagged variant is absent.
    """
    by_index: dict[int, list[Violation]] = {}
    for violation in violations:
        index = _import_index(violation.path)
        if index is not None:
            by_index.setdefault(index, []).append(violation)

    mismatched = {
        index
        for index, group in by_index.items()
        if any(v.path == ("imports", index) or v.type == "missing" for v in group)
    }
    if not mismatched:
        return violations

    imports = candidate.get("imports") if isinstance(candidate, dict) else None
    result = []
    for violation in violations:
        index = _import_index(violation.path)
        if index not in mismatched:
            result.append(violation)
            continue
        if index not in by_index:
            continue
        group = by_index.pop(index)
        path = ("imports", index)
        label = format_path(path)
        result.append(
            Violation(
                message=f'"{label}" does not match any of the allowed types',
                path=path,
                type=UNION_MISMATCH,
                context={
                    "label": label,
                    "key": index,
                    "value": imports[index] if isinstance(imports, list) and index < len(imports) else None,
                    "message": ". ".join(v.message for v in group),
                    "details": [v.to_dict() for v in group],
                },
            )
        )
    return result


def collect_violations(error: ValidationError, candidate: Any = None) -> list[Violation]:
    """Translate a pydantic ``ValidationError`` into structured violations."""
    violations = [_violation(e) for e in error.errors(include_url=False)]
    return _collapse_import_mismatches(violations, candidate)


def _dump(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(by_alias=True, exclude_unset=True)


def validate_configuration(candidate: Any) -> dict[str, Any]:
    """Validate a configuration document and return its sanitized copy.

    ``None`` means no configuration and validates to an empty document.

    Raises:
        ConfigValidationError: if any rule is violated. The exception is
            chained to a ``ConfigSchemaViolation`` carrying the details.
    """
    if candidate is None:
        candidate = {}
    try:
        model = SiteConfigSchema.model_validate(candidate)
    except ValidationError as e:
        violation = ConfigSchemaViolation(collect_violations(e, candidate))
        violation.__cause__ = e
        raise ConfigValidationError(violation) from violation
    return _dump(model)


def validate_import_config(import_type: str, candidate: Any) -> dict[str, Any]:
    """Validate a single import job body against the schema of its type."""
    schema = IMPORT_SCHEMAS.get(import_type)
    if schema is None:
        raise UnknownImportTypeError(import_type)
    try:
        model = schema.model_validate(candidate)
    except ValidationError as e:
        violation = ConfigSchemaViolation(collect_violations(e))
        violation.__cause__ = e
        raise InvalidImportConfigError(violation) from violation
    return _dump(model)
