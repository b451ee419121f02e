"""ValidationService — schema and document loading, matching, self-check.

Schemas are referenced as ``module:attribute`` (``myapp.schemas:user``) or
``path/to/file.py:attribute``, or by an alias from the ``[schemas]`` table
of ``shapecheck.toml``. The attribute may be a :class:`Schema`, a
:class:`RuleSet`, or the mapping/list shorthand accepted by
:func:`shapecheck.services.guard.as_schema`.

Documents are JSON, or YAML when the file suffix says so; ``-`` reads JSON
from stdin.
"""

from __future__ import annotations

import functools
import importlib
import importlib.util
import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from shapecheck.domain.matcher import Violation
from shapecheck.domain.patterns import PATTERNS
from shapecheck.domain.rules import RuleSet
from shapecheck.domain.schema import Schema
from shapecheck.services.guard import as_schema
from shapecheck.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from collections.abc import Iterable
    from types import ModuleType

    from shapecheck.config.settings import ShapecheckSettings

logger = logging.getLogger(__name__)

STDIN_MARKER = "-"

# Error codes
SCHEMA_NOT_FOUND = "SCHEMA_NOT_FOUND"
INVALID_SCHEMA = "INVALID_SCHEMA"
INVALID_DOCUMENT = "INVALID_DOCUMENT"
VALIDATION_FAILED = "VALIDATION_FAILED"
MALFORMED_SCHEMA = "MALFORMED_SCHEMA"
MATCH_ERROR = "MATCH_ERROR"


class LoadError(Exception):
    """A schema or document could not be loaded."""

    def __init__(self, code: str, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.error = ServiceError(code=code, message=message, detail=detail)


def violations_payload(violations: Iterable[Violation]) -> list[dict[str, Any]]:
    """Serializable form of *violations*."""
    return [
        {"path": list(v.path), "location": v.location, "message": v.message} for v in violations
    ]


class ValidationService:
    """Loads schemas and documents and runs the matcher over them."""

    def __init__(self, settings: ShapecheckSettings) -> None:
        self._settings = settings

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def resolve_reference(self, ref: str) -> str:
        """Expand a configured alias; other references pass through."""
        return self._settings.schemas.get(ref, ref)

    def load_schema(self, ref: str) -> Schema:
        """Import the schema named by *ref*.

        Raises:
            LoadError: With code ``SCHEMA_NOT_FOUND`` or ``INVALID_SCHEMA``.
        """
        target = self.resolve_reference(ref)
        module_name, sep, attribute = target.partition(":")
        if not sep or not module_name or not attribute:
            msg = f"Schema reference must look like 'module:attribute', got {target!r}"
            raise LoadError(SCHEMA_NOT_FOUND, msg, ref=ref)

        module = self._import(module_name, ref)
        try:
            obj = functools.reduce(getattr, attribute.split("."), module)
        except AttributeError as exc:
            msg = f"Module {module_name!r} has no attribute {attribute!r}"
            raise LoadError(SCHEMA_NOT_FOUND, msg, ref=ref) from exc

        if isinstance(obj, RuleSet):
            return Schema(obj)
        try:
            schema = as_schema(obj)
        except TypeError as exc:
            raise LoadError(INVALID_SCHEMA, str(exc), ref=ref) from exc
        logger.debug("Loaded schema %s from %s", attribute, module_name)
        return schema

    def _import(self, module_name: str, ref: str) -> ModuleType:
        if not module_name.endswith(".py"):
            try:
                return importlib.import_module(module_name)
            except ImportError as exc:
                msg = f"Cannot import schema module {module_name!r}: {exc}"
                raise LoadError(SCHEMA_NOT_FOUND, msg, ref=ref) from exc

        path = Path(module_name)
        if not path.is_absolute():
            path = self._settings.project_root / path
        if not path.is_file():
            msg = f"Schema file not found: {path}"
            raise LoadError(SCHEMA_NOT_FOUND, msg, ref=ref)

        spec = importlib.util.spec_from_file_location(f"_shapecheck_schema_{path.stem}", path)
        if spec is None or spec.loader is None:
            msg = f"Cannot load schema file: {path}"
            raise LoadError(SCHEMA_NOT_FOUND, msg, ref=ref)
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module

    def load_document(self, source: str) -> Any:
        """Read and decode the document at *source* (``-`` for stdin).

        Raises:
            LoadError: With code ``INVALID_DOCUMENT``.
        """
        config = self._settings.documents
        if source == STDIN_MARKER:
            text = sys.stdin.read()
            suffix = ".json"
        else:
            path = Path(source)
            try:
                text = path.read_text(encoding=config.encoding)
            except OSError as exc:
                msg = f"Unable to read document: {source}"
                raise LoadError(INVALID_DOCUMENT, msg, document=source) from exc
            suffix = path.suffix.lower()

        if suffix in config.yaml_suffixes:
            try:
                return YAML(typ="safe", pure=True).load(text)
            except YAMLError as exc:
                msg = f"Document is not valid YAML: {exc}"
                raise LoadError(INVALID_DOCUMENT, msg, document=source) from exc
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            msg = (
                f"Document is not valid JSON ({exc.msg}) "
                f"at line {exc.lineno} column {exc.colno}"
            )
            raise LoadError(INVALID_DOCUMENT, msg, document=source) from exc

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def validate(self, schema_ref: str, document: str) -> ServiceResult:
        """Match the document at *document* against the schema *schema_ref*."""
        op = "validate"
        try:
            schema = self.load_schema(schema_ref)
            value = self.load_document(document)
        except LoadError as exc:
            return ServiceResult(ok=False, op=op, error=exc.error)

        try:
            valid, violations = schema.validate(value)
        except Exception as exc:
            # Coercer failures and unknown kinds are hard failures of the matcher.
            logger.debug("Matcher raised for %s", schema_ref, exc_info=True)
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code=MATCH_ERROR,
                    message=f"{type(exc).__name__}: {exc}",
                    detail={"schema": schema_ref, "document": document},
                ),
            )

        data = {
            "schema": schema_ref,
            "document": document,
            "valid": valid,
            "count": len(violations),
            "violations": violations_payload(violations),
        }
        logger.debug(
            "Validated %s against %s: %d violation(s)", document, schema_ref, len(violations)
        )
        if valid:
            return ServiceResult(ok=True, op=op, data=data)
        return ServiceResult(
            ok=False,
            op=op,
            data=data,
            error=ServiceError(
                code=VALIDATION_FAILED,
                message=f"Document does not conform ({len(violations)} violation(s))",
            ),
        )

    def check(self, schema_ref: str, *, deep: bool | None = None) -> ServiceResult:
        """Self-check the rule set of *schema_ref*."""
        op = "check"
        if deep is None:
            deep = self._settings.check.deep
        try:
            schema = self.load_schema(schema_ref)
        except LoadError as exc:
            return ServiceResult(ok=False, op=op, error=exc.error)

        valid, violations = schema.check(deep=deep)
        data = {
            "schema": schema_ref,
            "deep": deep,
            "valid": valid,
            "count": len(violations),
            "violations": violations_payload(violations),
        }
        if valid:
            return ServiceResult(ok=True, op=op, data=data)
        return ServiceResult(
            ok=False,
            op=op,
            data=data,
            error=ServiceError(
                code=MALFORMED_SCHEMA,
                message=f"Schema rule set is malformed ({len(violations)} violation(s))",
            ),
        )

    def patterns(self) -> ServiceResult:
        """List the named-pattern table."""
        return ServiceResult(
            ok=True,
            op="patterns",
            data={"patterns": {name: pattern.pattern for name, pattern in PATTERNS.items()}},
        )
