"""
Record Redactor - MCP Server for parameterized record redaction

A local MCP (Model Context Protocol) server that lets AI agents redact
sensitive fields from records before they are logged or shared.

Tools:
    - redact_record: Redact one record according to a parameterization
    - redact_records: Redact a batch of records with the same parameterization
    - list_redaction_fields: Show which fields have redaction rules
    - describe_config: Show the validated (masked) server configuration

Startup:
    The environment is validated against APP_SCHEMA before the transport is
    opened. Any problem is reported on stderr and the process exits with
    status 1; a misconfigured server never starts serving.
"""

import logging
import sys
from typing import Any, Mapping, Optional

from mcp.server.fastmcp import FastMCP

from envconfig import FieldSpec, FieldType, Schema, ValidatedConfig, initialize_or_exit
from redaction import (
    ParameterizationSpec,
    RedactionEngine,
    RedactionError,
    UnregisteredRedactionField,
    parse_parameterization,
)

logger = logging.getLogger(__name__)

ENV_FILE = ".env"

APP_SCHEMA = Schema([
    FieldSpec("SERVICE_NAME", FieldType.STRING, required=False, default="record-redactor",
              description="Name advertised by the MCP server"),
    FieldSpec("LOG_LEVEL", FieldType.ENUM, required=False, default="INFO",
              choices=("DEBUG", "INFO", "WARNING", "ERROR")),
    FieldSpec("MCP_TRANSPORT", FieldType.ENUM, required=False, default="stdio",
              choices=("stdio", "sse", "streamable-http")),
    FieldSpec("MAX_BATCH_SIZE", FieldType.NUMBER, required=False, default="100",
              description="Largest batch accepted by redact_records"),
    FieldSpec("DEFAULT_REDACTION_SPEC", FieldType.STRING, required=False,
              description='JSON parameterization used when a call gives none, e.g. {"ssn": true}'),
])


class RedactionService:
    """
    Tool implementations, with every collaborator injected.

    Kept separate from the FastMCP wiring so tests can call the tools as
    plain methods.
    """

    def __init__(
        self,
        config: ValidatedConfig,
        engine: RedactionEngine,
        default_spec: Optional[ParameterizationSpec] = None,
    ):
        self._config = config
        self._engine = engine
        self._default_spec = default_spec or ParameterizationSpec()

    def _resolve_spec(self, redaction_spec: Optional[str]) -> ParameterizationSpec:
        if redaction_spec is None:
            return self._default_spec
        return parse_parameterization(redaction_spec)

    def redact_record(self, record: dict[str, Any], redaction_spec: Optional[str] = None) -> dict[str, Any]:
        """
        Redact sensitive fields from a single record.

        Args:
            record: The record to redact, e.g. {"firstName": "Howard", "ssn": "123456789"}
            redaction_spec: JSON object of field -> true/false. Defaults to the
                            server's DEFAULT_REDACTION_SPEC.

        Returns:
            A dictionary containing:
            - status: "success" or "error"
            - record: The redacted copy of the record
            - redacted_fields: Fields the parameterization enabled
        """
        try:
            spec = self._resolve_spec(redaction_spec)
            redacted = self._engine.redact(record, spec)
        except RedactionError as e:
            return {"status": "error", "message": str(e)}

        return {
            "status": "success",
            "record": redacted,
            "redacted_fields": [f for f in self._engine.registry.fields if f in spec.enabled()],
        }

    def redact_records(self, records: list[dict[str, Any]], redaction_spec: Optional[str] = None) -> dict[str, Any]:
        """
        Redact a batch of records with one parameterization.

        The batch is rejected if it is larger than MAX_BATCH_SIZE.
        """
        max_batch = self._config.get("MAX_BATCH_SIZE")
        if len(records) > max_batch:
            return {
                "status": "error",
                "message": f"Batch of {len(records)} exceeds MAX_BATCH_SIZE ({max_batch})",
            }

        try:
            spec = self._resolve_spec(redaction_spec)
            redacted = self._engine.redact_batch(records, spec)
        except RedactionError as e:
            return {"status": "error", "message": str(e)}

        return {"status": "success", "records": redacted, "count": len(redacted)}

    def list_redaction_fields(self) -> dict[str, Any]:
        """List the fields that have redaction rules, in application order."""
        return {
            "status": "success",
            "fields": [
                {"field": rule.field, "description": rule.description}
                for rule in self._engine.registry
            ],
            "default_spec": dict(self._default_spec),
        }

    def describe_config(self) -> dict[str, Any]:
        """Return the server's validated configuration with secrets masked."""
        return {"status": "success", "config": self._config.summary()}


def create_server(config: ValidatedConfig, service: RedactionService) -> FastMCP:
    """Wire the service's tools into a FastMCP server."""
    mcp = FastMCP(
        config.get("SERVICE_NAME"),
        instructions="MCP Server for redacting sensitive fields from records",
    )

    @mcp.tool()
    def redact_record(record: dict[str, Any], redaction_spec: Optional[str] = None) -> dict[str, Any]:
        """Redact sensitive fields from one record. redaction_spec is a JSON object of field -> true/false."""
        return service.redact_record(record, redaction_spec)

    @mcp.tool()
    def redact_records(records: list[dict[str, Any]], redaction_spec: Optional[str] = None) -> dict[str, Any]:
        """Redact a batch of records with one parameterization."""
        return service.redact_records(records, redaction_spec)

    @mcp.tool()
    def list_redaction_fields() -> dict[str, Any]:
        """List the fields that have redaction rules."""
        return service.list_redaction_fields()

    @mcp.tool()
    def describe_config() -> dict[str, Any]:
        """Show the validated server configuration (secrets masked)."""
        return service.describe_config()

    return mcp


def build_service(config: ValidatedConfig, engine: Optional[RedactionEngine] = None) -> RedactionService:
    """
    Assemble the service from validated config.

    Raises:
        InvalidParameterization: if DEFAULT_REDACTION_SPEC cannot be decoded.
        UnregisteredRedactionField: if DEFAULT_REDACTION_SPEC names a field
            the engine has no rule for.
    """
    engine = engine or RedactionEngine()
    default_spec = ParameterizationSpec()
    if config.has("DEFAULT_REDACTION_SPEC"):
        default_spec = parse_parameterization(config.get("DEFAULT_REDACTION_SPEC"))
        unknown = [name for name in default_spec if name not in engine.registry]
        if unknown:
            raise UnregisteredRedactionField(unknown)
    return RedactionService(config, engine, default_spec)


def main(environ: Optional[Mapping[str, str]] = None) -> None:
    # stdout belongs to the stdio transport
    logging.basicConfig(level=logging.INFO, stream=sys.stderr)

    # Validate first: nothing is opened until the environment is known good
    config = initialize_or_exit(APP_SCHEMA, environ, env_file=ENV_FILE)
    logging.getLogger().setLevel(config.get("LOG_LEVEL"))

    try:
        service = build_service(config)
    except RedactionError as e:
        print(f"Invalid DEFAULT_REDACTION_SPEC: {e}", file=sys.stderr)
        raise SystemExit(1) from e

    server = create_server(config, service)
    logger.info(f"Starting {config.get('SERVICE_NAME')} over {config.get('MCP_TRANSPORT')}")
    server.run(transport=config.get("MCP_TRANSPORT"))


if __name__ == "__main__":
    main()
