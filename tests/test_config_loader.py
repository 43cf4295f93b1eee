"""
Tests for the environment ConfigLoader.

Tests cover:
- Schema declaration rules
- Successful validation and typing
- Aggregate violation reporting
- has() / get() semantics and immutability
- .env file support and fail-fast exit
"""

import io

import pytest
from envconfig import (
    ConfigurationInvalid,
    FieldSpec,
    FieldType,
    InvalidEnumValue,
    MissingRequiredField,
    Schema,
    SchemaError,
    TypeMismatch,
    UnknownOrUnsetField,
    initialize,
    initialize_or_exit,
)


@pytest.fixture
def schema():
    return Schema([
        FieldSpec("DATABASE_URL", FieldType.STRING, secret=True),
        FieldSpec("PORT", FieldType.NUMBER),
        FieldSpec("NODE_ENV", FieldType.ENUM, choices=("development", "production", "test")),
        FieldSpec("TIMEOUT", FieldType.NUMBER, required=False),
        FieldSpec("REGION", FieldType.STRING, required=False, default="us-east-1"),
    ])


@pytest.fixture
def valid_env():
    return {
        "DATABASE_URL": "postgres://db/app",
        "PORT": "8080",
        "NODE_ENV": "production",
    }


class TestSchema:
    """Test suite for schema declarations."""

    def test_duplicate_names_rejected(self):
        """Should refuse two declarations with the same name."""
        with pytest.raises(SchemaError):
            Schema([FieldSpec("PORT"), FieldSpec("PORT", FieldType.NUMBER)])

    def test_enum_requires_choices(self):
        """Should refuse an enum with no permitted values."""
        with pytest.raises(SchemaError):
            FieldSpec("MODE", FieldType.ENUM)

    def test_choices_must_not_be_a_bare_string(self):
        """Should refuse a string where a sequence of choices is expected."""
        with pytest.raises(SchemaError):
            FieldSpec("NODE_ENV", FieldType.ENUM, choices="prod")

    def test_choices_only_for_enums(self):
        """Should refuse choices on a non-enum field."""
        with pytest.raises(SchemaError):
            FieldSpec("MODE", FieldType.STRING, choices=("a",))

    def test_required_field_cannot_have_default(self):
        """Should refuse a default on a required field."""
        with pytest.raises(SchemaError):
            FieldSpec("PORT", FieldType.NUMBER, default="80")

    def test_accepts_type_as_string(self):
        """Should accept the plain type name."""
        assert FieldSpec("PORT", "number").type is FieldType.NUMBER

    def test_unknown_type_rejected(self):
        """Should refuse an undeclared type name."""
        with pytest.raises(SchemaError):
            FieldSpec("FLAG", "boolean")

    def test_preserves_declaration_order(self, schema):
        """Should iterate fields in declaration order."""
        assert schema.names == ["DATABASE_URL", "PORT", "NODE_ENV", "TIMEOUT", "REGION"]


class TestInitialize:
    """Test suite for successful validation."""

    def test_returns_typed_values(self, schema, valid_env):
        """Should return every declared value, typed."""
        config = initialize(schema, valid_env)

        assert config.get("DATABASE_URL") == "postgres://db/app"
        assert config.get("PORT") == 8080
        assert isinstance(config.get("PORT"), int)
        assert config.get("NODE_ENV") == "production"

    def test_float_numbers(self, schema, valid_env):
        """Should parse non-integer numbers as floats."""
        config = initialize(schema, {**valid_env, "TIMEOUT": "2.5"})
        assert config.get("TIMEOUT") == 2.5

    def test_applies_defaults(self, schema, valid_env):
        """Should fill optional fields from their default."""
        config = initialize(schema, valid_env)
        assert config.get("REGION") == "us-east-1"

    def test_explicit_value_beats_default(self, schema, valid_env):
        """Should prefer the environment over the default."""
        config = initialize(schema, {**valid_env, "REGION": "eu-west-1"})
        assert config.get("REGION") == "eu-west-1"

    def test_undeclared_variables_ignored(self, schema, valid_env):
        """Should not leak undeclared environment entries."""
        config = initialize(schema, {**valid_env, "HOME": "/root", "SECRET_TOKEN": "x"})

        assert "HOME" not in config
        assert "SECRET_TOKEN" not in config
        assert set(config) == {"DATABASE_URL", "PORT", "NODE_ENV", "REGION"}

    def test_optional_unset_field_is_absent(self, schema, valid_env):
        """Should leave out optional fields with no value and no default."""
        config = initialize(schema, valid_env)
        assert "TIMEOUT" not in config

    def test_reads_process_environment_by_default(self, monkeypatch):
        """Should read os.environ when no mapping is injected."""
        monkeypatch.setenv("ENVCONFIG_TEST_VALUE", "from-os")
        config = initialize(Schema([FieldSpec("ENVCONFIG_TEST_VALUE")]))
        assert config.get("ENVCONFIG_TEST_VALUE") == "from-os"

    def test_does_not_mutate_input(self, schema, valid_env):
        """Should leave the injected environment untouched."""
        before = dict(valid_env)
        initialize(schema, valid_env)
        assert valid_env == before


class TestViolations:
    """Test suite for validation failures."""

    def test_missing_required_field(self, schema, valid_env):
        """Should name the missing field."""
        del valid_env["PORT"]

        with pytest.raises(ConfigurationInvalid) as exc_info:
            initialize(schema, valid_env)

        assert exc_info.value.field_names == ["PORT"]
        assert isinstance(exc_info.value.violations[0], MissingRequiredField)
        assert "PORT" in str(exc_info.value)

    def test_empty_string_counts_as_missing(self, schema, valid_env):
        """Should treat an empty required value as unset."""
        with pytest.raises(ConfigurationInvalid) as exc_info:
            initialize(schema, {**valid_env, "DATABASE_URL": ""})

        assert isinstance(exc_info.value.violations[0], MissingRequiredField)

    def test_type_mismatch(self, schema, valid_env):
        """Should report a non-numeric number."""
        with pytest.raises(ConfigurationInvalid) as exc_info:
            initialize(schema, {**valid_env, "PORT": "eighty"})

        violation = exc_info.value.violations[0]
        assert isinstance(violation, TypeMismatch)
        assert violation.name == "PORT"
        assert violation.expected == "number"
        assert violation.actual == "eighty"

    def test_non_finite_number_rejected(self, schema, valid_env):
        """Should refuse NaN and infinity."""
        with pytest.raises(ConfigurationInvalid) as exc_info:
            initialize(schema, {**valid_env, "TIMEOUT": "nan"})

        assert isinstance(exc_info.value.violations[0], TypeMismatch)

    def test_overflowing_number_rejected(self, schema, valid_env):
        """Should refuse a literal that overflows to infinity."""
        with pytest.raises(ConfigurationInvalid) as exc_info:
            initialize(schema, {**valid_env, "TIMEOUT": "1e999"})

        assert exc_info.value.violations[0].expected == "finite number"

    @pytest.mark.parametrize("raw", ["1_000", " 8080", "8080 ", "8080\n", "0x10", "1.2.3"])
    def test_loose_number_literals_rejected(self, schema, valid_env, raw):
        """Should accept only plain decimal number literals."""
        with pytest.raises(ConfigurationInvalid) as exc_info:
            initialize(schema, {**valid_env, "PORT": raw})

        assert isinstance(exc_info.value.violations[0], TypeMismatch)

    @pytest.mark.parametrize("raw,expected", [("-5", -5), ("+7", 7), ("1e3", 1000.0), (".5", 0.5)])
    def test_number_literal_forms(self, schema, valid_env, raw, expected):
        """Should accept signed, exponent and leading-dot literals."""
        config = initialize(schema, {**valid_env, "TIMEOUT": raw})
        assert config.get("TIMEOUT") == expected

    def test_secret_values_masked_in_violations(self, valid_env, caplog):
        """Should never put a secret's raw value in the error or the logs."""
        schema = Schema([
            FieldSpec("DB_PIN", FieldType.NUMBER, secret=True),
            FieldSpec("DB_MODE", FieldType.ENUM, choices=("ro", "rw"), secret=True),
        ])
        stream = io.StringIO()

        with pytest.raises(SystemExit):
            initialize_or_exit(
                schema,
                {"DB_PIN": "hunter2-topsecret", "DB_MODE": "rw-topsecret"},
                stream=stream,
            )

        output = stream.getvalue()
        assert "DB_PIN" in output
        assert "DB_MODE" in output
        assert "topsecret" not in output
        assert "topsecret" not in caplog.text

    def test_secret_violation_attribute_masked(self, valid_env):
        """Should mask the actual value carried by the violation."""
        schema = Schema([FieldSpec("DB_PIN", FieldType.NUMBER, secret=True)])

        with pytest.raises(ConfigurationInvalid) as exc_info:
            initialize(schema, {"DB_PIN": "hunter2"})

        assert exc_info.value.violations[0].actual == "***"

    def test_violations_logged_by_name(self, schema, caplog):
        """Should log the violated field names once, without values."""
        with pytest.raises(ConfigurationInvalid):
            initialize(schema, {"PORT": "eighty", "NODE_ENV": "staging"})

        errors = [r for r in caplog.records if r.levelname == "ERROR"]
        assert len(errors) == 1
        assert "DATABASE_URL, PORT, NODE_ENV" in errors[0].getMessage()
        assert "eighty" not in caplog.text

    def test_invalid_enum_value(self, schema, valid_env):
        """Should report a value outside the enum."""
        with pytest.raises(ConfigurationInvalid) as exc_info:
            initialize(schema, {**valid_env, "NODE_ENV": "staging"})

        violation = exc_info.value.violations[0]
        assert isinstance(violation, InvalidEnumValue)
        assert violation.allowed == ("development", "production", "test")
        assert violation.actual == "staging"

    def test_collects_all_violations(self, schema):
        """Should report every problem at once, in declaration order."""
        env = {"PORT": "abc", "NODE_ENV": "staging"}

        with pytest.raises(ConfigurationInvalid) as exc_info:
            initialize(schema, env)

        assert exc_info.value.field_names == ["DATABASE_URL", "PORT", "NODE_ENV"]
        message = str(exc_info.value)
        assert "3 problem(s)" in message
        for name in ("DATABASE_URL", "PORT", "NODE_ENV"):
            assert name in message

    def test_invalid_default_is_reported(self, valid_env):
        """Should validate defaults like any other value."""
        schema = Schema([FieldSpec("RETRIES", FieldType.NUMBER, required=False, default="many")])

        with pytest.raises(ConfigurationInvalid) as exc_info:
            initialize(schema, valid_env)

        assert exc_info.value.field_names == ["RETRIES"]


class TestValidatedConfig:
    """Test suite for has(), get() and immutability."""

    def test_get_required_fields_never_raises(self, schema, valid_env):
        """Should return a value for every required field."""
        config = initialize(schema, valid_env)
        for spec in schema:
            if spec.required:
                config.get(spec.name)

    def test_get_unknown_field_raises(self, schema, valid_env):
        """Should raise rather than return a sentinel."""
        config = initialize(schema, valid_env)

        with pytest.raises(UnknownOrUnsetField):
            config.get("NOT_DECLARED")
        with pytest.raises(UnknownOrUnsetField):
            config.get("TIMEOUT")

    def test_unknown_field_is_lookup_error(self, schema, valid_env):
        """Should be catchable as a LookupError."""
        config = initialize(schema, valid_env)
        with pytest.raises(LookupError):
            config["NOT_DECLARED"]

    def test_has(self, schema, valid_env):
        """Should be true only for present, non-falsy values."""
        config = initialize(schema, valid_env)

        assert config.has("PORT") is True
        assert config.has("TIMEOUT") is False
        assert config.has("NOT_DECLARED") is False

    def test_has_is_false_for_zero(self, schema, valid_env):
        """Should treat a falsy value as not set."""
        config = initialize(schema, {**valid_env, "TIMEOUT": "0"})

        assert config.get("TIMEOUT") == 0
        assert config.has("TIMEOUT") is False

    def test_is_immutable(self, schema, valid_env):
        """Should refuse attribute assignment."""
        config = initialize(schema, valid_env)

        with pytest.raises(TypeError):
            config.PORT = 9090
        with pytest.raises(TypeError):
            config["PORT"] = 9090

    def test_as_dict_is_a_copy(self, schema, valid_env):
        """Should not let changes to as_dict() leak back."""
        config = initialize(schema, valid_env)
        values = config.as_dict()
        values["PORT"] = 1

        assert config.get("PORT") == 8080

    def test_secrets_masked(self, schema, valid_env):
        """Should mask secret fields in summary() and repr()."""
        config = initialize(schema, valid_env)

        assert config.summary()["DATABASE_URL"] == "***"
        assert config.summary()["PORT"] == 8080
        assert "postgres://db/app" not in repr(config)


class TestEnvFile:
    """Test suite for .env support."""

    def test_reads_env_file(self, schema, tmp_path):
        """Should pick up values from a .env file."""
        env_file = tmp_path / ".env"
        env_file.write_text("DATABASE_URL=postgres://file/app\nPORT=5000\nNODE_ENV=test\n")

        config = initialize(schema, {}, env_file=env_file)

        assert config.get("DATABASE_URL") == "postgres://file/app"
        assert config.get("PORT") == 5000

    def test_environment_overrides_env_file(self, schema, valid_env, tmp_path):
        """Should prefer real environment values over the file."""
        env_file = tmp_path / ".env"
        env_file.write_text("PORT=5000\n")

        config = initialize(schema, valid_env, env_file=env_file)

        assert config.get("PORT") == 8080

    def test_missing_env_file_is_ignored(self, schema, valid_env, tmp_path):
        """Should validate normally when the file does not exist."""
        config = initialize(schema, valid_env, env_file=tmp_path / "absent.env")
        assert config.get("PORT") == 8080


class TestInitializeOrExit:
    """Test suite for the fail-fast entrypoint helper."""

    def test_returns_config_when_valid(self, schema, valid_env):
        """Should behave like initialize() on success."""
        config = initialize_or_exit(schema, valid_env)
        assert config.get("NODE_ENV") == "production"

    def test_exits_with_aggregate_message(self, schema):
        """Should print every violation and exit non-zero."""
        stream = io.StringIO()

        with pytest.raises(SystemExit) as exc_info:
            initialize_or_exit(schema, {"PORT": "x"}, stream=stream)

        assert exc_info.value.code == 1
        output = stream.getvalue()
        assert "DATABASE_URL" in output
        assert "PORT" in output
        assert "NODE_ENV" in output

    def test_writes_to_stderr_by_default(self, schema, capsys):
        """Should report on stderr, not stdout."""
        with pytest.raises(SystemExit):
            initialize_or_exit(schema, {})

        captured = capsys.readouterr()
        assert "DATABASE_URL" in captured.err
        assert captured.out == ""
