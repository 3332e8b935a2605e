import pytest

from reqbind.binding.coercion import FieldKind
from reqbind.binding.descriptors import FieldConfig, Rule, parse_rules
from reqbind.binding.errors import ConfigurationError
from reqbind.binding.sources import SourceKind
from tests.helpers import make_binder


def test_parse_simple_expression(validator):
    rules = parse_rules("required,min=3,max=50", validator.is_known)
    assert rules == (Rule("required"), Rule("min", "3"), Rule("max", "50"))


def test_parse_keeps_in_choices_together(validator):
    rules = parse_rules("required,min=1,max=5,dive,in=tech,sports,politics", validator.is_known)
    assert [str(r) for r in rules] == ["required", "min=1", "max=5", "dive", "in=tech,sports,politics"]


def test_parse_ignores_blank_tokens(validator):
    assert parse_rules("", validator.is_known) == ()
    assert parse_rules("required,,email,", validator.is_known) == (Rule("required"), Rule("email"))


def test_parse_unknown_rule_is_configuration_error(validator):
    with pytest.raises(ConfigurationError, match="sometimes"):
        parse_rules("required,sometimes", validator.is_known)
    with pytest.raises(ConfigurationError, match="between"):
        parse_rules("between=1", validator.is_known)


def test_compile_rejects_bad_int_param(validator):
    with pytest.raises(ConfigurationError, match="integer parameter"):
        validator.compile_rules("min=three", FieldKind.STRING, "Name")


def test_compile_rejects_rule_for_wrong_kind(validator):
    with pytest.raises(ConfigurationError, match="does not apply"):
        validator.compile_rules("unique", FieldKind.STRING, "Name")
    with pytest.raises(ConfigurationError, match="does not apply"):
        validator.compile_rules("email", FieldKind.UNSIGNED_INT, "UserID")


def test_compile_rejects_dive_on_scalar_and_double_dive(validator):
    with pytest.raises(ConfigurationError, match="dive"):
        validator.compile_rules("dive,min=1", FieldKind.STRING, "Name")
    with pytest.raises(ConfigurationError, match="dive"):
        validator.compile_rules("dive,dive", FieldKind.STRING_LIST, "Tags")


def test_compile_checks_element_kind_after_dive(validator):
    # elements of a uint list are numbers; email is string-only
    with pytest.raises(ConfigurationError, match="does not apply"):
        validator.compile_rules("dive,email", FieldKind.UNSIGNED_INT_LIST, "IDs")


def test_compile_rejects_param_on_paramless_rule(validator):
    with pytest.raises(ConfigurationError, match="takes no parameter"):
        validator.compile_rules("unique=1", FieldKind.STRING_LIST, "Tags")


def test_binder_rejects_unknown_field():
    with pytest.raises(ConfigurationError, match="Unknown field 'Nickname'"):
        make_binder([FieldConfig("Nickname", SourceKind.BODY)])


def test_binder_rejects_undeclared_source():
    # Email has no path key
    with pytest.raises(ConfigurationError, match="cannot be read from 'param'"):
        make_binder([FieldConfig("Email", SourceKind.PATH)])


def test_binder_rejects_uncoercible_default():
    with pytest.raises(ConfigurationError, match="Default 'five'"):
        make_binder([FieldConfig("Rating", SourceKind.QUERY, default="five")])


def test_validator_rejects_group_named_like_a_rule():
    from reqbind.binding.validation import Validator

    with pytest.raises(ConfigurationError, match="reserved"):
        Validator(groups=("create", "email"))


def test_group_name_inside_in_choices_is_configuration_error(validator):
    with pytest.raises(ConfigurationError, match="directly follows 'in=create'"):
        validator.compile_rules("in=create,update,delete", FieldKind.STRING, "Role")


def test_rule_name_right_after_in_choices_is_configuration_error(validator):
    with pytest.raises(ConfigurationError, match="'email' directly follows"):
        validator.compile_rules("in=work,email", FieldKind.STRING, "Email")


def test_parameterised_rule_after_in_is_fine(validator):
    rules = validator.compile_rules("in=ab,cd,min=2", FieldKind.STRING, "Role")
    assert [str(r) for r in rules] == ["in=ab,cd", "min=2"]
