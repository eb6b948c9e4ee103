"""
Tests for the rule tag grammar parser.
"""

import pytest

from fieldrules.validation.tags import RuleSpec, parse_tag


class TestParseTag:
    """Grammar: comma-separated rules, ?-delimited params, &-separated values."""

    def test_empty_tag_has_no_rules(self):
        assert parse_tag("") == ()

    def test_single_rule_with_positional_param(self):
        specs = parse_tag("min?10")

        assert len(specs) == 1
        assert specs[0].name == "min"
        assert specs[0].params == {"0": "10"}
        assert specs[0].custom_error is None

    def test_positional_params_and_custom_error(self):
        specs = parse_tag("min?123&foo&err=custom error message,nonzero")

        assert len(specs) == 2
        first, second = specs
        assert first.name == "min"
        assert first.params == {"0": "123", "1": "foo"}
        assert first.custom_error == "custom error message"
        assert second.name == "nonzero"
        assert not second.params
        assert second.custom_error is None

    def test_rule_without_params_has_empty_mapping(self):
        spec = parse_tag("nonzero")[0]

        assert dict(spec.params) == {}
        assert spec.custom_error is None

    def test_rules_keep_declaration_order(self):
        names = [spec.name for spec in parse_tag("nonzero,min?3,max?40,regexp?^a")]

        assert names == ["nonzero", "min", "max", "regexp"]

    def test_empty_fragments_are_skipped(self):
        specs = parse_tag(",,nonzero,,min?1,")

        assert [spec.name for spec in specs] == ["nonzero", "min"]

    def test_blank_names_are_skipped(self):
        assert parse_tag("?3,  ,  ?err=x") == ()

    def test_whitespace_is_trimmed_around_name_key_and_value(self):
        specs = parse_tag(" min ? 3 & err = too small ")

        assert specs[0].name == "min"
        assert specs[0].params == {"0": "3"}
        assert specs[0].custom_error == "too small"

    def test_inner_whitespace_in_values_is_kept(self):
        spec = parse_tag("nonzero?err=is  really required")[0]

        assert spec.custom_error == "is  really required"

    def test_keyed_params(self):
        spec = parse_tag("between?lo=1&hi=9")[0]

        assert spec.params == {"lo": "1", "hi": "9"}

    def test_value_split_on_first_equals_only(self):
        spec = parse_tag("match?expr=a=b")[0]

        assert spec.params == {"expr": "a=b"}

    def test_positional_keys_count_only_bare_values(self):
        spec = parse_tag("range?a&mode=strict&b")[0]

        assert spec.params == {"0": "a", "mode": "strict", "1": "b"}

    def test_positional_keys_restart_per_rule(self):
        first, second = parse_tag("min?1&2,max?3")

        assert first.params == {"0": "1", "1": "2"}
        assert second.params == {"0": "3"}

    def test_empty_param_fragments_are_skipped(self):
        spec = parse_tag("min?&&3&")[0]

        assert spec.params == {"0": "3"}

    def test_whitespace_only_param_fragments_are_skipped(self):
        spec = parse_tag("min?10&  & err=too small&\t")[0]

        assert spec.params == {"0": "10"}
        assert spec.custom_error == "too small"

    def test_question_mark_without_params(self):
        spec = parse_tag("nonzero?")[0]

        assert spec.name == "nonzero"
        assert not spec.params
        assert spec.custom_error is None

    def test_params_after_ampersand_without_question_mark(self):
        spec = parse_tag("nonzero&err=is required")[0]

        assert spec.name == "nonzero"
        assert not spec.params
        assert spec.custom_error == "is required"

    def test_question_mark_takes_precedence_over_ampersand(self):
        spec = parse_tag("regexp?a&b")[0]

        assert spec.name == "regexp"
        assert spec.params == {"0": "a", "1": "b"}

    def test_last_custom_error_wins(self):
        spec = parse_tag("min?3&err=first&err=second")[0]

        assert spec.custom_error == "second"
        assert "err" not in spec.params

    def test_empty_custom_error_is_kept(self):
        spec = parse_tag("min?3&err=")[0]

        assert spec.custom_error == ""

    def test_parse_is_deterministic(self):
        assert parse_tag("min?3,max?40") == parse_tag("min?3,max?40")

    def test_params_are_read_only(self):
        spec = parse_tag("min?3")[0]

        with pytest.raises(TypeError):
            spec.params["0"] = "4"


class TestRuleSpec:
    """Rendering back to tag form."""

    @pytest.mark.parametrize("raw", [
        "nonzero",
        "min?3",
        "min?3&err=too small",
        "between?lo=1&hi=9",
    ])
    def test_str_renders_tag_fragment(self, raw):
        assert str(parse_tag(raw)[0]) == raw

    def test_default_params_are_empty(self):
        assert RuleSpec(name="nonzero").params == {}
