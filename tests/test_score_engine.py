"""
Tests for the email risk scorer.
"""

import pytest

from emailrisk import (
    CLIENT_POLICY,
    DEFAULT_POLICY,
    SERVER_POLICY,
    ReferenceTables,
    ValidationVerdict,
    evaluate,
    format_validation_errors,
    is_email_trusted,
    is_short_circuit,
    tables_from_dict,
)
from emailrisk.score_engine import (
    MSG_ADVISORY,
    MSG_CHARS,
    MSG_DIGITS,
    MSG_DISPOSABLE,
    MSG_DOMAIN,
    MSG_DOMAIN_SHAPE,
    MSG_FORMAT,
    MSG_LONG,
    MSG_REJECTED,
    MSG_REQUIRED,
    MSG_SHORT,
)
from emailrisk.patterns import SUSPICIOUS_PATTERN_MESSAGE


class _AmbiguousTruth:
    """Behaves like pandas.NA: truthiness is undefined."""

    def __bool__(self):
        raise TypeError("boolean value of NA is ambiguous")


class TestHardFailures:
    """Inputs rejected outright with score 100."""

    @pytest.mark.parametrize("email", ["", None, "   ", 42, b"jane@gmail.com", [], _AmbiguousTruth()])
    def test_missing_or_non_string_input(self, email):
        verdict = evaluate(email)

        assert verdict.is_valid is False
        assert verdict.risk_score == 100
        assert verdict.errors == (MSG_REQUIRED,)

    @pytest.mark.parametrize("email", [
        "user@mailinator.com",
        "  USER@Mailinator.com ",
        "jane.doe@yopmail.com",
        "someone@teleworm.us",
    ])
    def test_disposable_domains(self, email):
        verdict = evaluate(email)

        assert verdict.is_valid is False
        assert verdict.risk_score == 100
        assert verdict.errors == (MSG_DISPOSABLE,)
        assert verdict.warnings == ()

    def test_disposable_wins_over_everything_else(self):
        verdict = evaluate("test12345678@mailinator.com")

        assert verdict.risk_score == 100
        assert verdict.warnings == ()

    @pytest.mark.parametrize("email", ["janedoe", "jane@"])
    def test_missing_domain(self, email):
        verdict = evaluate(email)

        assert verdict.is_valid is False
        assert verdict.risk_score == 100
        assert verdict.errors == (MSG_FORMAT, MSG_DOMAIN)
        assert is_short_circuit(verdict)

    @pytest.mark.parametrize("email", [
        "@", "@@", "a@b@c.com", "\x00", "ä@ü.de", "a" * 10000 + "@x.com", "jane doe@gmail.com",
    ])
    def test_never_raises(self, email):
        verdict = evaluate(email)

        assert isinstance(verdict, ValidationVerdict)
        assert 0 <= verdict.risk_score <= 100
        assert bool(verdict.errors) == (not verdict.is_valid)


class TestAccumulatedRisk:
    """Heuristic signals that add up against the thresholds."""

    def test_clean_trusted_address(self):
        verdict = evaluate("jane.doe87@gmail.com")

        assert verdict.is_valid is True
        assert verdict.risk_score < DEFAULT_POLICY.advisory_threshold
        assert verdict.risk_score == 0
        assert verdict.errors == ()
        assert verdict.warnings == ()
        assert verdict.email == "jane.doe87@gmail.com"
        assert verdict.domain == "gmail.com"

    def test_placeholder_prefix_on_unknown_domain(self):
        verdict = evaluate("test1234@example.com")

        # pattern + obscure domain, counted once even though two patterns match
        assert verdict.risk_score == DEFAULT_POLICY.pattern_penalty + DEFAULT_POLICY.obscure_domain_penalty
        assert verdict.warnings.count(SUSPICIOUS_PATTERN_MESSAGE) == 1
        assert MSG_ADVISORY in verdict.warnings
        assert verdict.is_valid is True

    def test_short_local_part_trusted_vs_untrusted(self):
        trusted = evaluate("ab@gmail.com")
        untrusted = evaluate("ab@example.com")

        assert trusted.risk_score == 30
        assert untrusted.risk_score == 60
        assert trusted.risk_score < untrusted.risk_score
        assert MSG_SHORT in trusted.warnings
        assert SUSPICIOUS_PATTERN_MESSAGE in trusted.warnings

    def test_long_local_part(self):
        verdict = evaluate("a" * 31 + "@gmail.com")

        assert verdict.risk_score == DEFAULT_POLICY.long_local_penalty
        assert verdict.warnings == (MSG_LONG,)

    def test_multiple_plus_tags(self):
        verdict = evaluate("a+b+c@gmail.com")

        assert verdict.risk_score == 10
        assert verdict.warnings == (SUSPICIOUS_PATTERN_MESSAGE,)

    def test_repeated_plus_signs(self):
        verdict = evaluate("jane++doe@gmail.com")

        assert verdict.risk_score == DEFAULT_POLICY.repeated_char_penalty
        assert verdict.warnings == (MSG_CHARS,)

    def test_rejected_above_threshold(self):
        verdict = evaluate("123456789@example..com")

        # numeric pattern 30 + obscure 10 + digits 15 + repeated dots 20
        assert verdict.risk_score == 75
        assert verdict.is_valid is False
        assert verdict.errors == (MSG_REJECTED,)
        assert MSG_DIGITS in verdict.warnings
        assert MSG_CHARS in verdict.warnings
        assert not is_short_circuit(verdict)

    def test_format_error_keeps_scoring(self):
        verdict = evaluate("jane@example")

        assert verdict.is_valid is False
        assert verdict.risk_score == DEFAULT_POLICY.format_penalty + DEFAULT_POLICY.obscure_domain_penalty
        assert verdict.errors == (MSG_FORMAT,)
        assert verdict.domain == "example"
        assert not is_short_circuit(verdict)

    def test_score_is_clamped(self):
        verdict = evaluate("123456789@exa mple..com")

    def test_clamped_format_error_is_not_a_hard_failure(self):
        policy = DEFAULT_POLICY.replace(reject_threshold=150)
        verdict = evaluate("123456789@exa mple..com", policy)

        assert verdict.risk_score == 100
        assert verdict.is_valid is False
        assert verdict.errors == (MSG_FORMAT,)
        assert not is_short_circuit(verdict)

        assert verdict.risk_score == 100
        assert verdict.errors == (MSG_FORMAT, MSG_REJECTED)


class TestProperties:

    @pytest.mark.parametrize("variant", [" Jane@GMAIL.com ", "JANE@gmail.com", "jane@gmail.com\t"])
    def test_normalization_is_idempotent(self, variant):
        assert evaluate(variant) == evaluate("jane@gmail.com")
        assert evaluate(variant) == evaluate(variant)

    @pytest.mark.parametrize("clean,noisy", [
        ("jane@example.com", "jane1234@example.com"),
        ("jane@example.com", "jane12345678@example.com"),
        ("jane@gmail.com", "jane1234@gmail.com"),
        ("jane.doe@gmail.com", "jane..doe@gmail.com"),
        ("jane@example.com", "test@example.com"),
        ("jane@gmail.com", "ja@gmail.com"),
    ])
    def test_extra_signal_never_lowers_score(self, clean, noisy):
        assert evaluate(noisy).risk_score >= evaluate(clean).risk_score

    @pytest.mark.parametrize("email", [
        "jane.doe87@gmail.com", "test1234@example.com", "123456789@example..com", "jane@example",
    ])
    def test_reject_threshold_invariant(self, email):
        verdict = evaluate(email)

        if verdict.risk_score >= DEFAULT_POLICY.reject_threshold:
            assert verdict.is_valid is False
        assert bool(verdict.errors) == (not verdict.is_valid)


class TestPolicies:

    def test_server_policy_short_circuits_format_errors(self):
        verdict = evaluate("jane@example", SERVER_POLICY)

        assert verdict.is_valid is False
        assert verdict.risk_score == 100
        assert verdict.errors == (MSG_FORMAT,)
        assert is_short_circuit(verdict)

    def test_server_policy_lower_threshold(self):
        verdict = evaluate("123456789@example..com", SERVER_POLICY)

        # numeric pattern 40 + digits 20
        assert verdict.risk_score == 60
        assert verdict.is_valid is False

    def test_server_policy_special_character_runs(self):
        server = evaluate("jane...doe@example.com", SERVER_POLICY)
        default = evaluate("jane...doe@example.com")

        assert server.risk_score == SERVER_POLICY.special_run_penalty
        assert server.warnings == (MSG_CHARS,)
        assert default.risk_score == DEFAULT_POLICY.repeated_char_penalty + DEFAULT_POLICY.obscure_domain_penalty
        assert default.warnings.count(MSG_CHARS) == 1

    def test_server_policy_domain_shape(self):
        verdict = evaluate("jane@a.b", SERVER_POLICY)

        assert verdict.risk_score == SERVER_POLICY.domain_shape_penalty
        assert verdict.warnings == (MSG_DOMAIN_SHAPE,)
        assert verdict.is_valid is True

    def test_server_policy_has_no_advisory(self):
        verdict = evaluate("jane...doe@a.b", SERVER_POLICY)

        assert verdict.risk_score == 55
        assert MSG_ADVISORY not in verdict.warnings

    def test_client_policy_skips_short_username_check(self):
        verdict = evaluate("ab@gmail.com", CLIENT_POLICY)

        assert verdict.risk_score == 10
        assert MSG_SHORT not in verdict.warnings

    def test_custom_threshold(self):
        policy = DEFAULT_POLICY.replace(reject_threshold=40)

        assert evaluate("test1234@example.com", policy).is_valid is False
        assert evaluate("test1234@example.com").is_valid is True


class TestTablesInScoring:

    def test_pattern_with_own_penalty(self):
        tables = tables_from_dict({
            "suspicious_patterns": [{"pattern": "^vip", "penalty": 5, "message": "VIP address"}],
        })
        verdict = evaluate("vip@example.com", tables=tables)

        assert verdict.risk_score == 5 + DEFAULT_POLICY.obscure_domain_penalty
        assert verdict.warnings == ("VIP address",)

    def test_extra_trusted_domain(self):
        tables = tables_from_dict({"trusted_domains": {"medclarity.health": "internal"}})

    def test_trust_agrees_with_is_email_trusted(self):
        tables = ReferenceTables(frozenset(), {"clinic.example": ""}, ())
        verdict = evaluate("jane@clinic.example", tables=tables)

        assert verdict.risk_score == 0
        assert is_email_trusted("jane@clinic.example", tables.trusted_domains) is True

        assert evaluate("jane@medclarity.health", tables=tables).risk_score == 0
        assert evaluate("jane@medclarity.health").risk_score == DEFAULT_POLICY.obscure_domain_penalty


class TestHelpers:

    @pytest.mark.parametrize("email,expected", [
        ("Jane@Gmail.com", True),
        ("jane@outlook.com", True),
        ("jane@example.com", False),
        ("no-at-sign", False),
        ("", False),
    ])
    def test_is_email_trusted(self, email, expected):
        assert is_email_trusted(email) is expected

    def test_format_validation_errors(self):
        verdict = evaluate("test1234@example.com")

        assert format_validation_errors(verdict) == f"{SUSPICIOUS_PATTERN_MESSAGE}. {MSG_ADVISORY}"

    def test_format_validation_errors_errors_first(self):
        verdict = ValidationVerdict(False, 80, ("first",), ("second",))

        assert format_validation_errors(verdict) == "first. second"

    def test_to_dict(self):
        data = evaluate("Jane@Gmail.com").to_dict()

        assert data == {
            "isValid": True,
            "riskScore": 0,
            "errors": [],
            "warnings": [],
            "email": "jane@gmail.com",
            "domain": "gmail.com",
        }
