"""Tests for .dockerignore classification."""

from slimcheck.config import Config
from slimcheck.ignorefile import classify_exclusions
from slimcheck.models import ExclusionState


def test_absent():
    """No content at all is ABSENT."""
    c = classify_exclusions(None)
    assert c.state == ExclusionState.ABSENT
    assert not c.present


def test_empty_and_whitespace_only():
    """Zero bytes or whitespace-only is EMPTY."""
    assert classify_exclusions("").state == ExclusionState.EMPTY
    assert classify_exclusions("  \n\n\t\n").state == ExclusionState.EMPTY


def test_comment_only():
    """Every non-blank line a comment is COMMENT_ONLY with zero rules."""
    c = classify_exclusions("# nothing to see here\n\n  # still nothing\n")
    assert c.state == ExclusionState.COMMENT_ONLY
    assert c.effective_rule_count == 0


def test_insufficient():
    """Two effective rules are not enough."""
    c = classify_exclusions(".git\n*.log\n")
    assert c.state == ExclusionState.INSUFFICIENT
    assert c.effective_rule_count == 2
    assert c.missing_critical == ()


def test_sufficient_missing_critical():
    """Coverage is computed only for SUFFICIENT files."""
    c = classify_exclusions("dist/\n*.log\n.env\n")
    assert c.state == ExclusionState.SUFFICIENT
    assert c.missing_critical == ("version-control", "node-modules")
    assert "logs" not in c.missing_advisory
    assert "docs" in c.missing_advisory


def test_substring_matching_is_approximate():
    """'.gitignore' satisfies '.git' by plain substring containment."""
    c = classify_exclusions(".gitignore\nnode_modules\nbuild/\n")
    assert c.missing_critical == ()


def test_state_monotonic_in_rule_count():
    """States line up with effective_rule_count thresholds."""
    for n in range(0, 8):
        content = "# header\n" + "".join(f"rule{i}\n" for i in range(n))
        c = classify_exclusions(content)
        assert c.effective_rule_count == n
        if n == 0:
            assert c.state == ExclusionState.COMMENT_ONLY
        elif n < 3:
            assert c.state == ExclusionState.INSUFFICIENT
        else:
            assert c.state == ExclusionState.SUFFICIENT


def test_min_rules_configurable():
    """Threshold comes from config."""
    cfg = Config(min_exclusion_rules=5)
    assert classify_exclusions("a\nb\nc\nd\n", cfg).state == ExclusionState.INSUFFICIENT
    assert classify_exclusions("a\nb\nc\nd\ne\n", cfg).state == ExclusionState.SUFFICIENT


def test_byte_order_mark_does_not_count_as_rule():
    """A comment-only file saved with a BOM is still comment-only."""
    result = classify_exclusions("\ufeff# nothing to see here\n")
    assert result.state == ExclusionState.COMMENT_ONLY
    assert result.effective_rule_count == 0
    assert classify_exclusions("\ufeff").state == ExclusionState.EMPTY
