"""Tests for hosts-mapping line reconciliation."""

from hostkit.domain.hostname import ReconcileAction, reconcile_lines, replace_anchor_line, replace_token

REPLACEMENT = "127.0.1.1 web01.example.com web01"


def test_replaces_first_anchor_line_only() -> None:
    """Only the first 127.0.1.1 line is rewritten; later duplicates stay."""
    lines = [
        "127.0.0.1 localhost",
        "  127.0.1.1\told-name",
        "::1 localhost ip6-localhost",
        "127.0.1.1 other",
    ]

    result = reconcile_lines(lines, REPLACEMENT)

    assert result.action is ReconcileAction.REPLACED
    assert result.lines == [
        "127.0.0.1 localhost",
        REPLACEMENT,
        "::1 localhost ip6-localhost",
        "127.0.1.1 other",
    ]


def test_anchor_requires_whitespace_after_ip() -> None:
    """127.0.1.10 is not the loopback alias."""
    lines = ["127.0.1.10 db", "127.0.0.1 localhost"]

    result = reconcile_lines(lines, REPLACEMENT)

    assert result.action is ReconcileAction.INSERTED
    assert result.lines[0] == "127.0.1.10 db"


def test_reconcile_is_idempotent() -> None:
    """Second run produces the same lines as the first."""
    lines = ["127.0.0.1 localhost", "10.0.0.5 gateway"]

    first = reconcile_lines(lines, REPLACEMENT)
    second = reconcile_lines(first.lines, REPLACEMENT)

    assert first.action is ReconcileAction.INSERTED
    assert second.action is ReconcileAction.REPLACED
    assert second.lines == first.lines


def test_insert_after_first_fallback_anchor() -> None:
    """K lines without anchor become K+1, new line right after 127.0.0.1."""
    lines = ["# hosts", "127.0.0.1 localhost", "127.0.0.1 localhost.localdomain", "::1 localhost"]

    result = reconcile_lines(lines, REPLACEMENT)

    assert len(result.lines) == len(lines) + 1
    assert result.lines[2] == REPLACEMENT
    assert result.lines[:2] == lines[:2]
    assert result.lines[3:] == lines[2:]


def test_append_without_fallback_anchor() -> None:
    lines = ["::1 localhost", "10.0.0.1 router"]

    result = reconcile_lines(lines, REPLACEMENT)

    assert result.action is ReconcileAction.APPENDED
    assert result.lines == lines + [REPLACEMENT]


def test_append_when_fallback_disabled() -> None:
    lines = ["127.0.0.1 localhost"]

    result = reconcile_lines(lines, REPLACEMENT, fallback_anchor=None)

    assert result.lines == lines + [REPLACEMENT]


def test_token_replacement_keeps_other_fields() -> None:
    """The previous hostname is swapped everywhere; stale FQDNs stay."""
    lines = [
        "127.0.0.1 localhost",
        "10.1.2.3   oldhost.example.com\toldhost",
        "10.1.2.4 oldhost-db oldhost",
    ]

    result = reconcile_lines(lines, REPLACEMENT, old_token="oldhost", new_token="web01")

    assert result.action is ReconcileAction.TOKEN_REPLACED
    assert result.lines == [
        "127.0.0.1 localhost",
        "10.1.2.3   oldhost.example.com\tweb01",
        "10.1.2.4 oldhost-db web01",
    ]


def test_token_replacement_needs_whole_word() -> None:
    """A token that only appears inside a longer word does not count."""
    lines = ["127.0.0.1 localhost", "10.1.2.3 oldhost.example.com"]

    result = reconcile_lines(lines, REPLACEMENT, old_token="oldhost", new_token="web01")

    assert result.action is ReconcileAction.INSERTED


def test_existing_mapping_of_new_name_is_left_alone() -> None:
    """A loopback line already carrying the new name is not duplicated."""
    lines = ["127.0.0.1 localhost web01"]

    result = reconcile_lines(lines, REPLACEMENT, old_token="web01", new_token="web01")

    assert result.action is ReconcileAction.PRESENT
    assert result.changed is False
    assert result.lines == lines


def test_token_path_is_idempotent() -> None:
    """Rerunning after a token swap keeps the file as the first run left it."""
    lines = ["127.0.0.1 localhost oldhost"]

    first = reconcile_lines(lines, "127.0.1.1 web01", old_token="oldhost", new_token="web01")
    second = reconcile_lines(first.lines, "127.0.1.1 web01", old_token="oldhost", new_token="web01")

    assert first.action is ReconcileAction.TOKEN_REPLACED
    assert second.action is ReconcileAction.PRESENT
    assert second.lines == first.lines


def test_new_name_elsewhere_does_not_block_insert() -> None:
    """Only loopback lines count as an existing mapping."""
    lines = ["127.0.0.1 localhost", "10.0.0.9 web01"]

    result = reconcile_lines(lines, REPLACEMENT, new_token="web01")

    assert result.action is ReconcileAction.INSERTED


def test_anchor_wins_over_token() -> None:
    lines = ["10.1.2.3 oldhost", "127.0.1.1 oldhost"]

    result = reconcile_lines(lines, REPLACEMENT, old_token="oldhost", new_token="web01")

    assert result.action is ReconcileAction.REPLACED
    assert result.lines == ["10.1.2.3 oldhost", REPLACEMENT]


def test_insertion_not_allowed_skips() -> None:
    lines = ["127.0.0.1 localhost"]

    result = reconcile_lines(lines, REPLACEMENT, allow_insert=False)

    assert result.action is ReconcileAction.SKIPPED
    assert result.changed is False
    assert result.lines == lines


def test_insertion_not_allowed_still_replaces_anchor() -> None:
    lines = ["127.0.1.1 old"]

    result = reconcile_lines(lines, REPLACEMENT, allow_insert=False)

    assert result.action is ReconcileAction.REPLACED


def test_input_is_not_mutated() -> None:
    lines = ["127.0.0.1 localhost"]

    reconcile_lines(lines, REPLACEMENT)

    assert lines == ["127.0.0.1 localhost"]


def test_replace_anchor_line_returns_none_without_anchor() -> None:
    assert replace_anchor_line(["127.0.0.1 localhost"], REPLACEMENT) is None


def test_replace_token_preserves_whitespace() -> None:
    assert replace_token("  a\t b  a", "a", "c") == "  c\t b  c"
