"""Tests for the calling-domain allow-list."""

import pytest

from oauth_broker.auth.domains import compile_domain_pattern, is_domain_allowed


class TestNoAllowList:
    """Unset allow-list means no restriction."""

    @pytest.mark.parametrize("allowed", [None, ""])
    def test_any_domain_allowed(self, allowed):
        assert is_domain_allowed("anything.test", allowed) is True

    def test_missing_domain_allowed(self):
        assert is_domain_allowed(None, None) is True


class TestExactEntries:
    """Entries without wildcard must match the whole domain."""

    def test_exact_match(self):
        assert is_domain_allowed("www.example.com", "www.example.com") is True

    def test_no_partial_match(self):
        assert is_domain_allowed("www.example.com.evil.test", "www.example.com") is False
        assert is_domain_allowed("evil-www.example.com", "www.example.com") is False

    def test_dot_is_literal(self):
        """A dot does not act as 'any character'."""
        assert is_domain_allowed("wwwxexample.com", "www.example.com") is False

    def test_other_metacharacters_are_literal(self):
        assert is_domain_allowed("a", "a|b") is False
        assert is_domain_allowed("a|b", "a|b") is True
        assert is_domain_allowed("example.com", "(example).com") is False

    def test_entries_are_trimmed(self):
        assert is_domain_allowed("b.test", " a.test ,  b.test ") is True

    def test_any_entry_matches(self):
        assert is_domain_allowed("c.test", "a.test,b.test,c.test") is True

    def test_nothing_matches(self):
        assert is_domain_allowed("d.test", "a.test,b.test") is False


class TestWildcardEntries:
    """A single `*` matches one or more characters."""

    def test_subdomain_matches(self):
        assert is_domain_allowed("www.example.com", "*.example.com") is True

    def test_multi_label_subdomain_matches(self):
        assert is_domain_allowed("a.b.example.com", "*.example.com") is True

    def test_wildcard_needs_at_least_one_character(self):
        assert is_domain_allowed(".example.com", "*.example.com") is False

    def test_bare_domain_does_not_match_wildcard(self):
        assert is_domain_allowed("example.com", "*.example.com") is False

    def test_other_tld_rejected(self):
        assert is_domain_allowed("www.example.org", "*.example.com") is False

    def test_wildcard_in_middle(self):
        assert is_domain_allowed("pr-42.preview.example.com", "pr-*.preview.example.com") is True

    def test_second_wildcard_is_literal(self):
        """Only the first `*` is a wildcard."""
        assert is_domain_allowed("a.b.example.com", "*.*.example.com") is False
        assert is_domain_allowed("a.*.example.com", "*.*.example.com") is True


class TestConfiguredListEdgeCases:
    """Configured list with missing or blank input."""

    @pytest.mark.parametrize("domain", [None, ""])
    def test_missing_domain_rejected(self, domain):
        assert is_domain_allowed(domain, "*.example.com") is False

    def test_blank_entries_ignored(self):
        """Blank entries never match an empty domain."""
        assert is_domain_allowed("", "a.test,,") is False
        assert is_domain_allowed("a.test", "a.test,,") is True

    def test_only_blank_entries_rejects_everything(self):
        assert is_domain_allowed("a.test", " , ") is False


class TestCompileDomainPattern:
    """Tests for compile_domain_pattern."""

    def test_wildcard_becomes_one_or_more(self):
        pattern = compile_domain_pattern("*.example.com")
        assert pattern.fullmatch("x.example.com")
        assert not pattern.fullmatch(".example.com")

    def test_cached(self):
        assert compile_domain_pattern("a.test") is compile_domain_pattern("a.test")
