import pytest
from exceptions import InvalidInputException
from services.extractors import extract_keywords, extract_url_signals, match_scam_keywords


class TestExtractUrlSignals:
    """Tests for extract_url_signals."""

    def test_scheme_is_assumed_https(self):
        signals = extract_url_signals("github.com/anthropics")
        assert signals.is_https is True
        assert signals.domain == "github.com"

    def test_http_scheme_is_kept(self):
        signals = extract_url_signals("http://example.com")
        assert signals.is_https is False
        assert signals.scheme == "http"

    def test_www_is_stripped_and_lowercased(self):
        signals = extract_url_signals("https://WWW.Example.COM/Path")
        assert signals.domain == "example.com"
        assert signals.full_url == "https://www.example.com/path"

    def test_suspicious_tld_and_keywords(self):
        signals = extract_url_signals("http://banco-brasil-resgate.site/confirme")
        assert signals.suspicious_tlds == (".site",)
        assert set(signals.matched_scam_keywords) == {"resgate", "confirme"}

    def test_shortener_exact_and_subdomain(self):
        assert extract_url_signals("https://bit.ly/abc").is_shortener is True
        assert extract_url_signals("https://go.bit.ly/abc").is_shortener is True

    def test_shortener_requires_domain_boundary(self):
        assert extract_url_signals("https://microsoft.com").is_shortener is False

    def test_ip_literal(self):
        assert extract_url_signals("http://192.168.0.1/login").is_ip_literal is True

    def test_subdomain_depth(self):
        assert extract_url_signals("https://a.b.c.example.com").subdomain_depth == 3
        assert extract_url_signals("https://example.com").subdomain_depth == 0

    def test_obfuscation_chars(self):
        assert extract_url_signals("https://pay--now.com").has_obfuscation_chars is True
        assert extract_url_signals("https://user@evil.com").has_obfuscation_chars is True
        assert extract_url_signals("https://example.com").has_obfuscation_chars is False

    @pytest.mark.parametrize("bad", ["", "   ", None, 42, "ftp://files.example.com", "https://exa mple.com"])
    def test_invalid_urls_raise(self, bad):
        with pytest.raises(InvalidInputException):
            extract_url_signals(bad)


class TestMatchScamKeywords:
    def test_short_terms_need_whole_token(self):
        assert "rg" not in match_scam_keywords("https://wikipedia.org", "wikipedia.org")
        assert "rg" in match_scam_keywords("https://site.com/envie-rg", "site.com")

    def test_long_terms_match_as_substring(self):
        assert "resgate" in match_scam_keywords("https://resgatevalores.com", "resgatevalores.com")

    def test_no_duplicates(self):
        found = match_scam_keywords("https://pix.com/pix", "pix.com")
        assert found.count("pix") == 1


class TestExtractKeywords:
    """Tests for extract_keywords."""

    def test_central_bank_claim(self):
        keywords = extract_keywords("O Banco Central vai taxar o PIX em 2025")
        assert "banco" in keywords
        assert "central" in keywords
        assert "pix" in keywords
        assert "vai" not in keywords

    def test_longest_first(self):
        keywords = extract_keywords("vacina covid aprovada anvisa")
        assert keywords[0] == "aprovada"
        assert [len(k) for k in keywords] == sorted((len(k) for k in keywords), reverse=True)

    def test_deduplicated_and_limited(self):
        text = " ".join(f"palavra{i}" for i in range(30)) + " palavra1 palavra1"
        keywords = extract_keywords(text)
        assert len(keywords) == 10
        assert len(set(keywords)) == len(keywords)

    def test_stop_words_removed(self):
        assert extract_keywords("para quando governo brasileiro") == []

    def test_punctuation_stripped(self):
        assert "eleição" in extract_keywords("A eleição, foi fraudada!")

    def test_empty(self):
        assert extract_keywords("") == []
