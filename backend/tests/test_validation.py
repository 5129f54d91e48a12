import pytest
from exceptions import InvalidInputException
from utils.validation import InputValidator


class TestSanitizeText:
    """Tests for InputValidator.sanitize_text."""

    def test_strips_whitespace(self):
        assert InputValidator.sanitize_text("   O PIX será taxado   ") == "O PIX será taxado"

    def test_strips_script_and_tags(self):
        text = "<script>alert('x')</script><b>Vacina</b> causa autismo segundo estudo"
        assert InputValidator.sanitize_text(text) == "Vacina causa autismo segundo estudo"

    def test_strips_control_characters(self):
        assert InputValidator.sanitize_text("Texto\x00 com\x07 controle") == "Texto com controle"

    @pytest.mark.parametrize("bad", [None, "", 123, ["lista"]])
    def test_requires_text(self, bad):
        with pytest.raises(InvalidInputException) as exc_info:
            InputValidator.sanitize_text(bad)
        assert exc_info.value.message == "Texto válido é obrigatório"

    def test_too_short_after_trim(self):
        with pytest.raises(InvalidInputException) as exc_info:
            InputValidator.sanitize_text("   curto   ")
        assert exc_info.value.message == "Texto muito curto. Mínimo de 10 caracteres."
        assert exc_info.value.status_code == 400

    def test_too_long(self):
        with pytest.raises(InvalidInputException) as exc_info:
            InputValidator.sanitize_text("a" * 10001)
        assert "10000" in exc_info.value.message

    def test_boundaries_accepted(self):
        assert InputValidator.sanitize_text("a" * 10) == "a" * 10
        assert len(InputValidator.sanitize_text("a" * 10000)) == 10000


class TestNormalizeUrl:
    def test_adds_https(self):
        parts = InputValidator.normalize_url("exemplo.com.br/pagina")
        assert parts.scheme == "https"
        assert parts.hostname == "exemplo.com.br"

    def test_keeps_http(self):
        assert InputValidator.normalize_url("HTTP://exemplo.com").scheme.lower() == "http"

    def test_with_port(self):
        assert InputValidator.normalize_url("https://exemplo.com:8443/a").port == 8443

    @pytest.mark.parametrize("bad", ["javascript://alert(1)", "https://", "https://exemplo..com", "http://host:99999"])
    def test_invalid_format(self, bad):
        with pytest.raises(InvalidInputException) as exc_info:
            InputValidator.normalize_url(bad)
        assert exc_info.value.message == "Formato de URL inválido"

    @pytest.mark.parametrize("bad", [None, "", "   ", 10])
    def test_missing_url(self, bad):
        with pytest.raises(InvalidInputException) as exc_info:
            InputValidator.normalize_url(bad)
        assert exc_info.value.message == "URL inválida"
