"""
Lexical signal extraction for links and free text.

Everything here is a pure function of its input: no I/O, no shared state.
"""
import re
from typing import List, Tuple

from config.constants import TEXT_CONFIG
from models.links import UrlSignals
from utils.validation import InputValidator

URL_SHORTENERS = (
    "bit.ly", "tinyurl.com", "goo.gl", "t.co", "ow.ly", "is.gd",
    "buff.ly", "adf.ly", "shorte.st", "cutt.ly",
)

SUSPICIOUS_TLDS = (
    ".site", ".online", ".top", ".xyz", ".click", ".link", ".buzz",
    ".tk", ".ml", ".ga", ".cf", ".gq",
)

# Portuguese vocabulary common in phishing and fraud links.
SCAM_KEYWORDS = (
    "resgate", "urgente", "pix", "ganhe", "gratis", "grátis", "premio", "prêmio",
    "dinheiro", "valores", "bloqueado", "liberado", "imediato", "agora", "confirme",
    "atualize", "cadastro", "suspensa", "cancelada", "verificar", "atualizar",
    "bonus", "bônus", "promoção", "promocao", "sorteio", "ganhador", "vencedor",
    "saque", "transferencia", "transferência", "cliqueaqui", "acesse", "confirmar",
    "cpf", "rg", "senha", "cartao", "cartão", "credito", "crédito", "debito", "débito",
)

# Terms shorter than this only match a whole URL token ("rg" must not hit ".org").
SUBSTRING_MATCH_MIN_LENGTH = 4

STOP_WORDS = frozenset({
    "o", "a", "os", "as", "um", "uma", "uns", "umas", "de", "da", "do", "das", "dos",
    "em", "na", "no", "nas", "nos", "por", "para", "com", "sem", "sob", "sobre",
    "que", "se", "não", "mais", "muito", "como", "quando", "onde", "quem",
    "foi", "ser", "são", "está", "estão", "tem", "têm", "ter", "pode", "podem",
    "este", "esta", "esse", "essa", "isso", "isto", "aqui", "ali", "lá",
    "e", "ou", "mas", "porém", "porque", "pois", "já", "ainda", "também",
    "vai", "vão", "será", "seria", "governo", "brasileiro", "brasil",
})

# Acronyms that carry a topic despite being short.
SHORT_KEYWORDS = frozenset({"pix", "bcb", "tse", "pib", "bpc", "cpf", "sus", "stf"})

NON_WORD_PATTERN = re.compile(r"[^a-z0-9_\sàáâãéêíóôõúç]")
URL_TOKEN_PATTERN = re.compile(r"[^\w]+")
IPV4_PATTERN = re.compile(r"^\d{1,3}(?:\.\d{1,3}){3}$")


def _strip_www(hostname: str) -> str:
    hostname = hostname.lower().rstrip(".")
    return hostname[4:] if hostname.startswith("www.") else hostname


def _is_shortener(domain: str) -> bool:
    return any(domain == host or domain.endswith("." + host) for host in URL_SHORTENERS)


def _match_suspicious_tlds(domain: str) -> Tuple[str, ...]:
    return tuple(tld for tld in SUSPICIOUS_TLDS if domain.endswith(tld))


def match_scam_keywords(full_url: str, domain: str) -> Tuple[str, ...]:
    tokens = set(URL_TOKEN_PATTERN.split(full_url))
    found: List[str] = []
    for keyword in SCAM_KEYWORDS:
        if len(keyword) >= SUBSTRING_MATCH_MIN_LENGTH:
            hit = keyword in full_url or keyword in domain
        else:
            hit = keyword in tokens
        if hit and keyword not in found:
            found.append(keyword)
    return tuple(found)


def extract_url_signals(raw_url: str) -> UrlSignals:
    """
    Parse a submitted URL and run every lexical check against it.
    Raises InvalidInputException when the URL cannot be parsed.
    All checks run; none short-circuits another.
    """
    parts = InputValidator.normalize_url(raw_url)

    domain = _strip_www(parts.hostname)
    full_url = parts.geturl().lower()

    return UrlSignals(
        domain=domain,
        scheme=parts.scheme.lower(),
        full_url=full_url,
        is_https=parts.scheme.lower() == "https",
        subdomain_depth=max(0, len(domain.split(".")) - 2),
        matched_scam_keywords=match_scam_keywords(full_url, domain),
        suspicious_tlds=_match_suspicious_tlds(domain),
        is_shortener=_is_shortener(domain),
        is_ip_literal=bool(IPV4_PATTERN.match(domain)),
        has_obfuscation_chars="--" in domain or "__" in domain or "@" in full_url,
    )


def extract_keywords(text: str, limit: int = TEXT_CONFIG.MAX_KEYWORDS) -> List[str]:
    """
    Pick the most specific terms of a claim: longest first, deduplicated.
    Length is a proxy for informativeness, not a relevance ranking.
    """
    if not text:
        return []

    cleaned = NON_WORD_PATTERN.sub(" ", text.lower())
    words = [
        word for word in cleaned.split()
        if (len(word) >= TEXT_CONFIG.MIN_KEYWORD_LENGTH or word in SHORT_KEYWORDS)
        and word not in STOP_WORDS
    ]
    unique = list(dict.fromkeys(words))
    return sorted(unique, key=len, reverse=True)[:limit]
