"""
Rule-based link scoring.

The score starts at 100 and goes through three ordered stages:

1. penalty passes, each a pure function of the URL signals that may subtract
   points and contribute an issue and a recommendation;
2. override rules that confirm a scam and force the score to 0 (they can only
   lower it, never raise it);
3. a clamp to [0, 100].

The scam narrative (scamType / modusOperandi) is picked separately by walking
NARRATIVE_RULES in priority order and taking the first rule that applies.
"""
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from config.constants import LINK_SCORING
from models.links import BrandMatch, LinkStatus, LinkVerdict, Narrative, ScoreCard, UrlSignals
from .extractors import SUSPICIOUS_TLDS


@dataclass(frozen=True)
class Brand:
    official_domain: str
    markers: Tuple[str, ...]


@dataclass(frozen=True)
class KeywordBucket:
    name: str
    terms: Tuple[str, ...]
    narrative: Narrative
    confirmed_issue: str


@dataclass(frozen=True)
class Penalty:
    points: int
    issue: str
    recommendation: Optional[str] = None


OFFICIAL_BRANDS = (
    Brand("gov.br", ("governo", "federal", "brasil", "gov")),
    Brand("bb.com.br", ("banco", "brasil", "bb")),
    Brand("caixa.gov.br", ("caixa", "cef", "economica")),
    Brand("itau.com.br", ("itau", "itaú")),
    Brand("bradesco.com.br", ("bradesco",)),
    Brand("santander.com.br", ("santander",)),
    Brand("nubank.com.br", ("nubank", "nu")),
    Brand("mercadolivre.com.br", ("mercado", "livre", "ml")),
    Brand("amazon.com.br", ("amazon", "amazônia")),
    Brand("correios.com.br", ("correios", "correio")),
    Brand("receita.fazenda.gov.br", ("receita", "federal", "imposto")),
    Brand("bcb.gov.br", ("banco", "central", "bacen", "bcb")),
    Brand("inss.gov.br", ("inss", "previdencia", "aposentadoria")),
    Brand("detran", ("detran", "transito", "cnh", "multa")),
)

IMPERSONATION_TELLS = ("-", "oficial", "online", "br")

# Domains exempt from brand-squatting detection. Being listed never raises a score.
TRUSTED_DOMAINS = (
    "google.com", "facebook.com", "twitter.com", "instagram.com",
    "youtube.com", "linkedin.com", "microsoft.com", "apple.com",
    "amazon.com", "netflix.com", "spotify.com", "github.com",
    "wikipedia.org", "gov.br", "bbc.com", "cnn.com", "reuters.com",
    "globo.com", "uol.com.br", "estadao.com.br",
) + tuple(brand.official_domain for brand in OFFICIAL_BRANDS if "." in brand.official_domain)

OFFICIAL_CLAIM_MARKERS = ("gov", "banco", "caixa", "federal", "receita", "inss", "detran")

# Tested in this order; the first bucket with a matching term wins.
KEYWORD_BUCKETS = (
    KeywordBucket(
        "refund",
        ("resgate", "valores", "saque", "bloqueado", "liberado"),
        Narrative(
            "Golpe do Falso Resgate",
            "Criminosos alegam que você tem valores a receber para roubar seus dados bancários e CPF. "
            "Órgãos oficiais NUNCA solicitam dados por links.",
        ),
        '🚫 GOLPE CONFIRMADO: Combinação de extensão suspeita com palavras típicas de fraude ("resgate", "valores")',
    ),
    KeywordBucket(
        "pix",
        ("pix", "transferencia", "transferência"),
        Narrative(
            "Golpe do PIX",
            "Sites falsos que prometem transferências ou cadastro de chaves PIX para roubar credenciais bancárias.",
        ),
        "🚫 GOLPE CONFIRMADO: Link de PIX em domínio suspeito",
    ),
    KeywordBucket(
        "prize",
        ("premio", "prêmio", "ganhe", "sorteio", "ganhador"),
        Narrative(
            "Golpe de Promoção/Sorteio Falso",
            "Promessas de prêmios inexistentes para coletar dados pessoais ou instalar malware no dispositivo.",
        ),
        "🚫 GOLPE CONFIRMADO: Promoção falsa em domínio suspeito",
    ),
    KeywordBucket(
        "account_update",
        ("atualize", "confirme", "verificar", "suspensa"),
        Narrative(
            "Phishing de Atualização Cadastral",
            'E-mails e sites falsos que imitam bancos ou empresas pedindo para "atualizar cadastro" e roubam senhas.',
        ),
        "🚫 GOLPE CONFIRMADO: Phishing em domínio não oficial",
    ),
)

MULTI_INDICATOR_NARRATIVE = Narrative(
    "Fraude Digital",
    "Este link combina múltiplos indicadores de golpe: extensão suspeita e palavras-chave típicas de fraude.",
)
MULTI_INDICATOR_ISSUE = "🚫 GOLPE CONFIRMADO: Múltiplos indicadores de fraude detectados"

FAKE_GOVERNMENT_NARRATIVE = Narrative(
    "Golpe de Falso Órgão Governamental",
    "Criminosos criam sites falsos imitando órgãos públicos (Gov.br, Receita Federal, INSS) para roubar dados. "
    "Sites oficiais sempre terminam em .gov.br",
)
FAKE_GOVERNMENT_ISSUE = (
    "🚫 GOLPE CONFIRMADO: Sites governamentais e bancários NUNCA usam extensões como .site, .online, .xyz"
)

SHORTENER_ISSUE = (
    "🔗 URL ENCURTADA: O destino real está oculto. "
    "Encurtadores são frequentemente usados para esconder links maliciosos"
)

GENERIC_RECOMMENDATIONS = (
    "Não clique em links recebidos por mensagem ou e-mail sem verificar",
    "Acesse sites oficiais digitando o endereço diretamente no navegador",
    "Em caso de dúvida, entre em contato com a empresa pelos canais oficiais",
)
DO_NOT_ACCESS = "❌ NÃO ACESSE ESTE LINK. Risco elevado de fraude."


def is_trusted_domain(domain: str) -> bool:
    return any(domain == trusted or domain.endswith("." + trusted) for trusted in TRUSTED_DOMAINS)


def detect_brand_squatting(signals: UrlSignals) -> Optional[BrandMatch]:
    """
    Find the official brand a domain imitates.
    When several brands match, the one with the most markers in the domain wins.
    """
    domain = signals.domain
    if is_trusted_domain(domain):
        return None

    impersonating = signals.has_suspicious_tld or any(tell in domain for tell in IMPERSONATION_TELLS)
    if not impersonating:
        return None

    best: Optional[BrandMatch] = None
    for brand in OFFICIAL_BRANDS:
        if domain.endswith(brand.official_domain):
            continue
        markers = tuple(marker for marker in brand.markers if marker in domain)
        if markers and (best is None or len(markers) > len(best.matched_markers)):
            best = BrandMatch(
                official_domain=brand.official_domain,
                targeted_brand=brand.official_domain,
                is_impersonating=True,
                matched_markers=markers,
            )
    return best


def match_keyword_bucket(signals: UrlSignals) -> Optional[KeywordBucket]:
    found = set(signals.matched_scam_keywords)
    for bucket in KEYWORD_BUCKETS:
        if found.intersection(bucket.terms):
            return bucket
    return None


def claims_official_entity(signals: UrlSignals) -> bool:
    return any(marker in signals.domain for marker in OFFICIAL_CLAIM_MARKERS)


# Penalty passes ------------------------------------------------------------

def _https_penalty(signals: UrlSignals, brand: Optional[BrandMatch]) -> Optional[Penalty]:
    if signals.is_https:
        return None
    return Penalty(
        LINK_SCORING.NO_HTTPS_PENALTY,
        "⚠️ CONEXÃO NÃO SEGURA: Este site não usa HTTPS, seus dados podem ser interceptados",
        "NUNCA insira dados pessoais ou bancários em sites sem HTTPS",
    )


def _shortener_penalty(signals: UrlSignals, brand: Optional[BrandMatch]) -> Optional[Penalty]:
    if not signals.is_shortener:
        return None
    return Penalty(
        LINK_SCORING.SHORTENER_PENALTY,
        SHORTENER_ISSUE,
        "Use serviços como CheckShortURL para revelar o destino antes de clicar",
    )


def _tld_penalty(signals: UrlSignals, brand: Optional[BrandMatch]) -> Optional[Penalty]:
    if not signals.has_suspicious_tld:
        return None
    return Penalty(
        LINK_SCORING.SUSPICIOUS_TLD_PENALTY,
        f"🚨 EXTENSÃO SUSPEITA: Domínios {', '.join(SUSPICIOUS_TLDS)} são frequentemente usados em golpes",
    )


def _scam_keyword_penalty(signals: UrlSignals, brand: Optional[BrandMatch]) -> Optional[Penalty]:
    found = signals.matched_scam_keywords
    if not found:
        return None
    terms = '", "'.join(found)
    return Penalty(
        min(len(found) * LINK_SCORING.SCAM_KEYWORD_PENALTY, LINK_SCORING.SCAM_KEYWORD_PENALTY_CAP),
        f'🎣 PALAVRAS DE ALERTA: "{terms}" são comuns em golpes de phishing',
    )


def _brand_penalty(signals: UrlSignals, brand: Optional[BrandMatch]) -> Optional[Penalty]:
    if brand is None:
        return None
    return Penalty(
        LINK_SCORING.BRAND_SQUATTING_PENALTY,
        f'🏴‍☠️ BRAND SQUATTING: Este domínio tenta imitar "{brand.official_domain}". '
        f"O site oficial é {brand.official_domain}",
    )


def _ip_literal_penalty(signals: UrlSignals, brand: Optional[BrandMatch]) -> Optional[Penalty]:
    if not signals.is_ip_literal:
        return None
    return Penalty(
        LINK_SCORING.IP_LITERAL_PENALTY,
        "🔢 URL COM IP NUMÉRICO: Sites legítimos usam nomes de domínio, não endereços IP",
    )


def _subdomain_penalty(signals: UrlSignals, brand: Optional[BrandMatch]) -> Optional[Penalty]:
    if signals.subdomain_depth <= LINK_SCORING.MAX_SUBDOMAIN_DEPTH:
        return None
    return Penalty(
        LINK_SCORING.SUBDOMAIN_PENALTY,
        "📊 MUITOS SUBDOMÍNIOS: Estrutura de URL complexa, comum em sites de phishing",
    )


def _obfuscation_penalty(signals: UrlSignals, brand: Optional[BrandMatch]) -> Optional[Penalty]:
    if not signals.has_obfuscation_chars:
        return None
    return Penalty(
        LINK_SCORING.OBFUSCATION_PENALTY,
        "⚡ CARACTERES SUSPEITOS: Uso de caracteres incomuns para ofuscar o verdadeiro destino",
    )


PenaltyPass = Callable[[UrlSignals, Optional[BrandMatch]], Optional[Penalty]]

PENALTY_PASSES: Tuple[PenaltyPass, ...] = (
    _https_penalty,
    _shortener_penalty,
    _tld_penalty,
    _scam_keyword_penalty,
    _brand_penalty,
    _ip_literal_penalty,
    _subdomain_penalty,
    _obfuscation_penalty,
)

ESCALATION_CHECKPOINT: PenaltyPass = _scam_keyword_penalty


# Override rules ------------------------------------------------------------

def confirmed_by_bucket(signals: UrlSignals, bucket: Optional[KeywordBucket], score: int) -> Optional[str]:
    if bucket is not None and signals.has_suspicious_tld:
        return bucket.confirmed_issue
    return None


def confirmed_by_multiple_indicators(
    signals: UrlSignals, bucket: Optional[KeywordBucket], score: int
) -> Optional[str]:
    if score > 0 and signals.has_suspicious_tld and len(set(signals.matched_scam_keywords)) >= 2:
        return MULTI_INDICATOR_ISSUE
    return None


def confirmed_fake_government(signals: UrlSignals, bucket: Optional[KeywordBucket], score: int) -> Optional[str]:
    if claims_official_entity(signals) and signals.has_suspicious_tld:
        return FAKE_GOVERNMENT_ISSUE
    return None


OVERRIDE_RULES = (
    confirmed_by_bucket,
    confirmed_by_multiple_indicators,
    confirmed_fake_government,
)


# Narrative rules, highest priority first -----------------------------------

def _fake_government_narrative(signals, brand, bucket, confirmed) -> Optional[Narrative]:
    if FAKE_GOVERNMENT_ISSUE in confirmed:
        return FAKE_GOVERNMENT_NARRATIVE
    return None


def _brand_narrative(signals, brand, bucket, confirmed) -> Optional[Narrative]:
    if brand is None:
        return None
    return Narrative(
        "Brand Squatting / Clone de Site Oficial",
        f'Este link tenta se passar pelo site oficial "{brand.official_domain}" para enganar vítimas. '
        "SEMPRE acesse sites oficiais digitando o endereço diretamente no navegador.",
    )


def _bucket_narrative(signals, brand, bucket, confirmed) -> Optional[Narrative]:
    return bucket.narrative if bucket is not None else None


def _multi_indicator_narrative(signals, brand, bucket, confirmed) -> Optional[Narrative]:
    if MULTI_INDICATOR_ISSUE in confirmed:
        return MULTI_INDICATOR_NARRATIVE
    return None


NARRATIVE_RULES = (
    _fake_government_narrative,
    _brand_narrative,
    _bucket_narrative,
    _multi_indicator_narrative,
)


def select_narrative(
    signals: UrlSignals,
    brand: Optional[BrandMatch],
    bucket: Optional[KeywordBucket],
    confirmed: Sequence[str] = (),
) -> Optional[Narrative]:
    for rule in NARRATIVE_RULES:
        narrative = rule(signals, brand, bucket, confirmed)
        if narrative is not None:
            return narrative
    return None


def score_signals(signals: UrlSignals) -> ScoreCard:
    brand = detect_brand_squatting(signals)
    bucket = match_keyword_bucket(signals)

    card = ScoreCard(score=LINK_SCORING.START_SCORE, brand_match=brand)
    escalation_score = card.score

    for penalty_pass in PENALTY_PASSES:
        penalty = penalty_pass(signals, brand)
        if penalty is not None:
            card.score -= penalty.points
            card.issues.append(penalty.issue)
            if penalty.recommendation:
                card.recommendations.append(penalty.recommendation)
        if penalty_pass is ESCALATION_CHECKPOINT:
            escalation_score = card.score

    # Escalations see the score as it stood right after the keyword pass.
    for rule in OVERRIDE_RULES:
        confirmed_issue = rule(signals, bucket, escalation_score)
        if confirmed_issue:
            escalation_score = 0
            card.score = min(card.score, 0)
            card.confirmed_issues.append(confirmed_issue)

    card.score = max(0, min(100, card.score))
    card.narrative = select_narrative(signals, brand, bucket, card.confirmed_issues)
    return card


def derive_status(score: int, is_brand_squatting: bool) -> LinkStatus:
    if score == 0 or is_brand_squatting:
        return "scam"
    if score < LINK_SCORING.DANGER_BELOW:
        return "danger"
    if score < LINK_SCORING.WARNING_BELOW:
        return "warning"
    return "safe"


def build_recommendations(card: ScoreCard, status: LinkStatus) -> List[str]:
    recommendations = list(card.recommendations)
    all_issues = card.confirmed_issues + card.issues
    only_shortener = all_issues == [SHORTENER_ISSUE]

    if all_issues and not only_shortener:
        recommendations.extend(GENERIC_RECOMMENDATIONS)

    if status in ("scam", "danger"):
        recommendations.insert(0, DO_NOT_ACCESS)
    return recommendations


def needs_ai_review(score: int) -> bool:
    return 0 < score < LINK_SCORING.AI_REVIEW_BELOW


def assess_link(signals: UrlSignals) -> LinkVerdict:
    """Score a link from its signals alone, without the optional AI review."""
    card = score_signals(signals)
    is_brand_squatting = card.brand_match is not None
    status = derive_status(card.score, is_brand_squatting)

    # Confirmations are prepended one by one, so the last confirmed rule leads.
    issues = list(reversed(card.confirmed_issues)) + card.issues

    return LinkVerdict(
        status=status,
        score=card.score,
        domain=signals.domain,
        issues=issues,
        recommendations=build_recommendations(card, status),
        scam_type=card.narrative.scam_type if card.narrative else None,
        modus_operandi=card.narrative.modus_operandi if card.narrative else None,
        is_brand_squatting=is_brand_squatting,
        is_url_shortener=signals.is_shortener,
        targeted_brand=card.brand_match.targeted_brand if card.brand_match else None,
    )
