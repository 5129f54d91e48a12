"""
Maps claim keywords to curated reference sources.

Only URLs from the static tables below ever reach a caller. Fact-checker
entries never point at a guessed article: their URL is a search-engine query
scoped to the checker's own domain.
"""
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple
from urllib.parse import quote

from config.constants import TEXT_CONFIG
from models.verdicts import SourceReference

SEARCH_ENGINE_URL = "https://www.google.com/search?q="


@dataclass(frozen=True)
class TopicSourceMapping:
    topic: str
    keywords: Tuple[str, ...]
    sources: Tuple[SourceReference, ...]


def _gov(name: str, description: str, url: str, relevance: str) -> SourceReference:
    return SourceReference(type="government", name=name, description=description, url=url, relevance=relevance)


def _academic(name: str, description: str, url: str, relevance: str) -> SourceReference:
    return SourceReference(type="academic", name=name, description=description, url=url, relevance=relevance)


TOPIC_SOURCE_MAPPINGS: Tuple[TopicSourceMapping, ...] = (
    TopicSourceMapping(
        "pix",
        ("pix", "banco central", "bcb", "transferência", "pagamento instantâneo", "chave pix"),
        (
            _gov("Banco Central do Brasil - PIX",
                 "Portal oficial do PIX com regras, comunicados e tire-dúvidas",
                 "https://www.bcb.gov.br/estabilidadefinanceira/pix",
                 "Fonte oficial sobre funcionamento e regulamentação do PIX"),
            _gov("BC - Perguntas Frequentes sobre PIX",
                 "FAQ oficial do Banco Central sobre o sistema de pagamentos",
                 "https://www.bcb.gov.br/estabilidadefinanceira/perguntasfrequentespix",
                 "Esclarece boatos comuns sobre taxas e cobranças"),
        ),
    ),
    TopicSourceMapping(
        "taxes",
        ("imposto", "taxa", "tributo", "receita federal", "tributação", "taxação", "declaração"),
        (
            _gov("Receita Federal do Brasil",
                 "Portal oficial da Receita Federal com legislação tributária",
                 "https://www.gov.br/receitafederal/pt-br",
                 "Fonte oficial sobre impostos federais e obrigações tributárias"),
            _gov("Portal da Legislação - Planalto",
                 "Acesso às leis e decretos do governo federal",
                 "https://www.planalto.gov.br/legislacao",
                 "Textos legais oficiais sobre tributação"),
        ),
    ),
    TopicSourceMapping(
        "health",
        ("vacina", "vacinação", "covid", "saúde", "medicamento", "anvisa", "tratamento", "doença", "vírus", "pandemia"),
        (
            _gov("Ministério da Saúde",
                 "Portal oficial com informações sobre campanhas de vacinação",
                 "https://www.gov.br/saude/pt-br",
                 "Comunicados oficiais sobre políticas de saúde pública"),
            _gov("ANVISA - Agência Nacional de Vigilância Sanitária",
                 "Informações sobre aprovação de medicamentos e vacinas",
                 "https://www.gov.br/anvisa/pt-br",
                 "Autoridade regulatória sobre medicamentos no Brasil"),
            _academic("Fiocruz - Fundação Oswaldo Cruz",
                      "Pesquisas e informações científicas sobre saúde",
                      "https://portal.fiocruz.br/",
                      "Instituição científica de referência em saúde pública"),
        ),
    ),
    TopicSourceMapping(
        "social_benefits",
        ("benefício", "bolsa família", "auxílio", "caixa", "saque", "bpc", "inss", "aposentadoria", "pensão"),
        (
            _gov("Ministério do Desenvolvimento Social",
                 "Informações oficiais sobre programas sociais",
                 "https://www.gov.br/mds/pt-br",
                 "Fonte oficial sobre Bolsa Família e outros benefícios"),
            _gov("INSS - Instituto Nacional do Seguro Social",
                 "Portal de serviços previdenciários",
                 "https://www.gov.br/inss/pt-br",
                 "Informações sobre aposentadorias, pensões e benefícios do INSS"),
            _gov("Caixa Econômica Federal",
                 "Informações sobre saques e pagamentos de benefícios",
                 "https://www.caixa.gov.br/",
                 "Banco responsável pelo pagamento de benefícios sociais"),
        ),
    ),
    TopicSourceMapping(
        "elections",
        ("eleição", "voto", "urna", "candidato", "tse", "fraude eleitoral", "apuração", "resultado"),
        (
            _gov("Tribunal Superior Eleitoral (TSE)",
                 "Portal oficial com dados eleitorais e resultados",
                 "https://www.tse.jus.br/",
                 "Autoridade máxima sobre processo eleitoral brasileiro"),
            _gov("TSE - Fato ou Boato",
                 "Seção de checagem de desinformação eleitoral",
                 "https://www.justicaeleitoral.jus.br/fato-ou-boato/",
                 "Combate a fake news sobre eleições"),
        ),
    ),
    TopicSourceMapping(
        "economy",
        ("inflação", "ipca", "dólar", "economia", "ibge", "pib", "desemprego", "juros", "selic"),
        (
            _gov("IBGE - Instituto Brasileiro de Geografia e Estatística",
                 "Dados oficiais sobre inflação, emprego e economia",
                 "https://www.ibge.gov.br/",
                 "Fonte primária de estatísticas econômicas do Brasil"),
            _gov("Banco Central - Indicadores Econômicos",
                 "Taxa Selic, câmbio e outros indicadores",
                 "https://www.bcb.gov.br/estatisticas",
                 "Dados oficiais sobre política monetária"),
        ),
    ),
    TopicSourceMapping(
        "environment",
        ("amazônia", "desmatamento", "clima", "aquecimento", "ibama", "queimada", "floresta"),
        (
            _gov("IBAMA",
                 "Instituto Brasileiro do Meio Ambiente",
                 "https://www.gov.br/ibama/pt-br",
                 "Fiscalização ambiental e dados sobre desmatamento"),
            _academic("INPE - Instituto Nacional de Pesquisas Espaciais",
                      "Monitoramento de desmatamento e queimadas",
                      "https://www.gov.br/inpe/pt-br",
                      "Dados científicos sobre mudanças na cobertura florestal"),
        ),
    ),
)

FACT_CHECKERS: Tuple[SourceReference, ...] = (
    SourceReference(type="factchecker", name="Aos Fatos",
                    description="Agência de checagem signatária do IFCN",
                    url="https://www.aosfatos.org/",
                    relevance="Verificações rigorosas com metodologia transparente"),
    SourceReference(type="factchecker", name="Agência Lupa",
                    description="Primeira agência de fact-checking do Brasil",
                    url="https://lupa.uol.com.br/",
                    relevance="Pioneira em checagem de fatos no país"),
    SourceReference(type="factchecker", name="G1 Fato ou Fake",
                    description="Núcleo de checagem do portal G1",
                    url="https://g1.globo.com/fato-ou-fake/",
                    relevance="Checagem vinculada ao maior portal de notícias do Brasil"),
    SourceReference(type="factchecker", name="Estadão Verifica",
                    description="Núcleo de verificação do jornal O Estado de S. Paulo",
                    url="https://www.estadao.com.br/estadao-verifica/",
                    relevance="Checagem de veículo tradicional da imprensa"),
)

# Search scope per fact-checker, keyed by lowercase name.
FACT_CHECKER_SEARCH_SCOPES: Dict[str, str] = {
    "aos fatos": "site:aosfatos.org",
    "aos fatos - busca verificada": "site:aosfatos.org",
    "agência lupa": "site:lupa.uol.com.br",
    "lupa": "site:lupa.uol.com.br",
    "g1 fato ou fake": "site:g1.globo.com+fato+ou+fake",
    "g1 fato ou fake - busca": "site:g1.globo.com+fato+ou+fake",
    "estadão verifica": "site:estadao.com.br+verifica",
}

FALLBACK_FACT_CHECKERS: Tuple[SourceReference, ...] = (
    SourceReference(type="factchecker", name="Aos Fatos - Busca Verificada",
                    description="Busque verificações relacionadas",
                    url="https://www.aosfatos.org/",
                    relevance="Agência de checagem de referência no Brasil"),
    SourceReference(type="factchecker", name="G1 Fato ou Fake - Busca",
                    description="Checagens do portal G1",
                    url="https://g1.globo.com/fato-ou-fake/",
                    relevance="Núcleo de checagem de grande veículo"),
)


def build_search_link(checker_name: str, keywords: Sequence[str]) -> str:
    query = quote(" ".join(keywords[:TEXT_CONFIG.SEARCH_QUERY_KEYWORDS]), safe="")
    scope = FACT_CHECKER_SEARCH_SCOPES.get(checker_name.lower())
    if scope is None:
        return f"{SEARCH_ENGINE_URL}{query}+verificação"
    return f"{SEARCH_ENGINE_URL}{scope}+{query}"


def _overlaps(topic_keyword: str, keywords: Sequence[str]) -> bool:
    topic_keyword = topic_keyword.lower()
    return any(keyword in topic_keyword or topic_keyword in keyword for keyword in keywords)


def matching_topics(keywords: Sequence[str]) -> List[TopicSourceMapping]:
    """Topics where any topic keyword overlaps any extracted keyword, in declaration order."""
    keywords = [k.lower() for k in keywords if k]
    return [
        mapping for mapping in TOPIC_SOURCE_MAPPINGS
        if any(_overlaps(topic_keyword, keywords) for topic_keyword in mapping.keywords)
    ]


def identify_relevant_sources(keywords: Sequence[str]) -> List[SourceReference]:
    """Catalogue sources for the matched topics plus fact-checkers, before URL rewriting."""
    sources: List[SourceReference] = []
    seen_urls = set()

    for mapping in matching_topics(keywords):
        for source in mapping.sources:
            if source.url not in seen_urls:
                sources.append(source)
                seen_urls.add(source.url)

    for checker in FACT_CHECKERS[:TEXT_CONFIG.FACTCHECKERS_APPENDED]:
        if checker.url not in seen_urls:
            sources.append(checker)
            seen_urls.add(checker.url)

    return sources[:TEXT_CONFIG.MAX_SOURCES]


def route(keywords: Sequence[str]) -> List[SourceReference]:
    """
    Resolve the references returned to the caller.

    Government/academic sources keep their catalogue URL; every fact-checker
    URL becomes a scoped search built from the keywords. When no topic
    matches, two generic fact-checker searches are returned.
    """
    keywords = list(keywords)
    if matching_topics(keywords):
        sources = identify_relevant_sources(keywords)
    else:
        sources = list(FALLBACK_FACT_CHECKERS)

    routed = []
    for source in sources:
        if source.type == "factchecker":
            source = source.model_copy(update={"url": build_search_link(source.name, keywords)})
        routed.append(source)
    return routed
