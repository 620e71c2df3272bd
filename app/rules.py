"""
Deterministic URL rewrite rules.

This file exists to keep every literal the rewrite engine depends on in one
place: the ordered substitution table, host exceptions, path markers and the
accessibility prompt.
"""

# Applied in this exact order, one pass per entry, after lower-casing.
SPECIAL_CHAR_REPLACEMENTS = (
    ("%C3%A7", "c"),   # ç
    ("%C3%A3", "a"),   # ã
    ("%C3%B5", "o"),   # õ
    ("%C3%A1", "a"),   # á
    ("%C3%A9", "e"),   # é
    ("%C3%AD", "i"),   # í
    ("%C3%B3", "o"),   # ó
    ("%C3%BA", "u"),   # ú
    ("%C3%A0", "a"),   # à
    ("%C3%A2", "a"),   # â
    ("%C3%AA", "e"),   # ê
    ("%C3%AE", "i"),   # î
    ("%C3%B4", "o"),   # ô
    ("%C3%BB", "u"),   # û
    ("%C3%B1", "n"),   # ñ
    ("%C2%BA", ""),    # º
    ("%20", "-"),
    ("%C3%8A", "E"),   # Ê
    ("%C3%89", "e"),   # É
    ("%C2%B0", ""),    # °
    ("%C3%87", "C"),   # Ç
    ("%C3%95", "O"),   # Õ
    ("%C3%81", "A"),   # Á
    ("%C3%83", "A"),   # Ã
    ("%C3%94", "O"),   # Ô
    ("%C3%8D", "I"),   # Í
    ("%C3%93", "O"),   # Ó
    ("%C2%AA", ""),    # ª
    ("%E2%80%93", "-"),  # en dash
    ("%CC%81", ""),    # combining acute accent
    ("+", "-"),
)

INTERNAL_DOMAIN_SUFFIX = ".df.gov.br"
RELATIVIZE_PATTERN = r"https?://[^/]+(/.*)?"

EXCEPTED_HOSTS = (
    "info.saude.df.gov.br",
    "amamentabrasilia.saude.df.gov.br",
)

DOCUMENTS_MARKER = "/documents/"
ASSET_MARKERS = ("/wp-content/", "/wp-conteudo")

TARGET_PATH_TEMPLATE = "/documents/d/{secretaria}/{name}{extension}"

# Responsive image attributes never survive the migration.
STRIPPED_ATTRIBUTES = ("srcset", "sizes")

# Department selector, in display order.
KNOWN_DEPARTMENTS = (
    ("smdf", "Secretaria da Mulher"),
    ("sedes", "Secretaria de Desenvolvimento Social"),
    ("segov", "Segov"),
    ("seec", "Economia"),
    ("defesacivil", "Defesa Civil"),
    ("casamilitar", "Casa Militar"),
    ("esg", "Esg"),
    ("semob", "Semob"),
    ("esporte", "SELDF"),
    ("secec", "Secec"),
    ("seac", "Seac"),
    ("sepd", "Sepd"),
    ("vice", "Vice"),
    ("sefjdf", "Sefjdf"),
    ("sema-df", "Sema"),
    ("educacao", "Educação"),
    ("so", "Obras e Infraestrutura"),
    ("sedet", "SEDET"),
    ("setur", "Turismo"),
    ("seduh", "Seduh"),
    ("undf", "Universidade"),
    ("slu", "SLU"),
    ("seagri", "Seagri"),
    ("fhb", "FHB"),
    ("dflegal", "DF Legal"),
    ("saude", "Saúde"),
    ("der", "DER"),
)

DEFAULT_DEPARTMENT = "saude"
DEFAULT_DEPARTMENT_NAME = "Saúde"

PROMPT_TEMPLATE = """Você é um especialista em transformação de URLs e acessibilidade para a Secretaria de {department_name}.

Sua ÚNICA tarefa é modificar o HTML fornecido da seguinte forma:

1. Normalizar URLs:
   - Para links que contêm "/documents/" com arquivos PDF:
     - Converter para o formato: /documents/d/{department}/[nome-do-arquivo] (sem a extensão -pdf)
     - Exemplo: converter "<a href="/documents/37101/0/529%C2%AA+RE.pdf/...">529ª Reunião Extraordinária</a>" para "/documents/d/{department}/529-_re"
   - Normalizar caracteres especiais em URLs (converter acentos para versões sem acento)
   - Substituir espaços (_)
   - Substituir símbolos por underscores (_)
   - Se houver uma sequência de múltiplos hífens consecutivos (---- ou ---), substituí-los por um único hífen (-)
   - Se houver uma sequência de múltiplos + consecutivos (+++ ou ++++), substituí-los por um único hífen (-)

2. Adicionar atributos de acessibilidade APENAS para links:
   - Adicionar um atributo aria-label descritivo baseado no conteúdo do link
   - Exemplo: <a href="..." aria-label="Cronograma de reuniões do Conselho de {department_name} do Distrito Federal (CSDF) para o ano 2025.">

NÃO modifique outros elementos HTML.
NÃO altere a estrutura do documento.
NÃO adicione novos elementos.
NÃO modifique o conteúdo textual.

Forneça o HTML resultante mantendo exatamente a mesma estrutura, apenas com as URLs normalizadas e aria-labels adicionados aos links."""
